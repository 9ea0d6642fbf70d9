"""
Namespace-scoped vector store.

Maps one CV to one namespace, converts embeddings to provider records
(truncating stored content to the metadata limit), batches upserts, and
turns provider matches back into similarity-ranked retrieval results.
Every provider call carries a timeout; failures surface as
VectorStoreUnavailable.

Dependencies: cvportal.boundary.vdb, cvportal.core.retry_policy
System role: Vector storage and similarity search for RAG
"""

import asyncio
import logging
from collections.abc import Awaitable
from datetime import datetime
from typing import Any, TypeVar

from cvportal.boundary.vdb.provider import VectorStoreProvider
from cvportal.boundary.vdb.vector_schemas import IndexStats, VectorMatch, VectorRecord
from cvportal.core.exceptions import ValidationError, VectorStoreUnavailable
from cvportal.core.retry_policy import Pacer, with_timeout
from cvportal.models.chunk import ChunkSection
from cvportal.models.embedding import Embedding, EmbeddingMetadata
from cvportal.models.retrieval import RetrievalResult

logger = logging.getLogger(__name__)

T = TypeVar("T")

TRUNCATION_MARKER = "..."


def truncate_content(content: str, max_length: int) -> str:
    """Cut content to ``max_length`` characters, ending with a visible marker."""
    if len(content) <= max_length:
        return content
    return content[: max_length - len(TRUNCATION_MARKER)] + TRUNCATION_MARKER


class VectorStore:
    """CV-namespaced facade over a VectorStoreProvider."""

    def __init__(
        self,
        provider: VectorStoreProvider,
        namespace_prefix: str = "cv_",
        max_content_length: int = 40960,
        upsert_batch_size: int = 100,
        timeout_seconds: float | None = 15.0,
        pacer: Pacer | None = None,
    ) -> None:
        """
        Initialize vector store.

        Args:
            provider: Vector backend
            namespace_prefix: Prefix prepended to the CV identifier
            max_content_length: Maximum stored content length in characters
            upsert_batch_size: Records per provider upsert call
            timeout_seconds: Per-call deadline for provider calls
            pacer: Delay enforced between upsert batches
        """
        if max_content_length <= len(TRUNCATION_MARKER):
            raise ValueError("max_content_length too small for the truncation marker")
        if upsert_batch_size < 1:
            raise ValueError("upsert_batch_size must be positive")
        self._provider = provider
        self.namespace_prefix = namespace_prefix
        self.max_content_length = max_content_length
        self.upsert_batch_size = upsert_batch_size
        self.timeout_seconds = timeout_seconds
        self._pacer = pacer or Pacer(0.0)

    def namespace_for(self, owner_id: str) -> str:
        if not owner_id or not owner_id.strip():
            raise ValidationError("owner_id must not be empty", field="owner_id")
        return f"{self.namespace_prefix}{owner_id}"

    async def upsert(self, owner_id: str, embeddings: list[Embedding]) -> int:
        """
        Write embeddings into the owner's namespace.

        Idempotent by embedding id: re-upserting an id overwrites it.

        Returns:
            int: Number of records written

        Raises:
            ValidationError: An embedding belongs to a different owner
            VectorStoreUnavailable: Provider failure or timeout
        """
        namespace = self.namespace_for(owner_id)
        foreign = [e.id for e in embeddings if e.owner_id != owner_id]
        if foreign:
            raise ValidationError(
                f"{len(foreign)} embeddings do not belong to {owner_id}",
                field="owner_id",
                details={"embedding_ids": foreign[:10]},
            )

        records = [self._to_record(embedding) for embedding in embeddings]
        for start in range(0, len(records), self.upsert_batch_size):
            await self._pacer.wait()
            batch = records[start:start + self.upsert_batch_size]
            await self._guard(self._provider.upsert(namespace, batch), "upsert", namespace)

        logger.info(f"{__name__}:upsert - Stored {len(records)} embeddings in {namespace}")
        return len(records)

    async def delete_namespace(self, owner_id: str) -> None:
        namespace = self.namespace_for(owner_id)
        await self._guard(self._provider.delete_all(namespace), "delete", namespace)
        logger.info(f"{__name__}:delete_namespace - Cleared {namespace}")

    async def has_data(self, owner_id: str) -> bool:
        namespace = self.namespace_for(owner_id)
        return await self._guard(self._provider.has_vectors(namespace), "has_data", namespace)

    async def search(
        self,
        owner_id: str,
        query_vector: list[float],
        top_k: int = 5,
    ) -> list[RetrievalResult]:
        """
        Top-k nearest embeddings in the owner's namespace.

        Matches whose stored owner differs from ``owner_id`` are dropped.
        Results are non-increasing in similarity; ties keep provider order.

        Raises:
            VectorStoreUnavailable: Provider failure or timeout
        """
        namespace = self.namespace_for(owner_id)
        if top_k < 1:
            return []

        matches = await self._guard(
            self._provider.query(namespace, query_vector, top_k, include_metadata=True),
            "query",
            namespace,
        )

        results: list[RetrievalResult] = []
        for match in matches:
            stored_owner = match.metadata.get("owner_id")
            if stored_owner != owner_id:
                logger.warning(
                    f"{__name__}:search - Dropping match {match.id} owned by "
                    f"{stored_owner!r} from namespace {namespace}"
                )
                continue
            results.append(
                RetrievalResult(
                    embedding=self._to_embedding(match, owner_id),
                    similarity=max(-1.0, min(1.0, match.score)),
                )
            )

        results.sort(key=lambda result: -result.similarity)
        return results[:top_k]

    async def stats(self) -> IndexStats:
        return await self._guard(self._provider.describe_index_stats(), "stats", None)

    async def _guard(self, call: Awaitable[T], operation: str, namespace: str | None) -> T:
        try:
            return await with_timeout(call, self.timeout_seconds)
        except VectorStoreUnavailable:
            raise
        except asyncio.TimeoutError as e:
            logger.error(f"{__name__}:{operation} - Timed out after {self.timeout_seconds}s")
            raise VectorStoreUnavailable(
                f"Vector store {operation} timed out",
                operation=operation,
                namespace=namespace,
                details={"timeout_seconds": self.timeout_seconds},
            ) from e
        except Exception as e:
            logger.error(f"{__name__}:{operation} - {type(e).__name__}: {e}")
            raise VectorStoreUnavailable(
                f"Vector store {operation} failed",
                operation=operation,
                namespace=namespace,
                details={"error": str(e)},
            ) from e

    def _to_record(self, embedding: Embedding) -> VectorRecord:
        metadata = embedding.metadata
        return VectorRecord(
            id=embedding.id,
            values=embedding.vector,
            metadata={
                "owner_id": embedding.owner_id,
                "content": truncate_content(embedding.content, self.max_content_length),
                "section": metadata.section.value,
                "section_key": metadata.section_key,
                "chunk_index": metadata.chunk_index,
                "importance": metadata.importance,
                "keywords": list(metadata.keywords),
                "token_count": metadata.token_count,
                "embedding_model": metadata.embedding_model,
                "created_at": metadata.created_at.isoformat(),
            },
        )

    @staticmethod
    def _to_embedding(match: VectorMatch, owner_id: str) -> Embedding:
        meta: dict[str, Any] = match.metadata
        try:
            section = ChunkSection(meta.get("section", ChunkSection.OTHER.value))
        except ValueError:
            section = ChunkSection.OTHER

        metadata_kwargs: dict[str, Any] = {
            "section": section,
            "section_key": meta.get("section_key", ""),
            "chunk_index": int(meta.get("chunk_index", 0)),
            "importance": int(meta.get("importance", 1)),
            "keywords": list(meta.get("keywords") or []),
            "token_count": int(meta.get("token_count", 0)),
            "embedding_model": meta.get("embedding_model", ""),
        }
        if meta.get("created_at"):
            metadata_kwargs["created_at"] = datetime.fromisoformat(meta["created_at"])

        return Embedding(
            id=match.id,
            owner_id=owner_id,
            vector=[],
            content=meta.get("content", ""),
            metadata=EmbeddingMetadata(**metadata_kwargs),
        )
