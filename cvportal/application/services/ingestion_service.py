"""
CV ingestion service.

Chunk, embed and store one CV in its own vector namespace. Partial
embedding failure is tolerated; zero embeddings from a non-empty CV is
fatal.

Dependencies: cvportal.core
System role: Ingestion orchestration (done once per CV)
"""

import logging
import time

from cvportal.core.chunker import CVChunker
from cvportal.core.embedding_generator import EmbeddingGenerator
from cvportal.core.vector_store import VectorStore
from cvportal.models.cv import ParsedCV
from cvportal.models.ingestion import EmbeddingStatus, IngestionResult
from cvportal.observability.log_utils import log_with_context

logger = logging.getLogger(__name__)


class IngestionService:
    """Chunker -> Embedding Generator -> Vector Store."""

    def __init__(
        self,
        chunker: CVChunker,
        embedding_generator: EmbeddingGenerator,
        vector_store: VectorStore,
    ) -> None:
        self._chunker = chunker
        self._embedding_generator = embedding_generator
        self._vector_store = vector_store

    async def ingest(self, cv: ParsedCV, force: bool = False) -> IngestionResult:
        """
        Index a CV.

        Already-indexed CVs are skipped unless ``force``. Otherwise the
        namespace is cleared and rewritten with fresh embeddings.

        Args:
            cv: Parsed CV
            force: Re-index even when the namespace holds data

        Returns:
            IngestionResult: Counts and skipped chunk ids

        Raises:
            EmbeddingGenerationFailed: CV had chunks but none embedded
            VectorStoreUnavailable: Vector store call failed
        """
        start = time.perf_counter()
        namespace = self._vector_store.namespace_for(cv.id)

        if not force and await self._vector_store.has_data(cv.id):
            logger.info(f"{__name__}:ingest - {namespace} already indexed, skipping")
            return IngestionResult(
                owner_id=cv.id,
                namespace=namespace,
                status="skipped",
                processing_time_ms=self._elapsed_ms(start),
            )

        chunks = self._chunker.chunk(cv)
        if not chunks:
            logger.warning(f"{__name__}:ingest - CV {cv.id} produced no chunks")
            await self._vector_store.delete_namespace(cv.id)
            return IngestionResult(
                owner_id=cv.id,
                namespace=namespace,
                status="empty",
                processing_time_ms=self._elapsed_ms(start),
            )

        batch = await self._embedding_generator.embed_batch(chunks)

        await self._vector_store.delete_namespace(cv.id)
        stored = await self._vector_store.upsert(cv.id, batch.embeddings)

        result = IngestionResult(
            owner_id=cv.id,
            namespace=namespace,
            status="stored",
            chunk_count=len(chunks),
            embedding_count=stored,
            skipped_chunk_ids=[skip.chunk_id for skip in batch.skipped],
            processing_time_ms=self._elapsed_ms(start),
        )
        log_with_context(
            logger,
            logging.INFO,
            f"{__name__}:ingest - {namespace}: {stored}/{len(chunks)} chunks stored "
            f"in {result.processing_time_ms}ms",
            owner_id=cv.id,
            skipped_chunk_ids=result.skipped_chunk_ids,
        )
        return result

    async def delete(self, owner_id: str) -> None:
        await self._vector_store.delete_namespace(owner_id)

    async def status(self, owner_id: str) -> EmbeddingStatus:
        return EmbeddingStatus(owner_id=owner_id, has_data=await self._vector_store.has_data(owner_id))

    @staticmethod
    def _elapsed_ms(start: float) -> int:
        return int((time.perf_counter() - start) * 1000)
