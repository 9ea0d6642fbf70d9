"""
Semantic retriever.

Embeds the query, searches the owner's namespace, and discards every
result below the similarity threshold. An empty result set is a valid
state that tells the chat orchestrator to answer without context.

Dependencies: cvportal.core.embedding_generator, cvportal.core.vector_store
System role: Retrieval stage of the RAG pipeline
"""

import asyncio
import logging

from cvportal.core.embedding_generator import EmbeddingGenerator
from cvportal.core.exceptions import EmbeddingError, RetrievalError
from cvportal.core.vector_store import VectorStore
from cvportal.models.retrieval import RAGContextResult, RetrievalResult
from cvportal.observability.log_utils import preview_text

logger = logging.getLogger(__name__)


def build_context(results: list[RetrievalResult]) -> str:
    """Section-labelled passages separated by blank lines."""
    return "\n\n".join(f"[{result.section}] {result.content}" for result in results)


def unique_sections(results: list[RetrievalResult]) -> list[str]:
    """Section labels in first-seen order."""
    return list(dict.fromkeys(result.section for result in results))


class SemanticRetriever:
    """Query-time retrieval over one CV namespace."""

    def __init__(
        self,
        embedding_generator: EmbeddingGenerator,
        vector_store: VectorStore,
        top_k: int = 5,
        min_similarity: float = 0.7,
    ) -> None:
        self._embedding_generator = embedding_generator
        self._vector_store = vector_store
        self.top_k = top_k
        self.min_similarity = min_similarity

    async def retrieve(
        self,
        owner_id: str,
        query: str,
        top_k: int | None = None,
        min_similarity: float | None = None,
    ) -> RAGContextResult:
        """
        Retrieve context passages for a question.

        Args:
            owner_id: CV identifier (namespace key)
            query: User question
            top_k: Override for the number of candidates searched
            min_similarity: Override for the similarity threshold

        Returns:
            RAGContextResult: Kept results in descending similarity

        Raises:
            ValidationError: Empty query
            RetrievalError: Query embedding failed
            VectorStoreUnavailable: Search failed or timed out
        """
        k = top_k if top_k is not None else self.top_k
        threshold = min_similarity if min_similarity is not None else self.min_similarity

        try:
            query_vector = await self._embedding_generator.embed_query(query)
        except (EmbeddingError, asyncio.TimeoutError) as e:
            raise RetrievalError(
                "Failed to embed query",
                owner_id=owner_id,
                details={"error": str(e), "error_type": type(e).__name__},
            ) from e

        candidates = await self._vector_store.search(owner_id, query_vector, k)
        kept = [result for result in candidates if result.similarity >= threshold]

        confidence = sum(r.similarity for r in kept) / len(kept) if kept else 0.0

        logger.info(
            f"{__name__}:retrieve - Kept {len(kept)}/{len(candidates)} results "
            f"(threshold={threshold}) for '{preview_text(query, 50)}'",
            extra={"owner_id": owner_id},
        )

        return RAGContextResult(
            query=query,
            results=kept,
            context=build_context(kept),
            sources=unique_sections(kept),
            confidence=confidence,
        )
