"""
Embedding generator.

Turns content chunks into embeddings through an EmbeddingProvider,
sequentially and paced to respect provider rate limits. A failed chunk
is logged and skipped; only an auth failure or zero successes abort.

Dependencies: cvportal.boundary.embeddings, cvportal.core.retry_policy
System role: Second stage of CV ingestion, query embedding at chat time
"""

import asyncio
import logging
import re
from collections import Counter
from datetime import datetime, timezone

from cvportal.boundary.embeddings.provider import EmbeddingProvider, EmbeddingRequest
from cvportal.core.exceptions import (
    EmbeddingAuthError,
    EmbeddingError,
    EmbeddingGenerationFailed,
    ValidationError,
)
from cvportal.core.retry_policy import Pacer, RetryPolicy
from cvportal.models.chunk import ChunkSection, ContentChunk
from cvportal.models.embedding import (
    Embedding,
    EmbeddingBatchResult,
    EmbeddingMetadata,
    EmbeddingSkipped,
)
from cvportal.observability.log_utils import preview_text

logger = logging.getLogger(__name__)

SECTION_IMPORTANCE: dict[ChunkSection, int] = {
    ChunkSection.SUMMARY: 9,
    ChunkSection.EXPERIENCE: 8,
    ChunkSection.PROJECTS: 8,
    ChunkSection.SKILLS: 8,
    ChunkSection.EDUCATION: 7,
    ChunkSection.CERTIFICATIONS: 7,
    ChunkSection.OTHER: 5,
}

MAX_KEYWORDS = 8

STOPWORDS = frozenset(
    {
        "about", "after", "also", "been", "before", "being", "between", "both",
        "could", "during", "each", "from", "have", "having", "into", "more",
        "most", "other", "over", "same", "some", "such", "than", "that", "their",
        "them", "then", "there", "these", "they", "this", "those", "through",
        "under", "until", "very", "were", "what", "when", "where", "which",
        "while", "with", "within", "would", "your", "years", "year",
    }
)

_WORD = re.compile(r"[a-z][a-z0-9+#]*")


def extract_keywords(text: str, limit: int = MAX_KEYWORDS) -> list[str]:
    """Most frequent non-stopword tokens longer than three characters."""
    words = [
        word
        for word in _WORD.findall(text.lower())
        if len(word) > 3 and word not in STOPWORDS
    ]
    return [word for word, _ in Counter(words).most_common(limit)]


class EmbeddingGenerator:
    """Generate embeddings for chunks and queries."""

    def __init__(
        self,
        provider: EmbeddingProvider,
        model_name: str,
        batch_size: int = 10,
        retry_policy: RetryPolicy | None = None,
        pacer: Pacer | None = None,
        dimension: int | None = None,
    ) -> None:
        """
        Initialize embedding generator.

        Args:
            provider: Embedding backend
            model_name: Model name recorded on every embedding
            batch_size: Chunks per paced batch
            retry_policy: Retry/timeout policy for each provider call
            pacer: Delay enforced between batches
            dimension: Expected vector length, None to accept any
        """
        if batch_size < 1:
            raise ValueError("batch_size must be positive")
        self._provider = provider
        self.model_name = model_name
        self.batch_size = batch_size
        self._retry_policy = retry_policy or RetryPolicy()
        self._pacer = pacer or Pacer()
        self.dimension = dimension

    async def embed_batch(self, chunks: list[ContentChunk]) -> EmbeddingBatchResult:
        """
        Embed chunks in order, skipping individual failures.

        Args:
            chunks: Chunks from the chunker (same owner)

        Returns:
            EmbeddingBatchResult: Embeddings in chunk order plus skip records

        Raises:
            EmbeddingGenerationFailed: Auth failure, or no chunk succeeded
        """
        result = EmbeddingBatchResult()
        if not chunks:
            return result

        owner_id = chunks[0].owner_id
        logger.info(
            f"{__name__}:embed_batch - Embedding {len(chunks)} chunks "
            f"in batches of {self.batch_size}",
            extra={"owner_id": owner_id},
        )

        for start in range(0, len(chunks), self.batch_size):
            await self._pacer.wait()
            for chunk in chunks[start:start + self.batch_size]:
                try:
                    vector = await self._embed_text(
                        chunk.content, operation="embed_batch", input_type="document"
                    )
                except EmbeddingAuthError as e:
                    logger.error(f"{__name__}:embed_batch - Provider rejected credentials: {e}")
                    raise EmbeddingGenerationFailed(
                        "Embedding provider rejected credentials",
                        owner_id=owner_id,
                        details={"chunk_id": chunk.id},
                    ) from e
                except (EmbeddingError, asyncio.TimeoutError) as e:
                    reason = str(e) or "embedding call timed out"
                    logger.warning(
                        f"{__name__}:embed_batch - Skipping chunk {chunk.id}: "
                        f"{type(e).__name__}: {reason}"
                    )
                    result.skipped.append(
                        EmbeddingSkipped(
                            chunk_id=chunk.id,
                            reason=reason,
                            error_type=type(e).__name__,
                        )
                    )
                    continue

                result.embeddings.append(self._build_embedding(chunk, vector))

        if not result.embeddings:
            raise EmbeddingGenerationFailed(
                f"No embeddings produced for {len(chunks)} chunks",
                owner_id=owner_id,
                details={"skipped": len(result.skipped)},
            )

        logger.info(
            f"{__name__}:embed_batch - Generated {len(result.embeddings)}/{len(chunks)} "
            f"embeddings ({len(result.skipped)} skipped)",
            extra={"owner_id": owner_id},
        )
        return result

    async def embed_query(self, text: str) -> list[float]:
        """
        Embed a user query.

        Raises:
            ValidationError: Empty query text
            EmbeddingError: Provider failure after retries
            asyncio.TimeoutError: Provider call exceeded its deadline
        """
        if not text or not text.strip():
            raise ValidationError("Query text must not be empty", field="text")
        logger.debug(f"{__name__}:embed_query - '{preview_text(text)}'")
        return await self._embed_text(text.strip(), operation="embed_query")

    async def validate_connection(self) -> bool:
        """Check the provider answers with a vector of the expected dimension."""
        try:
            vector = await self._embed_text("connection test", operation="validate_connection")
        except (EmbeddingError, asyncio.TimeoutError) as e:
            logger.error(f"{__name__}:validate_connection - {type(e).__name__}: {e}")
            return False
        logger.info(f"{__name__}:validate_connection - OK ({len(vector)} dimensions)")
        return True

    async def _embed_text(
        self,
        text: str,
        operation: str,
        input_type: str = "query",
    ) -> list[float]:
        request = EmbeddingRequest(model=self.model_name, input=text, input_type=input_type)
        response = await self._retry_policy.call(
            self._provider.embed,
            request,
            operation=operation,
        )
        if not response.vector:
            raise EmbeddingError("Provider returned an empty vector")
        if self.dimension is not None and len(response.vector) != self.dimension:
            raise EmbeddingError(
                f"Expected {self.dimension} dimensions, got {len(response.vector)}",
                details={"model": self.model_name},
            )
        return response.vector

    def _build_embedding(self, chunk: ContentChunk, vector: list[float]) -> Embedding:
        return Embedding(
            id=chunk.id,
            owner_id=chunk.owner_id,
            vector=vector,
            content=chunk.content,
            metadata=EmbeddingMetadata(
                section=chunk.section,
                section_key=chunk.section_key,
                chunk_index=chunk.chunk_index,
                importance=SECTION_IMPORTANCE.get(chunk.section, 5),
                keywords=extract_keywords(chunk.content),
                token_count=chunk.token_count_estimate,
                embedding_model=self.model_name,
                created_at=datetime.now(timezone.utc),
            ),
        )
