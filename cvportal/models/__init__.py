"""
Domain models.

Pydantic models for CV input, chunks, embeddings, retrieval results and
chat API contracts.
"""

from cvportal.models.chat import (
    ChatAnalytics,
    ChatInteraction,
    ChatRequest,
    ChatResponse,
    ChatSession,
    SessionInitRequest,
    SessionInitResponse,
    SourceCitation,
    TopQuestion,
)
from cvportal.models.chunk import ChunkSection, ContentChunk
from cvportal.models.cv import ParsedCV
from cvportal.models.embedding import (
    Embedding,
    EmbeddingBatchResult,
    EmbeddingMetadata,
    EmbeddingSkipped,
)
from cvportal.models.ingestion import EmbeddingStatus, IngestionResult
from cvportal.models.retrieval import ConfidenceScore, RAGContextResult, RetrievalResult

__all__ = [
    "ChatAnalytics",
    "ChatInteraction",
    "ChatRequest",
    "ChatResponse",
    "ChatSession",
    "ChunkSection",
    "ConfidenceScore",
    "ContentChunk",
    "Embedding",
    "EmbeddingBatchResult",
    "EmbeddingMetadata",
    "EmbeddingSkipped",
    "EmbeddingStatus",
    "IngestionResult",
    "ParsedCV",
    "RAGContextResult",
    "RetrievalResult",
    "SessionInitRequest",
    "SessionInitResponse",
    "SourceCitation",
    "TopQuestion",
]
