"""
Core business logic module.

Chunking, embedding generation, vector storage, retrieval, confidence
scoring and the answer-building helpers used by the chat orchestrator.
Only the exception hierarchy is re-exported here; import components
from their modules.
"""

from cvportal.core.exceptions import (
    ChatProcessingError,
    ChunkingWarning,
    CVPortalException,
    EmbeddingAuthError,
    EmbeddingError,
    EmbeddingGenerationFailed,
    EmbeddingInputError,
    EmbeddingRateLimitError,
    LLMError,
    RetrievalError,
    ValidationError,
    VectorStoreUnavailable,
)

__all__ = [
    "CVPortalException",
    "ChatProcessingError",
    "ChunkingWarning",
    "EmbeddingAuthError",
    "EmbeddingError",
    "EmbeddingGenerationFailed",
    "EmbeddingInputError",
    "EmbeddingRateLimitError",
    "LLMError",
    "RetrievalError",
    "ValidationError",
    "VectorStoreUnavailable",
]
