"""
Exception hierarchy for the CV portal chat backend.

Provides layered exception structure for domain-specific errors.
All exceptions include context for observability and debugging.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any


class CVPortalException(Exception):
    """Base exception for all CV portal errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context for debugging
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ValidationError(CVPortalException):
    """Raised when input validation fails."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize validation error.

        Args:
            message: Error message
            field: Field name that failed validation
            details: Additional context
        """
        details = details or {}
        if field:
            details["field"] = field
        super().__init__(message, details)


class ChunkingWarning(UserWarning):
    """Issued (not raised) when chunking of one section item is cut short."""


class EmbeddingError(CVPortalException):
    """Base exception for embedding provider failures."""

    def __init__(
        self,
        message: str,
        chunk_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize embedding error.

        Args:
            message: Error message
            chunk_id: Chunk whose embedding failed, if any
            details: Additional context
        """
        details = details or {}
        if chunk_id:
            details["chunk_id"] = chunk_id
        super().__init__(message, details)


class EmbeddingRateLimitError(EmbeddingError):
    """Provider throttled the request. Retryable."""


class EmbeddingAuthError(EmbeddingError):
    """Provider rejected the credentials. Fatal for the whole operation."""


class EmbeddingInputError(EmbeddingError):
    """Provider rejected the input text. The chunk is skipped."""


class EmbeddingGenerationFailed(EmbeddingError):
    """Raised when an ingestion produced no embeddings at all."""

    def __init__(
        self,
        message: str,
        owner_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if owner_id:
            details["owner_id"] = owner_id
        super().__init__(message, details=details)


class VectorStoreUnavailable(CVPortalException):
    """Raised when vector store operations fail or time out."""

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        namespace: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize vector store error.

        Args:
            message: Error message
            operation: Operation that failed (upsert, query, delete, stats)
            namespace: Namespace the operation targeted
            details: Additional context
        """
        details = details or {}
        if operation:
            details["operation"] = operation
        if namespace:
            details["namespace"] = namespace
        super().__init__(message, details)


class RetrievalError(CVPortalException):
    """Raised when retrieval operations fail."""

    def __init__(
        self,
        message: str,
        owner_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if owner_id:
            details["owner_id"] = owner_id
        super().__init__(message, details)


class LLMError(CVPortalException):
    """Raised when the language-model completion call fails."""


class ChatProcessingError(CVPortalException):
    """Raised inside the chat orchestrator; converted to an apology response."""

    def __init__(
        self,
        message: str,
        session_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if session_id:
            details["session_id"] = session_id
        super().__init__(message, details)
