"""
Embedding provider protocol and wire shapes.

Dependencies: pydantic
System role: Contract between the embedding generator and its backend
"""

from typing import Literal, Protocol, runtime_checkable

from pydantic import BaseModel, Field


class EmbeddingRequest(BaseModel):
    """Single embedding call."""

    model: str
    input: str
    input_type: Literal["document", "query"] = Field(
        default="query",
        description="CV chunks are embedded as documents, visitor questions as queries",
    )
    encoding_format: str = "float"


class EmbeddingResponse(BaseModel):
    """Embedding vector plus provider usage counters."""

    vector: list[float]
    usage: dict[str, int] = Field(default_factory=dict)


@runtime_checkable
class EmbeddingProvider(Protocol):
    """
    Backend that turns one text into one vector.

    Implementations raise EmbeddingRateLimitError (retryable),
    EmbeddingAuthError (fatal) or EmbeddingInputError (skip the chunk).
    """

    async def embed(self, request: EmbeddingRequest) -> EmbeddingResponse: ...
