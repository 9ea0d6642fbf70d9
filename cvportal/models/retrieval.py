"""
Retrieval and confidence models.

Ephemeral per-query structures: similarity-scored results, the assembled
RAG context, and the derived confidence score.

Dependencies: pydantic
System role: Retrieval result contracts
"""

from pydantic import BaseModel, Field

from cvportal.models.embedding import Embedding


class RetrievalResult(BaseModel):
    """Single nearest-neighbour match."""

    embedding: Embedding
    similarity: float = Field(ge=-1.0, le=1.0, description="Cosine similarity")

    @property
    def section(self) -> str:
        return self.embedding.metadata.section.value

    @property
    def content(self) -> str:
        return self.embedding.content


class RAGContextResult(BaseModel):
    """Filtered retrieval output ready for prompt assembly."""

    query: str
    results: list[RetrievalResult] = Field(default_factory=list)
    context: str = ""
    sources: list[str] = Field(default_factory=list)
    confidence: float = Field(default=0.0, description="Mean similarity of kept results")

    @property
    def is_empty(self) -> bool:
        return not self.results


class ConfidenceScore(BaseModel):
    """Bounded confidence derived from retrieval signal and answer length."""

    overall: float = Field(ge=0.0, le=1.0)
    semantic: float = Field(ge=0.0, le=1.0)
    factual: float = Field(ge=0.0, le=1.0)
    completeness: float = Field(ge=0.0, le=1.0)
