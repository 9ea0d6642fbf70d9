"""
Embedding domain models.

One embedding per chunk (same id), tagged with the producing model and a
creation timestamp so stored vectors can be re-embedded later.

Dependencies: pydantic
System role: Embedding data structures shared by generator and vector store
"""

from datetime import datetime, timezone

from pydantic import BaseModel, Field

from cvportal.models.chunk import ChunkSection


class EmbeddingMetadata(BaseModel):
    """Metadata stored alongside each vector."""

    section: ChunkSection
    section_key: str = ""
    chunk_index: int = 0
    importance: int = Field(default=1, ge=0, description="Per-section weight (higher = more central)")
    keywords: list[str] = Field(default_factory=list)
    token_count: int = 0
    embedding_model: str = ""
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class Embedding(BaseModel):
    """Vector plus content for one chunk."""

    id: str = Field(description="Chunk identifier")
    owner_id: str = Field(description="CV identifier (namespace key)")
    vector: list[float] = Field(description="Embedding vector")
    content: str = Field(description="Chunk text content")
    metadata: EmbeddingMetadata


class EmbeddingSkipped(BaseModel):
    """Record of a chunk whose embedding call failed and was skipped."""

    chunk_id: str
    reason: str
    error_type: str


class EmbeddingBatchResult(BaseModel):
    """Outcome of embedding a list of chunks."""

    embeddings: list[Embedding] = Field(default_factory=list)
    skipped: list[EmbeddingSkipped] = Field(default_factory=list)

    @property
    def attempted(self) -> int:
        return len(self.embeddings) + len(self.skipped)
