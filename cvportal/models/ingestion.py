"""
Ingestion result schema.

Dependencies: pydantic
System role: CV ingestion API contract
"""

from pydantic import Field

from cvportal.models.chat import CamelModel


class IngestionResult(CamelModel):
    """Summary of one CV ingestion run."""

    owner_id: str
    namespace: str
    status: str = Field(description="'stored', 'skipped' (already indexed) or 'empty'")
    chunk_count: int = 0
    embedding_count: int = 0
    skipped_chunk_ids: list[str] = Field(default_factory=list)
    processing_time_ms: int = 0


class EmbeddingStatus(CamelModel):
    owner_id: str
    has_data: bool
