"""
Content chunk domain model.

Represents a bounded span of CV text prepared for embedding, with an id
that is reproducible from (section key, item index, chunk index).

Dependencies: pydantic
System role: Chunk data structure for CV ingestion
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class ChunkSection(str, Enum):
    """Section label attached to every chunk, embedding and citation."""

    SUMMARY = "summary"
    EXPERIENCE = "experience"
    EDUCATION = "education"
    SKILLS = "skills"
    PROJECTS = "projects"
    CERTIFICATIONS = "certifications"
    OTHER = "other"


class ContentChunk(BaseModel):
    """Immutable chunk of CV text."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(description="Deterministic chunk identifier")
    owner_id: str = Field(description="CV identifier the chunk belongs to")
    content: str = Field(description="Chunk text content")
    section: ChunkSection = Field(description="Section label")
    section_key: str = Field(description="Source CV field (e.g. 'personal_info')")
    item_index: int | None = Field(default=None, description="Index within an array section")
    chunk_index: int = Field(default=0, ge=0, description="Window index within the item")
    token_count_estimate: int = Field(ge=0, description="words / 0.75 heuristic")
