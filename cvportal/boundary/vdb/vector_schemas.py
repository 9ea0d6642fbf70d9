"""
Vector database schemas.

Pydantic models for the provider-level wire shapes: records written,
matches returned, and index statistics.

Dependencies: pydantic
System role: Type definitions for vector operations
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class VectorRecord(BaseModel):
    """Vector written to a namespace."""

    id: str = Field(description="Embedding (chunk) identifier, unique within a namespace")
    values: list[float] = Field(description="Embedding vector")
    metadata: dict[str, Any] = Field(default_factory=dict, description="Stored payload")


class VectorMatch(BaseModel):
    """Single nearest-neighbour match."""

    id: str
    score: float = Field(description="Cosine similarity (-1.0 to 1.0)")
    metadata: dict[str, Any] = Field(default_factory=dict)


class IndexStats(BaseModel):
    """Index-wide statistics."""

    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel)

    dimension: int | None = None
    total_vector_count: int = 0
    namespaces: dict[str, int] = Field(default_factory=dict, description="Vector count per namespace")
