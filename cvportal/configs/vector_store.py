"""
Vector store configuration settings.

Manages vector storage configuration: backend selection, namespace
prefix, retrieval defaults and metadata limits.

Dependencies: pydantic, pydantic_settings
System role: Vector database configuration for RAG retrieval
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from cvportal.configs.base import BaseSettings


class VectorStoreSettings(BaseSettings):
    """Vector store configuration (in-memory for dev, S3 Vectors for prod)."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="VECTOR_STORE_",
        case_sensitive=False,
        extra="ignore",
    )

    store_type: str = Field(
        default="memory",
        description="Vector store type: 'memory' for local dev, 's3' for production",
    )
    aws_region: str = Field(default="us-east-1", description="AWS region for S3 Vectors")
    vectors_bucket: str = Field(default="cvportal-vectors", description="S3 Vectors bucket name")
    index_name: str = Field(default="cv-embeddings", description="S3 Vectors index name")

    namespace_prefix: str = Field(default="cv_", description="Prefix for per-CV namespaces")
    top_k: int = Field(default=5, ge=1, le=100, description="Number of top results to retrieve")
    similarity_threshold: float = Field(
        default=0.7,
        ge=-1.0,
        le=1.0,
        description="Minimum similarity score kept by retrieval",
    )

    max_content_length: int = Field(
        default=40960,
        ge=4,
        description="Maximum characters of content stored as vector metadata",
    )
    upsert_batch_size: int = Field(default=100, ge=1, description="Vectors per upsert call")
    upsert_delay_seconds: float = Field(default=0.2, ge=0.0, description="Delay between upsert batches")
    request_timeout_seconds: float = Field(default=15.0, gt=0.0, description="Per-call timeout")
