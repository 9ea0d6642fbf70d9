"""
Embedding provider configuration settings.

Selects the embedding backend and controls batching, pacing, timeouts
and retry/backoff for embedding calls.

Dependencies: pydantic, pydantic_settings
System role: Embedding generation configuration
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from cvportal.configs.base import BaseSettings


class EmbeddingSettings(BaseSettings):
    """Embedding provider configuration (Google Gemini or Amazon Bedrock)."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="EMBEDDING_",
        case_sensitive=False,
        extra="ignore",
    )

    provider: str = Field(
        default="google",
        description="Embedding provider: 'google' (Gemini) or 'bedrock' (Titan)",
    )
    model: str = Field(
        default="models/gemini-embedding-001",
        description="Embedding model identifier",
    )
    dimension: int = Field(
        default=1536,
        description="Embedding vector dimension (must match the vector index)",
    )
    region: str = Field(default="us-east-1", description="AWS region for Bedrock embeddings")

    batch_size: int = Field(default=10, ge=1, description="Chunks per paced batch")
    pacing_delay_seconds: float = Field(
        default=0.1,
        ge=0.0,
        description="Minimum delay between batches to respect provider rate limits",
    )
    request_timeout_seconds: float = Field(
        default=30.0,
        gt=0.0,
        description="Per-call timeout for embedding requests",
    )
    max_retries: int = Field(default=3, ge=1, description="Attempts per call on rate limiting")
    backoff_initial_seconds: float = Field(default=0.5, ge=0.0)
    backoff_max_seconds: float = Field(default=10.0, ge=0.0)
