"""
Chat and RAG tuning settings.

Chunking heuristics, confidence weights, citation and suggestion limits,
and the language-model backend used by the chat orchestrator. The
numeric constants are empirical and kept configurable rather than derived.

Dependencies: pydantic, pydantic_settings
System role: Chat orchestration configuration
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from cvportal.configs.base import BaseSettings


class ChatSettings(BaseSettings):
    """Chat orchestration, chunking and scoring configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="CHAT_",
        case_sensitive=False,
        extra="ignore",
    )

    # Chunking
    max_chunk_tokens: int = Field(default=500, ge=1)
    overlap_tokens: int = Field(default=50, ge=0)
    words_per_token: float = Field(default=0.75, gt=0.0)
    max_chunks_per_item: int = Field(default=100, ge=1)

    # Confidence scoring
    semantic_weight: float = Field(default=0.4, ge=0.0, le=1.0)
    factual_weight: float = Field(default=0.4, ge=0.0, le=1.0)
    completeness_weight: float = Field(default=0.2, ge=0.0, le=1.0)
    semantic_saturation: int = Field(default=3, ge=1)
    factual_threshold: float = Field(default=0.8)
    completeness_saturation: int = Field(default=200, ge=1)

    # Response assembly
    max_citations: int = Field(default=3, ge=0)
    citation_excerpt_length: int = Field(default=200, ge=1)
    max_suggestions: int = Field(default=3, ge=0)
    history_window: int = Field(default=5, ge=0)

    # Language model
    llm_provider: str = Field(
        default="none",
        description="Completion backend: 'google', 'bedrock' or 'none' (template answers)",
    )
    llm_model: str = Field(default="gemini-2.0-flash")
    llm_temperature: float = Field(default=0.0, ge=0.0, le=2.0)
    llm_max_tokens: int = Field(default=1000, ge=1)
    llm_region: str = Field(default="us-east-1")
    llm_timeout_seconds: float = Field(default=30.0, gt=0.0)
    max_context_length: int = Field(default=8000, ge=1)
    response_style: str = Field(default="professional")
