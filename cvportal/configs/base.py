"""
Shared settings base.

Every config module reads the same ``.env`` file, matches variable names
case-insensitively, and ignores keys owned by other modules.

Dependencies: pydantic_settings
System role: Parent class of the per-concern config modules
"""

from pydantic import Field
from pydantic_settings import BaseSettings as PydanticBaseSettings, SettingsConfigDict


class BaseSettings(PydanticBaseSettings):
    """Common ``.env`` loading plus the process log level."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    log_level: str = Field(
        default="INFO",
        description="Root log level applied by setup_logging",
    )
