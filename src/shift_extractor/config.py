"""Configuration management for Shift Extractor.

This module handles application configuration using Pydantic settings.
Configuration can be loaded from environment variables or .env files.
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with environment variable support.

    All settings can be overridden via environment variables with
    the SHIFT_EXTRACTOR_ prefix (e.g., SHIFT_EXTRACTOR_ANTHROPIC_MODEL).
    """

    model_config = SettingsConfigDict(
        env_prefix="SHIFT_EXTRACTOR_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Anthropic Configuration
    anthropic_api_key: str | None = Field(
        default=None,
        description="API key for the Anthropic Messages API",
    )
    anthropic_base_url: str = Field(
        default="https://api.anthropic.com",
        description="Anthropic API base URL",
    )
    anthropic_model: str = Field(
        default="claude-sonnet-4-5-20250929",
        description="Vision-capable model used for shift extraction",
    )
    anthropic_version: str = Field(
        default="2023-06-01",
        description="Value sent in the anthropic-version header",
    )
    anthropic_max_tokens: int = Field(
        default=1000,
        gt=0,
        description="Output token ceiling for a single extraction request",
    )
    anthropic_timeout: float = Field(
        default=120.0,
        gt=0,
        description="Timeout for the extraction request in seconds",
    )

    # Upload limits, enforced by callers before invoking the pipeline
    max_images: int = Field(
        default=8,
        gt=0,
        description="Maximum number of images accepted for one upload",
    )
    max_image_bytes: int = Field(
        default=10 * 1024 * 1024,
        gt=0,
        description="Maximum size of a single uploaded image in bytes",
    )

    # Application Configuration
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )
    debug: bool = Field(
        default=False,
        description="Enable debug mode",
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings.

    Returns:
        Settings: Application settings instance.
    """
    return Settings()
