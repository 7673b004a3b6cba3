"""
Core configuration management using Pydantic V2 Settings.

This module provides type-safe, validated configuration management with support for:
- Environment variables
- .env file loading
- Runtime validation
"""

from __future__ import annotations

import json
from functools import lru_cache
from typing import Annotated, Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

DEFAULT_MEDIA_EXTENSIONS: tuple[str, ...] = (
    "jpg",
    "jpeg",
    "png",
    "gif",
    "mp4",
    "mov",
    "avi",
    "webm",
    "mkv",
)


def split_model_id(model: str) -> tuple[str, str]:
    """Split ``provider/name``; bare names belong to the OpenAI back-end."""
    if "/" not in model:
        return "openai", model
    provider, name = model.split("/", 1)
    return provider, name


class Settings(BaseSettings):
    """
    Application-wide configuration with environment variable support.

    All settings can be overridden via environment variables or .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ═══════════════════════════════════════════════════════════════════════
    # LLM Configuration
    # ═══════════════════════════════════════════════════════════════════════
    llm_model: str = Field(
        default="openai/gpt-4o-mini",
        description="LLM model identifier (prefix: openai/, ollama/)",
    )

    openai_api_key: str | None = Field(
        default=None,
        description="OpenAI API key for GPT models",
    )

    ollama_url: str = Field(
        default="http://localhost:11434",
        description="Ollama server URL for local models",
    )

    llm_max_tokens: int = Field(
        default=1024,
        ge=64,
        le=16384,
        description="Maximum number of tokens the model may generate",
    )

    llm_temperature: float = Field(
        default=0.0,
        ge=0.0,
        le=2.0,
        description="Sampling temperature for classification",
    )

    llm_timeout_seconds: float = Field(
        default=60.0,
        gt=0,
        le=600,
        description="Timeout for a single model call in seconds",
    )

    # ═══════════════════════════════════════════════════════════════════════
    # Fetch Configuration
    # ═══════════════════════════════════════════════════════════════════════
    url_check_timeout_seconds: float = Field(
        default=10.0,
        gt=0,
        le=120,
        description="Timeout for a reachability check in seconds",
    )

    fetch_timeout_seconds: float = Field(
        default=15.0,
        gt=0,
        le=120,
        description="Timeout for a content fetch in seconds",
    )

    max_content_chars: int = Field(
        default=5000,
        ge=100,
        le=100_000,
        description="Maximum characters of fetched content passed to the model",
    )

    # NoDecode: MEDIA_EXTENSIONS may be "jpg,png" as well as a JSON list
    media_extensions: Annotated[tuple[str, ...], NoDecode] = Field(
        default=DEFAULT_MEDIA_EXTENSIONS,
        description="File extensions treated as media and never fetched",
    )

    user_agent: str = Field(
        default="ysws-analyzer/1.0",
        description="User-Agent header for outbound requests",
    )

    # ═══════════════════════════════════════════════════════════════════════
    # Application Configuration
    # ═══════════════════════════════════════════════════════════════════════
    app_name: str = Field(
        default="YSWS Project Analyzer",
        description="Application display name",
    )

    app_version: str = Field(
        default="1.0.0",
        description="Application version",
    )

    environment: Literal["development", "production", "testing"] = Field(
        default="development",
        description="Runtime environment",
    )

    debug: bool = Field(
        default=False,
        description="Enable debug mode",
    )

    # ═══════════════════════════════════════════════════════════════════════
    # Logging Configuration
    # ═══════════════════════════════════════════════════════════════════════
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )

    log_format: Literal["json", "console"] = Field(
        default="console",
        description="Log output format",
    )

    # ═══════════════════════════════════════════════════════════════════════
    # Web Server Configuration
    # ═══════════════════════════════════════════════════════════════════════
    app_host: str = Field(
        default="0.0.0.0",
        description="Web server host",
    )

    app_port: int = Field(
        default=8000,
        ge=1,
        le=65535,
        description="Web server port",
    )

    # ═══════════════════════════════════════════════════════════════════════
    # Validators
    # ═══════════════════════════════════════════════════════════════════════
    @field_validator("log_level", mode="before")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensure log level is uppercase."""
        return v.upper() if isinstance(v, str) else v

    @field_validator("llm_model")
    @classmethod
    def validate_model_format(cls, v: str) -> str:
        """Validate model identifier format."""
        valid_prefixes = ("openai/", "ollama/")
        if not v.startswith(valid_prefixes):
            # Default to openai if no prefix
            return f"openai/{v}"
        return v

    @field_validator("media_extensions", mode="before")
    @classmethod
    def normalize_extensions(cls, v: object) -> object:
        """Accept comma-separated or JSON list strings and strip dots and case."""
        if isinstance(v, str):
            if v.lstrip().startswith("["):
                v = json.loads(v)
            else:
                v = [part for part in v.split(",") if part.strip()]
        if isinstance(v, (list, tuple, set)):
            return tuple(str(ext).strip().lstrip(".").lower() for ext in v)
        return v

    # ═══════════════════════════════════════════════════════════════════════
    # Helper Methods
    # ═══════════════════════════════════════════════════════════════════════
    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"

    @property
    def llm_provider(self) -> str:
        """Provider prefix of the configured model."""
        return split_model_id(self.llm_model)[0]

    @property
    def llm_model_name(self) -> str:
        """Model name without the provider prefix."""
        return split_model_id(self.llm_model)[1]


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Get cached application settings instance.

    Returns:
        Settings: Singleton settings object
    """
    return Settings()


# Convenience export
settings: Settings = get_settings()
