"""Settings, error types and logging shared by the services, API and CLI."""

from __future__ import annotations

from .config import Settings, get_settings, settings, split_model_id
from .exceptions import (
    AnalyzerError,
    ClassificationError,
    ConfigurationError,
    LLMError,
    ValidationError,
)
from .logging import LoggerMixin, get_logger, set_log_level

__all__ = [
    "Settings",
    "get_settings",
    "settings",
    "split_model_id",
    "AnalyzerError",
    "ClassificationError",
    "ConfigurationError",
    "LLMError",
    "ValidationError",
    "LoggerMixin",
    "get_logger",
    "set_log_level",
]
