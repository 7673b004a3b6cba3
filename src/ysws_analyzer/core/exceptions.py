"""
Custom exception hierarchy for the YSWS analyzer.

Provides domain-specific exceptions with rich error context.
"""

from __future__ import annotations

from typing import Any


class AnalyzerError(Exception):
    """Base exception for all analyzer errors."""

    def __init__(self, message: str, **context: Any) -> None:
        """
        Initialize exception with message and context.

        Args:
            message: Human-readable error message
            **context: Additional error context for logging
        """
        super().__init__(message)
        self.message = message
        self.context = context

    def __str__(self) -> str:
        """Return formatted error message."""
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} ({context_str})"
        return self.message


class ValidationError(AnalyzerError):
    """Raised when a submission is missing required fields."""


class LLMError(AnalyzerError):
    """Raised when LLM communication fails."""


class ClassificationError(AnalyzerError):
    """Raised when the model reply is not a valid analysis."""


class ConfigurationError(AnalyzerError):
    """Raised when configuration is invalid."""
