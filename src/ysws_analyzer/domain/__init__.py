"""Domain models and business entities."""

from __future__ import annotations

from .models import (
    AnalysisResult,
    DecisionResponse,
    DemoUrlType,
    ReadmeTemplate,
    ReleaseType,
    Submission,
)

__all__ = [
    "AnalysisResult",
    "DecisionResponse",
    "DemoUrlType",
    "ReadmeTemplate",
    "ReleaseType",
    "Submission",
]
