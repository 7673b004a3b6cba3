"""
YSWS Project Analyzer - decide whether a hackathon submission counts for
a "You Ship, We Ship" program.

Checks the submitted URLs, fetches the README and repository page, and asks
a language model to classify the project against the program's rules.
"""

from __future__ import annotations

__version__ = "1.0.0"

from .core.config import settings
from .domain.models import (
    AnalysisResult,
    DecisionResponse,
    DemoUrlType,
    ReadmeTemplate,
    ReleaseType,
    Submission,
)
from .services.classifier import ProjectClassifier, analyze_submission

__all__ = [
    "__version__",
    "settings",
    "analyze_submission",
    "ProjectClassifier",
    "AnalysisResult",
    "DecisionResponse",
    "DemoUrlType",
    "ReadmeTemplate",
    "ReleaseType",
    "Submission",
]
