"""Business services: URL checks, prompt assembly and classification."""

from __future__ import annotations

from .classifier import ProjectClassifier, analyze_submission, parse_analysis
from .llm import LLMClient

__all__ = ["LLMClient", "ProjectClassifier", "analyze_submission", "parse_analysis"]
