"""
Domain models using Pydantic V2.

Defines the per-request data structures for the analyzer with:
- Closed enumerations for every categorical field the model emits
- Strict validation of model output (unknown fields and values rejected)
- The two-field public response envelope
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, StrictBool, field_validator

from ..core.exceptions import ValidationError

INACCESSIBLE_REASONING = "One or more URLs are inaccessible"
INFERENCE_ERROR_REASONING = "AI inference error"
MISSING_PARAMETERS_REASONING = "Missing required parameters: repoUrl, demoUrl, readmeUrl"

REQUIRED_FIELDS: tuple[str, ...] = ("repoUrl", "demoUrl", "readmeUrl")


class DemoUrlType(str, Enum):
    """How the project's live demo is presented."""

    DIRECT_LINK = "direct_link"
    VIDEO = "video"
    JUSTIFIED_VIDEO = "justified_video"
    OTHER = "other"
    INACCESSIBLE = "inaccessible"


class ReleaseType(str, Enum):
    """Kind of packaged release the project ships."""

    EXECUTABLE = "executable"
    SOURCE_ONLY = "source_only"
    NONE = "none"


class ReadmeTemplate(str, Enum):
    """Whether the README is boilerplate or written for the project."""

    DEFAULT_TEMPLATE = "default_template"
    MODIFIED_TEMPLATE = "modified_template"
    ORIGINAL = "original"


class Submission(BaseModel):
    """
    A project submitted for YSWS review.

    Attributes:
        repo_url: Source repository URL
        demo_url: Live demo URL (site, video, release page...)
        readme_url: URL of the README, usually a raw file link
    """

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        str_strip_whitespace=True,
    )

    repo_url: str = Field(..., alias="repoUrl", min_length=1)
    demo_url: str = Field(..., alias="demoUrl", min_length=1)
    readme_url: str = Field(..., alias="readmeUrl", min_length=1)

    @classmethod
    def from_payload(cls, payload: Any) -> Submission:
        """
        Build a submission from a decoded request body.

        Raises:
            ValidationError: If the payload is not an object or a URL is missing
        """
        if not isinstance(payload, dict):
            raise ValidationError(
                MISSING_PARAMETERS_REASONING,
                payload_type=type(payload).__name__,
            )

        missing = [
            name
            for name in REQUIRED_FIELDS
            if not isinstance(payload.get(name), str) or not payload[name].strip()
        ]
        if missing:
            raise ValidationError(MISSING_PARAMETERS_REASONING, missing=missing)

        return cls(**{name: payload[name] for name in REQUIRED_FIELDS})

    @property
    def urls(self) -> tuple[str, str, str]:
        """All three URLs in repo, demo, README order."""
        return (self.repo_url, self.demo_url, self.readme_url)


class AnalysisResult(BaseModel):
    """
    Full classification of a submission.

    Field names double as the JSON keys the model is asked to emit, so the
    schema is validated strictly: unknown keys, unknown enum values and
    non-boolean flags are all rejected.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
    )

    project_name: str = Field(..., description="Name of the project")
    description: str = Field(..., description="One or two sentence summary")
    readme_url: str = Field(..., description="README URL that was reviewed")
    counts_for_ysws: StrictBool = Field(..., description="Eligibility decision")
    ysws_reasoning: str = Field(..., description="Short justification")
    demo_url_type: DemoUrlType
    release_link: str | None = Field(default=None, description="Release page, if any")
    release_type: ReleaseType
    readme_template: ReadmeTemplate
    is_fork: StrictBool

    @field_validator("release_link", mode="before")
    @classmethod
    def blank_release_link(cls, v: Any) -> Any:
        """Treat empty strings as no release."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @classmethod
    def fallback(
        cls,
        submission: Submission,
        reasoning: str,
        demo_url_type: DemoUrlType,
    ) -> AnalysisResult:
        return cls(
            project_name="Unknown",
            description="",
            readme_url=submission.readme_url,
            counts_for_ysws=False,
            ysws_reasoning=reasoning,
            demo_url_type=demo_url_type,
            release_link=None,
            release_type=ReleaseType.NONE,
            readme_template=ReadmeTemplate.ORIGINAL,
            is_fork=False,
        )

    @classmethod
    def inaccessible(cls, submission: Submission) -> AnalysisResult:
        """Result used when any submitted URL fails its reachability check."""
        return cls.fallback(submission, INACCESSIBLE_REASONING, DemoUrlType.INACCESSIBLE)

    @classmethod
    def inference_error(cls, submission: Submission) -> AnalysisResult:
        """Result used when the model call or its output is unusable."""
        return cls.fallback(submission, INFERENCE_ERROR_REASONING, DemoUrlType.OTHER)


class DecisionResponse(BaseModel):
    """Public response body of ``POST /analyze``."""

    model_config = ConfigDict(frozen=True)

    ysws_decision: bool
    ysws_reasoning: str

    @classmethod
    def from_result(cls, result: AnalysisResult) -> DecisionResponse:
        """Project a full analysis down to the decision and its reasoning."""
        return cls(
            ysws_decision=result.counts_for_ysws,
            ysws_reasoning=result.ysws_reasoning,
        )

    @classmethod
    def missing_parameters(cls) -> DecisionResponse:
        return cls(ysws_decision=False, ysws_reasoning=MISSING_PARAMETERS_REASONING)

    @classmethod
    def internal_error(cls, message: str) -> DecisionResponse:
        return cls(
            ysws_decision=False,
            ysws_reasoning=f"Internal server error: {message}",
        )
