"""
End-to-end YSWS classification of a submission.

Pipeline per submission:
1. Check the three URLs concurrently; any failure ends the analysis with
   the "inaccessible" result and no model call.
2. Fetch the README and repository page concurrently.
3. Ask the model for a JSON analysis and validate it against
   ``AnalysisResult``; any failure yields the "AI inference error" result.
"""

from __future__ import annotations

import asyncio
import json
import re
from typing import Any

import httpx
from pydantic import ValidationError as PydanticValidationError

from ..core.exceptions import AnalyzerError, ClassificationError
from ..core.logging import LoggerMixin
from ..domain.models import AnalysisResult, Submission
from .fetcher import build_client, check_url, fetch_content
from .llm import LLMClient
from .prompts import build_prompt

_CODE_FENCE = re.compile(r"^```(?:json)?\s*(.*?)\s*```$", re.DOTALL | re.IGNORECASE)


def parse_analysis(text: str) -> AnalysisResult:
    """
    Parse a model reply into an ``AnalysisResult``.

    A surrounding Markdown code fence is tolerated; anything else that is not
    a single JSON object matching the schema is rejected.

    Raises:
        ClassificationError: If the reply is not valid JSON or fails validation
    """
    candidate = text.strip()
    fenced = _CODE_FENCE.match(candidate)
    if fenced:
        candidate = fenced.group(1)

    try:
        data: Any = json.loads(candidate)
    except json.JSONDecodeError as e:
        raise ClassificationError(
            "Model reply is not valid JSON",
            error=str(e),
            preview=candidate[:200],
        ) from e

    if not isinstance(data, dict):
        raise ClassificationError(
            "Model reply is not a JSON object",
            reply_type=type(data).__name__,
        )

    try:
        return AnalysisResult.model_validate(data)
    except PydanticValidationError as e:
        raise ClassificationError(
            "Model reply does not match the analysis schema",
            errors=e.error_count(),
            fields=sorted({str(err["loc"][0]) for err in e.errors() if err["loc"]}),
        ) from e


class ProjectClassifier(LoggerMixin):
    """Runs the reachability gate, content fetch and model classification."""

    def __init__(
        self,
        llm: Any | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Args:
            llm: Object with an async ``complete(prompt)`` method
                 (defaults to an ``LLMClient`` for the configured model)
            transport: Optional httpx transport for the per-request client
        """
        self.llm = llm if llm is not None else LLMClient()
        self.transport = transport

    async def classify(
        self,
        submission: Submission,
        readme_content: str | None,
        repo_content: str | None,
    ) -> AnalysisResult:
        """Ask the model for an analysis; never raises."""
        prompt = build_prompt(submission, readme_content, repo_content)
        try:
            reply = await self.llm.complete(prompt)
            result = parse_analysis(reply)
        except AnalyzerError as e:
            self.logger.error(
                "classification_fallback",
                repo_url=submission.repo_url,
                error=str(e),
            )
            return AnalysisResult.inference_error(submission)
        except Exception:
            self.logger.exception(
                "classification_fallback",
                repo_url=submission.repo_url,
            )
            return AnalysisResult.inference_error(submission)

        self.logger.info(
            "classification_completed",
            repo_url=submission.repo_url,
            counts_for_ysws=result.counts_for_ysws,
            demo_url_type=result.demo_url_type.value,
        )
        return result

    async def analyze(
        self,
        submission: Submission,
        client: httpx.AsyncClient | None = None,
    ) -> AnalysisResult:
        """
        Run the full pipeline for one submission.

        Args:
            submission: URLs to analyze
            client: Optional HTTP client (a new one is created and closed if None)
        """
        if client is None:
            async with build_client(transport=self.transport) as owned_client:
                return await self._analyze(submission, owned_client)
        return await self._analyze(submission, client)

    async def _analyze(
        self,
        submission: Submission,
        client: httpx.AsyncClient,
    ) -> AnalysisResult:
        self.logger.info("analysis_started", repo_url=submission.repo_url)

        reachable = await asyncio.gather(
            *(check_url(url, client) for url in submission.urls)
        )
        if not all(reachable):
            self.logger.info(
                "urls_inaccessible",
                repo_url=submission.repo_url,
                repo=reachable[0],
                demo=reachable[1],
                readme=reachable[2],
            )
            return AnalysisResult.inaccessible(submission)

        readme_content, repo_content = await asyncio.gather(
            fetch_content(submission.readme_url, client),
            fetch_content(submission.repo_url, client),
        )
        return await self.classify(submission, readme_content, repo_content)


async def analyze_submission(
    submission: Submission,
    llm: Any | None = None,
    *,
    model: str | None = None,
) -> AnalysisResult:
    """
    High-level convenience function to analyze a submission.

    Args:
        submission: URLs to analyze
        llm: Completion client to use instead of a new ``LLMClient``
        model: Model identifier for the ``LLMClient`` created when llm is None

    Example:
        >>> result = asyncio.run(analyze_submission(Submission(
        ...     repo_url="https://github.com/me/app",
        ...     demo_url="https://me.github.io/app",
        ...     readme_url="https://raw.githubusercontent.com/me/app/main/README.md",
        ... )))
        >>> result.counts_for_ysws
    """
    classifier = ProjectClassifier(llm if llm is not None else LLMClient(model))
    try:
        return await classifier.analyze(submission)
    finally:
        if llm is None:
            await classifier.llm.aclose()
