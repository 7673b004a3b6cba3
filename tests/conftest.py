"""
Pytest configuration and fixtures.

Provides shared fixtures and configuration for all tests.
"""

from __future__ import annotations

import json
from typing import Any, Callable

import httpx
import pytest

from ysws_analyzer.core.config import Settings
from ysws_analyzer.domain.models import Submission

REPO_URL = "https://github.com/hacker/weather-cli"
DEMO_URL = "https://github.com/hacker/weather-cli/releases/tag/v1.0.0"
README_URL = "https://raw.githubusercontent.com/hacker/weather-cli/main/README.md"

README_TEXT = "# weather-cli\n\nA terminal weather dashboard.\n\n## Install\n\npip install weather-cli\n"
REPO_PAGE_TEXT = "<html><body>hacker/weather-cli: A terminal weather dashboard</body></html>"


class StubLLM:
    """Completion client returning a canned reply and recording prompts."""

    def __init__(self, reply: str | None = None, error: BaseException | None = None) -> None:
        self.reply = reply
        self.error = error
        self.prompts: list[str] = []

    async def complete(self, prompt: str, max_tokens: int | None = None) -> str:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        assert self.reply is not None
        return self.reply


def make_transport(
    pages: dict[str, tuple[int, str]],
    seen: list[str] | None = None,
) -> httpx.MockTransport:
    """
    Build a mock transport serving ``pages`` (url -> (status, body)).

    Unknown URLs fail with a connection error; requested URLs are appended
    to ``seen`` when given.
    """

    def handler(request: httpx.Request) -> httpx.Response:
        url = str(request.url)
        if seen is not None:
            seen.append(url)
        if url not in pages:
            raise httpx.ConnectError("connection refused", request=request)
        status, body = pages[url]
        return httpx.Response(status, text=body)

    return httpx.MockTransport(handler)


@pytest.fixture
def submission() -> Submission:
    """Provide a sample submission."""
    return Submission(repo_url=REPO_URL, demo_url=DEMO_URL, readme_url=README_URL)


@pytest.fixture
def analysis_payload() -> dict[str, Any]:
    """Provide a valid model reply as a dictionary."""
    return {
        "project_name": "weather-cli",
        "description": "A terminal weather dashboard.",
        "readme_url": README_URL,
        "counts_for_ysws": True,
        "ysws_reasoning": "Original CLI tool with a downloadable release and a clear README.",
        "demo_url_type": "direct_link",
        "release_link": DEMO_URL,
        "release_type": "executable",
        "readme_template": "original",
        "is_fork": False,
    }


@pytest.fixture
def analysis_reply(analysis_payload: dict[str, Any]) -> str:
    """Provide a valid model reply as JSON text."""
    return json.dumps(analysis_payload)


@pytest.fixture
def reachable_pages() -> dict[str, tuple[int, str]]:
    """All three submission URLs answering 200."""
    return {
        REPO_URL: (200, REPO_PAGE_TEXT),
        DEMO_URL: (200, "release page"),
        README_URL: (200, README_TEXT),
    }


@pytest.fixture
def transport_factory() -> Callable[..., httpx.MockTransport]:
    """Expose ``make_transport`` to tests."""
    return make_transport


@pytest.fixture
def mock_settings() -> Settings:
    """Provide mock settings for testing."""
    return Settings(
        llm_model="ollama/test",
        environment="testing",
        log_level="DEBUG",
        max_content_chars=1000,
    )


@pytest.fixture
def stub_llm() -> type[StubLLM]:
    """Expose the ``StubLLM`` class to tests."""
    return StubLLM
