"""
Integration tests for the HTTP API.

Exercises POST /analyze through FastAPI's TestClient with the classifier
dependency overridden (mocked HTTP transport and stub model).
"""

from __future__ import annotations

import json
from typing import Any, Callable, Generator

import httpx
import pytest
from fastapi.testclient import TestClient

from ysws_analyzer.domain.models import (
    INACCESSIBLE_REASONING,
    INFERENCE_ERROR_REASONING,
    MISSING_PARAMETERS_REASONING,
    Submission,
)
from ysws_analyzer.services.classifier import ProjectClassifier
from ysws_analyzer.web.app import app, get_classifier


@pytest.fixture
def use_classifier() -> Generator[Callable[[ProjectClassifier], None], None, None]:
    """Install a classifier for the duration of a test."""

    def _install(classifier: ProjectClassifier) -> None:
        app.dependency_overrides[get_classifier] = lambda: classifier

    yield _install
    app.dependency_overrides.clear()


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)


def _body(submission: Submission) -> dict[str, str]:
    return {
        "repoUrl": submission.repo_url,
        "demoUrl": submission.demo_url,
        "readmeUrl": submission.readme_url,
    }


class TestAnalyzeEndpoint:
    """Tests for POST /analyze."""

    def test_eligible_project(
        self,
        client: TestClient,
        use_classifier: Callable[[ProjectClassifier], None],
        submission: Submission,
        analysis_payload: dict[str, Any],
        reachable_pages: dict[str, tuple[int, str]],
        transport_factory: Callable[..., httpx.MockTransport],
        stub_llm: type,
    ) -> None:
        """Test the end-to-end scenario with a deterministic model reply."""
        llm = stub_llm(reply=json.dumps(analysis_payload))
        use_classifier(ProjectClassifier(llm, transport=transport_factory(reachable_pages)))

        response = client.post("/analyze", json=_body(submission))

        assert response.status_code == 200
        assert response.json() == {
            "ysws_decision": True,
            "ysws_reasoning": analysis_payload["ysws_reasoning"],
        }

    def test_response_has_only_two_fields(
        self,
        client: TestClient,
        use_classifier: Callable[[ProjectClassifier], None],
        submission: Submission,
        analysis_reply: str,
        reachable_pages: dict[str, tuple[int, str]],
        transport_factory: Callable[..., httpx.MockTransport],
        stub_llm: type,
    ) -> None:
        """Test that internal analysis fields never reach the caller."""
        llm = stub_llm(reply=analysis_reply)
        use_classifier(ProjectClassifier(llm, transport=transport_factory(reachable_pages)))

        response = client.post("/analyze", json=_body(submission))

        assert set(response.json()) == {"ysws_decision", "ysws_reasoning"}

    @pytest.mark.parametrize("missing", ["repoUrl", "demoUrl", "readmeUrl"])
    def test_missing_parameter(
        self,
        missing: str,
        client: TestClient,
        use_classifier: Callable[[ProjectClassifier], None],
        submission: Submission,
        stub_llm: type,
    ) -> None:
        """Test that each missing field yields 400."""
        llm = stub_llm(reply="{}")
        use_classifier(ProjectClassifier(llm))
        body = _body(submission)
        del body[missing]

        response = client.post("/analyze", json=body)

        assert response.status_code == 400
        assert response.json() == {
            "ysws_decision": False,
            "ysws_reasoning": MISSING_PARAMETERS_REASONING,
        }
        assert llm.prompts == []

    def test_empty_object(
        self,
        client: TestClient,
        use_classifier: Callable[[ProjectClassifier], None],
        stub_llm: type,
    ) -> None:
        """Test that an empty body object yields 400."""
        use_classifier(ProjectClassifier(stub_llm(reply="{}")))

        response = client.post("/analyze", json={})

        assert response.status_code == 400
        assert response.json()["ysws_decision"] is False

    def test_unreachable_url(
        self,
        client: TestClient,
        use_classifier: Callable[[ProjectClassifier], None],
        submission: Submission,
        reachable_pages: dict[str, tuple[int, str]],
        transport_factory: Callable[..., httpx.MockTransport],
        stub_llm: type,
    ) -> None:
        """Test that an unreachable demo yields a negative decision."""
        del reachable_pages[submission.demo_url]
        llm = stub_llm(reply="{}")
        use_classifier(ProjectClassifier(llm, transport=transport_factory(reachable_pages)))

        response = client.post("/analyze", json=_body(submission))

        assert response.status_code == 200
        assert response.json() == {
            "ysws_decision": False,
            "ysws_reasoning": INACCESSIBLE_REASONING,
        }

    def test_malformed_model_output(
        self,
        client: TestClient,
        use_classifier: Callable[[ProjectClassifier], None],
        submission: Submission,
        reachable_pages: dict[str, tuple[int, str]],
        transport_factory: Callable[..., httpx.MockTransport],
        stub_llm: type,
    ) -> None:
        """Test that garbage model output is reported as an inference error."""
        llm = stub_llm(reply="```\nnot json\n```")
        use_classifier(ProjectClassifier(llm, transport=transport_factory(reachable_pages)))

        response = client.post("/analyze", json=_body(submission))

        assert response.status_code == 200
        assert response.json() == {
            "ysws_decision": False,
            "ysws_reasoning": INFERENCE_ERROR_REASONING,
        }

    def test_unexpected_error(
        self,
        client: TestClient,
        use_classifier: Callable[[ProjectClassifier], None],
        submission: Submission,
    ) -> None:
        """Test that uncaught pipeline errors become a 500 envelope."""

        class ExplodingClassifier(ProjectClassifier):
            async def analyze(self, submission: Submission, client: Any = None) -> Any:
                raise RuntimeError("disk on fire")

        use_classifier(ExplodingClassifier(llm=object()))

        response = client.post("/analyze", json=_body(submission))

        assert response.status_code == 500
        assert response.json() == {
            "ysws_decision": False,
            "ysws_reasoning": "Internal server error: disk on fire",
        }

    def test_malformed_json_body(
        self,
        client: TestClient,
        use_classifier: Callable[[ProjectClassifier], None],
        stub_llm: type,
    ) -> None:
        """Test that an undecodable body is an internal error."""
        use_classifier(ProjectClassifier(stub_llm(reply="{}")))

        response = client.post(
            "/analyze",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 500
        assert response.json()["ysws_decision"] is False
        assert response.json()["ysws_reasoning"].startswith("Internal server error: ")


class TestRouting:
    """Tests for everything that is not POST /analyze."""

    @pytest.mark.parametrize(
        ("method", "path"),
        [
            ("GET", "/analyze"),
            ("PUT", "/analyze"),
            ("GET", "/"),
            ("POST", "/analyse"),
            ("GET", "/docs"),
            ("GET", "/openapi.json"),
        ],
    )
    def test_not_found(self, client: TestClient, method: str, path: str) -> None:
        """Test that other methods and paths answer a plain-text 404."""
        response = client.request(method, path)

        assert response.status_code == 404
        assert response.text == "Not Found"
        assert response.headers["content-type"].startswith("text/plain")
