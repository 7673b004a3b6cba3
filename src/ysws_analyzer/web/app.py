"""
FastAPI application exposing the YSWS classifier.

Endpoints
---------
POST /analyze   -> {"ysws_decision": bool, "ysws_reasoning": str}

Every other method or path answers 404 with a plain-text body.
"""

from __future__ import annotations

from typing import Any

from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from ..core.config import settings
from ..core.exceptions import ValidationError
from ..core.logging import get_logger
from ..domain.models import DecisionResponse, Submission
from ..services.classifier import ProjectClassifier

# ═══════════════════════════════════════════════════════════════════════════
# Application Setup
# ═══════════════════════════════════════════════════════════════════════════
logger = get_logger(__name__)

app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="YSWS eligibility classification for hackathon submissions",
    docs_url=None,
    redoc_url=None,
    openapi_url=None,
)


def get_classifier(request: Request) -> ProjectClassifier:
    """Return the app-wide classifier, creating it on first use."""
    classifier = getattr(request.app.state, "classifier", None)
    if classifier is None:
        classifier = ProjectClassifier()
        request.app.state.classifier = classifier
    return classifier


# ═══════════════════════════════════════════════════════════════════════════
# Error Handlers
# ═══════════════════════════════════════════════════════════════════════════
@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(
    request: Request,
    exc: StarletteHTTPException,
) -> Any:
    """Collapse routing errors (unknown path or method) into a plain 404."""
    if exc.status_code in (404, 405):
        return PlainTextResponse("Not Found", status_code=404)
    return PlainTextResponse(str(exc.detail), status_code=exc.status_code)


# ═══════════════════════════════════════════════════════════════════════════
# API Routes
# ═══════════════════════════════════════════════════════════════════════════
@app.post("/analyze")
async def analyze(
    request: Request,
    classifier: ProjectClassifier = Depends(get_classifier),
) -> JSONResponse:
    """
    Classify a submission.

    Body:
        JSON object with ``repoUrl``, ``demoUrl`` and ``readmeUrl``

    Returns:
        200 with the decision, 400 if a URL is missing, 500 on internal errors
    """
    try:
        payload = await request.json()

        try:
            submission = Submission.from_payload(payload)
        except ValidationError as e:
            logger.info("analyze_request_rejected", **e.context)
            return JSONResponse(
                DecisionResponse.missing_parameters().model_dump(),
                status_code=400,
            )

        result = await classifier.analyze(submission)
        response = DecisionResponse.from_result(result)

        logger.info(
            "analyze_request_completed",
            repo_url=submission.repo_url,
            ysws_decision=response.ysws_decision,
        )
        return JSONResponse(response.model_dump(), status_code=200)

    except Exception as e:
        logger.exception("analyze_request_failed")
        return JSONResponse(
            DecisionResponse.internal_error(str(e)).model_dump(),
            status_code=500,
        )


# ═══════════════════════════════════════════════════════════════════════════
# Startup/Shutdown Events
# ═══════════════════════════════════════════════════════════════════════════
@app.on_event("startup")
async def startup_event() -> None:
    """Application startup."""
    logger.info(
        "application_started",
        environment=settings.environment,
        model=settings.llm_model,
    )


@app.on_event("shutdown")
async def shutdown_event() -> None:
    """Application shutdown."""
    classifier = getattr(app.state, "classifier", None)
    llm = getattr(classifier, "llm", None)
    if llm is not None and hasattr(llm, "aclose"):
        await llm.aclose()
    logger.info("application_shutdown")
