"""
API route definitions — health, analyze, docs assets, metrics.

GET /healthz                liveness probe, no auth, no dependencies
GET|POST /analyze           sentence analysis behind the bearer token gate
GET /openapi.yaml           generated OpenAPI document as YAML
GET /metrics                Prometheus scrape target (network-isolated, no auth)

The analyze handler is a plain request handler; build_router() composes it
with require_roles() explicitly. Method dispatch happens inside the handler,
after the gate, so unsupported methods on /analyze answer 405 only to
authenticated callers.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime
from typing import Any

import yaml
from fastapi import APIRouter, Request, Response
from fastapi.responses import JSONResponse, PlainTextResponse
from pydantic import BaseModel, Field, ValidationError

from sentence_api.analysis_engine import AnalyzeResult, analyze
from sentence_api.api_logging import get_logger
from sentence_api.api_server.auth import utcnow
from sentence_api.api_server.metrics import CONTENT_TYPE_LATEST, HttpMetrics
from sentence_api.api_server.middleware import require_roles
from sentence_api.config import Settings
from sentence_api.core.exceptions import BadRequestError, MethodNotAllowedError

logger = get_logger(__name__)

# Methods routed to the analyze handler without being documented; the handler rejects them.
UNSUPPORTED_ANALYZE_METHODS = ["PUT", "PATCH", "DELETE", "OPTIONS", "TRACE"]


# -----------------------------------------------------------------------------
# Request / response models
# -----------------------------------------------------------------------------

class AnalyzeRequest(BaseModel):
    """POST /analyze body. A missing or null sentence is treated as empty."""

    sentence: str | None = Field(None, description="Sentence to analyze")


class AnalyzeResponse(BaseModel):
    """Analyze result; sentence is omitted when empty."""

    words: int = Field(..., ge=0, description="Whitespace-delimited tokens")
    vowels: int = Field(..., ge=0, description="Letters a/e/i/o/u, case-insensitive")
    consonants: int = Field(..., ge=0, description="Letters that are not vowels")
    sentence: str | None = Field(None, description="Echoed input (omitted when empty)")

    @classmethod
    def from_result(cls, result: AnalyzeResult) -> "AnalyzeResponse":
        return cls(
            words=result.words,
            vowels=result.vowels,
            consonants=result.consonants,
            sentence=result.sentence or None,
        )


_GET_ANALYZE_OPENAPI: dict[str, Any] = {
    "parameters": [
        {
            "name": "sentence",
            "in": "query",
            "required": True,
            "schema": {"type": "string", "minLength": 1},
        }
    ],
}

_POST_ANALYZE_OPENAPI: dict[str, Any] = {
    "requestBody": {
        "required": True,
        "content": {"application/json": {"schema": AnalyzeRequest.model_json_schema()}},
    },
}

_ANALYZE_RESPONSES: dict[int | str, dict[str, Any]] = {
    200: {"model": AnalyzeResponse},
    400: {"description": "Missing sentence query or invalid JSON body"},
    401: {"description": "Missing, invalid or expired bearer token"},
    403: {"description": "Token role not allowed"},
}


# -----------------------------------------------------------------------------
# Handlers
# -----------------------------------------------------------------------------

async def read_sentence(request: Request) -> str:
    """Extract the sentence from the query (GET) or JSON body (POST)."""
    if request.method == "GET":
        # First value wins when the parameter is repeated.
        values = request.query_params.getlist("sentence")
        sentence = values[0] if values else ""
        if not sentence:
            raise BadRequestError("missing 'sentence' query")
        return sentence
    if request.method == "POST":
        body = await request.body()
        try:
            payload = AnalyzeRequest.model_validate_json(body)
        except ValidationError as e:
            raise BadRequestError("invalid JSON body") from e
        return payload.sentence or ""
    raise MethodNotAllowedError("method not allowed")


def build_router(
    settings: Settings,
    metrics: HttpMetrics,
    *,
    clock: Callable[[], datetime] | None = None,
) -> APIRouter:
    """Build the service routes from injected settings, metrics and token clock."""
    router = APIRouter(redirect_slashes=False)

    @router.get("/healthz", response_class=PlainTextResponse, tags=["Health"])
    def healthz() -> str:
        """Liveness probe: API is up."""
        return "ok"

    async def analyze_sentence(request: Request) -> Response:
        """Count words, vowels and consonants in a sentence."""
        sentence = await read_sentence(request)
        result = analyze(sentence)
        metrics.mark_analyzed(request.method)
        logger.debug(
            "analyze_completed",
            method=request.method,
            words=result.words,
            vowels=result.vowels,
            consonants=result.consonants,
        )
        resp = AnalyzeResponse.from_result(result)
        return JSONResponse(content=resp.model_dump(exclude_none=True))

    gate = require_roles(
        settings.jwt_secret,
        settings.allowed_roles,
        clock=clock or utcnow,
        metrics=metrics,
    )
    protected = gate(analyze_sentence)

    router.add_api_route(
        "/analyze",
        protected,
        methods=["GET"],
        name="analyze_get",
        summary="Analyze a sentence passed as query parameter",
        tags=["Analyze"],
        responses=_ANALYZE_RESPONSES,
        openapi_extra=_GET_ANALYZE_OPENAPI,
    )
    router.add_api_route(
        "/analyze",
        protected,
        methods=["POST"],
        name="analyze_post",
        summary="Analyze a sentence passed as JSON body",
        tags=["Analyze"],
        responses=_ANALYZE_RESPONSES,
        openapi_extra=_POST_ANALYZE_OPENAPI,
    )
    router.add_api_route(
        "/analyze",
        protected,
        methods=UNSUPPORTED_ANALYZE_METHODS,
        name="analyze_unsupported",
        include_in_schema=False,
    )

    @router.get("/openapi.yaml", include_in_schema=False)
    def openapi_yaml(request: Request) -> Response:
        """OpenAPI document rendered as YAML."""
        document = yaml.safe_dump(request.app.openapi(), sort_keys=False, allow_unicode=True)
        return Response(content=document, media_type="application/yaml")

    @router.get("/metrics", include_in_schema=False)
    def prometheus_metrics() -> Response:
        return Response(metrics.render(), media_type=CONTENT_TYPE_LATEST)

    return router
