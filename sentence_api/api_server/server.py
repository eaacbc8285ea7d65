"""
FastAPI server — health check and JWT-gated sentence analysis.

create_app(settings) builds a fully configured app from injected settings:
no handler reads the environment, so tests can build apps with any secret or
role set. Errors leave as plain text with the status of their kind.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime

from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse, RedirectResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from sentence_api import __version__
from sentence_api.api_logging import get_logger
from sentence_api.api_server.metrics import HttpMetrics, build_metrics
from sentence_api.api_server.middleware import RequestContextMiddleware
from sentence_api.api_server.routes import build_router
from sentence_api.config import Settings
from sentence_api.core.exceptions import SentenceAPIError, UnauthorizedError

logger = get_logger(__name__)


# -----------------------------------------------------------------------------
# Error responses
# -----------------------------------------------------------------------------

def sentence_api_error_handler(request: Request, exc: SentenceAPIError) -> PlainTextResponse:
    """Plain-text error body with the status of the error kind."""
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, UnauthorizedError) else None
    return PlainTextResponse(exc.message, status_code=exc.status_code, headers=headers)


def http_exception_handler(request: Request, exc: StarletteHTTPException) -> PlainTextResponse:
    """Framework errors (404, 405 on fixed routes) as plain text too."""
    return PlainTextResponse(
        str(exc.detail),
        status_code=exc.status_code,
        headers=getattr(exc, "headers", None),
    )


# -----------------------------------------------------------------------------
# App factory
# -----------------------------------------------------------------------------

def create_app(
    settings: Settings,
    *,
    metrics: HttpMetrics | None = None,
    clock: Callable[[], datetime] | None = None,
) -> FastAPI:
    """
    Build the ASGI app.

    Args:
        settings: Immutable configuration (secret, allowed roles, listen address).
        metrics: Prometheus instruments; a fresh registry is created when omitted.
        clock: Time source for token expiry checks (default: current UTC time).
    """
    metrics = metrics or build_metrics()
    app = FastAPI(
        title="Sentence Analyzer API",
        description="Counts words, vowels and consonants in a sentence. /analyze requires a Bearer JWT (HS256) with role user or admin.",
        version=__version__,
        redirect_slashes=False,
    )
    app.state.settings = settings
    app.state.metrics = metrics

    app.include_router(build_router(settings, metrics, clock=clock))
    app.add_middleware(RequestContextMiddleware, metrics=metrics)

    app.add_exception_handler(SentenceAPIError, sentence_api_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)

    @app.get("/docs/", include_in_schema=False)
    def docs_trailing_slash() -> RedirectResponse:
        return RedirectResponse(url="/docs")

    logger.info(
        "app_created",
        allowed_roles=sorted(settings.allowed_roles),
        version=__version__,
    )
    return app


__all__ = ["create_app"]
