"""
HTTP middleware — request context, timing, auth gate.

Responsibilities:
- Request/response logging, request IDs, timing and Prometheus counters
  (RequestContextMiddleware, installed app-wide).
- Bearer JWT validation and role check for protected routes only, by explicit
  wrapping of the route handler (require_roles).
"""

from __future__ import annotations

import functools
import time
import uuid
from collections.abc import Awaitable, Callable, Iterable
from datetime import datetime

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.types import ASGIApp

from sentence_api.api_logging import bind_request, clear_request, get_logger
from sentence_api.api_server.auth import authenticate, utcnow
from sentence_api.api_server.metrics import UNMATCHED_ROUTE, HttpMetrics
from sentence_api.core.exceptions import ForbiddenError, UnauthorizedError

logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-Id"

Handler = Callable[[Request], Awaitable[Response]]


def require_roles(
    secret: bytes,
    allowed_roles: Iterable[str],
    *,
    clock: Callable[[], datetime] = utcnow,
    metrics: HttpMetrics | None = None,
) -> Callable[[Handler], Handler]:
    """
    Return a decorator that puts the bearer token gate in front of a handler.

    The wrapped handler runs only when the token verifies and its role is
    allowed; otherwise UnauthorizedError / ForbiddenError propagates to the
    app's exception handlers. The handler receives the request unchanged.
    """
    allowed = frozenset(allowed_roles)

    def decorator(handler: Handler) -> Handler:
        @functools.wraps(handler)
        async def protected(request: Request) -> Response:
            try:
                authenticate(request.headers.get("Authorization"), secret, allowed, clock())
            except UnauthorizedError as e:
                logger.info("auth_rejected", status=e.status_code, reason=e.reason, path=request.url.path)
                if metrics is not None:
                    metrics.mark_auth_rejection(e.reason)
                raise
            except ForbiddenError as e:
                logger.info("auth_rejected", status=e.status_code, reason="forbidden_role", path=request.url.path)
                if metrics is not None:
                    metrics.mark_auth_rejection("forbidden_role")
                raise
            return await handler(request)

        return protected

    return decorator


class RequestContextMiddleware(BaseHTTPMiddleware):
    """
    Binds a request_id for structured logs, times the request, records metrics
    and echoes X-Request-Id on the response.
    """

    def __init__(self, app: ASGIApp, metrics: HttpMetrics | None = None):
        super().__init__(app)
        self.metrics = metrics

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        bind_request(request_id)
        t0 = time.perf_counter()
        try:
            response = await call_next(request)
            elapsed = time.perf_counter() - t0
            route = request.scope.get("route")
            route_path = getattr(route, "path", UNMATCHED_ROUTE)
            if self.metrics is not None:
                self.metrics.observe_request(request.method, route_path, response.status_code, elapsed)
            logger.info(
                "http_request",
                method=request.method,
                path=request.url.path,
                route=route_path,
                status=response.status_code,
                duration_ms=round(elapsed * 1000, 2),
            )
            response.headers[REQUEST_ID_HEADER] = request_id
            return response
        finally:
            clear_request()
