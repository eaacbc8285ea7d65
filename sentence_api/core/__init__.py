"""
Core utilities — shared exceptions and cross-cutting concerns.

Used by the config layer, the auth middleware and the API server.
"""

from sentence_api.core.exceptions import (
    BadRequestError,
    ConfigError,
    ForbiddenError,
    MethodNotAllowedError,
    SentenceAPIError,
    UnauthorizedError,
)

__all__ = [
    "BadRequestError",
    "ConfigError",
    "ForbiddenError",
    "MethodNotAllowedError",
    "SentenceAPIError",
    "UnauthorizedError",
]
