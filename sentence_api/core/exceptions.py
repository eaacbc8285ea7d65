"""
Application-level exceptions.

Request-level errors carry the HTTP status they map to and a short plain-text
message; the API server turns them into responses at the request boundary.
ConfigError is the startup-only fatal kind and never reaches a request.
"""

from __future__ import annotations


class SentenceAPIError(Exception):
    """Base class for errors that end a request with a plain-text response."""

    status_code: int = 500
    default_message: str = "internal error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class BadRequestError(SentenceAPIError):
    """Malformed client input: missing required field, unparseable JSON."""

    status_code = 400
    default_message = "bad request"


class UnauthorizedError(SentenceAPIError):
    """Missing, malformed, unverifiable or expired credential."""

    status_code = 401
    default_message = "invalid token"

    def __init__(self, message: str | None = None, reason: str = "invalid"):
        super().__init__(message)
        # Short machine-readable tag for logs and metrics (no token contents).
        self.reason = reason


class ForbiddenError(SentenceAPIError):
    """Valid credential, role not allowed."""

    status_code = 403
    default_message = "forbidden (insufficient role)"


class MethodNotAllowedError(SentenceAPIError):
    status_code = 405
    default_message = "method not allowed"


class ConfigError(Exception):
    """Required configuration is absent or invalid; the process must not start serving."""
