"""
Application settings.

Settings are read once at startup and injected into the app factory; request
handlers never read the environment. The secret is kept as bytes and hidden
from repr so it cannot leak through logs or tracebacks.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from sentence_api.config.env import (
    get_allowed_roles,
    get_api_host,
    get_api_port,
    get_jwt_secret,
)
from sentence_api.core.exceptions import ConfigError


@dataclass(frozen=True)
class Settings:
    """Immutable process-wide configuration."""

    jwt_secret: bytes = field(repr=False)
    allowed_roles: frozenset[str] = frozenset({"user", "admin"})
    api_host: str = "0.0.0.0"
    api_port: int = 8080

    def __post_init__(self) -> None:
        if not self.jwt_secret:
            raise ConfigError("JWT_SECRET is not set (refuse to start without auth secret)")
        if not self.allowed_roles:
            raise ConfigError("ALLOWED_ROLES must name at least one role")


def get_settings() -> Settings:
    """
    Build Settings from the environment (and .env).

    Raises:
        ConfigError: JWT_SECRET missing/empty, ALLOWED_ROLES empty or API_PORT not an integer.
    """
    try:
        port = get_api_port()
    except ValueError as e:
        raise ConfigError(f"API_PORT must be an integer: {e}") from e
    return Settings(
        jwt_secret=get_jwt_secret().encode("utf-8"),
        allowed_roles=frozenset(get_allowed_roles()),
        api_host=get_api_host(),
        api_port=port,
    )
