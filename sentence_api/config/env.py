"""
Environment variable loading for the Sentence Analyzer API.

- JWT_SECRET: shared HMAC secret used to verify bearer tokens (required)
- ALLOWED_ROLES: comma-separated role names accepted on /analyze (default: user,admin)
- API_HOST / API_PORT: listen address (default: 0.0.0.0:8080)
- Loads .env from project root when available.
"""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

# Project root: config is sentence_api/config/, root is 2 levels up
_CONFIG_DIR = Path(__file__).resolve().parent
_PACKAGE_DIR = _CONFIG_DIR.parent
_ROOT = _PACKAGE_DIR.parent
_ENV_PATH = _ROOT / ".env"

DEFAULT_ALLOWED_ROLES = ("user", "admin")
DEFAULT_API_HOST = "0.0.0.0"
DEFAULT_API_PORT = 8080


def load_api_env() -> None:
    """Load .env from project root. Safe to call multiple times; never overrides real env vars."""
    load_dotenv(_ENV_PATH, override=False)


def get_jwt_secret() -> str:
    """Return JWT_SECRET from env, stripped. Empty string when unset."""
    load_api_env()
    return (os.getenv("JWT_SECRET") or "").strip()


def get_allowed_roles() -> tuple[str, ...]:
    """
    Return ALLOWED_ROLES from env as a tuple of role names.
    Default: user, admin. Blank entries are dropped.
    """
    load_api_env()
    raw = os.getenv("ALLOWED_ROLES")
    if raw is None:
        return DEFAULT_ALLOWED_ROLES
    return tuple(r.strip() for r in raw.split(",") if r.strip())


def get_api_host() -> str:
    load_api_env()
    return (os.getenv("API_HOST") or DEFAULT_API_HOST).strip()


def get_api_port() -> int:
    """Return API_PORT from env (default 8080). Raises ValueError when not an integer."""
    load_api_env()
    raw = (os.getenv("API_PORT") or "").strip()
    return int(raw) if raw else DEFAULT_API_PORT
