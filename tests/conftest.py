"""
Pytest fixtures for Sentence Analyzer API tests. Apps are built from injected
Settings with a test secret; the process environment is never required.
"""

from __future__ import annotations

import time

import jwt as pyjwt
import pytest

SECRET = "super-secret-jwt-token-for-testing-only"


@pytest.fixture
def settings():
    from sentence_api.config import Settings

    return Settings(jwt_secret=SECRET.encode("utf-8"))


@pytest.fixture
def app(settings):
    from sentence_api.api_server.server import create_app

    return create_app(settings)


@pytest.fixture
def client(app):
    """FastAPI TestClient over a freshly built app (own metrics registry)."""
    from fastapi.testclient import TestClient

    return TestClient(app)


@pytest.fixture
def make_token():
    """Factory: build an HS256 JWT with a role and exp (default one hour ahead)."""

    def _make_token(
        role: str | None = "user",
        exp: int | None = None,
        secret: str = SECRET,
        algorithm: str = "HS256",
        **extra: object,
    ) -> str:
        payload: dict[str, object] = {"exp": exp if exp is not None else int(time.time()) + 3600, **extra}
        if role is not None:
            payload["role"] = role
        return pyjwt.encode(payload, secret, algorithm=algorithm)

    return _make_token


@pytest.fixture
def auth_header(make_token):
    """Factory: Authorization header dict for a fresh token."""

    def _auth_header(role: str | None = "user", **kwargs: object) -> dict[str, str]:
        return {"Authorization": f"Bearer {make_token(role=role, **kwargs)}"}

    return _auth_header
