"""
Tests for settings loading from the environment and fatal startup behaviour.
"""

from __future__ import annotations

import pytest

from sentence_api.config import Settings, get_settings
from sentence_api.core.exceptions import ConfigError


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """Unset service variables and point .env loading at a file that does not exist."""
    for name in ("JWT_SECRET", "ALLOWED_ROLES", "API_HOST", "API_PORT", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr("sentence_api.config.env._ENV_PATH", tmp_path / ".env")
    return monkeypatch


def test_settings_from_env(clean_env):
    clean_env.setenv("JWT_SECRET", "  s3cret-value  ")
    settings = get_settings()
    assert settings.jwt_secret == b"s3cret-value"
    assert settings.allowed_roles == frozenset({"user", "admin"})
    assert settings.api_host == "0.0.0.0"
    assert settings.api_port == 8080


def test_settings_overrides(clean_env):
    clean_env.setenv("JWT_SECRET", "abc")
    clean_env.setenv("ALLOWED_ROLES", " admin , ops ,, ")
    clean_env.setenv("API_HOST", "127.0.0.1")
    clean_env.setenv("API_PORT", "9000")
    settings = get_settings()
    assert settings.allowed_roles == frozenset({"admin", "ops"})
    assert settings.api_host == "127.0.0.1"
    assert settings.api_port == 9000


@pytest.mark.parametrize("value", [None, "", "   "])
def test_missing_secret_is_fatal(clean_env, value):
    if value is not None:
        clean_env.setenv("JWT_SECRET", value)
    with pytest.raises(ConfigError, match="JWT_SECRET is not set"):
        get_settings()


def test_empty_role_list_is_fatal(clean_env):
    clean_env.setenv("JWT_SECRET", "abc")
    clean_env.setenv("ALLOWED_ROLES", " , ")
    with pytest.raises(ConfigError, match="ALLOWED_ROLES"):
        get_settings()


def test_bad_port_is_fatal(clean_env):
    clean_env.setenv("JWT_SECRET", "abc")
    clean_env.setenv("API_PORT", "eighty")
    with pytest.raises(ConfigError, match="API_PORT"):
        get_settings()


def test_settings_reject_empty_secret():
    with pytest.raises(ConfigError):
        Settings(jwt_secret=b"")


def test_secret_not_in_repr():
    settings = Settings(jwt_secret=b"do-not-print-me")
    assert "do-not-print-me" not in repr(settings)


def test_settings_are_immutable():
    settings = Settings(jwt_secret=b"abc")
    with pytest.raises(AttributeError):
        settings.jwt_secret = b"other"  # type: ignore[misc]


def test_main_exits_without_secret(clean_env, monkeypatch):
    """Startup without JWT_SECRET terminates with exit code 1 before serving."""
    import main

    served = []
    monkeypatch.setattr("uvicorn.run", lambda *a, **kw: served.append((a, kw)))
    with pytest.raises(SystemExit) as exc_info:
        main.main([])
    assert exc_info.value.code == 1
    assert served == []


def test_main_serves_with_secret(clean_env, monkeypatch):
    import main

    clean_env.setenv("JWT_SECRET", "abc")
    served = []
    monkeypatch.setattr("uvicorn.run", lambda app, **kw: served.append(kw))
    main.main(["--port", "9123", "--host", "127.0.0.1"])
    assert served == [{"host": "127.0.0.1", "port": 9123, "log_level": "info"}]


def test_app_module_refuses_import_without_secret(clean_env):
    import importlib
    import sys

    sys.modules.pop("sentence_api.api_server.app", None)
    with pytest.raises(ConfigError):
        importlib.import_module("sentence_api.api_server.app")
