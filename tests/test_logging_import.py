"""
Test that api_logging can be imported without circular import and logger works.
"""

from __future__ import annotations

import io
import json
import logging

import pytest


@pytest.fixture
def log_buffer(monkeypatch):
    """Route JSON logs into a buffer for the test; restore stdout logging afterwards."""
    from sentence_api.api_logging import get_logger
    from sentence_api.api_logging.logger import configure_structlog

    buf = io.StringIO()
    configure_structlog("json", logging.DEBUG, file=buf)
    # Module-level loggers are bound at import; rebind the middleware one to the buffer.
    monkeypatch.setattr("sentence_api.api_server.middleware.logger", get_logger("sentence_api.api_server.middleware"))
    yield buf
    configure_structlog()


def _records(buf: io.StringIO) -> list[dict]:
    return [json.loads(line) for line in buf.getvalue().splitlines() if line.strip()]


def test_logging_import():
    """Import get_logger from api_logging and use the logger."""
    from sentence_api.api_logging import get_logger

    logger = get_logger(__name__)
    logger.info("logging_import_ok", component="tests")


def test_request_id_bound_to_log_lines(log_buffer):
    from sentence_api.api_logging import bind_request, clear_request, get_logger

    logger = get_logger("tests.request_id")
    bind_request("abc123")
    try:
        logger.info("inside_request", words=2)
    finally:
        clear_request()
    record = _records(log_buffer)[-1]
    assert record["event_type"] == "inside_request"
    assert record["request_id"] == "abc123"
    assert record["logger"] == "tests.request_id"
    assert record["level"] == "info"
    assert "timestamp" in record
    assert record["timestamp"].startswith("20")
    assert "event" not in record


def test_auth_rejection_log_never_contains_token(log_buffer, client, auth_header):
    headers = auth_header(role="guest")
    token = headers["Authorization"].split(" ", 1)[1]
    client.get("/analyze", params={"sentence": "hi"}, headers=headers)
    out = log_buffer.getvalue()
    rejected = [r for r in _records(log_buffer) if r["event_type"] == "auth_rejected"]
    assert len(rejected) == 1
    assert rejected[0]["reason"] == "forbidden_role"
    assert rejected[0]["status"] == 403
    assert token not in out
