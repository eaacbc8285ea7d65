"""
Structured JSON logging: timestamp, level, event_type, request_id.

Every record carries an ISO-8601 UTC timestamp, the level, the logger name and
event_type (structlog's positional event). request_id is merged in from
structlog contextvars, bound per request by RequestContextMiddleware. Never
pass secrets or raw tokens as log fields.

This module imports nothing from sentence_api so any module can log.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Any, TextIO

import structlog

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_LEVEL_VALUE = getattr(logging, LOG_LEVEL, logging.INFO)

# "json" in deployments; anything else renders for a terminal
LOG_FORMAT = os.getenv("LOG_FORMAT", "json").strip().lower()


def _event_as_event_type(
    logger: Any,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    event = event_dict.pop("event", None)
    if event is not None:
        event_dict.setdefault("event_type", event)
    return event_dict


def configure_structlog(
    log_format: str = LOG_FORMAT,
    level: int = LOG_LEVEL_VALUE,
    file: TextIO | None = None,
) -> None:
    """(Re)configure structlog. Records go to `file`, stdout by default."""
    renderer: Any
    if log_format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty(), event_key="event_type")
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True, key="timestamp"),
            structlog.processors.format_exc_info,
            _event_as_event_type,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=file or sys.stdout),
        cache_logger_on_first_use=True,
    )


if not structlog.is_configured():
    configure_structlog()


def get_logger(name: str) -> structlog.BoundLogger:
    """
    Return a structured logger for the given module name.

    Log with event_type (first arg) and keyword fields:
        logger = get_logger(__name__)
        logger.info("analyze_completed", words=2, vowels=3, consonants=7)
    Output (JSON): {"event_type": "analyze_completed", "words": 2, ..., "timestamp": "...", "level": "info", "logger": "module.name"}
    """
    return structlog.get_logger(name).bind(logger=name)


def bind_request(request_id: str) -> None:
    """Bind request_id to every log call made while handling the current request."""
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(request_id=request_id)


def clear_request() -> None:
    structlog.contextvars.clear_contextvars()
