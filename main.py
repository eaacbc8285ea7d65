"""
Main entrypoint: FastAPI server for the Sentence Analyzer API.

Loads settings once, refuses to start when JWT_SECRET is missing (exit 1,
before binding a port), then serves with uvicorn until terminated.

Env: JWT_SECRET (required), ALLOWED_ROLES, API_HOST, API_PORT, LOG_LEVEL, LOG_FORMAT.

Equivalent without this wrapper: uvicorn sentence_api.api_server.app:app --host 0.0.0.0 --port 8080
"""

from __future__ import annotations

import argparse
import os
import sys
from dataclasses import replace

# Configure structured JSON logging before other imports that may log
from sentence_api.api_logging import get_logger

logger = get_logger("main")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the Sentence Analyzer API server.")
    parser.add_argument("--host", default=None, help="Listen host (default: API_HOST or 0.0.0.0)")
    parser.add_argument("--port", type=int, default=None, help="Listen port (default: API_PORT or 8080)")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    """Validate configuration, build the app and run uvicorn in the main thread."""
    args = parse_args(argv)

    from sentence_api.config import get_settings
    from sentence_api.core.exceptions import ConfigError

    try:
        settings = get_settings()
    except ConfigError as e:
        logger.error("config_error", message=str(e))
        sys.exit(1)

    if args.host:
        settings = replace(settings, api_host=args.host)
    if args.port:
        settings = replace(settings, api_port=args.port)

    from sentence_api.api_server.server import create_app
    import uvicorn

    app = create_app(settings)
    logger.info(
        "server_starting",
        host=settings.api_host,
        port=settings.api_port,
        allowed_roles=sorted(settings.allowed_roles),
    )
    uvicorn.run(app, host=settings.api_host, port=settings.api_port, log_level=os.getenv("LOG_LEVEL", "info").lower())


if __name__ == "__main__":
    main()
