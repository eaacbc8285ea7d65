"""
FastAPI/ASGI application entrypoint.

Builds the app from environment settings; importing this module fails with
ConfigError when JWT_SECRET is missing, so the server never binds without it.
Run with: uvicorn sentence_api.api_server.app:app --host 0.0.0.0 --port 8080
"""

from sentence_api.api_server.server import create_app
from sentence_api.config import get_settings

app = create_app(get_settings())

__all__ = ["app"]
