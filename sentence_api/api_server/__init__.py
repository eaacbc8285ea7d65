"""
API server package — HTTP interface.

Exposes the health check and the sentence analysis endpoint. Handles bearer
token authentication and role checks, and delegates to the analysis engine.
"""

from sentence_api.api_server.server import create_app

__all__ = ["create_app"]
