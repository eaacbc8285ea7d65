"""
Structured logging for the Sentence Analyzer API.

JSON logs with timestamp, event_type and request_id.
Use get_logger() in all modules for aggregation-friendly output.
"""

from sentence_api.api_logging.logger import bind_request, clear_request, get_logger

__all__ = ["bind_request", "clear_request", "get_logger"]
