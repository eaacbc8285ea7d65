"""
Analysis engine — text statistics computed per request.

Stateless; safe to call concurrently from any number of requests.
"""

from sentence_api.analysis_engine.text import AnalyzeResult, analyze

__all__ = ["AnalyzeResult", "analyze"]
