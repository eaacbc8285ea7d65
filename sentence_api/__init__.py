"""
Sentence Analyzer API — JWT-gated text analysis service.

Counts words, vowels and consonants in a sentence over HTTP. Modular layout:
config (environment), api_logging (structlog), core (exceptions),
analysis_engine (pure text statistics) and api_server (FastAPI app, auth gate,
metrics).
"""

__version__ = "0.1.0"
