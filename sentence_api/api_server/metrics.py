"""
Prometheus instruments for the HTTP layer.

Each app instance owns its own CollectorRegistry so several apps (tests,
multiple workers in one process) never collide on metric names. /metrics
renders that registry in the text exposition format.
"""

from __future__ import annotations

from dataclasses import dataclass

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    Histogram,
    generate_latest,
)

UNMATCHED_ROUTE = "unmatched"


@dataclass
class HttpMetrics:
    """
    Wrapper over Prometheus instruments to keep usage structured.
    """

    registry: CollectorRegistry
    req_counter: Counter
    req_latency: Histogram
    auth_rejections: Counter
    sentences_analyzed: Counter

    def observe_request(self, method: str, route: str, status_code: int, elapsed: float) -> None:
        self.req_counter.labels(method=method, route=route, status=str(status_code)).inc()
        self.req_latency.labels(route=route).observe(max(0.0, elapsed))

    def mark_auth_rejection(self, reason: str) -> None:
        self.auth_rejections.labels(reason=reason).inc()

    def mark_analyzed(self, method: str) -> None:
        self.sentences_analyzed.labels(method=method).inc()

    def render(self) -> bytes:
        return generate_latest(self.registry)


def build_metrics(registry: CollectorRegistry | None = None) -> HttpMetrics:
    """Create the service instruments on a fresh (or given) registry."""
    registry = registry or CollectorRegistry()
    return HttpMetrics(
        registry=registry,
        req_counter=Counter(
            "sentence_api_requests_total",
            "HTTP requests",
            ["method", "route", "status"],
            registry=registry,
        ),
        req_latency=Histogram(
            "sentence_api_request_latency_seconds",
            "HTTP request latency in seconds",
            ["route"],
            registry=registry,
        ),
        auth_rejections=Counter(
            "sentence_api_auth_rejections_total",
            "Requests rejected by the bearer token gate",
            ["reason"],
            registry=registry,
        ),
        sentences_analyzed=Counter(
            "sentence_api_sentences_analyzed_total",
            "Sentences analyzed successfully",
            ["method"],
            registry=registry,
        ),
    )


__all__ = ["CONTENT_TYPE_LATEST", "HttpMetrics", "UNMATCHED_ROUTE", "build_metrics"]
