"""
Prometheus request metrics.

Each app gets its own registry so several apps (one per test) can live in the
same process without clashing on metric names.
"""

import time
from typing import Any, Callable

from fastapi import Request
from prometheus_client import CONTENT_TYPE_LATEST, CollectorRegistry, Counter, Histogram, generate_latest
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response


class RequestMetrics:
    """Request counter and latency histogram, labelled by route template."""

    def __init__(self, registry: CollectorRegistry = None):
        self.registry = registry or CollectorRegistry()
        self.requests = Counter(
            "http_requests_received_total",
            "Number of HTTP requests handled",
            ["method", "endpoint", "code"],
            registry=self.registry,
        )
        self.duration = Histogram(
            "http_request_duration_seconds",
            "Time spent handling HTTP requests",
            ["method", "endpoint"],
            registry=self.registry,
        )

    def observe(self, method: str, endpoint: str, status_code: int, elapsed: float) -> None:
        self.requests.labels(method=method, endpoint=endpoint, code=str(status_code)).inc()
        self.duration.labels(method=method, endpoint=endpoint).observe(elapsed)

    def render(self) -> Response:
        return Response(content=generate_latest(self.registry), media_type=CONTENT_TYPE_LATEST)


class MetricsMiddleware(BaseHTTPMiddleware):
    def __init__(self, app, metrics: RequestMetrics):
        super().__init__(app)
        self.metrics = metrics

    async def dispatch(self, request: Request, call_next: Callable[[Request], Any]) -> Response:
        start = time.perf_counter()
        response = await call_next(request)
        elapsed = time.perf_counter() - start

        # Route templates, not raw paths, keep label cardinality bounded
        route = request.scope.get("route")
        endpoint = getattr(route, "path", "<unmatched>")
        self.metrics.observe(request.method, endpoint, response.status_code, elapsed)
        return response
