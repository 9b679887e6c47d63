"""Prometheus metrics middleware for FastAPI.

Records request counts, latencies and in-flight requests labelled by
route template, and exposes them on /metrics.
"""

import time

from fastapi import FastAPI
from prometheus_client import Counter, Gauge, Histogram, make_asgi_app
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

METRICS_PATH = "/metrics"

# =============================================================================
# HTTP METRICS
# =============================================================================

HTTP_REQUESTS_TOTAL = Counter(
    "watch_server_http_requests_total",
    "Total HTTP requests",
    ["method", "route", "status"],
)

HTTP_REQUEST_DURATION = Histogram(
    "watch_server_http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "route"],
    buckets=[0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0],
)

HTTP_REQUESTS_IN_PROGRESS = Gauge(
    "watch_server_http_requests_in_progress",
    "HTTP requests currently being served",
    ["method"],
)


def route_template(request: Request) -> str:
    """Matched route template such as /v1/authorized/movie/{movie_id}.

    Unmatched requests share one label to bound metric cardinality.
    """
    route = request.scope.get("route")
    return getattr(route, "path", "unmatched")


# =============================================================================
# MIDDLEWARE
# =============================================================================


class PrometheusMiddleware(BaseHTTPMiddleware):
    """Records HTTP request metrics for Prometheus.

    Skips the metrics endpoint itself. Requests failing with an
    unhandled exception are counted with status 500.
    """

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        """Process request and record metrics.

        Args:
            request: Incoming HTTP request.
            call_next: Next middleware/handler in the chain.

        Returns:
            HTTP response from downstream handler.
        """
        if request.url.path.startswith(METRICS_PATH):
            return await call_next(request)

        method = request.method
        status = "500"
        start = time.perf_counter()
        HTTP_REQUESTS_IN_PROGRESS.labels(method=method).inc()
        try:
            response = await call_next(request)
            status = str(response.status_code)
            return response
        finally:
            route = route_template(request)
            HTTP_REQUESTS_IN_PROGRESS.labels(method=method).dec()
            HTTP_REQUESTS_TOTAL.labels(method=method, route=route, status=status).inc()
            HTTP_REQUEST_DURATION.labels(method=method, route=route).observe(
                time.perf_counter() - start
            )


# =============================================================================
# MOUNT HELPER
# =============================================================================


def mount_metrics(app: FastAPI) -> None:
    """Mount the Prometheus exposition endpoint.

    The mounted ASGI sub-app bypasses FastAPI dependencies, so no
    authentication is required.

    Args:
        app: FastAPI application instance.
    """
    app.mount(METRICS_PATH, make_asgi_app())
