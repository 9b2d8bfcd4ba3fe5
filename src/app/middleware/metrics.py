"""Prometheus metrics middleware for request and order monitoring."""
import time
from typing import Callable

from prometheus_client import CONTENT_TYPE_LATEST, Counter, Gauge, Histogram, generate_latest
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response


# =============================================================================
# Prometheus Metrics Definitions
# =============================================================================

REQUEST_COUNT = Counter(
    "http_requests_total",
    "Total HTTP requests",
    ["method", "endpoint", "status"],
)

REQUEST_LATENCY = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency in seconds",
    ["method", "endpoint"],
    buckets=[0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.0, 5.0, 10.0],
)

ACTIVE_REQUESTS = Gauge(
    "http_requests_active",
    "Number of active HTTP requests",
)

# Order placement outcomes: created, rejected (4xx), error (5xx)
ORDER_COUNTER = Counter(
    "orders_created_total",
    "Order placement attempts by outcome",
    ["status"],
)

ORDER_LATENCY = Histogram(
    "order_creation_latency_seconds",
    "Order placement latency in seconds",
    buckets=[0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.0, 5.0],
)


# =============================================================================
# Metrics Middleware
# =============================================================================

class PrometheusMiddleware(BaseHTTPMiddleware):
    """Middleware to collect Prometheus metrics for all HTTP requests."""

    # Path prefixes collapsed into one label value each
    ENDPOINT_PATTERNS = {
        "/api/orders/my-orders": "/api/orders/my-orders",
        "/api/orders/": "/api/orders/{id}",
        "/api/orders": "/api/orders",
        "/api/products": "/api/products",
        "/api/admin": "/api/admin",
    }

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        if request.url.path == "/metrics":
            return await call_next(request)

        ACTIVE_REQUESTS.inc()
        start_time = time.perf_counter()

        try:
            response = await call_next(request)
            status_code = response.status_code
        except Exception:
            status_code = 500
            raise
        finally:
            ACTIVE_REQUESTS.dec()
            latency = time.perf_counter() - start_time
            endpoint = normalize_endpoint(request.url.path, self.ENDPOINT_PATTERNS)

            REQUEST_COUNT.labels(
                method=request.method,
                endpoint=endpoint,
                status=status_code,
            ).inc()

            REQUEST_LATENCY.labels(
                method=request.method,
                endpoint=endpoint,
            ).observe(latency)

            if endpoint == "/api/orders" and request.method == "POST":
                record_order_outcome(status_code, latency)

        return response


def normalize_endpoint(path: str, patterns: dict[str, str]) -> str:
    """Normalize endpoint path to reduce metric cardinality."""
    for pattern, normalized in patterns.items():
        if path.startswith(pattern):
            return normalized

    if path in ("/health", "/health/ready", "/metrics"):
        return path

    return "/other"


def record_order_outcome(status_code: int, latency: float) -> None:
    """Record one order placement attempt."""
    ORDER_LATENCY.observe(latency)
    if status_code in (200, 201):
        ORDER_COUNTER.labels(status="created").inc()
    elif status_code >= 500:
        ORDER_COUNTER.labels(status="error").inc()
    else:
        ORDER_COUNTER.labels(status="rejected").inc()


# =============================================================================
# Metrics Endpoint
# =============================================================================

async def metrics_endpoint(request: Request) -> Response:
    """Prometheus metrics scrape endpoint."""
    return Response(
        content=generate_latest(),
        media_type=CONTENT_TYPE_LATEST,
    )
