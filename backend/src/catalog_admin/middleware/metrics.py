"""Prometheus metrics for the catalog admin service."""
import time
from typing import Callable

from prometheus_client import CONTENT_TYPE_LATEST, Counter, Gauge, Histogram, generate_latest
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

LATENCY_BUCKETS = [0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.0, 5.0, 10.0]

REQUEST_COUNT = Counter(
    "catalog_admin_requests_total",
    "HTTP requests handled by the admin service",
    ["method", "route", "status"],
)

REQUEST_LATENCY = Histogram(
    "catalog_admin_request_duration_seconds",
    "Admin request latency in seconds",
    ["method", "route"],
    buckets=LATENCY_BUCKETS,
)

OPEN_REQUESTS = Gauge(
    "catalog_admin_requests_in_flight",
    "Admin requests currently being handled",
)

# Storefront API calls
UPSTREAM_CALLS = Counter(
    "catalog_api_calls_total",
    "Calls made to the storefront API",
    ["operation", "outcome"],  # success, failed, error
)

UPSTREAM_LATENCY = Histogram(
    "catalog_api_call_duration_seconds",
    "Storefront API call latency in seconds",
    ["operation"],
    buckets=LATENCY_BUCKETS,
)

DRAFT_SUBMISSIONS = Counter(
    "draft_submissions_total",
    "Product draft submissions",
    ["outcome"],  # success, failed
)

MEDIA_FILES = Counter(
    "draft_media_files_total",
    "Files received for draft variants",
    ["result"],  # accepted, dropped
)


class PrometheusMiddleware(BaseHTTPMiddleware):
    """Records count and latency per route shape.

    Draft, variant, category and order ids are replaced by ``{id}`` so the
    ``route`` label stays bounded, e.g. ``/api/v1/drafts/{id}/composing/media``.
    """

    # Path segments that are part of the route, everything else is an id
    STATIC_SEGMENTS = frozenset(
        {
            "api", "v1", "drafts", "categories", "subcategories", "products",
            "orders", "options", "variants", "edit", "editing", "composing",
            "media", "move", "save", "cancel", "submit", "status",
            "delete-preview", "health",
        }
    )

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        if request.url.path == "/metrics":
            return await call_next(request)

        OPEN_REQUESTS.inc()
        start_time = time.perf_counter()
        status_code = 500

        try:
            response = await call_next(request)
            status_code = response.status_code
        finally:
            OPEN_REQUESTS.dec()
            route = self.route_of(request.url.path)
            REQUEST_COUNT.labels(method=request.method, route=route, status=status_code).inc()
            REQUEST_LATENCY.labels(method=request.method, route=route).observe(
                time.perf_counter() - start_time
            )

        return response

    @classmethod
    def route_of(cls, path: str) -> str:
        segments = [s for s in path.split("/") if s]
        if not segments or segments[0] not in ("api", "health"):
            return "/other"
        return "/" + "/".join(
            s if s in cls.STATIC_SEGMENTS else "{id}" for s in segments
        )


async def metrics_endpoint(request: Request) -> Response:
    """Prometheus metrics scrape endpoint."""
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)


def record_upstream_call(operation: str, outcome: str, duration: float) -> None:
    """Record one storefront API call."""
    UPSTREAM_CALLS.labels(operation=operation, outcome=outcome).inc()
    UPSTREAM_LATENCY.labels(operation=operation).observe(duration)


def record_draft_submission(outcome: str) -> None:
    DRAFT_SUBMISSIONS.labels(outcome=outcome).inc()


def record_media_files(accepted: int, dropped: int) -> None:
    if accepted:
        MEDIA_FILES.labels(result="accepted").inc(accepted)
    if dropped:
        MEDIA_FILES.labels(result="dropped").inc(dropped)
