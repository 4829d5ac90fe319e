from __future__ import annotations

import time
from collections.abc import Callable

from prometheus_client import CONTENT_TYPE_LATEST, Counter, Histogram, generate_latest
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

RPC_PATH_PREFIX = "/api/rpc/"

PROCEDURE_CALLS = Counter(
    "kaptan_procedure_calls_total",
    "API calls by procedure and status",
    ["procedure", "status_code"],
)
PROCEDURE_LATENCY = Histogram(
    "kaptan_procedure_duration_seconds",
    "API call latency by procedure",
    ["procedure"],
)
PROCEDURE_ERRORS = Counter(
    "kaptan_procedure_errors_total",
    "API errors by error class",
    ["code"],
)
ADMIN_LOGINS = Counter(
    "kaptan_admin_logins_total",
    "Admin login attempts",
    ["result"],
)
MEDIA_UPLOAD_BYTES = Histogram(
    "kaptan_media_upload_bytes",
    "Size of stored media uploads",
    buckets=(16 * 1024, 128 * 1024, 512 * 1024, 1024**2, 4 * 1024**2, 10 * 1024**2),
)


def procedure_label(path: str) -> str:
    """``/api/rpc/posts.getBySlug`` -> ``posts.getBySlug``; other paths as-is."""
    if path.startswith(RPC_PATH_PREFIX):
        return path[len(RPC_PATH_PREFIX) :]
    return path


class MetricsMiddleware(BaseHTTPMiddleware):
    """Count and time each call, labelled by RPC procedure."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        start = time.perf_counter()
        response = await call_next(request)
        duration = time.perf_counter() - start
        # Unmatched paths share one label so scanners can't blow up cardinality.
        route = request.scope.get("route")
        procedure = procedure_label(getattr(route, "path", "unmatched"))
        PROCEDURE_CALLS.labels(procedure, response.status_code).inc()
        PROCEDURE_LATENCY.labels(procedure).observe(duration)
        return response


def metrics_response() -> Response:
    return Response(generate_latest(), media_type=CONTENT_TYPE_LATEST)
