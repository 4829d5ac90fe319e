"""Logging and metrics wiring."""

from __future__ import annotations

from kaptan.observability.logging import configure_logging
from kaptan.observability.metrics import (
    ADMIN_LOGINS,
    MEDIA_UPLOAD_BYTES,
    PROCEDURE_ERRORS,
    MetricsMiddleware,
    metrics_response,
)

__all__ = [
    "ADMIN_LOGINS",
    "MEDIA_UPLOAD_BYTES",
    "PROCEDURE_ERRORS",
    "MetricsMiddleware",
    "configure_logging",
    "metrics_response",
]
