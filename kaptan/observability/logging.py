from __future__ import annotations

import logging
from logging.config import dictConfig

from asgi_correlation_id.context import correlation_id
from pythonjsonlogger import jsonlogger

SERVICE_NAME = "kaptan-cms"


class CorrelationIdFilter(logging.Filter):
    """Attach the current request correlation ID to each log record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.correlation_id = correlation_id.get() or "-"
        return True


def logging_config(
    level: str = "INFO", *, sql_echo: bool = False, environment: str = "development"
) -> dict:
    """``dictConfig`` mapping: one JSON stream for the API, uvicorn and SQLAlchemy.

    Every record carries ``service`` and ``environment`` so logs from several
    deployments can share one index. Uvicorn's access log is quiet unless
    ``level`` is DEBUG; the metrics middleware already counts every call.
    """
    level = level.upper()
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "filters": {"with_correlation": {"()": CorrelationIdFilter}},
        "formatters": {
            "json": {
                "()": jsonlogger.JsonFormatter,
                "fmt": "%(asctime)s %(levelname)s %(name)s %(message)s %(correlation_id)s",
                "rename_fields": {"levelname": "level", "asctime": "ts"},
                "static_fields": {
                    "service": SERVICE_NAME,
                    "environment": environment,
                },
            }
        },
        "handlers": {
            "default": {
                "class": "logging.StreamHandler",
                "formatter": "json",
                "filters": ["with_correlation"],
            }
        },
        "root": {"handlers": ["default"], "level": level},
        "loggers": {
            "kaptan": {"level": level},
            "uvicorn.error": {"handlers": ["default"], "level": level, "propagate": False},
            "uvicorn.access": {
                "handlers": ["default"],
                "level": level if level == "DEBUG" else "WARNING",
                "propagate": False,
            },
            "sqlalchemy.engine": {"level": "INFO" if sql_echo else "WARNING"},
            # boto3 logs every request at INFO
            "botocore": {"level": "WARNING"},
        },
    }


def configure_logging(
    level: str = "INFO", *, sql_echo: bool = False, environment: str = "development"
) -> None:
    dictConfig(logging_config(level, sql_echo=sql_echo, environment=environment))
