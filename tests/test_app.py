"""Application wiring: health, metrics, request ids and error rendering."""

from __future__ import annotations

import logging
from unittest.mock import patch
from uuid import uuid4

from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from kaptan.errors import (
    DuplicateKeyError,
    KaptanError,
    NotFound,
    StoreUnavailableError,
    ValidationError,
    WriteOutcome,
)
from kaptan.main import create_app
from kaptan.observability.logging import SERVICE_NAME, CorrelationIdFilter, logging_config
from kaptan.observability.metrics import procedure_label


def test_healthz(client):
    response = client.get("/healthz")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
    assert response.json()["database"] == "connected"


def test_healthz_reports_unavailable_store(client, store):
    error = OperationalError("SELECT 1", {}, Exception("gone"))
    with patch.object(store, "ping", side_effect=error):
        response = client.get("/healthz")

    assert response.status_code == 503
    assert response.json() == {
        "detail": "Database not available",
        "code": "StoreUnavailableError",
    }


def test_request_id_is_echoed(client):
    request_id = uuid4().hex
    response = client.get("/healthz", headers={"X-Request-ID": request_id})

    assert response.headers["X-Request-ID"] == request_id


def test_list_procedure_when_store_is_down(client):
    error = OperationalError("SELECT", {}, Exception("connection refused"))
    with patch("sqlalchemy.orm.Session.scalars", side_effect=error):
        response = client.get("/api/rpc/categories.list")

    assert response.status_code == 503
    assert response.json()["code"] == "StoreUnavailableError"


def test_metrics_open_without_password(client):
    client.get("/healthz")

    response = client.get("/metrics", auth=("prometheus", "anything"))

    assert response.status_code == 200
    assert "kaptan_procedure_calls_total" in response.text


def test_metrics_requires_configured_password(settings, store, storage):
    secured = settings.model_copy(update={"metrics_password": "scrape-me"})
    app = create_app(secured, store=store, storage=storage)

    with TestClient(app) as test_client:
        denied = test_client.get("/metrics", auth=("prometheus", "wrong"))
        allowed = test_client.get("/metrics", auth=("prometheus", "scrape-me"))

    assert denied.status_code == 401
    assert allowed.status_code == 200


def test_docs_hidden_in_production(settings, store, storage):
    production = settings.model_copy(update={"environment": "production"})
    app = create_app(production, store=store, storage=storage)

    with TestClient(app) as test_client:
        assert test_client.get("/docs").status_code == 404
        assert test_client.get("/healthz").json() == {"status": "healthy"}


class TestErrorTaxonomy:
    def test_status_codes(self):
        assert ValidationError().status_code == 400
        assert DuplicateKeyError().status_code == 409
        assert NotFound().status_code == 404
        assert StoreUnavailableError().status_code == 503

    def test_duplicate_is_a_validation_error(self):
        assert isinstance(DuplicateKeyError(), ValidationError)

    def test_code_is_class_name(self):
        assert NotFound("post 3 not found").code == "NotFound"
        assert NotFound("post 3 not found").message == "post 3 not found"
        assert KaptanError().message == "Internal error"

    def test_write_outcome(self):
        assert WriteOutcome.success(1).unwrap() == 1
        assert WriteOutcome.hard_failure(ValidationError()).ok is False


class TestObservability:
    def test_procedure_label(self):
        assert procedure_label("/api/rpc/posts.getBySlug") == "posts.getBySlug"
        assert procedure_label("/healthz") == "/healthz"

    def test_metrics_labelled_by_procedure(self, client):
        client.get("/api/rpc/categories.list")
        client.post("/api/admin-login", json={"username": "x", "password": "y"})

        text = client.get("/metrics", auth=("prometheus", "any")).text

        assert 'procedure="categories.list"' in text
        assert 'kaptan_admin_logins_total{result="rejected"}' in text

    def test_upload_size_is_recorded(self, admin_client):
        admin_client.post(
            "/api/rpc/media.upload",
            json={
                "filename": "a.jpg",
                "base64": "aGVsbG8=",
                "mime_type": "image/jpeg",
            },
        )

        text = admin_client.get("/metrics", auth=("prometheus", "any")).text

        assert "kaptan_media_upload_bytes_count" in text

    def test_log_records_carry_service_and_environment(self):
        config = logging_config("debug", sql_echo=True, environment="production")

        formatter = config["formatters"]["json"]
        assert formatter["static_fields"] == {
            "service": SERVICE_NAME,
            "environment": "production",
        }
        assert config["root"]["level"] == "DEBUG"
        assert config["loggers"]["uvicorn.access"]["level"] == "DEBUG"
        assert config["loggers"]["sqlalchemy.engine"]["level"] == "INFO"

    def test_access_log_quiet_outside_debug(self):
        config = logging_config("info")

        assert config["loggers"]["uvicorn.access"]["level"] == "WARNING"
        assert config["loggers"]["sqlalchemy.engine"]["level"] == "WARNING"

    def test_correlation_filter_outside_request(self):
        record = logging.LogRecord("kaptan", logging.INFO, __file__, 1, "hi", None, None)

        assert CorrelationIdFilter().filter(record) is True
        assert record.correlation_id == "-"
