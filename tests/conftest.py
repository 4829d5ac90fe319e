"""Test fixtures: in-memory store, fake media storage and API clients."""

from __future__ import annotations

import os
from datetime import UTC, datetime, timedelta

# Set DATABASE_URL *before* importing kaptan modules so the module-level app
# never touches the on-disk default database.
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from kaptan.config import Settings  # noqa: E402
from kaptan.database import Store  # noqa: E402
from kaptan.main import create_app  # noqa: E402
from kaptan.security.rate_limit import limiter  # noqa: E402
from kaptan.services.storage import StorageBackend, StoredObject  # noqa: E402

# Disable rate limiting in tests to prevent cross-test 429 flakes
limiter.enabled = False

ADMIN_USERNAME = "kaptan"
ADMIN_PASSWORD = "pruva-2024"
OWNER_OPEN_ID = "owner@kaptan.test"


class FakeStorage(StorageBackend):
    """In-memory object store recording saves and deletes."""

    def __init__(self):
        self.objects: dict[str, bytes] = {}
        self.deleted: list[str] = []

    async def save(self, data: bytes, key: str, content_type: str) -> StoredObject:
        self.objects[key] = data
        return StoredObject(url=f"https://cdn.kaptan.test/{key}", reference=key)

    async def delete(self, reference: str) -> bool:
        self.deleted.append(reference)
        return self.objects.pop(reference, None) is not None


class FakeClock:
    """Deterministic clock for upsert timestamps."""

    def __init__(self, start: datetime | None = None):
        self.current = start or datetime(2024, 6, 1, 9, 0, tzinfo=UTC)

    def __call__(self) -> datetime:
        return self.current

    def advance(self, **kwargs) -> datetime:
        self.current += timedelta(**kwargs)
        return self.current


@pytest.fixture
def settings() -> Settings:
    return Settings(
        environment="development",
        admin_username=ADMIN_USERNAME,
        admin_password=ADMIN_PASSWORD,
        owner_open_id=OWNER_OPEN_ID,
        allowed_origins=["http://localhost:5173"],
        metrics_password=None,
    )


@pytest.fixture
def store():
    store = Store("sqlite://")
    store.create_all()
    yield store
    store.dispose()


@pytest.fixture
def db_session(store):
    session = store.session()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def storage() -> FakeStorage:
    return FakeStorage()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def app(settings, store, storage, clock):
    return create_app(settings, store=store, storage=storage, clock=clock)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


def login(client: TestClient) -> None:
    response = client.post(
        "/api/admin-login",
        json={"username": ADMIN_USERNAME, "password": ADMIN_PASSWORD},
    )
    assert response.status_code == 200, response.text


@pytest.fixture
def admin_client(client):
    """Client holding a real admin session cookie."""
    login(client)
    yield client
    client.cookies.clear()
