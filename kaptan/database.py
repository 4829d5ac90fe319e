"""SQLAlchemy store handle and session helpers."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

from fastapi import Request
from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.pool import StaticPool


class Base(DeclarativeBase):
    """Declarative base class for ORM models."""


class Store:
    """Engine and session factory, built once at process start.

    Every request gets its own session from :meth:`session`; nothing here is
    module-global so tests can hand the app an in-memory store.
    """

    def __init__(self, database_url: str, *, echo: bool = False):
        url = make_url(database_url)
        engine_kwargs: dict[str, object] = {"echo": echo, "pool_pre_ping": True}
        if url.get_backend_name() == "sqlite":
            engine_kwargs["connect_args"] = {"check_same_thread": False}
            if url.database in (None, "", ":memory:"):
                engine_kwargs["poolclass"] = StaticPool
            else:
                Path(url.database).parent.mkdir(parents=True, exist_ok=True)
        self.engine: Engine = create_engine(url, **engine_kwargs)
        self.session_factory = sessionmaker(
            bind=self.engine, autoflush=False, autocommit=False
        )

    def create_all(self) -> None:
        # Import for side effects: registers every table on Base.metadata.
        import kaptan.models  # noqa: F401

        Base.metadata.create_all(bind=self.engine)

    def session(self) -> Session:
        return self.session_factory()

    def ping(self) -> None:
        with self.engine.connect() as connection:
            connection.execute(text("SELECT 1"))

    def dispose(self) -> None:
        self.engine.dispose()


def get_store(request: Request) -> Store:
    return request.app.state.store


def get_db(request: Request) -> Iterator[Session]:
    """Yield a request-scoped session for dependency injection."""
    db = get_store(request).session()
    try:
        yield db
    finally:
        db.close()
