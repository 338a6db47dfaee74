"""SQLAlchemy engine and unit-of-work handling for the application database."""
from __future__ import annotations

import logging
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterator, Optional, Union

from sqlalchemy import DateTime, create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.pool import StaticPool
from sqlalchemy.types import TypeDecorator

logger = logging.getLogger("layered.database")


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class UTCDateTime(TypeDecorator[datetime]):
    """Store datetimes as naive UTC and hand them back timezone-aware.

    SQLite drops timezone information, so values are normalised on the way
    in and tagged as UTC on the way out.
    """

    impl = DateTime
    cache_ok = True

    def process_bind_param(self, value, dialect):  # type: ignore[override]
        if value is None:
            return None
        if value.tzinfo is None:
            return value
        return value.astimezone(timezone.utc).replace(tzinfo=None)

    def process_result_value(self, value, dialect):  # type: ignore[override]
        if value is None:
            return None
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)


class Base(DeclarativeBase):
    """Declarative base for every persistence record."""


def _ensure_directory(path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)


def resolve_database_path(url: str) -> Optional[Path]:
    """Return the on-disk file behind a SQLite URL, or ``None`` for other URLs."""

    prefix = "sqlite:///"
    if not url.startswith(prefix):
        return None
    raw_path = url[len(prefix):]
    if not raw_path or raw_path == ":memory:":
        return None
    return Path(raw_path)


def _build_engine(url: str) -> Engine:
    if url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        if resolve_database_path(url) is None:
            # In-memory databases only live as long as their single connection.
            kwargs["poolclass"] = StaticPool
        return create_engine(url, future=True, **kwargs)
    return create_engine(url, future=True, pool_pre_ping=True, pool_recycle=1800)


class Database:
    """Owns the engine and hands out one session per unit of work."""

    def __init__(self, location: Union[str, Path]) -> None:
        if isinstance(location, Path):
            _ensure_directory(location)
            url = f"sqlite:///{location}"
        else:
            url = location
            path = resolve_database_path(url)
            if path is not None:
                _ensure_directory(path)
        self._url = url
        self.engine = _build_engine(url)
        self._session_factory = sessionmaker(
            bind=self.engine, class_=Session, expire_on_commit=False, future=True
        )

    @property
    def url(self) -> str:
        return self._url

    def initialize(self) -> None:
        """Create the required tables if they do not already exist."""

        # Records register themselves on Base.metadata when imported.
        from .backend.user.persistence import entity  # noqa: F401

        Base.metadata.create_all(self.engine)
        logger.info("Database schema ready at %s", self.engine.url.render_as_string(hide_password=True))

    @contextmanager
    def session(self) -> Iterator[Session]:
        """Yield a session that commits on success and rolls back on error."""

        session = self._session_factory()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def dispose(self) -> None:
        self.engine.dispose()


__all__ = ["Base", "Database", "UTCDateTime", "resolve_database_path", "utcnow"]
