from __future__ import annotations

import sys
from pathlib import Path
from typing import Iterator

import pytest
from sqlalchemy.orm import Session

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from layered.backend.user import UserFacade, create_user_facade
from layered.database import Database


@pytest.fixture()
def database(tmp_path: Path) -> Database:
    db = Database(tmp_path / "layered.sqlite3")
    db.initialize()
    return db


@pytest.fixture()
def session(database: Database) -> Iterator[Session]:
    """A session whose work is rolled back once the test finishes."""

    connection = database.engine.connect()
    transaction = connection.begin()
    session = Session(bind=connection)
    try:
        yield session
    finally:
        session.close()
        if transaction.is_active:
            transaction.rollback()
        connection.close()


@pytest.fixture()
def facade(session: Session) -> UserFacade:
    return create_user_facade(session)
