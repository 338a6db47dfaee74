"""Tests for the user repository, entity manager and mapper."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy.exc import IntegrityError

from layered.backend.user import InvalidArgumentError, UserFactory, create_user_facade
from layered.backend.user.persistence import UserEntity, UserMapper
from layered.models import User


@pytest.fixture()
def factory(session) -> UserFactory:
    return UserFactory(session)


def test_mapper_round_trip_keeps_email_only() -> None:
    mapper = UserMapper()

    transfer = mapper.to_transfer(mapper.to_record(User(email="map@email.com"), None))

    assert transfer == User(email="map@email.com")


def test_mapper_keeps_existing_email_when_transfer_has_none() -> None:
    record = UserEntity(email="kept@email.com")

    mapped = UserMapper().to_record(User(id=3), record)

    assert mapped is record
    assert mapped.email == "kept@email.com"


def test_mapper_does_not_touch_identity_or_timestamps() -> None:
    stamp = datetime(2024, 1, 1, tzinfo=timezone.utc)
    user = User(id=7, email="new@email.com", created_at=stamp, updated_at=stamp)

    record = UserMapper().to_record(user, None)

    assert record.id is None
    assert record.created_at is None
    assert record.updated_at is None


def test_repository_returns_raw_record_by_id(factory) -> None:
    stored = factory.create_entity_manager().persist(User(email="raw@email.com"))

    record = factory.create_repository().find_one_by_id(stored.id)

    assert isinstance(record, UserEntity)
    assert record.email == "raw@email.com"
    assert factory.create_repository().find_one_by_id(stored.id + 100) is None


def test_entity_manager_rejects_missing_id_and_email(factory) -> None:
    with pytest.raises(InvalidArgumentError, match="Email or Id required"):
        factory.create_entity_manager().persist(User())


def test_entity_manager_inserts_new_record_for_stale_id(factory) -> None:
    stored = factory.create_entity_manager().persist(User(id=999, email="stale@email.com"))

    assert stored.id != 999
    assert stored.email == "stale@email.com"


def test_stale_id_without_email_fails_in_the_store(factory) -> None:
    with pytest.raises(IntegrityError):
        factory.create_entity_manager().persist(User(id=999))


def test_update_by_id_without_email_keeps_stored_email(factory) -> None:
    manager = factory.create_entity_manager()
    created = manager.persist(User(email="keep@email.com"))

    updated = manager.persist(User(id=created.id))

    assert updated.email == "keep@email.com"
    assert updated.updated_at > created.updated_at


def test_update_by_id_with_empty_email_keeps_stored_email(factory) -> None:
    manager = factory.create_entity_manager()
    created = manager.persist(User(email="keep@email.com"))

    updated = manager.persist(User(id=created.id, email=""))

    assert updated.id == created.id
    assert updated.email == "keep@email.com"


def test_mapper_treats_empty_email_as_absent() -> None:
    record = UserEntity(email="kept@email.com")

    mapped = UserMapper().to_record(User(id=3, email=""), record)

    assert mapped.email == "kept@email.com"


def test_duplicate_email_is_refused_by_unique_constraint(factory) -> None:
    manager = factory.create_entity_manager()
    manager.persist(User(email="dup@email.com"))

    with pytest.raises(IntegrityError):
        manager.persist(User(email="dup@email.com"))


def test_updated_at_advances_even_when_clock_stands_still(factory, monkeypatch) -> None:
    frozen = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)
    monkeypatch.setattr(
        "layered.backend.user.persistence.entity.utcnow", lambda: frozen
    )
    manager = factory.create_entity_manager()

    created = manager.persist(User(email="clock@email.com"))
    updated = manager.persist(User(id=created.id, email="clock2@email.com"))

    assert created.created_at == created.updated_at == frozen
    assert updated.updated_at == frozen + timedelta(microseconds=1)


def test_timestamps_survive_reload_as_utc(database) -> None:
    with database.session() as session:
        stored = create_user_facade(session).persist_user(User(email="utc@email.com"))

    with database.session() as session:
        loaded = create_user_facade(session).find_one_by_email("utc@email.com")

    assert loaded is not None
    assert loaded.created_at.tzinfo is not None
    assert loaded.created_at == stored.created_at
    assert loaded.updated_at == stored.updated_at


def test_update_in_later_unit_of_work_advances_updated_at(database) -> None:
    with database.session() as session:
        created = create_user_facade(session).persist_user(User(email="later@email.com"))

    with database.session() as session:
        updated = create_user_facade(session).persist_user(
            User(id=created.id, email="later2@email.com")
        )

    assert updated.id == created.id
    assert updated.updated_at > created.updated_at


def test_unit_of_work_rolls_back_on_error(database) -> None:
    with pytest.raises(RuntimeError):
        with database.session() as session:
            create_user_facade(session).persist_user(User(email="gone@email.com"))
            raise RuntimeError("boom")

    with database.session() as session:
        assert create_user_facade(session).find_one_by_email("gone@email.com") is None
