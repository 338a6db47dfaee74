"""Read access to stored users."""

from __future__ import annotations

from typing import Optional, Protocol

from sqlalchemy import select
from sqlalchemy.orm import Session

from ....models import User
from .entity import UserEntity
from .mapper import UserMapper


class UserRepositoryInterface(Protocol):
    """Lookups the business layer needs from user storage."""

    def find_one_by_email(self, email: str) -> Optional[User]:
        ...

    def find_one_by_id(self, user_id: int) -> Optional[UserEntity]:
        ...


class UserRepository:
    """SQLAlchemy-backed user lookups."""

    def __init__(self, session: Session, mapper: UserMapper) -> None:
        self._session = session
        self._mapper = mapper

    def find_one_by_email(self, email: str) -> Optional[User]:
        statement = select(UserEntity).where(UserEntity.email == email)
        record = self._session.execute(statement).scalar_one_or_none()
        if record is None:
            return None
        return self._mapper.to_transfer(record)

    def find_one_by_id(self, user_id: int) -> Optional[UserEntity]:
        """Return the raw record so the entity manager can update it in place."""
        return self._session.get(UserEntity, user_id)


__all__ = ["UserRepository", "UserRepositoryInterface"]
