"""Conversion between user records and user transfers."""

from __future__ import annotations

from typing import Optional

from ....models import User
from .entity import UserEntity


class UserMapper:
    def to_transfer(self, record: UserEntity) -> User:
        return User(
            id=record.id,
            email=record.email,
            created_at=record.created_at,
            updated_at=record.updated_at,
        )

    def to_record(self, user: User, record: Optional[UserEntity] = None) -> UserEntity:
        """Copy the transfer's email onto ``record`` or onto a new record.

        Identifiers and timestamps are left to the store.
        """
        if record is None:
            return UserEntity(email=user.email)
        record.email = user.email or record.email
        return record


__all__ = ["UserMapper"]
