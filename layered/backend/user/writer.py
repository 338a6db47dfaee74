"""Write side of the user business layer."""

from __future__ import annotations

from dataclasses import replace
from typing import Protocol

from ...models import User
from .persistence import UserEntityManagerInterface, UserRepositoryInterface


class UserWriterInterface(Protocol):
    def persist_user(self, user: User) -> User:
        ...


class UserWriter:
    """Persists users, treating the email address as the merge key.

    A transfer whose email already belongs to a stored user takes over that
    user's id, so saving the same email twice updates one row instead of
    inserting a duplicate.
    """

    def __init__(
        self,
        repository: UserRepositoryInterface,
        entity_manager: UserEntityManagerInterface,
    ) -> None:
        self._repository = repository
        self._entity_manager = entity_manager

    def persist_user(self, user: User) -> User:
        if user.email:
            existing = self._repository.find_one_by_email(user.email)
            if existing is not None:
                user = replace(user, id=existing.id)

        return self._entity_manager.persist(user)


__all__ = ["UserWriter", "UserWriterInterface"]
