"""Public entry point of the user module."""

from __future__ import annotations

from typing import Optional, Protocol

from ...models import User
from .reader import UserReaderInterface
from .writer import UserWriterInterface


class UserFacadeInterface(Protocol):
    """Everything routes and commands may ask of the user module."""

    def find_one_by_email(self, email: str) -> Optional[User]:
        """Return the stored user with exactly this email, or ``None``."""
        ...

    def persist_user(self, user: User) -> User:
        """Insert or update a user and return its stored state.

        Raises :class:`~layered.backend.user.exceptions.InvalidArgumentError`
        when the user has neither an id nor an email.
        """
        ...


class UserFacade:
    def __init__(self, reader: UserReaderInterface, writer: UserWriterInterface) -> None:
        self._reader = reader
        self._writer = writer

    def find_one_by_email(self, email: str) -> Optional[User]:
        return self._reader.find_one_by_email(email)

    def persist_user(self, user: User) -> User:
        return self._writer.persist_user(user)


__all__ = ["UserFacade", "UserFacadeInterface"]
