"""Read side of the user business layer."""

from __future__ import annotations

from typing import Optional, Protocol

from ...models import User
from .persistence import UserRepositoryInterface


class UserReaderInterface(Protocol):
    def find_one_by_email(self, email: str) -> Optional[User]:
        ...


class UserReader:
    def __init__(self, repository: UserRepositoryInterface) -> None:
        self._repository = repository

    def find_one_by_email(self, email: str) -> Optional[User]:
        return self._repository.find_one_by_email(email)


__all__ = ["UserReader", "UserReaderInterface"]
