"""Wiring for the user module."""

from __future__ import annotations

from sqlalchemy.orm import Session

from .facade import UserFacade
from .persistence import UserEntityManager, UserMapper, UserRepository
from .reader import UserReader
from .writer import UserWriter


class UserFactory:
    """Builds the user module's collaborators around a single session."""

    def __init__(self, session: Session) -> None:
        self._session = session
        self._mapper = UserMapper()

    def create_repository(self) -> UserRepository:
        return UserRepository(self._session, self._mapper)

    def create_entity_manager(self) -> UserEntityManager:
        return UserEntityManager(self._session, self.create_repository(), self._mapper)

    def create_reader(self) -> UserReader:
        return UserReader(self.create_repository())

    def create_writer(self) -> UserWriter:
        return UserWriter(self.create_repository(), self.create_entity_manager())

    def create_facade(self) -> UserFacade:
        return UserFacade(self.create_reader(), self.create_writer())


def create_user_facade(session: Session) -> UserFacade:
    return UserFactory(session).create_facade()


__all__ = ["UserFactory", "create_user_facade"]
