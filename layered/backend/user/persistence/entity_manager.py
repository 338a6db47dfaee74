"""Write access to stored users."""

from __future__ import annotations

import logging
from typing import Protocol

from sqlalchemy.orm import Session

from ....models import User
from ..exceptions import InvalidArgumentError
from .mapper import UserMapper
from .repository import UserRepositoryInterface

logger = logging.getLogger("layered.user")


class UserEntityManagerInterface(Protocol):
    def persist(self, user: User) -> User:
        """Insert or update ``user`` and return the stored state.

        Raises :class:`InvalidArgumentError` when neither id nor email is set.
        """
        ...


class UserEntityManager:
    """Upserts users within the caller's session."""

    def __init__(
        self,
        session: Session,
        repository: UserRepositoryInterface,
        mapper: UserMapper,
    ) -> None:
        self._session = session
        self._repository = repository
        self._mapper = mapper

    def persist(self, user: User) -> User:
        if not user.email and not user.id:
            raise InvalidArgumentError("Email or Id required")

        record = None
        if user.id:
            record = self._repository.find_one_by_id(user.id)

        record = self._mapper.to_record(user, record)

        is_new = record.id is None
        if is_new:
            self._session.add(record)

        self._session.flush()

        if is_new:
            logger.info("Created user %s", record.id)
        else:
            logger.info("Updated user %s", record.id)

        return self._mapper.to_transfer(record)


__all__ = ["UserEntityManager", "UserEntityManagerInterface"]
