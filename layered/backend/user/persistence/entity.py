"""ORM record for stored users."""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Optional

from sqlalchemy import Integer, String, event
from sqlalchemy.orm import Mapped, mapped_column

from ....database import Base, UTCDateTime, utcnow


class UserEntity(Base):
    """Persistence model for users.

    ``id`` and both timestamps are owned by the store: the id is assigned and
    the timestamps are stamped when the record is flushed.
    """

    __tablename__ = "users"

    id: Mapped[Optional[int]] = mapped_column(Integer, primary_key=True, autoincrement=True)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False, index=True)
    created_at: Mapped[Optional[datetime]] = mapped_column(UTCDateTime(), nullable=False)
    updated_at: Mapped[Optional[datetime]] = mapped_column(UTCDateTime(), nullable=False)

    def __repr__(self) -> str:
        return f"<UserEntity(id={self.id}, email={self.email})>"


@event.listens_for(UserEntity, "before_insert")
def _stamp_created(mapper, connection, target: UserEntity) -> None:
    now = utcnow()
    target.created_at = now
    target.updated_at = now


@event.listens_for(UserEntity, "before_update")
def _stamp_updated(mapper, connection, target: UserEntity) -> None:
    now = utcnow()
    previous = target.updated_at
    if previous is not None and now <= previous:
        now = previous + timedelta(microseconds=1)
    target.updated_at = now


__all__ = ["UserEntity"]
