"""Transfer objects passed between the application layers."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class User:
    """Represents a user as seen by controllers, commands and the facade.

    ``id`` and the timestamps stay ``None`` until the user has been flushed
    to the database.
    """

    id: Optional[int] = None
    email: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


__all__ = ["User"]
