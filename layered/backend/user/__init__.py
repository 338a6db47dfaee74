"""User management: lookup by email and upsert by email or id."""

from .exceptions import InvalidArgumentError
from .facade import UserFacade, UserFacadeInterface
from .factory import UserFactory, create_user_facade

__all__ = [
    "InvalidArgumentError",
    "UserFacade",
    "UserFacadeInterface",
    "UserFactory",
    "create_user_facade",
]
