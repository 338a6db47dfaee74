"""Persistence layer of the user module."""

from .entity import UserEntity
from .entity_manager import UserEntityManager, UserEntityManagerInterface
from .mapper import UserMapper
from .repository import UserRepository, UserRepositoryInterface

__all__ = [
    "UserEntity",
    "UserEntityManager",
    "UserEntityManagerInterface",
    "UserMapper",
    "UserRepository",
    "UserRepositoryInterface",
]
