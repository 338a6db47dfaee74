"""Errors raised by the user module."""

from __future__ import annotations


class InvalidArgumentError(ValueError):
    """Raised when a user cannot be persisted with the supplied values."""


__all__ = ["InvalidArgumentError"]
