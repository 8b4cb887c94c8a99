"""Shared types and exceptions for user stores."""

from dataclasses import dataclass
from enum import Enum


class StoreType(str, Enum):
    """Supported user store backends."""

    MEMORY = "memory"
    SQLITE = "sqlite"


@dataclass(frozen=True)
class User:
    """A user record as held by a store."""

    id: str
    name: str
    email: str


class StoreError(Exception):
    """Base exception for user store operations."""

    pass


class StoreConnectionError(StoreError):
    """Error opening the backing store."""

    pass


class DuplicateUserError(StoreError):
    """A user with the same id already exists."""

    pass
