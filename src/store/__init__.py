"""User stores backing the GraphQL resolvers.

Example:
    >>> from store import StoreConfig, create_store
    >>>
    >>> store = create_store(StoreConfig(store_type="memory"))
    >>> await store.get_user("2")
    User(id='2', name='Charlie', email='charlie.gracie@noibu.com')
"""

from .factory import StoreConfig, create_store, get_store
from .interface import UserStore
from .memory import DEFAULT_USERS, InMemoryUserStore
from .sqlite_store import SQLiteUserStore
from .types import (
    DuplicateUserError,
    StoreConnectionError,
    StoreError,
    StoreType,
    User,
)

__all__ = [
    # Factory
    "StoreConfig",
    "create_store",
    "get_store",
    # Stores
    "UserStore",
    "InMemoryUserStore",
    "SQLiteUserStore",
    "DEFAULT_USERS",
    # Types and exceptions
    "StoreType",
    "User",
    "StoreError",
    "StoreConnectionError",
    "DuplicateUserError",
]
