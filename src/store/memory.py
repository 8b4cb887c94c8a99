"""In-memory user store."""

import asyncio
from collections.abc import Iterable
from types import MappingProxyType

from common.logger import get_logger

from .interface import UserStore
from .types import DuplicateUserError, User

logger = get_logger(__name__)

DEFAULT_USERS: tuple[User, ...] = (
    User(id="1", name="Pavel", email="Pavelboukine@gmail.com"),
    User(id="2", name="Charlie", email="charlie.gracie@noibu.com"),
)


class InMemoryUserStore(UserStore):
    """Read-only user store backed by a dictionary.

    Example:
        >>> store = InMemoryUserStore()
        >>> await store.get_user("1")
        User(id='1', name='Pavel', email='Pavelboukine@gmail.com')
        >>> await store.get_user("99") is None
        True
    """

    def __init__(self, users: Iterable[User] = DEFAULT_USERS, latency: float = 0.0):
        """Initialize the store.

        Args:
            users: Users to serve
            latency: Seconds to sleep on every lookup, to simulate I/O

        Raises:
            DuplicateUserError: If two users share an id
        """
        by_id: dict[str, User] = {}
        for user in users:
            if user.id in by_id:
                raise DuplicateUserError(f"Duplicate user id: {user.id!r}")
            by_id[user.id] = user
        self._users = MappingProxyType(by_id)
        self.latency = latency

    async def get_user(self, user_id: str) -> User | None:
        if self.latency:
            await asyncio.sleep(self.latency)
        user = self._users.get(user_id)
        if user is None:
            logger.debug(f"No user with id {user_id!r}")
        return user
