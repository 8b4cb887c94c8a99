"""Abstract user store interface.

Resolvers only depend on this interface, so the data source behind the
GraphQL schema can be swapped without touching the schema or executor.
"""

from abc import ABC, abstractmethod

from .types import User


class UserStore(ABC):
    """Keyed lookup of users.

    Implementations must be safe to share between concurrent requests.
    """

    @abstractmethod
    async def get_user(self, user_id: str) -> User | None:
        """Look up a user by exact id.

        Args:
            user_id: User id, compared by exact string equality

        Returns:
            The user, or None if no user has that id

        Raises:
            StoreError: If the backing store cannot be read
        """
        pass
