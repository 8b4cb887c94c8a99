"""User query resolvers."""

from engine import ResolveInfo, ResolverSet
from store import User, UserStore


def register_user_resolvers(resolvers: ResolverSet, store: UserStore) -> None:
    """Register the root user resolvers against ``store``.

    ``User`` fields need no resolvers of their own: the default resolver
    reads them from the ``User`` record.
    """

    @resolvers.field("Query", "user_by_id")
    async def user_by_id(parent: None, info: ResolveInfo, id: str) -> User | None:
        """
        Get a single user by id.

        Args:
            id: User id, matched by exact string equality

        Returns:
            User or None if not found
        """
        return await store.get_user(id)
