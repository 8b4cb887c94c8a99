"""GraphQL schema combining all types and resolvers."""

from engine import QueryExecutor, ResolverSet, SchemaGraph, TypeRegistry
from store import UserStore, get_store

from api.resolvers.users import register_user_resolvers
from api.types import QUERY_TYPE, USER_TYPE


def build_graph() -> SchemaGraph:
    """Register every type and freeze the schema graph."""
    registry = TypeRegistry()
    registry.register_type(QUERY_TYPE)
    registry.register_type(USER_TYPE)
    return registry.build(query_type=QUERY_TYPE.name)


def build_resolvers(store: UserStore) -> ResolverSet:
    resolvers = ResolverSet()
    register_user_resolvers(resolvers, store)
    return resolvers.freeze()


def create_executor(store: UserStore | None = None) -> QueryExecutor:
    """Create an executor for the user-graph schema.

    Args:
        store: Backing user store; defaults to the store selected by the
            environment (see ``store.get_store``)
    """
    return QueryExecutor(build_graph(), build_resolvers(store or get_store()))
