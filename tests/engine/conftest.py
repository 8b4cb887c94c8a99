"""Shared fixtures for engine tests: a small schema with nested, list and failing fields."""

import asyncio

import pytest

from engine import (
    ArgumentDescriptor,
    FieldDescriptor,
    QueryExecutor,
    ResolverSet,
    TypeDescriptor,
    TypeRegistry,
)
from store import DEFAULT_USERS, InMemoryUserStore

FRIENDS = {"1": "2", "2": None}

USER = TypeDescriptor(
    "User",
    (
        FieldDescriptor("id", "String", nullable=False),
        FieldDescriptor("name", "String", nullable=False),
        FieldDescriptor("email", "String", nullable=False),
        FieldDescriptor("friend", "User"),
        FieldDescriptor("nickname", "String"),
        FieldDescriptor("broken", "String", nullable=False),
    ),
)

QUERY = TypeDescriptor(
    "Query",
    (
        FieldDescriptor(
            "user_by_id",
            "User",
            arguments=(ArgumentDescriptor("id", "String", required=True),),
        ),
        FieldDescriptor("users", "User", nullable=False, is_list=True, item_nullable=False),
        FieldDescriptor(
            "echo",
            "String",
            arguments=(
                ArgumentDescriptor("text", "String"),
                ArgumentDescriptor("times", "Int", default=1),
            ),
        ),
        FieldDescriptor(
            "slow",
            "String",
            arguments=(
                ArgumentDescriptor("delay", "Float", required=True),
                ArgumentDescriptor("label", "String", required=True),
                ArgumentDescriptor("fail", "Boolean", default=False),
            ),
        ),
        FieldDescriptor("ping", "Boolean"),
        FieldDescriptor("fail", "String"),
        FieldDescriptor("required_fail", "String", nullable=False),
        FieldDescriptor("bad_int", "Int"),
        FieldDescriptor("waiter", "String"),
        FieldDescriptor("setter", "String"),
    ),
)


def build_test_resolvers(store: InMemoryUserStore) -> ResolverSet:
    resolvers = ResolverSet()

    @resolvers.field("Query", "user_by_id")
    async def user_by_id(parent, info, id):
        return await store.get_user(id)

    @resolvers.field("Query", "users")
    def users(parent, info):
        return list(DEFAULT_USERS)

    @resolvers.field("Query", "echo")
    def echo(parent, info, times, text=None):
        return None if text is None else text * times

    @resolvers.field("Query", "slow")
    async def slow(parent, info, delay, label, fail):
        await asyncio.sleep(delay)
        if fail:
            raise RuntimeError(f"{label} failed")
        return label

    @resolvers.field("Query", "ping")
    def ping(parent, info):
        return True

    @resolvers.field("Query", "fail")
    def fail(parent, info):
        raise RuntimeError("boom")

    @resolvers.field("Query", "required_fail")
    def required_fail(parent, info):
        raise RuntimeError("required boom")

    @resolvers.field("Query", "bad_int")
    def bad_int(parent, info):
        return "abc"

    @resolvers.field("Query", "waiter")
    async def waiter(parent, info):
        await asyncio.wait_for(info.context["event"].wait(), timeout=1.0)
        return "released"

    @resolvers.field("Query", "setter")
    def setter(parent, info):
        info.context["event"].set()
        return "set"

    @resolvers.field("User", "friend")
    async def friend(parent, info):
        friend_id = FRIENDS.get(parent.id)
        return None if friend_id is None else await store.get_user(friend_id)

    @resolvers.field("User", "nickname")
    def nickname(parent, info):
        raise ValueError(f"no nickname for {parent.id}")

    @resolvers.field("User", "broken")
    def broken(parent, info):
        raise ValueError("broken field")

    return resolvers.freeze()


@pytest.fixture
def registry():
    """A registry holding the test types, not yet built."""
    registry = TypeRegistry()
    registry.register_type(QUERY)
    registry.register_type(USER)
    return registry


@pytest.fixture
def graph(registry):
    return registry.build()


@pytest.fixture
def executor(graph):
    return QueryExecutor(graph, build_test_resolvers(InMemoryUserStore()))
