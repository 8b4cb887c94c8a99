"""Tests for the user-graph schema wiring."""

import pytest

from api.schema import build_graph, build_resolvers, create_executor
from engine import ExecutionRequest, RegistryFrozenError
from store import InMemoryUserStore, SQLiteUserStore, User


class TestBuildGraph:
    """Tests for build_graph."""

    def test_types(self):
        """Test the graph holds Query and User."""
        graph = build_graph()

        assert list(graph.types) == ["Query", "User"]
        assert [f.name for f in graph.get_type("User").fields] == ["id", "name", "email"]

    def test_user_by_id_signature(self):
        """Test user_by_id takes a required String id and returns a nullable User."""
        descriptor = build_graph().lookup_field("Query", "user_by_id")

        assert descriptor.type_name == "User"
        assert descriptor.nullable
        assert descriptor.get_argument("id").type_label == "String!"

    def test_user_fields_non_null(self):
        """Test every User field is a non-null String."""
        for descriptor in build_graph().get_type("User").fields:
            assert descriptor.type_label == "String!"


class TestBuildResolvers:
    """Tests for build_resolvers."""

    def test_frozen(self):
        """Test the returned resolver set is frozen."""
        resolvers = build_resolvers(InMemoryUserStore())

        assert ("Query", "user_by_id") in resolvers
        with pytest.raises(RegistryFrozenError):
            resolvers.register("Query", "other", lambda parent, info: None)


class TestCreateExecutor:
    """Tests for create_executor."""

    @pytest.mark.asyncio
    async def test_custom_store(self):
        """Test the executor reads from the given store."""
        store = InMemoryUserStore([User("42", "Ada", "ada@example.com")])
        executor = create_executor(store)

        response = await executor.execute(
            ExecutionRequest(query='{ user_by_id(id: "42") { name email } }')
        )

        assert response.to_dict() == {
            "data": {"user_by_id": {"name": "Ada", "email": "ada@example.com"}}
        }

    @pytest.mark.asyncio
    async def test_default_store_from_env(self, monkeypatch):
        """Test the executor falls back to the configured store."""
        monkeypatch.setenv("USER_STORE_TYPE", "memory")
        monkeypatch.setenv("USER_STORE_LATENCY", "0")
        executor = create_executor()

        response = await executor.execute(ExecutionRequest(query='{ user_by_id(id: "2") { id } }'))

        assert response.to_dict() == {"data": {"user_by_id": {"id": "2"}}}

    @pytest.mark.asyncio
    async def test_store_failure_is_field_error(self, tmp_path):
        """Test a store failure surfaces as a field error with null data."""
        executor = create_executor(SQLiteUserStore(tmp_path / "missing-table.db"))

        response = await executor.execute(
            ExecutionRequest(query='{ user_by_id(id: "1") { id } }')
        )
        body = response.to_dict()

        assert body["data"] == {"user_by_id": None}
        assert body["errors"][0]["path"] == ["user_by_id"]
        assert body["errors"][0]["message"].startswith("Failed to read user '1'")
