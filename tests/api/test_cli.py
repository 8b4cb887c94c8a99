"""Tests for the user-graph CLI."""

import json
import sys

import pytest

from api import cli
from store import SQLiteUserStore


def run_cli(monkeypatch, *args):
    monkeypatch.setattr(sys, "argv", ["user-graph", *args])
    cli.main()


@pytest.fixture(autouse=True)
def memory_store(monkeypatch):
    monkeypatch.setenv("USER_STORE_TYPE", "memory")
    monkeypatch.setenv("USER_STORE_LATENCY", "0")


class TestQueryCommand:
    """Tests for the query subcommand."""

    def test_query_prints_response(self, monkeypatch, capsys):
        """Test a successful query prints the JSON response."""
        run_cli(monkeypatch, "query", '{ user_by_id(id: "1") { name } }')

        output = json.loads(capsys.readouterr().out)
        assert output == {"data": {"user_by_id": {"name": "Pavel"}}}

    def test_query_with_variables(self, monkeypatch, capsys):
        """Test variables and operation name are passed through."""
        run_cli(
            monkeypatch,
            "query",
            "query Find($id: String!) { user_by_id(id: $id) { email } }",
            "--variables",
            '{"id": "2"}',
            "--operation",
            "Find",
        )

        output = json.loads(capsys.readouterr().out)
        assert output == {"data": {"user_by_id": {"email": "charlie.gracie@noibu.com"}}}

    def test_query_from_file(self, monkeypatch, capsys, tmp_path):
        """Test the query can be read from a file."""
        query_file = tmp_path / "query.graphql"
        query_file.write_text('{ user_by_id(id: "9") { id } }')

        run_cli(monkeypatch, "query", "--file", str(query_file))

        assert json.loads(capsys.readouterr().out) == {"data": {"user_by_id": None}}

    def test_query_errors_exit_code(self, monkeypatch, capsys):
        """Test a response with errors exits with status 2."""
        with pytest.raises(SystemExit) as exc_info:
            run_cli(monkeypatch, "query", "{ nope }")

        assert exc_info.value.code == 2
        output = json.loads(capsys.readouterr().out)
        assert output["errors"][0]["message"].startswith(
            "Cannot query field 'nope' on type 'Query'."
        )

    def test_invalid_variables(self, monkeypatch, capsys):
        """Test malformed --variables exits with status 1."""
        with pytest.raises(SystemExit) as exc_info:
            run_cli(monkeypatch, "query", "{ __typename }", "--variables", "{bad")

        assert exc_info.value.code == 1
        assert "--variables is not valid JSON" in capsys.readouterr().err

    def test_missing_query(self, monkeypatch, capsys):
        """Test the query subcommand needs a query."""
        with pytest.raises(SystemExit) as exc_info:
            run_cli(monkeypatch, "query")

        assert exc_info.value.code == 1


class TestSchemaCommand:
    """Tests for the schema subcommand."""

    def test_prints_sdl(self, monkeypatch, capsys):
        """Test the SDL is printed to stdout."""
        run_cli(monkeypatch, "schema")

        output = capsys.readouterr().out
        assert "user_by_id(id: String!): User" in output
        assert "email: String!" in output

    def test_writes_file(self, monkeypatch, tmp_path):
        """Test --output writes the SDL to a file."""
        output = tmp_path / "schema.graphql"
        run_cli(monkeypatch, "schema", "--output", str(output))

        assert "type User" in output.read_text()


class TestSeedCommand:
    """Tests for the seed subcommand."""

    @pytest.mark.asyncio
    async def test_seed_creates_users(self, monkeypatch, tmp_path):
        """Test seeding writes the default users."""
        db_path = tmp_path / "users.db"
        run_cli(monkeypatch, "seed", "--db-path", str(db_path))

        user = await SQLiteUserStore(db_path).get_user("1")
        assert user.name == "Pavel"

    def test_seed_twice_fails(self, monkeypatch, tmp_path, capsys):
        """Test seeding an already-seeded database exits with status 1."""
        db_path = tmp_path / "users.db"
        run_cli(monkeypatch, "seed", "--db-path", str(db_path))

        with pytest.raises(SystemExit) as exc_info:
            run_cli(monkeypatch, "seed", "--db-path", str(db_path))

        assert exc_info.value.code == 1
        assert "already" in capsys.readouterr().err


class TestMain:
    """Tests for argument handling."""

    def test_no_command_prints_help(self, monkeypatch, capsys):
        """Test running without a subcommand exits with status 1."""
        with pytest.raises(SystemExit) as exc_info:
            run_cli(monkeypatch)

        assert exc_info.value.code == 1
        assert "serve" in capsys.readouterr().out

    def test_serve_invokes_uvicorn(self, monkeypatch):
        """Test serve hands the app to uvicorn with the parsed options."""
        calls = []
        monkeypatch.setattr("uvicorn.run", lambda app, **kwargs: calls.append((app, kwargs)))
        monkeypatch.setattr(cli, "setup_logging", lambda level: None)
        monkeypatch.delenv("LOG_LEVEL", raising=False)

        run_cli(monkeypatch, "serve", "--host", "0.0.0.0", "--port", "9000")

        assert calls == [
            (
                "api.main:app",
                {"host": "0.0.0.0", "port": 9000, "reload": False, "log_level": "info"},
            )
        ]
