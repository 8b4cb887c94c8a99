"""Tests for the graphql-core schema mirror and SDL output."""

from graphql import GraphQLList, GraphQLNonNull

from engine import print_sdl, to_graphql_schema


class TestSchemaMirror:
    """Tests for to_graphql_schema."""

    def test_types_mirrored(self, graph):
        """Test every graph type appears in the mirror."""
        schema = to_graphql_schema(graph)

        assert schema.query_type.name == "Query"
        assert set(schema.type_map) >= {"Query", "User", "String", "Int", "Float", "Boolean"}

    def test_wrapping(self, graph):
        """Test non-null and list wrappers match the descriptors."""
        schema = to_graphql_schema(graph)
        users = schema.query_type.fields["users"].type

        assert isinstance(users, GraphQLNonNull)
        assert isinstance(users.of_type, GraphQLList)
        assert isinstance(users.of_type.of_type, GraphQLNonNull)
        assert users.of_type.of_type.of_type.name == "User"

    def test_argument_defaults(self, graph):
        """Test argument defaults and required flags carry over."""
        schema = to_graphql_schema(graph)
        echo = schema.query_type.fields["echo"]
        user_by_id = schema.query_type.fields["user_by_id"]

        assert echo.args["times"].default_value == 1
        assert isinstance(user_by_id.args["id"].type, GraphQLNonNull)


class TestPrintSdl:
    """Tests for print_sdl."""

    def test_sdl(self, graph):
        """Test the SDL lists types and fields."""
        sdl = print_sdl(graph)

        assert "type Query {" in sdl
        assert "user_by_id(id: String!): User" in sdl
        assert "users: [User!]!" in sdl
        assert "echo(text: String, times: Int = 1): String" in sdl
        assert "type User {" in sdl
        assert "email: String!" in sdl
