"""GraphQL type definitions for the user-graph API."""

from engine import ArgumentDescriptor, FieldDescriptor, TypeDescriptor

USER_TYPE = TypeDescriptor(
    name="User",
    description="A registered user.",
    fields=(
        FieldDescriptor("id", "String", nullable=False, description="Unique user id."),
        FieldDescriptor("name", "String", nullable=False, description="Display name."),
        FieldDescriptor("email", "String", nullable=False, description="Contact email address."),
    ),
)

QUERY_TYPE = TypeDescriptor(
    name="Query",
    description="GraphQL queries for the user-graph API.",
    fields=(
        FieldDescriptor(
            "user_by_id",
            "User",
            arguments=(ArgumentDescriptor("id", "String", required=True),),
            description="Get a single user by id, or null if no user has that id.",
        ),
    ),
)
