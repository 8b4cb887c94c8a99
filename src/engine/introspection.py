"""Schema introspection and SDL output.

The schema graph is mirrored into a graphql-core ``GraphQLSchema`` that
carries no resolvers. The mirror is what requests are validated against;
graphql-core also answers ``__schema`` / ``__type`` root fields from it
(this is what the query console uses to load its documentation pane) and
prints the SDL.
"""

from collections.abc import Mapping
from typing import Any

from graphql import (
    GraphQLArgument,
    GraphQLField,
    GraphQLList,
    GraphQLNonNull,
    GraphQLObjectType,
    GraphQLSchema,
    execute_sync,
    print_schema,
)
from graphql.language import (
    DocumentNode,
    FieldNode,
    FragmentDefinitionNode,
    OperationDefinitionNode,
    OperationType,
    SelectionSetNode,
)

from .registry import FieldDescriptor, SchemaGraph
from .types import ResponseError
from .values import SCALARS


def to_graphql_schema(graph: SchemaGraph) -> GraphQLSchema:
    """Build a resolver-less graphql-core schema mirroring ``graph``."""
    object_types: dict[str, GraphQLObjectType] = {}

    def output_type(descriptor: FieldDescriptor):
        named = SCALARS.get(descriptor.type_name) or object_types[descriptor.type_name]
        if descriptor.is_list:
            if not descriptor.item_nullable:
                named = GraphQLNonNull(named)
            named = GraphQLList(named)
        return named if descriptor.nullable else GraphQLNonNull(named)

    def make_fields(type_name: str):
        def thunk():
            fields = {}
            for descriptor in graph.get_type(type_name).fields:
                arguments = {}
                for argument in descriptor.arguments:
                    scalar = SCALARS[argument.type_name]
                    kwargs = {"description": argument.description}
                    if argument.has_default:
                        kwargs["default_value"] = argument.default
                    arguments[argument.name] = GraphQLArgument(
                        GraphQLNonNull(scalar) if argument.required else scalar, **kwargs
                    )
                fields[descriptor.name] = GraphQLField(
                    output_type(descriptor),
                    args=arguments,
                    description=descriptor.description,
                )
            return fields

        return thunk

    for name, descriptor in graph.types.items():
        object_types[name] = GraphQLObjectType(
            name, make_fields(name), description=descriptor.description
        )

    return GraphQLSchema(
        query=object_types[graph.query_type.name], types=list(object_types.values())
    )


def print_sdl(graph: SchemaGraph) -> str:
    """Return the schema in GraphQL SDL."""
    return print_schema(to_graphql_schema(graph))


def resolve_introspection_field(
    schema: GraphQLSchema,
    operation: OperationDefinitionNode,
    fragments: Mapping[str, FragmentDefinitionNode],
    nodes: list[FieldNode],
    variables: Mapping[str, Any],
) -> tuple[Any, list[ResponseError], bool]:
    """Answer one ``__schema`` or ``__type`` root field with graphql-core.

    The field's nodes are run as a query of their own, carrying the
    operation's variable definitions and the document's fragments.

    Returns:
        Tuple of (value, errors, whether the value is a null that has to
        propagate to ``data``)
    """
    document = DocumentNode(
        definitions=(
            OperationDefinitionNode(
                operation=OperationType.QUERY,
                name=None,
                variable_definitions=operation.variable_definitions or (),
                directives=(),
                selection_set=SelectionSetNode(selections=tuple(nodes)),
            ),
            *fragments.values(),
        )
    )
    result = execute_sync(schema, document, variable_values=dict(variables))
    errors = [ResponseError.from_dict(error.formatted) for error in result.errors or ()]
    if result.data is None:
        return None, errors, True
    key = nodes[0].alias.value if nodes[0].alias else nodes[0].name.value
    return result.data.get(key), errors, False
