"""Parsing and validation of GraphQL documents against a schema graph.

Everything here runs synchronously before any resolver is invoked. Syntax
errors and validation errors both fail the whole request. The document is
checked with graphql-core's standard rules against the schema mirror, so
every rule applies to the whole document and the client sees every problem
at once.
"""

from collections.abc import Mapping
from typing import Any

from graphql import GraphQLError, GraphQLSchema, parse, validate
from graphql.error import GraphQLSyntaxError
from graphql.execution.values import get_variable_values
from graphql.language import (
    DocumentNode,
    FragmentDefinitionNode,
    Node,
    OperationDefinitionNode,
    OperationType,
    get_location,
)

from .errors import QuerySyntaxError, QueryValidationError

TYPENAME_FIELD = "__typename"
INTROSPECTION_FIELDS = frozenset({"__schema", "__type"})


def locations_of(*nodes: Node | None) -> list[tuple[int, int]]:
    """Return (line, column) pairs for the given AST nodes."""
    result = []
    for node in nodes:
        if node is not None and node.loc is not None:
            location = get_location(node.loc.source, node.loc.start)
            result.append((location.line, location.column))
    return result


def _request_error(error: GraphQLError) -> QueryValidationError:
    locations = [(loc.line, loc.column) for loc in error.locations or ()]
    return QueryValidationError(error.message, locations)


def parse_document(text: str) -> DocumentNode:
    """Parse request text into a document AST.

    Raises:
        QuerySyntaxError: If the text is not valid GraphQL
    """
    try:
        return parse(text)
    except GraphQLSyntaxError as e:
        locations = [(loc.line, loc.column) for loc in e.locations or ()]
        raise QuerySyntaxError(e.message, locations) from e


def select_operation(
    document: DocumentNode, operation_name: str | None
) -> OperationDefinitionNode:
    """Pick the operation to run from a parsed document.

    Raises:
        QueryValidationError: If no operation matches, the choice is
            ambiguous, or the operation is not a query
    """
    operations = [d for d in document.definitions if isinstance(d, OperationDefinitionNode)]
    if not operations:
        raise QueryValidationError("Must provide an operation.")

    if operation_name is None:
        if len(operations) > 1:
            raise QueryValidationError(
                "Must provide operation name if query contains multiple operations."
            )
        operation = operations[0]
    else:
        matches = [op for op in operations if op.name and op.name.value == operation_name]
        if not matches:
            raise QueryValidationError(f"Unknown operation named '{operation_name}'.")
        operation = matches[0]

    if operation.operation != OperationType.QUERY:
        raise QueryValidationError(
            f"Schema is not configured to execute {operation.operation.value} operation.",
            locations_of(operation),
        )
    return operation


def fragment_definitions(document: DocumentNode) -> dict[str, FragmentDefinitionNode]:
    return {
        d.name.value: d for d in document.definitions if isinstance(d, FragmentDefinitionNode)
    }


def validate_document(
    schema: GraphQLSchema, document: DocumentNode
) -> list[QueryValidationError]:
    """Validate every definition in the document; an empty list means it is valid.

    Args:
        schema: graphql-core mirror of the schema graph
        document: Parsed request document
    """
    return [_request_error(error) for error in validate(schema, document)]


def coerce_variable_values(
    schema: GraphQLSchema, operation: OperationDefinitionNode, inputs: Mapping[str, Any]
) -> tuple[dict[str, Any], list[QueryValidationError]]:
    """Coerce the request's variables against the operation's definitions.

    Returns:
        Tuple of (coerced values, errors); variables that were not provided
        and have no default are absent from the values
    """
    result = get_variable_values(schema, operation.variable_definitions or (), dict(inputs))
    if isinstance(result, list):
        return {}, [_request_error(error) for error in result]
    return result.coerced, []
