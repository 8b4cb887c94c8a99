"""Scalar coercion for argument literals and resolved values.

The rules for each built-in scalar come from graphql-core's scalar types,
so literals and outgoing values are checked the same way any GraphQL
server checks them.
"""

from collections.abc import Mapping
from typing import Any

from graphql import GraphQLScalarType
from graphql.language import NullValueNode, ValueNode, VariableNode
from graphql.type import GraphQLBoolean, GraphQLFloat, GraphQLID, GraphQLInt, GraphQLString

from .registry import ArgumentDescriptor

SCALARS: dict[str, GraphQLScalarType] = {
    "String": GraphQLString,
    "Int": GraphQLInt,
    "Float": GraphQLFloat,
    "Boolean": GraphQLBoolean,
    "ID": GraphQLID,
}

# Marks an argument that was neither given nor defaulted
OMITTED = object()


def value_from_literal(
    node: ValueNode,
    type_name: str,
    variables: Mapping[str, Any],
) -> Any:
    """Turn a validated literal or variable reference into a Python value.

    Returns:
        The value, or ``OMITTED`` for a reference to a variable that was
        not provided
    """
    if isinstance(node, VariableNode):
        return variables.get(node.name.value, OMITTED)
    if isinstance(node, NullValueNode):
        return None
    return SCALARS[type_name].parse_literal(node)


def serialize(value: Any, type_name: str) -> Any:
    """Serialize a resolved value as ``type_name`` for the response.

    Raises:
        GraphQLError: If the value cannot be represented
    """
    return SCALARS[type_name].serialize(value)


def argument_values(
    arguments: tuple[ArgumentDescriptor, ...],
    nodes: Mapping[str, ValueNode],
    variables: Mapping[str, Any],
) -> dict[str, Any]:
    """Build the keyword arguments for a resolver call.

    Arguments that are neither given (directly or through a provided
    variable) nor defaulted are left out.
    """
    values: dict[str, Any] = {}
    for argument in arguments:
        value = OMITTED
        node = nodes.get(argument.name)
        if node is not None:
            value = value_from_literal(node, argument.type_name, variables)
        if value is OMITTED and argument.has_default:
            value = argument.default
        if value is not OMITTED:
            values[argument.name] = value
    return values
