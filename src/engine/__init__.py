"""GraphQL execution engine.

This package turns GraphQL request text into a response: a type registry
describing the schema, a resolver set producing field values, and an
executor that parses, validates and resolves requests.

Example:
    >>> from engine import (
    ...     ExecutionRequest,
    ...     FieldDescriptor,
    ...     QueryExecutor,
    ...     ResolverSet,
    ...     TypeDescriptor,
    ...     TypeRegistry,
    ... )
    >>>
    >>> registry = TypeRegistry()
    >>> registry.register_type(TypeDescriptor("Query", (FieldDescriptor("hello", "String"),)))
    >>> resolvers = ResolverSet()
    >>> resolvers.register("Query", "hello", lambda parent, info: "world")
    >>>
    >>> executor = QueryExecutor(registry.build(), resolvers.freeze())
    >>> response = await executor.execute(ExecutionRequest(query="{ hello }"))
    >>> response.to_dict()
    {'data': {'hello': 'world'}}
"""

from .errors import (
    DuplicateFieldError,
    DuplicateResolverError,
    DuplicateTypeError,
    QuerySyntaxError,
    QueryValidationError,
    RegistryFrozenError,
    RequestError,
    ResolutionError,
    SchemaError,
    UnknownFieldError,
    UnknownTypeError,
)
from .executor import QueryExecutor
from .introspection import print_sdl, to_graphql_schema
from .registry import (
    SCALAR_TYPES,
    ArgumentDescriptor,
    FieldDescriptor,
    SchemaGraph,
    TypeDescriptor,
    TypeRegistry,
)
from .resolvers import ResolveInfo, ResolverSet, default_resolver
from .types import ExecutionRequest, ExecutionResponse, RequestPayloadError, ResponseError

__all__ = [
    # Schema
    "SCALAR_TYPES",
    "ArgumentDescriptor",
    "FieldDescriptor",
    "SchemaGraph",
    "TypeDescriptor",
    "TypeRegistry",
    "print_sdl",
    "to_graphql_schema",
    # Resolvers
    "ResolveInfo",
    "ResolverSet",
    "default_resolver",
    # Execution
    "QueryExecutor",
    "ExecutionRequest",
    "ExecutionResponse",
    "ResponseError",
    "RequestPayloadError",
    # Exceptions
    "SchemaError",
    "DuplicateTypeError",
    "DuplicateFieldError",
    "DuplicateResolverError",
    "UnknownTypeError",
    "UnknownFieldError",
    "RegistryFrozenError",
    "RequestError",
    "QuerySyntaxError",
    "QueryValidationError",
    "ResolutionError",
]
