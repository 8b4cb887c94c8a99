"""Query executor: parse, validate, resolve and assemble a response.

Execution of a request walks the selection tree from the root query type.
Sibling fields are resolved concurrently (one task per field) and then
assembled back in selection order, so both the data and the error list are
independent of which resolver finishes first.

A failing field is recorded with its response path and turned into null.
When the failing field is non-nullable the null moves up to the nearest
nullable ancestor (or to ``data`` itself at the root).
"""

import asyncio
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from graphql import GraphQLError, GraphQLSchema
from graphql.language import (
    DirectiveNode,
    FieldNode,
    FragmentDefinitionNode,
    FragmentSpreadNode,
    InlineFragmentNode,
    OperationDefinitionNode,
    SelectionSetNode,
)

from common.logger import get_logger

from .errors import QuerySyntaxError, QueryValidationError, ResolutionError
from .introspection import resolve_introspection_field, to_graphql_schema
from .registry import FieldDescriptor, SchemaGraph, TypeDescriptor
from .resolvers import ResolveInfo, ResolverSet
from .types import ExecutionRequest, ExecutionResponse, Path, ResponseError
from .validation import (
    INTROSPECTION_FIELDS,
    TYPENAME_FIELD,
    coerce_variable_values,
    fragment_definitions,
    locations_of,
    parse_document,
    select_operation,
    validate_document,
)
from .values import argument_values, serialize, value_from_literal

logger = get_logger(__name__)


@dataclass
class FieldResult:
    """Outcome of completing one field.

    ``null_propagates`` is set when the field is non-nullable but ended up
    null, so its parent object has to become null as well.
    """

    value: Any = None
    errors: list[ResponseError] = field(default_factory=list)
    null_propagates: bool = False


@dataclass
class ExecutionContext:
    """Per-request state shared by every field of one execution."""

    operation: OperationDefinitionNode
    fragments: dict[str, FragmentDefinitionNode]
    variables: dict[str, Any]
    context: Any = None

    @property
    def operation_name(self) -> str | None:
        return self.operation.name.value if self.operation.name else None


class QueryExecutor:
    """Executes GraphQL requests against a schema graph and resolver set.

    The executor holds no per-request state; one instance serves any number
    of concurrent requests.

    Example:
        >>> executor = QueryExecutor(graph, resolvers)
        >>> request = ExecutionRequest(query='{ user_by_id(id: "1") { name } }')
        >>> response = await executor.execute(request)
        >>> response.to_dict()
        {'data': {'user_by_id': {'name': 'Pavel'}}}
    """

    def __init__(self, graph: SchemaGraph, resolvers: ResolverSet):
        self.graph = graph
        self.resolvers = resolvers
        self.graphql_schema: GraphQLSchema = to_graphql_schema(graph)

    async def execute(self, request: ExecutionRequest, context: Any = None) -> ExecutionResponse:
        """Execute one request.

        Syntax and validation failures produce a response without data.
        Resolver failures produce a partial response.

        Args:
            request: The request to run
            context: Optional object handed to resolvers as ``info.context``

        Returns:
            ExecutionResponse
        """
        try:
            document = parse_document(request.query)
        except QuerySyntaxError as e:
            logger.debug(f"Rejected request: {e.message}")
            return ExecutionResponse.request_failure([ResponseError.from_request_error(e)])

        errors = validate_document(self.graphql_schema, document)
        if errors:
            logger.debug(f"Request failed validation with {len(errors)} error(s)")
            return ExecutionResponse.request_failure(
                [ResponseError.from_request_error(e) for e in errors]
            )

        try:
            operation = select_operation(document, request.operation_name)
        except QueryValidationError as e:
            logger.debug(f"Rejected request: {e.message}")
            return ExecutionResponse.request_failure([ResponseError.from_request_error(e)])

        variables, errors = coerce_variable_values(
            self.graphql_schema, operation, request.variables or {}
        )
        if errors:
            logger.debug(f"Request failed validation with {len(errors)} error(s)")
            return ExecutionResponse.request_failure(
                [ResponseError.from_request_error(e) for e in errors]
            )

        exe_context = ExecutionContext(
            operation=operation,
            fragments=fragment_definitions(document),
            variables=variables,
            context=context,
        )
        root = self.graph.query_type
        fields = self.collect_fields(exe_context, root, [operation.selection_set])
        result = await self.execute_fields(exe_context, root, fields, None, ())
        data = None if result.null_propagates else result.value
        return ExecutionResponse(data=data, errors=result.errors)

    def collect_fields(
        self,
        exe_context: ExecutionContext,
        type_descriptor: TypeDescriptor,
        selection_sets: Iterable[SelectionSetNode],
    ) -> dict[str, list[FieldNode]]:
        """Group the selected field nodes by response key, in selection order.

        Fragments are inlined and ``@skip`` / ``@include`` are applied.
        """
        fields: dict[str, list[FieldNode]] = {}
        visited: set[str] = set()

        def collect(selection_set: SelectionSetNode) -> None:
            for selection in selection_set.selections:
                if not self._should_include(exe_context, selection.directives):
                    continue
                if isinstance(selection, FieldNode):
                    key = selection.alias.value if selection.alias else selection.name.value
                    fields.setdefault(key, []).append(selection)
                elif isinstance(selection, InlineFragmentNode):
                    collect(selection.selection_set)
                elif isinstance(selection, FragmentSpreadNode):
                    name = selection.name.value
                    if name in visited:
                        continue
                    visited.add(name)
                    collect(exe_context.fragments[name].selection_set)

        for selection_set in selection_sets:
            collect(selection_set)
        return fields

    @staticmethod
    def _should_include(
        exe_context: ExecutionContext, directives: tuple[DirectiveNode, ...] | None
    ) -> bool:
        for directive in directives or ():
            name = directive.name.value
            condition = next(
                (arg.value for arg in directive.arguments or () if arg.name.value == "if"),
                None,
            )
            if condition is None:
                continue
            value = value_from_literal(condition, "Boolean", exe_context.variables)
            if name == "skip" and value is True:
                return False
            if name == "include" and value is not True:
                return False
        return True

    async def execute_fields(
        self,
        exe_context: ExecutionContext,
        type_descriptor: TypeDescriptor,
        fields: Mapping[str, list[FieldNode]],
        parent: Any,
        path: Path,
    ) -> FieldResult:
        """Resolve every field of one object concurrently and assemble the object."""
        keys = list(fields)
        results = await asyncio.gather(
            *(
                self.execute_field(exe_context, type_descriptor, fields[key], parent, path + (key,))
                for key in keys
            )
        )

        data: dict[str, Any] = {}
        errors: list[ResponseError] = []
        null_propagates = False
        for key, result in zip(keys, results):
            data[key] = result.value
            errors.extend(result.errors)
            null_propagates = null_propagates or result.null_propagates

        return FieldResult(
            value=None if null_propagates else data,
            errors=errors,
            null_propagates=null_propagates,
        )

    async def execute_field(
        self,
        exe_context: ExecutionContext,
        type_descriptor: TypeDescriptor,
        nodes: list[FieldNode],
        parent: Any,
        path: Path,
    ) -> FieldResult:
        """Resolve a single field and complete its value."""
        node = nodes[0]
        name = node.name.value
        if name == TYPENAME_FIELD:
            return FieldResult(value=type_descriptor.name)
        if name in INTROSPECTION_FIELDS and type_descriptor is self.graph.query_type:
            value, errors, null_propagates = resolve_introspection_field(
                self.graphql_schema,
                exe_context.operation,
                exe_context.fragments,
                nodes,
                exe_context.variables,
            )
            return FieldResult(value=value, errors=errors, null_propagates=null_propagates)

        descriptor = type_descriptor.get_field(name)
        field_label = f"{type_descriptor.name}.{name}"
        arguments = argument_values(
            descriptor.arguments,
            {argument.name.value: argument.value for argument in node.arguments or ()},
            exe_context.variables,
        )
        info = ResolveInfo(
            parent_type=type_descriptor.name,
            field_name=name,
            path=path,
            operation_name=exe_context.operation_name,
            variables=exe_context.variables,
            context=exe_context.context,
        )

        try:
            value = await self.resolvers.resolve(
                type_descriptor.name, name, parent, info, arguments
            )
        except ResolutionError as e:
            return self._field_error(e.message, path, node, descriptor.nullable)

        return await self.complete_value(
            exe_context,
            descriptor,
            field_label,
            nodes,
            value,
            path,
            descriptor.nullable,
            descriptor.is_list,
        )

    async def complete_value(
        self,
        exe_context: ExecutionContext,
        descriptor: FieldDescriptor,
        field_label: str,
        nodes: list[FieldNode],
        value: Any,
        path: Path,
        nullable: bool,
        as_list: bool,
    ) -> FieldResult:
        """Turn a resolved value into its response shape.

        Lists are completed item by item with the index appended to the
        path; objects recurse into the merged sub-selection; scalars are
        serialized to their declared type.
        """
        if value is None:
            if nullable:
                return FieldResult(value=None)
            return self._field_error(
                f"Cannot return null for non-nullable field {field_label}.",
                path,
                nodes[0],
                nullable=False,
            )

        if as_list:
            if isinstance(value, (str, bytes, Mapping)) or not isinstance(value, Iterable):
                return self._field_error(
                    f"Expected Iterable, but did not find one for field {field_label}.",
                    path,
                    nodes[0],
                    nullable,
                )
            items = await asyncio.gather(
                *(
                    self.complete_value(
                        exe_context,
                        descriptor,
                        field_label,
                        nodes,
                        item,
                        path + (index,),
                        descriptor.item_nullable,
                        False,
                    )
                    for index, item in enumerate(value)
                )
            )
            errors = [error for item in items for error in item.errors]
            if any(item.null_propagates for item in items):
                return FieldResult(value=None, errors=errors, null_propagates=not nullable)
            return FieldResult(value=[item.value for item in items], errors=errors)

        if descriptor.is_leaf:
            try:
                return FieldResult(value=serialize(value, descriptor.type_name))
            except GraphQLError as e:
                return self._field_error(e.message, path, nodes[0], nullable)

        object_type = self.graph.get_type(descriptor.type_name)
        sub_fields = self.collect_fields(
            exe_context, object_type, [n.selection_set for n in nodes if n.selection_set]
        )
        result = await self.execute_fields(exe_context, object_type, sub_fields, value, path)
        if result.null_propagates:
            return FieldResult(value=None, errors=result.errors, null_propagates=not nullable)
        return result

    @staticmethod
    def _field_error(message: str, path: Path, node: FieldNode, nullable: bool) -> FieldResult:
        error = ResponseError(message=message, path=path, locations=tuple(locations_of(node)))
        return FieldResult(value=None, errors=[error], null_propagates=not nullable)
