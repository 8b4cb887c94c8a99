"""Type registry and the immutable schema graph built from it.

The registry is written once at startup. ``TypeRegistry.build()`` checks
that every field type resolves, freezes the registry and returns a
``SchemaGraph`` that executors share read-only across requests.

Example:
    >>> registry = TypeRegistry()
    >>> user_id = FieldDescriptor("id", "ID", nullable=False)
    >>> registry.register_type(TypeDescriptor("User", (user_id,)))
    >>> registry.register_type(
    ...     TypeDescriptor(
    ...         "Query",
    ...         (FieldDescriptor("user", "User", arguments=(ArgumentDescriptor("id", "ID"),)),),
    ...     )
    ... )
    >>> graph = registry.build()
    >>> graph.lookup_field("Query", "user").type_name
    'User'
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from .errors import (
    DuplicateFieldError,
    DuplicateTypeError,
    RegistryFrozenError,
    UnknownFieldError,
    UnknownTypeError,
)

# Built-in GraphQL scalars
SCALAR_TYPES: frozenset[str] = frozenset({"String", "Int", "Float", "Boolean", "ID"})

_NO_DEFAULT = object()


def is_scalar(type_name: str) -> bool:
    return type_name in SCALAR_TYPES


@dataclass(frozen=True)
class ArgumentDescriptor:
    """A named field argument with a scalar type."""

    name: str
    type_name: str
    required: bool = False
    default: Any = _NO_DEFAULT
    description: str | None = None

    @property
    def has_default(self) -> bool:
        return self.default is not _NO_DEFAULT

    @property
    def type_label(self) -> str:
        """Type as written in SDL, e.g. ``String!``."""
        return f"{self.type_name}!" if self.required else self.type_name


@dataclass(frozen=True)
class FieldDescriptor:
    """A field on an object type.

    Attributes:
        name: Field name
        type_name: Scalar name or object type name of the value (or of the
            list items when ``is_list`` is set)
        nullable: Whether the field itself may be null
        is_list: Whether the field returns a list of ``type_name``
        item_nullable: Whether list items may be null (lists only)
        arguments: Declared arguments, in declaration order
        description: Optional documentation
    """

    name: str
    type_name: str
    nullable: bool = True
    is_list: bool = False
    item_nullable: bool = True
    arguments: tuple[ArgumentDescriptor, ...] = ()
    description: str | None = None

    @property
    def is_leaf(self) -> bool:
        return is_scalar(self.type_name)

    @property
    def type_label(self) -> str:
        label = self.type_name
        if self.is_list:
            label = f"[{label}{'' if self.item_nullable else '!'}]"
        return label if self.nullable else f"{label}!"

    def get_argument(self, name: str) -> ArgumentDescriptor | None:
        for argument in self.arguments:
            if argument.name == name:
                return argument
        return None


@dataclass(frozen=True)
class TypeDescriptor:
    """An object type and its ordered fields."""

    name: str
    fields: tuple[FieldDescriptor, ...]
    description: str | None = None
    _by_name: MappingProxyType = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        by_name: dict[str, FieldDescriptor] = {}
        for descriptor in self.fields:
            if descriptor.name in by_name:
                raise DuplicateFieldError(
                    f"Type '{self.name}' declares field '{descriptor.name}' more than once"
                )
            by_name[descriptor.name] = descriptor
        object.__setattr__(self, "_by_name", MappingProxyType(by_name))

    def get_field(self, name: str) -> FieldDescriptor | None:
        return self._by_name.get(name)


class SchemaGraph:
    """Read-only schema: the root query type and every type it reaches."""

    def __init__(self, query_type: TypeDescriptor, types: dict[str, TypeDescriptor]):
        self._query_type = query_type
        self._types = MappingProxyType(dict(types))

    @property
    def query_type(self) -> TypeDescriptor:
        return self._query_type

    @property
    def types(self) -> MappingProxyType:
        """Object types keyed by name, root query type first."""
        return self._types

    def get_type(self, name: str) -> TypeDescriptor:
        try:
            return self._types[name]
        except KeyError:
            raise UnknownTypeError(f"Unknown type '{name}'") from None

    def has_type(self, name: str) -> bool:
        return name in self._types

    def lookup_field(self, type_name: str, field_name: str) -> FieldDescriptor:
        descriptor = self.get_type(type_name).get_field(field_name)
        if descriptor is None:
            raise UnknownFieldError(f"Type '{type_name}' has no field '{field_name}'")
        return descriptor


class TypeRegistry:
    """Mutable collection of type descriptors, used only during startup."""

    def __init__(self):
        self._types: dict[str, TypeDescriptor] = {}
        self._frozen = False

    @property
    def frozen(self) -> bool:
        return self._frozen

    def register_type(self, descriptor: TypeDescriptor) -> None:
        """Add an object type.

        Raises:
            DuplicateTypeError: If a type with the same name exists
            RegistryFrozenError: If the registry was already built
        """
        if self._frozen:
            raise RegistryFrozenError(
                f"Cannot register type '{descriptor.name}': registry is already built"
            )
        if descriptor.name in self._types or is_scalar(descriptor.name):
            raise DuplicateTypeError(f"Type '{descriptor.name}' is already registered")
        self._types[descriptor.name] = descriptor

    def lookup_field(self, type_name: str, field_name: str) -> FieldDescriptor:
        """Return the descriptor of ``type_name.field_name``.

        Raises:
            UnknownTypeError: If the type is not registered
            UnknownFieldError: If the type has no such field
        """
        descriptor = self._types.get(type_name)
        if descriptor is None:
            raise UnknownTypeError(f"Unknown type '{type_name}'")
        result = descriptor.get_field(field_name)
        if result is None:
            raise UnknownFieldError(f"Type '{type_name}' has no field '{field_name}'")
        return result

    def build(self, query_type: str = "Query") -> SchemaGraph:
        """Check the schema, freeze the registry and return the graph.

        Only types reachable from the root query type are part of the graph.

        Raises:
            UnknownTypeError: If the root type or any referenced type is unknown,
                or an argument is declared with a non-scalar type
        """
        if query_type not in self._types:
            raise UnknownTypeError(f"Root query type '{query_type}' is not registered")

        reachable: dict[str, TypeDescriptor] = {}
        pending = [query_type]
        while pending:
            name = pending.pop(0)
            if name in reachable:
                continue
            descriptor = self._types[name]
            reachable[name] = descriptor
            for field_descriptor in descriptor.fields:
                for argument in field_descriptor.arguments:
                    if not is_scalar(argument.type_name):
                        raise UnknownTypeError(
                            f"Argument '{name}.{field_descriptor.name}({argument.name})' "
                            f"must have a scalar type, got '{argument.type_name}'"
                        )
                target = field_descriptor.type_name
                if is_scalar(target):
                    continue
                if target not in self._types:
                    raise UnknownTypeError(
                        f"Field '{name}.{field_descriptor.name}' refers to unknown type '{target}'"
                    )
                pending.append(target)

        self._frozen = True
        return SchemaGraph(self._types[query_type], reachable)
