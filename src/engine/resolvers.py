"""Resolver set: value-producing functions keyed by (type name, field name).

Resolvers are called as ``fn(parent, info, **arguments)`` and may return a
value or an awaitable. Fields without a registered resolver read the value
from the parent with ``default_resolver``.
"""

import inspect
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

from common.logger import get_logger

from .errors import DuplicateResolverError, ResolutionError, RegistryFrozenError
from .types import Path

logger = get_logger(__name__)

Resolver = Callable[..., Any]


@dataclass(frozen=True)
class ResolveInfo:
    """Per-invocation context handed to a resolver."""

    parent_type: str
    field_name: str
    path: Path
    operation_name: str | None = None
    variables: Mapping[str, Any] = field(default_factory=dict)
    context: Any = None


def default_resolver(parent: Any, info: ResolveInfo, **arguments: Any) -> Any:
    """Read ``info.field_name`` from a mapping key or attribute of the parent."""
    if parent is None:
        return None
    if isinstance(parent, Mapping):
        return parent.get(info.field_name)
    value = getattr(parent, info.field_name, None)
    if callable(value):
        return value(**arguments)
    return value


class ResolverSet:
    """Registry of field resolvers.

    Example:
        >>> resolvers = ResolverSet()
        >>> @resolvers.field("Query", "hello")
        ... def hello(parent, info):
        ...     return "world"
    """

    def __init__(self, fallback: Resolver = default_resolver):
        self._resolvers: dict[tuple[str, str], Resolver] = {}
        self._fallback = fallback
        self._frozen = False

    def register(self, type_name: str, field_name: str, fn: Resolver) -> None:
        """Register the resolver for ``type_name.field_name``.

        Raises:
            DuplicateResolverError: If the pair already has a resolver
            RegistryFrozenError: If the set was frozen
        """
        if self._frozen:
            raise RegistryFrozenError(
                f"Cannot register resolver for '{type_name}.{field_name}': resolver set is frozen"
            )
        key = (type_name, field_name)
        if key in self._resolvers:
            raise DuplicateResolverError(f"Resolver for '{type_name}.{field_name}' already exists")
        self._resolvers[key] = fn

    def field(self, type_name: str, field_name: str) -> Callable[[Resolver], Resolver]:
        """Decorator form of ``register``."""

        def decorator(fn: Resolver) -> Resolver:
            self.register(type_name, field_name, fn)
            return fn

        return decorator

    def freeze(self) -> "ResolverSet":
        self._frozen = True
        return self

    def get(self, type_name: str, field_name: str) -> Resolver:
        return self._resolvers.get((type_name, field_name), self._fallback)

    def __contains__(self, key: tuple[str, str]) -> bool:
        return key in self._resolvers

    async def resolve(
        self,
        type_name: str,
        field_name: str,
        parent: Any,
        info: ResolveInfo,
        arguments: Mapping[str, Any],
    ) -> Any:
        """Invoke the resolver for a field and await its result if needed.

        Returns:
            The resolved value (None for absent data)

        Raises:
            ResolutionError: If the resolver raised; the original exception
                is kept on ``original``
        """
        fn = self.get(type_name, field_name)
        try:
            result = fn(parent, info, **arguments)
            if inspect.isawaitable(result):
                result = await result
        except ResolutionError:
            raise
        except Exception as e:
            logger.warning(f"Resolver {type_name}.{field_name} failed: {e}")
            raise ResolutionError(str(e) or e.__class__.__name__, original=e) from e
        return result
