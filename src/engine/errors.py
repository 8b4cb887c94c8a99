"""Exceptions raised by the GraphQL engine.

Schema errors are programming errors raised while the schema is being built
at startup. Request errors (syntax and validation) abort a single request
before any resolver runs. Resolution errors are recovered at the field
boundary and reported in the response next to partial data.
"""


class SchemaError(Exception):
    """Base exception for schema construction errors."""

    pass


class DuplicateTypeError(SchemaError):
    """A type with the same name is already registered."""

    pass


class DuplicateFieldError(SchemaError):
    """A type declares the same field name twice."""

    pass


class UnknownTypeError(SchemaError):
    """A type name does not resolve to a scalar or a registered type."""

    pass


class UnknownFieldError(SchemaError):
    """A field is not declared on the given type."""

    pass


class RegistryFrozenError(SchemaError):
    """The registry was already built and can no longer change."""

    pass


class DuplicateResolverError(SchemaError):
    """A resolver is already registered for the (type, field) pair."""

    pass


class RequestError(Exception):
    """Base exception for errors that fail a whole request."""

    def __init__(self, message: str, locations: list[tuple[int, int]] | None = None):
        super().__init__(message)
        self.message = message
        self.locations = locations or []


class QuerySyntaxError(RequestError):
    """The request text does not parse."""

    pass


class QueryValidationError(RequestError):
    """The document does not match the schema."""

    pass


class ResolutionError(Exception):
    """A resolver failed to produce a value for a field."""

    def __init__(self, message: str, original: BaseException | None = None):
        super().__init__(message)
        self.message = message
        self.original = original
