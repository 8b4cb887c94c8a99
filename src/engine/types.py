"""Request and response types for GraphQL execution.

The response tree itself is built from plain Python values (dicts keyed by
response key in selection order, lists, scalars and None) so it can be
handed straight to a JSON encoder. Errors travel next to the tree.
"""

import json
from dataclasses import dataclass, field
from typing import Any

from .errors import RequestError

# Response path: field names (response keys) and list indices from the root
Path = tuple[str | int, ...]


class RequestPayloadError(Exception):
    """The transport payload is not a valid GraphQL request."""

    pass


@dataclass(frozen=True)
class ResponseError:
    """A single entry of the response's ``errors`` list."""

    message: str
    path: Path = ()
    locations: tuple[tuple[int, int], ...] = ()

    @classmethod
    def from_request_error(cls, exc: RequestError) -> "ResponseError":
        """Convert a syntax or validation error into a response entry."""
        return cls(message=exc.message, locations=tuple(exc.locations))

    def to_dict(self) -> dict[str, Any]:
        """Encode to the wire format."""
        result: dict[str, Any] = {"message": self.message}
        if self.locations:
            result["locations"] = [
                {"line": line, "column": column} for line, column in self.locations
            ]
        if self.path:
            result["path"] = list(self.path)
        return result

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> "ResponseError":
        """Decode from the wire format."""
        return cls(
            message=payload["message"],
            path=tuple(payload.get("path") or ()),
            locations=tuple(
                (loc["line"], loc["column"]) for loc in payload.get("locations") or ()
            ),
        )


@dataclass
class ExecutionRequest:
    """One incoming GraphQL request."""

    query: str
    operation_name: str | None = None
    variables: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_payload(cls, payload: Any) -> "ExecutionRequest":
        """Build a request from a decoded JSON body.

        Args:
            payload: Decoded body, expected to be an object with ``query``
                and optional ``operationName`` and ``variables`` keys

        Returns:
            ExecutionRequest

        Raises:
            RequestPayloadError: If the payload shape is invalid
        """
        if not isinstance(payload, dict):
            raise RequestPayloadError("Request body must be a JSON object.")

        query = payload.get("query")
        if not isinstance(query, str):
            raise RequestPayloadError("Request body must contain a 'query' string.")

        operation_name = payload.get("operationName")
        if operation_name is not None and not isinstance(operation_name, str):
            raise RequestPayloadError("'operationName' must be a string or null.")

        variables = payload.get("variables")
        if variables is None:
            variables = {}
        elif not isinstance(variables, dict):
            raise RequestPayloadError("'variables' must be an object or null.")

        return cls(query=query, operation_name=operation_name, variables=variables)


@dataclass
class ExecutionResponse:
    """Result of executing one request.

    ``executed`` is False when the request failed before resolution began
    (syntax or validation errors); such a response has no ``data`` key on
    the wire. An executed response may carry data and errors together.
    """

    data: dict[str, Any] | None = None
    errors: list[ResponseError] = field(default_factory=list)
    executed: bool = True

    @classmethod
    def request_failure(cls, errors: list[ResponseError]) -> "ExecutionResponse":
        return cls(data=None, errors=list(errors), executed=False)

    @property
    def ok(self) -> bool:
        return not self.errors

    def to_dict(self) -> dict[str, Any]:
        """Encode to the wire format."""
        result: dict[str, Any] = {}
        if self.executed:
            result["data"] = self.data
        if self.errors:
            result["errors"] = [error.to_dict() for error in self.errors]
        return result

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> "ExecutionResponse":
        """Decode from the wire format."""
        return cls(
            data=payload.get("data"),
            errors=[ResponseError.from_dict(entry) for entry in payload.get("errors") or ()],
            executed="data" in payload,
        )

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False, separators=(",", ":"))

    @classmethod
    def from_json(cls, text: str) -> "ExecutionResponse":
        return cls.from_dict(json.loads(text))
