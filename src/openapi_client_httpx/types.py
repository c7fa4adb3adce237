"""Data model for operations, parameters and resolved requests.

The API document itself stays a plain (dereferenced) ``dict``; these types are
the typed views the client derives from it once and never mutates.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

from openapi_client_httpx.errors.exceptions import ParameterResolutionError


class HttpMethod(StrEnum):
    """HTTP methods recognized as operations, in catalog order."""

    GET = "get"
    PUT = "put"
    POST = "post"
    PATCH = "patch"
    DELETE = "delete"
    OPTIONS = "options"
    HEAD = "head"
    TRACE = "trace"


class ParamType(StrEnum):
    """Parameter locations (the ``in`` field of a parameter object)."""

    PATH = "path"
    QUERY = "query"
    HEADER = "header"
    COOKIE = "cookie"


@dataclass(frozen=True)
class ServerVariable:
    default: str
    enum: tuple[str, ...] = ()
    description: str | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ServerVariable":
        return cls(
            default=str(data.get("default", "")),
            enum=tuple(str(item) for item in data.get("enum") or ()),
            description=data.get("description"),
        )


@dataclass(frozen=True)
class Server:
    """A server object; ``url`` may contain ``{variable}`` placeholders."""

    url: str
    description: str | None = None
    variables: dict[str, ServerVariable] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Server":
        variables = data.get("variables") or {}
        return cls(
            url=data["url"],
            description=data.get("description"),
            variables={name: ServerVariable.from_dict(var) for name, var in variables.items()},
        )


@dataclass(frozen=True)
class Parameter:
    """A declared operation parameter.

    ``style`` and ``explode`` are kept as declared (``None`` when absent); the
    serializer applies the ``form`` / ``True`` defaults.
    """

    name: str
    location: ParamType
    required: bool = False
    style: str | None = None
    explode: bool | None = None
    schema: dict[str, Any] | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Parameter":
        return cls(
            name=data["name"],
            location=ParamType(data.get("in", ParamType.QUERY)),
            required=bool(data.get("required", False)),
            style=data.get("style"),
            explode=data.get("explode"),
            schema=data.get("schema"),
        )


@dataclass(frozen=True)
class Operation:
    """A flattened operation: one HTTP method under one path template.

    Attributes:
        path: Path template, e.g. ``/pets/{petId}``
        method: HTTP method
        operation_id: ``operationId``, or None when the document omits it
        parameters: Operation-level parameters followed by path-item parameters
        servers: Operation-level servers followed by path-item servers
        security: Operation security, falling back to the document's
        spec: The merged raw operation object (summary, requestBody, tags, ...)
    """

    path: str
    method: HttpMethod
    operation_id: str | None = None
    parameters: tuple[Parameter, ...] = ()
    servers: tuple[Server, ...] = ()
    security: tuple[dict[str, Any], ...] | None = None
    spec: dict[str, Any] = field(default_factory=dict, compare=False, repr=False)

    def find_parameter(self, name: str) -> Parameter | None:
        """Return the first parameter declared with ``name``."""
        for param in self.parameters:
            if param.name == name:
                return param
        return None

    def first_parameter(self) -> Parameter | None:
        """Target of a bare scalar argument: first required parameter, else first declared."""
        for param in self.parameters:
            if param.required:
                return param
        return self.parameters[0] if self.parameters else None


@dataclass
class ExplicitParam:
    name: str
    value: Any
    location: ParamType | None = None

    @classmethod
    def coerce(cls, entry: "ExplicitParam | Mapping[str, Any]") -> "ExplicitParam":
        if isinstance(entry, ExplicitParam):
            return entry
        if isinstance(entry, Mapping) and "name" in entry:
            location = entry.get("in")
            try:
                param_type = ParamType(location) if location else None
            except ValueError as e:
                raise ParameterResolutionError(
                    f"Invalid parameter location {location!r} for '{entry['name']}'; "
                    f"expected one of: {', '.join(ParamType)}"
                ) from e
            return cls(name=entry["name"], value=entry.get("value"), location=param_type)
        raise ParameterResolutionError(f"Invalid explicit parameter entry: {entry!r}")


@dataclass(frozen=True)
class ByArray:
    """Parameters given as explicit ``{name, value, in?}`` entries."""

    entries: tuple[ExplicitParam, ...]


@dataclass(frozen=True)
class ByObject:
    """Parameters given as a ``name -> value`` mapping."""

    values: Mapping[str, Any]


@dataclass(frozen=True)
class ByScalar:
    """A single value for the operation's first parameter."""

    value: str | int | float | bool


ParamsArg = ByArray | ByObject | ByScalar


def classify_params(arg: Any) -> ParamsArg | None:
    """Classify the first operation-method argument into a ``ParamsArg`` variant.

    Args:
        arg: None, a list/tuple of explicit entries, a mapping, a scalar,
            or an already classified variant

    Returns:
        The matching variant, or None when no parameters were supplied

    Raises:
        ParameterResolutionError: If the argument has an unsupported type
    """
    if arg is None:
        return None
    if isinstance(arg, ByArray | ByObject | ByScalar):
        return arg
    if isinstance(arg, list | tuple):
        return ByArray(tuple(ExplicitParam.coerce(entry) for entry in arg))
    if isinstance(arg, Mapping):
        return ByObject(arg)
    if isinstance(arg, str | int | float | bool):
        return ByScalar(arg)
    raise ParameterResolutionError(f"Unsupported parameters argument of type {type(arg).__name__}")


@dataclass
class RequestConfig:
    """Transport-agnostic description of one operation call."""

    method: HttpMethod
    url: str
    path: str
    path_params: dict[str, str] = field(default_factory=dict)
    query: dict[str, Any] = field(default_factory=dict)
    query_string: str = ""
    headers: dict[str, Any] = field(default_factory=dict)
    cookies: dict[str, Any] = field(default_factory=dict)
    payload: Any = None
