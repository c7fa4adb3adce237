"""Mapping of operation-method arguments onto request parameters.

An operation method is called as ``(params, data, config)``. ``params`` may be:

- ``None``: no parameters
- a list of explicit entries: ``[{"name": "petId", "value": 1, "in": "path"}]``
- a mapping: ``{"petId": 1, "x-petshop-id": "shop"}``
- a scalar: ``1``, bound to the operation's first parameter

Each resolved ``(name, value, in)`` triple lands in exactly one of four
buckets (path, query, header, cookie). Names the operation doesn't declare
default to ``query``.

Example:
    ```python
    request = resolve_request(operation, 1, base_url="http://localhost:8080")
    request.path  # "/pets/1"
    request.path_params  # {"petId": "1"}
    ```
"""

import logging
from collections.abc import Mapping
from typing import Any

from openapi_client_httpx.errors.exceptions import MissingPathParameterError, NoParametersAvailableError
from openapi_client_httpx.serialization import build_query_string, encode_uri_component, substitute_path, template_names
from openapi_client_httpx.types import (
    ByArray,
    ByObject,
    ByScalar,
    Operation,
    ParamType,
    RequestConfig,
    classify_params,
)

logger = logging.getLogger(__name__)

# Placeholder substituted for path variables that received no value
MISSING_PATH_VALUE = "undefined"


class _Buckets:
    def __init__(self, headers: Mapping[str, Any] | None = None):
        self.path: dict[str, Any] = {}
        self.query: dict[str, Any] = {}
        self.headers: dict[str, Any] = dict(headers or {})
        self.cookies: dict[str, Any] = {}

    def route(self, name: str, value: Any, location: ParamType) -> None:
        match location:
            case ParamType.PATH:
                self.path[name] = value
            case ParamType.QUERY:
                self.query[name] = list(value) if isinstance(value, tuple) else value
            case ParamType.HEADER:
                self.headers[name] = value
            case ParamType.COOKIE:
                self.cookies[name] = value


def _location_of(operation: Operation, name: str) -> ParamType:
    param = operation.find_parameter(name)
    return param.location if param else ParamType.QUERY


def _path_value(value: Any) -> str | None:
    if value is None:
        return None
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def resolve_request(
    operation: Operation,
    params: Any = None,
    payload: Any = None,
    *,
    base_url: str | None = None,
    default_headers: Mapping[str, Any] | None = None,
    strict: bool = False,
) -> RequestConfig:
    """Build the request descriptor for one operation call.

    Args:
        operation: The operation being called
        params: Raw first call argument (see module docstring)
        payload: Request body, passed through untouched
        base_url: Resolved base URL prefixed to ``url``
        default_headers: Headers applied before header parameters
        strict: Raise instead of substituting ``"undefined"`` for missing path values

    Returns:
        A fresh RequestConfig

    Raises:
        NoParametersAvailableError: A scalar was given but nothing is declared
        MissingPathParameterError: In strict mode, a path variable has no value
        ParameterResolutionError: ``params`` has an unsupported shape
    """
    buckets = _Buckets(default_headers)

    match classify_params(params):
        case ByArray(entries=entries):
            for entry in entries:
                buckets.route(entry.name, entry.value, entry.location or _location_of(operation, entry.name))
        case ByObject(values=values):
            for name, value in values.items():
                if value is not None:
                    buckets.route(name, value, _location_of(operation, name))
        case ByScalar(value=value):
            target = operation.first_parameter()
            if target is None:
                raise NoParametersAvailableError(
                    f"No parameters found for operation {operation.operation_id or operation.path}"
                )
            buckets.route(target.name, value, target.location)

    path_params: dict[str, str] = {}
    missing: list[str] = []
    for name in template_names(operation.path):
        value = _path_value(buckets.path.get(name))
        if value is None:
            missing.append(name)
            value = MISSING_PATH_VALUE
        path_params[name] = value

    if missing:
        message = f"Missing path parameters for {operation.method.upper()} {operation.path}: {', '.join(missing)}"
        if strict:
            raise MissingPathParameterError(message, missing=missing)
        logger.warning(f"{message}; substituting '{MISSING_PATH_VALUE}'")

    path = substitute_path(operation.path, {name: encode_uri_component(value) for name, value in path_params.items()})
    query_string = build_query_string(operation, buckets.query)
    url = f"{base_url or ''}{path}{f'?{query_string}' if query_string else ''}"

    return RequestConfig(
        method=operation.method,
        url=url,
        path=path,
        path_params=path_params,
        query=buckets.query,
        query_string=query_string,
        headers=buckets.headers,
        cookies=buckets.cookies,
        payload=payload,
    )
