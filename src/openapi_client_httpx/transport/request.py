"""Transport-layer request configuration and override merging."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from openapi_client_httpx.types import RequestConfig

_WHOLESALE_FIELDS = frozenset(["method", "url", "data", "cookies", "base_url"])


@dataclass
class TransportRequest:
    """Request configuration handed to a runner.

    Attributes:
        method: HTTP method (lowercase)
        url: Server-relative path, already substituted
        data: Request payload, untouched
        params: Raw query parameters; the runner serializes them
        headers: Request headers
        cookies: Request cookies
        base_url: Base URL to join ``url`` onto (None lets the runner decide)
        options: Any other keyword for the transport (timeout, auth, ...)
    """

    method: str
    url: str
    data: Any = None
    params: dict[str, Any] = field(default_factory=dict)
    headers: dict[str, Any] = field(default_factory=dict)
    cookies: dict[str, Any] = field(default_factory=dict)
    base_url: str | None = None
    options: dict[str, Any] = field(default_factory=dict)


def build_transport_request(
    request: RequestConfig,
    override: Mapping[str, Any] | None = None,
    base_url: str | None = None,
) -> TransportRequest:
    """Map a RequestConfig onto a TransportRequest, applying caller overrides.

    ``params`` and ``headers`` from ``override`` merge key by key with the
    resolved values (override wins per key). Every other key replaces the
    computed value wholesale; keys that are not TransportRequest fields go
    to ``options``.

    Example:
        ```python
        transport_request = build_transport_request(
            request,
            override={"headers": {"authorization": "Bearer abc"}, "timeout": 5},
        )
        ```
    """
    transport_request = TransportRequest(
        method=request.method.value,
        url=request.path,
        data=request.payload,
        params=dict(request.query),
        headers=dict(request.headers),
        cookies=dict(request.cookies),
        base_url=base_url,
    )
    if not override:
        return transport_request

    for key, value in override.items():
        if key == "params":
            transport_request.params.update(value or {})
        elif key == "headers":
            transport_request.headers.update(value or {})
        elif key in _WHOLESALE_FIELDS:
            setattr(transport_request, key, value)
        else:
            transport_request.options[key] = value

    return transport_request
