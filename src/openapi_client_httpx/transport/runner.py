"""Request runners: the injected functions that execute a TransportRequest.

By default operations run through ``HttpxRunner``, which sends the request
with an ``httpx.AsyncClient``. Any other runner can be registered, globally or
for a single operation:

```python
async def run_with_recorder(request, operation, context):
    context["seen"].append(request)
    return await default_runner(request, operation, context)

api.register_runner(Runner(run_with_recorder, context={"seen": []}), "getPetById")
```

Whatever a runner returns or raises is passed back to the caller unmodified.
"""

import logging
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass
from typing import Any

import httpx

from openapi_client_httpx.serialization import build_query_string, encode_uri_component
from openapi_client_httpx.transport.request import TransportRequest
from openapi_client_httpx.types import Operation

logger = logging.getLogger(__name__)

RunRequest = Callable[[TransportRequest, Operation, dict[str, Any] | None], Awaitable[Any]]


@dataclass
class Runner:
    """A request-execution function plus the context injected into it."""

    run_request: RunRequest
    context: dict[str, Any] | None = None


def join_url(base_url: str, path: str) -> str:
    """Join a base URL and a server-relative path with exactly one slash."""
    if not path:
        return base_url
    return f"{base_url.rstrip('/')}/{path.lstrip('/')}"


class HttpxRunner:
    """Run TransportRequests with an ``httpx.AsyncClient``.

    - ``params`` are serialized with the operation's declared styles and
      appended to the path
    - ``base_url`` (when set) is joined with a relative path, otherwise the client's
      own ``base_url`` applies
    - ``cookies`` are sent as a ``Cookie`` header, values percent-encoded
    - mapping and list payloads are sent as JSON, ``str``/``bytes`` as raw content
    - ``options`` are forwarded to ``AsyncClient.request``

    Example:
        ```python
        async with httpx.AsyncClient(base_url="https://api.example.com") as http:
            runner = HttpxRunner(http)
            response = await runner(transport_request, operation)
        ```
    """

    def __init__(self, client: httpx.AsyncClient):
        self._client = client

    @property
    def client(self) -> httpx.AsyncClient:
        return self._client

    def build_url(self, request: TransportRequest, operation: Operation | None = None) -> str:
        url = request.url
        # an absolute url (e.g. a config override) ignores the base URL
        if request.base_url and not httpx.URL(url).is_absolute_url:
            url = join_url(request.base_url, url)
        query_string = build_query_string(operation, request.params)
        if query_string:
            url = f"{url}{'&' if '?' in url else '?'}{query_string}"
        return url

    def build_headers(self, request: TransportRequest) -> dict[str, str]:
        headers = {
            name: value if isinstance(value, str | bytes) else str(value)
            for name, value in request.headers.items()
            if value is not None
        }
        if request.cookies:
            cookie = "; ".join(
                f"{name}={encode_uri_component(value)}" for name, value in request.cookies.items() if value is not None
            )
            if cookie:
                headers["Cookie"] = cookie
        return headers

    async def __call__(
        self,
        request: TransportRequest,
        operation: Operation | None = None,
        context: dict[str, Any] | None = None,
    ) -> httpx.Response:
        url = self.build_url(request, operation)
        kwargs: dict[str, Any] = dict(request.options)

        data = request.data
        if isinstance(data, Mapping | list):
            kwargs["json"] = data
        elif isinstance(data, str | bytes):
            kwargs["content"] = data
        elif data is not None:
            kwargs["json"] = data

        logger.debug(f"Sending {request.method.upper()} {url}")
        return await self._client.request(request.method.upper(), url, headers=self.build_headers(request), **kwargs)
