"""Transport layer: request configuration and request runners.

The core never talks to the network itself. It produces a ``TransportRequest``
and hands it to a ``Runner``; the default runner is ``HttpxRunner``, which
wraps an ``httpx.AsyncClient`` (and therefore any ``httpx`` transport, such
as ``httpx.MockTransport`` in tests).

Modules:
    request: TransportRequest and override merging
    runner: Runner, HttpxRunner

Example:
    ```python
    import httpx

    from openapi_client_httpx.transport import HttpxRunner

    runner = HttpxRunner(httpx.AsyncClient(transport=httpx.MockTransport(handler)))
    ```
"""

from openapi_client_httpx.transport.request import TransportRequest, build_transport_request
from openapi_client_httpx.transport.runner import HttpxRunner, RunRequest, Runner, join_url

__all__ = [
    "HttpxRunner",
    "RunRequest",
    "Runner",
    "TransportRequest",
    "build_transport_request",
    "join_url",
]
