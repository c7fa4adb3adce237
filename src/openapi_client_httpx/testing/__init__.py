"""Testing utilities for code built on OpenAPIClient.

``RecordingRunner`` replaces the network: it records every TransportRequest
and answers with a canned ``httpx.Response`` (or whatever a handler returns).

Example:
    ```python
    from openapi_client_httpx.testing import RecordingRunner


    async def test_get_pet(api):
        recorder = RecordingRunner(json={"id": 1})
        api.register_runner(recorder.as_runner())

        response = await api.getPetById(1)

        assert response.json() == {"id": 1}
        assert recorder.last_request.url == "/pets/1"
    ```
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

import httpx

from openapi_client_httpx.transport.request import TransportRequest
from openapi_client_httpx.transport.runner import Runner
from openapi_client_httpx.types import Operation


@dataclass
class RecordedCall:
    request: TransportRequest
    operation: Operation
    context: dict[str, Any] | None = None


@dataclass
class RecordingRunner:
    """Runner that records calls instead of sending them.

    Args:
        status_code: Status of the canned response
        json: JSON body of the canned response
        handler: Optional ``(TransportRequest, Operation) -> response``; its
            return value replaces the canned response, and anything it raises
            propagates like a transport error
    """

    status_code: int = 200
    json: Any = None
    handler: Callable[[TransportRequest, Operation], Any] | None = None
    calls: list[RecordedCall] = field(default_factory=list)

    async def __call__(
        self, request: TransportRequest, operation: Operation, context: dict[str, Any] | None = None
    ) -> Any:
        self.calls.append(RecordedCall(request=request, operation=operation, context=context))
        if self.handler is not None:
            return self.handler(request, operation)
        return create_mock_response(self.status_code, self.json)

    def as_runner(self, context: dict[str, Any] | None = None) -> Runner:
        return Runner(self, context=context)

    @property
    def last_request(self) -> TransportRequest:
        if not self.calls:
            raise AssertionError("No requests were recorded")
        return self.calls[-1].request


def create_mock_response(status_code: int = 200, json: Any = None) -> httpx.Response:
    """Build an ``httpx.Response`` with an optional JSON body."""
    if json is None:
        return httpx.Response(status_code)
    return httpx.Response(status_code, json=json)


__all__ = [
    "RecordedCall",
    "RecordingRunner",
    "create_mock_response",
]
