"""Tests for the testing helpers."""

import pytest

from openapi_client_httpx.testing import RecordingRunner, create_mock_response


@pytest.mark.unit
def test_last_request_without_calls():
    with pytest.raises(AssertionError, match="No requests were recorded"):
        RecordingRunner().last_request


@pytest.mark.unit
def test_create_mock_response():
    assert create_mock_response(204).content == b""
    assert create_mock_response(201, {"id": 1}).json() == {"id": 1}


@pytest.mark.unit
async def test_handler_replaces_canned_response(api):
    recorder = RecordingRunner(handler=lambda request, operation: (request.url, operation.operation_id))
    api.register_runner(recorder.as_runner(context={"tenant": "a"}))

    assert await api.getPetById(3) == ("/pets/3", "getPetById")
    assert recorder.calls[0].context == {"tenant": "a"}
