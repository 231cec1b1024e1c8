from __future__ import annotations

import pytest

from changetip_client.errors import NetworkError
from changetip_client.request import OperationRequest
from changetip_client.transport import TransportResponse


class RecordingTransport:
    def __init__(self, responses: list[TransportResponse] | None = None, *, error: Exception | None = None):
        self.responses = responses or []
        self.error = error
        self.requests: list[OperationRequest] = []
        self.closed = False

    async def send(self, request: OperationRequest) -> TransportResponse:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        if not self.responses:
            return TransportResponse(200, '{"ok": true}')
        return self.responses.pop(0)

    async def aclose(self) -> None:
        self.closed = True


@pytest.fixture
def transport() -> RecordingTransport:
    return RecordingTransport()


@pytest.fixture
def failing_transport() -> RecordingTransport:
    return RecordingTransport(error=NetworkError("connection refused", cause=ConnectionRefusedError()))
