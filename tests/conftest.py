from __future__ import annotations

import json
from typing import Any

import pytest

from frontend_client.diagnostics import CollectingDiagnostics
from frontend_client.models import RequestDescriptor
from frontend_client.transport import TransportResponse


class RecordingTransport:
    """Fake transport that records dispatches and replies with a canned response."""

    def __init__(self, response: TransportResponse | None = None) -> None:
        self.response = response or TransportResponse(
            status=200,
            headers={"Content-Type": "application/json"},
            body=json.dumps({"ok": True}).encode(),
        )
        self.calls: list[tuple[str, RequestDescriptor]] = []

    async def dispatch(self, url: str, descriptor: RequestDescriptor) -> Any:
        self.calls.append((url, descriptor))
        return self.response


@pytest.fixture
def transport() -> RecordingTransport:
    return RecordingTransport()


@pytest.fixture
def diagnostics() -> CollectingDiagnostics:
    return CollectingDiagnostics()


@pytest.fixture
def transport_factory() -> type[RecordingTransport]:
    return RecordingTransport
