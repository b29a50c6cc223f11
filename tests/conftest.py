"""Pytest fixtures for all test modules."""

from __future__ import annotations

import json
from typing import Any

import pytest

from conceptnetclient import ConceptNetClient
from conceptnetclient.errors import TransportError


class StubTransport:
    """Transport that records every GET and replays a canned outcome."""

    def __init__(self, body: bytes | None = None, error: Exception | None = None):
        self.body = body if body is not None else json.dumps({"numFound": 1, "edges": []}).encode()
        self.error = error
        self.calls: list[tuple[str, int, str]] = []

    async def get(self, host: str, port: int, path: str) -> bytes:
        self.calls.append((host, port, path))
        if self.error is not None:
            raise self.error
        return self.body

    @property
    def paths(self) -> list[str]:
        return [path for _, _, path in self.calls]


class RecordingCallback:
    """Completion handler that remembers every invocation."""

    def __init__(self):
        self.calls: list[tuple[Any, Any]] = []

    def __call__(self, error: Any, data: Any) -> None:
        self.calls.append((error, data))


@pytest.fixture
def transport():
    """Stub transport returning a small JSON document."""
    return StubTransport()


@pytest.fixture
def failing_transport():
    """Stub transport that fails at the network level."""
    return StubTransport(error=TransportError("Request failed: connection refused"))


@pytest.fixture
def client(transport):
    """Client on the legacy deployment wired to the stub transport."""
    return ConceptNetClient(transport=transport)


@pytest.fixture
def current_client(transport):
    """Client on the current deployment wired to the stub transport."""
    return ConceptNetClient(deployment="current", transport=transport)


@pytest.fixture
def callback():
    return RecordingCallback()


@pytest.fixture(autouse=True)
def _clear_conceptnet_env(monkeypatch):
    """Keep CONCEPTNET_* variables from the outer environment out of tests."""
    for name in (
        "CONCEPTNET_HOST",
        "CONCEPTNET_PORT",
        "CONCEPTNET_API_VERSION",
        "CONCEPTNET_DEPLOYMENT",
        "CONCEPTNET_FILTER_POLICY",
        "CONCEPTNET_TIMEOUT",
    ):
        monkeypatch.delenv(name, raising=False)
