"""Pytest configuration and fixtures."""

import json
from datetime import date
from typing import Callable, Dict, List, Optional

import httpx
import pytest

from practice_tracker.api.client import ConsistencyClient
from practice_tracker.storage.memory import InMemoryStore


BASE_URL = "http://test.local/api/v1"


class FakeToday:
    """Mutable date provider for simulating successive days."""

    def __init__(self, start: date):
        self.value = start

    def __call__(self) -> date:
        return self.value

    def set(self, value: date) -> None:
        self.value = value


class RecordingBackend:
    """httpx.MockTransport handler that routes by path and records requests."""

    def __init__(self, routes: Optional[Dict[str, Callable[[httpx.Request], httpx.Response]]] = None):
        self.routes = routes or {}
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path.replace("/api/v1", "", 1)
        handler = self.routes.get(f"{request.method} {path}")
        if handler is None:
            return httpx.Response(404, json={"error": "not found"})
        return handler(request)

    def calls(self, method: str, path: str) -> List[httpx.Request]:
        return [
            r for r in self.requests
            if r.method == method and r.url.path.endswith(path)
        ]

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)


def json_response(payload, status: int = 200) -> Callable[[httpx.Request], httpx.Response]:
    return lambda request: httpx.Response(status, content=json.dumps(payload).encode(),
                                          headers={"Content-Type": "application/json"})


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def fake_today() -> FakeToday:
    return FakeToday(date(2026, 10, 19))


@pytest.fixture
def backend() -> RecordingBackend:
    return RecordingBackend()


@pytest.fixture
def make_client(backend):
    """Build a client wired to the recording backend."""
    clients = []

    def _make(token: Optional[str] = "test-token") -> ConsistencyClient:
        client = ConsistencyClient(BASE_URL, token=token, transport=backend.transport())
        clients.append(client)
        return client

    yield _make
    for client in clients:
        client.close()


@pytest.fixture
def respond():
    """Factory for canned JSON route handlers."""
    return json_response
