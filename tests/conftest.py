"""
Shared fixtures.

- transport: in-memory backend recording every request
- app: Application wired to that transport
- network: the app's NetworkController
"""

import copy
import logging
from typing import Any

import pytest

from netweave.core.application import Application


class FakeResponse:
    """Backend response with a canned JSON body."""

    def __init__(self, body: Any = None, status: int = 200):
        self.body = body
        self.status = status

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300

    def json(self) -> Any:
        return copy.deepcopy(self.body)


class FakeTransport:
    """Transport answering from a (method, path) table; unknown routes get a 404."""

    name = "fake"

    def __init__(self):
        self.responses: dict[tuple[str, str], FakeResponse | Exception] = {}
        self.calls: list[tuple[str, str, Any]] = []

    def reply(self, method: str, path: str, body: Any = None, status: int = 200) -> None:
        self.responses[(method, path)] = FakeResponse(body, status)

    def raise_on(self, method: str, path: str, error: Exception) -> None:
        self.responses[(method, path)] = error

    def requests(self) -> list[tuple[str, str]]:
        """Method and path of every call, in order."""
        return [(method, path) for method, path, _ in self.calls]

    def body_of(self, method: str, path: str) -> Any:
        for call_method, call_path, body in self.calls:
            if (call_method, call_path) == (method, path):
                return body
        raise AssertionError(f"no {method} {path} request")

    async def _handle(self, method: str, path: str, body: Any = None) -> FakeResponse:
        self.calls.append((method, path, copy.deepcopy(body)))
        result = self.responses.get((method, path), FakeResponse(status=404))
        if isinstance(result, Exception):
            raise result
        return result

    async def get(self, path: str) -> FakeResponse:
        return await self._handle("GET", path)

    async def post(self, path: str, body: Any) -> FakeResponse:
        return await self._handle("POST", path, body)

    async def put(self, path: str, body: Any) -> FakeResponse:
        return await self._handle("PUT", path, body)

    async def delete(self, path: str) -> FakeResponse:
        return await self._handle("DELETE", path)


@pytest.fixture(autouse=True)
def _isolate(monkeypatch):
    """Fresh application singleton, no backend env vars, no leftover log handlers."""
    monkeypatch.delenv("NETWEAVE_URL", raising=False)
    monkeypatch.delenv("NETWEAVE_TOKEN", raising=False)
    Application.reset()
    yield
    Application.reset()
    logger = logging.getLogger("netweave")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def app(transport) -> Application:
    return Application(transport=transport)


@pytest.fixture
def network(app):
    return app.network


@pytest.fixture
def wire_connection() -> dict[str, Any]:
    """Wired connection as the backend sends it."""
    return {
        "id": "eth0",
        "interface": "eth0",
        "method4": "manual",
        "method6": "auto",
        "addresses": ["192.168.1.10/24"],
        "nameservers": ["8.8.8.8"],
        "gateway4": "192.168.1.1",
        "status": "up",
    }
