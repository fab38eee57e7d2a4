from __future__ import annotations

from typing import Any, Protocol


class Response(Protocol):
    """Backend response."""

    ok: bool
    status: int

    def json(self) -> Any: ...


class Transport(Protocol):
    """Request/response interface to the network service backend."""

    name: str

    async def get(self, path: str) -> Response: ...
    async def post(self, path: str, body: Any) -> Response: ...
    async def put(self, path: str, body: Any) -> Response: ...
    async def delete(self, path: str) -> Response: ...
