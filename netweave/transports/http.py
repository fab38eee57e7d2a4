"""HTTP/JSON transport built on requests."""

import asyncio
import logging
from functools import partial
from typing import Any

import orjson
import requests

from ..core.exceptions import TransportError, WireFormatError


logger = logging.getLogger(__name__)


class HTTPResponse:
    """Adapter exposing a ``requests.Response`` through the transport interface."""

    def __init__(self, response: requests.Response) -> None:
        self._response = response

    @property
    def ok(self) -> bool:
        return self._response.ok

    @property
    def status(self) -> int:
        return self._response.status_code

    def json(self) -> Any:
        content = self._response.content
        if not content:
            return None
        try:
            return orjson.loads(content)
        except orjson.JSONDecodeError as e:
            raise WireFormatError(f"Invalid JSON in response: {e}", {"status": self.status}) from e

    def __repr__(self) -> str:
        return f"<HTTPResponse {self.status}>"


class HTTPTransport:
    """Transport for the network service HTTP API.

    requests is blocking, so every call runs in the loop's default executor and
    only suspends the calling flow.
    """

    name = "http"

    def __init__(
        self,
        url: str = "http://localhost/api",
        token: str | None = None,
        verify_ssl: bool = True,
        timeout: float = 30.0,
        session: requests.Session | None = None,
    ):
        self.url = url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.verify = verify_ssl
        self.session.headers["Content-Type"] = "application/json"
        if token:
            self.session.headers["Authorization"] = f"Bearer {token}"

    async def _request(self, method: str, path: str, body: Any = None) -> HTTPResponse:
        kwargs: dict[str, Any] = {"timeout": self.timeout}
        if body is not None:
            kwargs["data"] = orjson.dumps(body)

        loop = asyncio.get_running_loop()
        try:
            response = await loop.run_in_executor(
                None,
                partial(self.session.request, method, f"{self.url}{path}", **kwargs),
            )
        except requests.RequestException as e:
            raise TransportError(str(e), method=method, path=path) from e

        logger.debug("%s %s -> %s", method, path, response.status_code)
        return HTTPResponse(response)

    async def get(self, path: str) -> HTTPResponse:
        return await self._request("GET", path)

    async def post(self, path: str, body: Any) -> HTTPResponse:
        return await self._request("POST", path, body)

    async def put(self, path: str, body: Any) -> HTTPResponse:
        return await self._request("PUT", path, body)

    async def delete(self, path: str) -> HTTPResponse:
        return await self._request("DELETE", path)
