"""Network controller: the gateway to the network service backend.

Reads translate every wire object into a domain object before returning. Writes
are staged by the backend and only take effect on apply, so every mutating
operation is a (write, apply) pair and apply is only issued once the write
response has been observed.
"""

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING, Any, TypeVar
from urllib.parse import quote

from ..core.controller import BaseController
from ..core.exceptions import TransportError, WireFormatError
from ..models.address import IPAddress
from ..models.converters import (
    access_point_from_wire,
    connection_from_wire,
    connection_to_wire,
    create_connection,
    device_from_wire,
    settings_from_wire,
)
from ..models.network import AccessPoint, Connection, Device, NetworkSettings
from ..models.outcome import ChangeOutcome, ChangePhase, Outcome


if TYPE_CHECKING:
    from ..core.application import Application
    from ..transports.base import Response


logger = logging.getLogger(__name__)

T = TypeVar("T")

DEVICES_PATH = "/network/devices"
CONNECTIONS_PATH = "/network/connections"
WIFI_PATH = "/network/wifi"
SETTINGS_PATH = "/network/settings"
APPLY_PATH = "/network/system/apply"


def connection_path(connection_id: str) -> str:
    return f"{CONNECTIONS_PATH}/{quote(connection_id, safe='')}"


def _records(data: Any, what: str) -> list[Any]:
    """The records of a collection body; a null body is an empty collection."""

    if data is None:
        return []
    if not isinstance(data, list):
        raise WireFormatError(f"Expected a {what}, got {type(data).__name__}")
    return data


class NetworkController(BaseController["Application"]):
    """Controller for devices, connections, access points and settings."""

    # ---------- transport helpers ----------

    async def _call(self, method: str, path: str, *body: Any) -> Outcome["Response"]:
        """Issue one request, turning rejections and transport errors into a failure."""

        try:
            response = await getattr(self.transport, method)(path, *body)
        except TransportError as e:
            return Outcome.failure(str(e))
        if not response.ok:
            return Outcome.failure(f"HTTP {response.status}", status=response.status)
        return Outcome.success(response)

    async def _fetch(self, path: str, what: str, translate: Callable[[Any], T]) -> Outcome[T]:
        """GET a collection and translate it.

        A failed request is logged and reported as a failure. Malformed data in a
        successful response raises.
        """

        outcome = await self._call("get", path)
        if not outcome.ok:
            logger.warning("Failed to get %s from %s: %s", what, path, outcome.error)
            return Outcome.failure(outcome.error, outcome.status)
        return Outcome.success(translate(outcome.value.json()))

    async def _change(self, method: str, path: str, *body: Any) -> ChangeOutcome:
        """Write, then apply once the write has succeeded."""

        write = await self._call(method, path, *body)
        if not write.ok:
            logger.error("Failed to %s %s: %s", method.upper(), path, write.error)
            return ChangeOutcome.failed(ChangePhase.WRITE, write)

        commit = await self.apply()
        if not commit.ok:
            return ChangeOutcome.failed(ChangePhase.APPLY, commit)
        return ChangeOutcome()

    # ---------- reads ----------

    async def fetch_devices(self) -> Outcome[list[Device]]:
        return await self._fetch(
            DEVICES_PATH,
            "list of devices",
            lambda data: [device_from_wire(device) for device in _records(data, "list of devices")],
        )

    async def fetch_connections(self) -> Outcome[list[Connection]]:
        return await self._fetch(
            CONNECTIONS_PATH,
            "list of connections",
            lambda data: [connection_from_wire(conn) for conn in _records(data, "list of connections")],
        )

    async def fetch_access_points(self) -> Outcome[list[AccessPoint]]:
        decoder = self.app.security_decoder
        return await self._fetch(
            WIFI_PATH,
            "list of access points",
            lambda data: [access_point_from_wire(ap, decoder) for ap in _records(data, "list of access points")],
        )

    async def fetch_settings(self) -> Outcome[NetworkSettings]:
        return await self._fetch(SETTINGS_PATH, "settings", lambda data: settings_from_wire(data or {}))

    async def devices(self) -> list[Device]:
        """Devices running configuration, empty when the backend fails."""

        return (await self.fetch_devices()).unwrap_or([])

    async def connections(self) -> list[Connection]:
        """Connection profiles, empty when the backend fails."""

        return (await self.fetch_connections()).unwrap_or([])

    async def access_points(self) -> list[AccessPoint]:
        """Visible access points, empty when the backend fails."""

        return (await self.fetch_access_points()).unwrap_or([])

    async def settings(self) -> NetworkSettings:
        """General network settings, empty when the backend fails."""

        return (await self.fetch_settings()).unwrap_or(NetworkSettings())

    async def get_connection(self, connection_id: str) -> Connection | None:
        """First connection with the given id, or ``None``."""

        for connection in await self.connections():
            if connection.id == connection_id:
                return connection
        return None

    async def addresses(self) -> list[IPAddress]:
        """IP addresses of all connections, in connection order."""

        # TODO: drop duplicate addresses shared by several connections
        return [address for connection in await self.connections() for address in connection.addresses]

    # ---------- writes ----------

    async def apply(self) -> Outcome["Response"]:
        """Commit the staged changes on the managed system."""

        outcome = await self._call("put", APPLY_PATH, {})
        if outcome.ok:
            logger.debug("Network changes applied")
        else:
            logger.error("Failed to apply network changes: %s", outcome.error)
        return outcome

    async def add_connection(self, connection: Connection) -> Connection | None:
        """Add a connection without applying it.

        Returns the connection confirmed by the backend, or ``None`` when the
        backend rejected it.
        """

        outcome = await self._call("post", CONNECTIONS_PATH, connection_to_wire(connection))
        if not outcome.ok:
            logger.error("Failed to add connection %r: %s", connection.id, outcome.error)
            return None

        data = outcome.value.json()
        if not data:
            return connection
        return connection_from_wire(data)

    async def update_connection_outcome(self, connection: Connection) -> ChangeOutcome:
        return await self._change("put", connection_path(connection.id), connection_to_wire(connection))

    async def update_connection(self, connection: Connection) -> bool:
        """Update the connection matched by ``id`` and apply.

        True only when both the update and the apply succeeded.
        """

        return (await self.update_connection_outcome(connection)).ok

    async def delete_connection_outcome(self, connection_id: str) -> ChangeOutcome:
        return await self._change("delete", connection_path(connection_id))

    async def delete_connection(self, connection_id: str) -> bool:
        """Delete the connection and apply.

        True only when both the delete and the apply succeeded.
        """

        return (await self.delete_connection_outcome(connection_id)).ok

    async def add_or_update_connection(self, connection: Connection) -> ChangeOutcome:
        """Update the connection when its id exists, add it otherwise, then apply."""

        if await self.get_connection(connection.id) is not None:
            return await self.update_connection_outcome(connection)
        return await self._change("post", CONNECTIONS_PATH, connection_to_wire(connection))

    async def connect_to(self, connection: Connection) -> Connection | None:
        """Add the connection and apply; the backend activates it when written."""

        added = await self.add_connection(connection)
        if added is None:
            return None
        await self.apply()
        return added

    async def add_and_connect_to(
        self,
        ssid: str,
        *,
        security: str | None = None,
        password: str | None = None,
        hidden: bool = False,
        mode: str | None = None,
    ) -> Connection | None:
        """Create a wireless connection named after ``ssid`` and connect to it."""

        wireless: dict[str, Any] = {"ssid": ssid, "mode": "infrastructure"}
        if security:
            wireless["security"] = security
        if password:
            wireless["password"] = password
        if hidden:
            wireless["hidden"] = hidden
        if mode:
            wireless["mode"] = mode

        connection = create_connection(id=ssid, wireless=wireless)
        return await self.connect_to(connection)
