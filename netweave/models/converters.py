"""Translation between backend wire objects and domain objects."""

from collections.abc import Iterable, Mapping
from typing import Any

from ..core.exceptions import WireFormatError
from .address import IPAddress, format_ip, parse_ip
from .network import AccessPoint, Connection, Device, NetworkSettings, Route
from .security import SecurityDecoder, security_from_flags


def _parse_addresses(values: Iterable[Any] | None) -> tuple[IPAddress, ...]:
    """Parse a list of ``address[/prefix-or-netmask]`` strings."""

    addresses = []
    for value in values or ():
        if not isinstance(value, str):
            raise WireFormatError(f"Expected an address string, got {value!r}")
        addresses.append(parse_ip(value))
    return tuple(addresses)


def decompose_routes(routes: Iterable[Mapping[str, Any]] | None) -> tuple[Route, ...]:
    """Decode the ``destination`` of each wire route, keeping every other field."""

    decoded = []
    for route in routes or ():
        destination = route.get("destination")
        if not isinstance(destination, str):
            raise WireFormatError(f"Route without a destination string: {dict(route)!r}")
        decoded.append(Route.model_validate({**route, "destination": parse_ip(destination)}))
    return tuple(decoded)


# --- Factories ---------------------------------------------------------------


def create_connection(**fields: Any) -> Connection:
    """Build a :class:`Connection`, applying defaults for omitted fields."""

    return Connection.model_validate(fields)


def create_device(**fields: Any) -> Device:
    """Build a :class:`Device`, applying defaults for omitted fields."""

    return Device.model_validate(fields)


def create_access_point(**fields: Any) -> AccessPoint:
    """Build an :class:`AccessPoint`, applying defaults for omitted fields."""

    return AccessPoint.model_validate(fields)


# --- Wire -> domain ----------------------------------------------------------


def connection_from_wire(data: Mapping[str, Any]) -> Connection:
    """Translate a wire connection into a :class:`Connection`."""

    return create_connection(
        **{
            **data,
            "addresses": _parse_addresses(data.get("addresses")),
            "nameservers": data.get("nameservers") or [],
        }
    )


def device_from_wire(data: Mapping[str, Any]) -> Device:
    """Translate a wire device, flattening its ``ipConfig`` into the device."""

    ip_config = data.get("ipConfig") or {}
    device = {key: value for key, value in data.items() if key != "ipConfig"}

    return create_device(
        **{
            **device,
            **ip_config,
            "addresses": _parse_addresses(ip_config.get("addresses")),
            "nameservers": ip_config.get("nameservers") or [],
            "routes4": decompose_routes(ip_config.get("routes4")),
            "routes6": decompose_routes(ip_config.get("routes6")),
        }
    )


def access_point_from_wire(
    data: Mapping[str, Any],
    decoder: SecurityDecoder = security_from_flags,
) -> AccessPoint:
    """Translate a wire access point, decoding its security flags."""

    return create_access_point(
        ssid=data.get("ssid"),
        hw_address=data.get("hw_address"),
        strength=data.get("strength"),
        security=decoder(data.get("flags", 0), data.get("wpa_flags", 0), data.get("rsn_flags", 0)),
    )


def settings_from_wire(data: Mapping[str, Any]) -> NetworkSettings:
    return NetworkSettings.model_validate(data)


# --- Domain -> wire ----------------------------------------------------------


def connection_to_wire(connection: Connection) -> dict[str, Any]:
    """Translate a :class:`Connection` back to the wire shape.

    Addresses are formatted as strings, ``iface`` is sent as ``interface`` and
    blank gateways are left out. The derived ``type`` is never sent.
    """

    wire = connection.model_dump(
        mode="json",
        by_alias=True,
        exclude_none=True,
        exclude={"type", "iface", "gateway4", "gateway6", "addresses"},
    )
    wire["addresses"] = [format_ip(address) for address in connection.addresses]

    if connection.gateway4.strip():
        wire["gateway4"] = connection.gateway4
    if connection.gateway6.strip():
        wire["gateway6"] = connection.gateway6
    if connection.iface is not None:
        wire["interface"] = connection.iface

    return wire
