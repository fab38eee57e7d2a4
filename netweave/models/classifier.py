"""Connection type classification from the marker fields of a record."""

from collections.abc import Callable, Mapping
from enum import StrEnum
from typing import Any


class ConnectionType(StrEnum):
    ETHERNET = "ethernet"
    WIRELESS = "wireless"
    LOOPBACK = "loopback"
    BOND = "bond"
    VLAN = "vlan"


def _has(field: str) -> Callable[[Mapping[str, Any]], bool]:
    return lambda record: record.get(field) is not None


def record_iface(record: Mapping[str, Any]) -> str | None:
    """Interface name of a wire or domain record (``iface`` or ``interface``)."""

    iface = record.get("iface")
    if iface is None:
        iface = record.get("interface")
    return iface


CONNECTION_TYPE_RULES: tuple[tuple[Callable[[Mapping[str, Any]], bool], ConnectionType], ...] = (
    (_has("wireless"), ConnectionType.WIRELESS),
    (_has("bond"), ConnectionType.BOND),
    (_has("vlan"), ConnectionType.VLAN),
    (lambda record: record_iface(record) == "lo", ConnectionType.LOOPBACK),
)
"""Ordered rules, the first matching rule wins."""


def classify_connection(record: Mapping[str, Any]) -> ConnectionType:
    """Return the connection type of a record, ``ETHERNET`` when no rule matches."""

    for matches, connection_type in CONNECTION_TYPE_RULES:
        if matches(record):
            return connection_type
    return ConnectionType.ETHERNET
