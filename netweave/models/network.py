"""Normalized network domain objects.

All models are frozen value objects. Records the backend may extend keep unknown
fields in their ``model_extra`` bag so they survive a round trip to the backend.
"""

from collections.abc import Mapping
from enum import IntEnum
from typing import Annotated, Any

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    StrictInt,
    StrictStr,
    computed_field,
    model_validator,
)

from ..core.model import DisplayModel
from .address import IPAddress
from .classifier import ConnectionType, classify_connection
from .security import SecurityProtocol


Strength = Annotated[StrictInt, Field(ge=0, le=100)]


class DeviceType(IntEnum):
    LOOPBACK = 0
    ETHERNET = 1
    WIRELESS = 2
    DUMMY = 3
    BOND = 4


class ConnectionState(IntEnum):
    UNKNOWN = 0
    ACTIVATING = 1
    ACTIVATED = 2
    DEACTIVATING = 3
    DEACTIVATED = 4


class Route(BaseModel):
    """A route whose destination has been decoded into an :class:`IPAddress`.

    The address family is implied by the collection the route was read from.
    """

    model_config = ConfigDict(frozen=True, extra="allow", populate_by_name=True)

    destination: IPAddress
    """Destination network."""

    next_hop: StrictStr | None = Field(default=None, alias="nextHop")
    """Gateway address."""

    metric: StrictInt | None = None
    """Route metric."""


class WirelessConfig(BaseModel):
    """Wireless settings of a connection."""

    model_config = ConfigDict(frozen=True, extra="allow")

    ssid: StrictStr
    """Network name."""

    mode: StrictStr = "infrastructure"
    """Wireless mode (infrastructure, adhoc, mesh, ap)."""

    security: StrictStr | None = None
    """Key management (none, owe, wpa-psk, sae...)."""

    password: StrictStr | None = None

    hidden: StrictBool = False
    """Whether the network does not broadcast its SSID."""


class BondConfig(BaseModel):
    """Bond settings of a connection, kept as sent by the backend."""

    model_config = ConfigDict(frozen=True, extra="allow")


class VlanConfig(BaseModel):
    """VLAN settings of a connection, kept as sent by the backend."""

    model_config = ConfigDict(frozen=True, extra="allow")


class Connection(DisplayModel):
    """A network connection profile.

    ``type`` is computed from the marker fields and the interface name; any
    ``type`` present in the input is ignored.
    """

    model_config = ConfigDict(frozen=True, extra="allow", populate_by_name=True)

    id: StrictStr
    """Stable connection id, used to match connections on update and delete."""

    iface: StrictStr | None = Field(default=None, validation_alias=AliasChoices("iface", "interface"))
    """Interface the connection is bound to."""

    method4: StrictStr | None = None
    """IPv4 configuration method as named by the backend (auto, manual, disabled...)."""

    method6: StrictStr | None = None
    """IPv6 configuration method as named by the backend (auto, dhcp, ignore...)."""

    gateway4: StrictStr = ""
    """IPv4 gateway, empty when not set."""

    gateway6: StrictStr = ""
    """IPv6 gateway, empty when not set."""

    addresses: tuple[IPAddress, ...] = ()
    nameservers: tuple[StrictStr, ...] = ()

    wireless: WirelessConfig | None = None
    bond: BondConfig | None = None
    vlan: VlanConfig | None = None

    @model_validator(mode="before")
    @classmethod
    def _drop_wire_type(cls, data: Any) -> Any:
        if isinstance(data, Mapping) and "type" in data:
            return {key: value for key, value in data.items() if key != "type"}
        return data

    @computed_field
    @property
    def type(self) -> ConnectionType:
        """Derived connection type."""

        return classify_connection(
            {"wireless": self.wireless, "bond": self.bond, "vlan": self.vlan, "iface": self.iface}
        )


class Device(DisplayModel):
    """Running configuration of a network device."""

    model_config = ConfigDict(frozen=True, extra="allow", populate_by_name=True)

    iface: StrictStr = Field(validation_alias=AliasChoices("iface", "name"))
    """Interface name."""

    type: DeviceType
    """Device type code."""

    state: ConnectionState = ConnectionState.UNKNOWN

    mac_address: StrictStr = Field(default="", alias="macAddress")

    connection: StrictStr | None = None
    """Id of the connection bound to this device."""

    addresses: tuple[IPAddress, ...] = ()
    nameservers: tuple[StrictStr, ...] = ()
    gateway4: StrictStr = ""
    gateway6: StrictStr = ""
    routes4: tuple[Route, ...] = ()
    routes6: tuple[Route, ...] = ()


class AccessPoint(DisplayModel):
    """A visible wireless access point.

    Access points sharing an SSID are distinct entities.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    ssid: StrictStr
    hw_address: StrictStr = Field(alias="hwAddress")
    strength: Strength
    security: frozenset[SecurityProtocol] = frozenset()


class NetworkSettings(DisplayModel):
    """General network settings. ``NetworkSettings()`` is the empty object."""

    model_config = ConfigDict(frozen=True, extra="allow", populate_by_name=True)

    hostname: StrictStr = ""
    connectivity: StrictBool = False
    wireless_enabled: StrictBool = Field(default=False, alias="wirelessEnabled")
    networking_enabled: StrictBool = Field(default=False, alias="networkingEnabled")
