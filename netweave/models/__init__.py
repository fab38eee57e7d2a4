"""NetWeave network models.

This package contains:
- address: IP address value object and the address/prefix codec
- classifier: Connection type rules
- network: Domain objects (connections, devices, access points, settings)
- converters: Translation between wire objects and domain objects
- security: Security protocols and the access point flags decoder
- events: Network event taxonomy
- outcome: Operation outcomes
- config: Client settings

Example:
    from netweave import Application
    app = Application.current()
    connections = asyncio.run(app.network.connections())
"""

from .address import IPAddress, format_ip, ip_prefix_for, netmask_to_prefix, parse_ip
from .classifier import CONNECTION_TYPE_RULES, ConnectionType, classify_connection
from .common import load_settings
from .config import ClientSettings
from .converters import (
    access_point_from_wire,
    connection_from_wire,
    connection_to_wire,
    create_access_point,
    create_connection,
    create_device,
    decompose_routes,
    device_from_wire,
    settings_from_wire,
)
from .events import NetworkEvent, NetworkEventType, event_from_wire
from .network import (
    AccessPoint,
    BondConfig,
    Connection,
    ConnectionState,
    Device,
    DeviceType,
    NetworkSettings,
    Route,
    VlanConfig,
    WirelessConfig,
)
from .outcome import ChangeOutcome, ChangePhase, Outcome
from .security import ApFlags, SecurityDecoder, SecurityProtocol, security_from_flags


__all__ = [
    # Address codec
    "IPAddress",
    "format_ip",
    "ip_prefix_for",
    "netmask_to_prefix",
    "parse_ip",
    # Classifier
    "CONNECTION_TYPE_RULES",
    "ConnectionType",
    "classify_connection",
    # Settings
    "ClientSettings",
    "load_settings",
    # Converters and factories
    "access_point_from_wire",
    "connection_from_wire",
    "connection_to_wire",
    "create_access_point",
    "create_connection",
    "create_device",
    "decompose_routes",
    "device_from_wire",
    "settings_from_wire",
    # Events
    "NetworkEvent",
    "NetworkEventType",
    "event_from_wire",
    # Domain objects
    "AccessPoint",
    "BondConfig",
    "Connection",
    "ConnectionState",
    "Device",
    "DeviceType",
    "NetworkSettings",
    "Route",
    "VlanConfig",
    "WirelessConfig",
    # Outcomes
    "ChangeOutcome",
    "ChangePhase",
    "Outcome",
    # Security
    "ApFlags",
    "SecurityDecoder",
    "SecurityProtocol",
    "security_from_flags",
]
