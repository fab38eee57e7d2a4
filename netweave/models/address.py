"""IP address value object and the ``address[/prefix-or-netmask]`` codec."""

from ipaddress import IPv4Address, ip_address
from typing import Self

from pydantic import BaseModel, ConfigDict, StrictInt, StrictStr, model_validator

from ..core.exceptions import WireFormatError


MAX_PREFIX = {4: 32, 6: 128}


def ip_version(address: str) -> int:
    """Return 4 or 6 for a literal address, raising on anything else."""

    try:
        return ip_address(address).version
    except ValueError as e:
        raise WireFormatError(f"Invalid IP address: {address!r}") from e


class IPAddress(BaseModel):
    """An address with an optional CIDR prefix.

    A missing prefix means "not specified" (host route or protocol default), not zero.
    """

    model_config = ConfigDict(frozen=True)

    address: StrictStr
    """IPv4 or IPv6 literal."""

    prefix: StrictInt | None = None
    """Prefix length, 0-32 for IPv4 and 0-128 for IPv6."""

    @model_validator(mode="after")
    def _check_prefix_range(self) -> Self:
        version = ip_version(self.address)
        if self.prefix is not None and not 0 <= self.prefix <= MAX_PREFIX[version]:
            raise WireFormatError(f"Prefix {self.prefix} out of range for IPv{version} address {self.address!r}")
        return self

    @property
    def version(self) -> int:
        return ip_version(self.address)

    def __str__(self) -> str:
        return format_ip(self)


def netmask_to_prefix(netmask: str) -> int:
    """Convert a dotted IPv4 netmask to its prefix length.

    Non-contiguous masks such as ``255.0.255.0`` are rejected.
    """

    try:
        value = int(IPv4Address(netmask))
    except ValueError as e:
        raise WireFormatError(f"Invalid netmask: {netmask!r}") from e

    prefix = 32 - (~value & 0xFFFFFFFF).bit_length()
    if value != (0xFFFFFFFF << (32 - prefix)) & 0xFFFFFFFF:
        raise WireFormatError(f"Non-contiguous netmask: {netmask!r}")
    return prefix


def ip_prefix_for(value: str, version: int = 4) -> int:
    """Return the prefix length for an integer prefix or a dotted netmask."""

    if value.isascii() and value.isdigit():
        prefix = int(value)
        if prefix > MAX_PREFIX[version]:
            raise WireFormatError(f"Prefix {prefix} out of range for IPv{version}")
        return prefix

    if version == 4 and "." in value:
        return netmask_to_prefix(value)

    raise WireFormatError(f"Invalid prefix or netmask: {value!r}")


def parse_ip(text: str) -> IPAddress:
    """Parse ``"A/B"`` or ``"A"`` into an :class:`IPAddress`."""

    address, sep, rest = text.strip().partition("/")
    version = ip_version(address)
    if not sep:
        return IPAddress(address=address)
    return IPAddress(address=address, prefix=ip_prefix_for(rest, version))


def format_ip(ip: IPAddress) -> str:
    """Format an :class:`IPAddress` back to ``"address/prefix"`` or ``"address"``."""

    if ip.prefix is None:
        return ip.address
    return f"{ip.address}/{ip.prefix}"
