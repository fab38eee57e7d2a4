"""Wireless security protocols and the access point flags decoder.

The bit layout belongs to the wireless stack reporting the access points, so the
decoder is a pluggable strategy. ``security_from_flags`` implements the
NetworkManager layout and is used when no other decoder is configured.
"""

from collections.abc import Callable
from enum import IntFlag, StrEnum


class SecurityProtocol(StrEnum):
    WEP = "WEP"
    WPA = "WPA1"
    RSN = "WPA2"
    IEEE_8021X = "802.1X"


class ApFlags(IntFlag):
    """NM80211ApFlags capability bits."""

    NONE = 0x0
    PRIVACY = 0x1
    WPS = 0x2
    WPS_PBC = 0x4
    WPS_PIN = 0x8


SecurityDecoder = Callable[[int, int, int], frozenset[SecurityProtocol]]


def security_from_flags(flags: int, wpa_flags: int, rsn_flags: int) -> frozenset[SecurityProtocol]:
    """Decode NetworkManager access point flags into security protocols."""

    security: set[SecurityProtocol] = set()
    if flags & ApFlags.PRIVACY and wpa_flags == 0 and rsn_flags == 0:
        security.add(SecurityProtocol.WEP)
    if wpa_flags > 0:
        security.add(SecurityProtocol.WPA)
    if rsn_flags > 0:
        security.add(SecurityProtocol.RSN)
    return frozenset(security)
