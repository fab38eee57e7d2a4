"""NetWeave controllers."""

from .network import NetworkController


__all__ = [
    "NetworkController",
]
