"""NetWeave core framework."""

from .application import Application
from .controller import BaseController
from .exceptions import NetWeaveError, TransportError, WireFormatError
from .logging import setup_logging
from .model import DisplayModel


__all__ = [
    "Application",
    "BaseController",
    "DisplayModel",
    "NetWeaveError",
    "TransportError",
    "WireFormatError",
    "setup_logging",
]
