"""Backend transports."""

from .base import Response, Transport
from .factory import make_transport
from .http import HTTPResponse, HTTPTransport


__all__ = [
    "HTTPResponse",
    "HTTPTransport",
    "Response",
    "Transport",
    "make_transport",
]
