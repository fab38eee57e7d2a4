"""Exception hierarchy for NetWeave.

    NetWeaveError
    ├── WireFormatError   (malformed backend data, also a ValueError)
    └── TransportError    (backend unreachable)
"""

from typing import Any


class NetWeaveError(Exception):
    """Base class for all NetWeave errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        if self.details:
            details_str = ", ".join(f"{k}={v!r}" for k, v in self.details.items())
            return f"{self.message} ({details_str})"
        return self.message


class WireFormatError(NetWeaveError, ValueError):
    """Backend data that cannot be translated into a domain object."""


class TransportError(NetWeaveError):
    """The backend could not be reached."""

    def __init__(self, message: str, method: str | None = None, path: str | None = None) -> None:
        details = {}
        if method:
            details["method"] = method
        if path:
            details["path"] = path
        self.method = method
        self.path = path
        super().__init__(message, details)
