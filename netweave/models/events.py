"""Network event taxonomy.

Delivery is handled elsewhere; this module only defines the event names and the
envelope, and decodes the flat ``type``-tagged form the backend emits.
"""

from collections.abc import Mapping
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict

from ..core.exceptions import WireFormatError


class NetworkEventType(StrEnum):
    ACTIVE_CONNECTION_ADDED = "active_connection_added"
    ACTIVE_CONNECTION_UPDATED = "active_connection_updated"
    ACTIVE_CONNECTION_REMOVED = "active_connection_removed"
    CONNECTION_ADDED = "connection_added"
    CONNECTION_UPDATED = "connection_updated"
    CONNECTION_REMOVED = "connection_removed"
    SETTINGS_UPDATED = "settings_updated"


class NetworkEvent(BaseModel):
    """Notification envelope.

    Every field besides ``type`` is kept in the extension bag and exposed as
    ``payload``.
    """

    model_config = ConfigDict(frozen=True, extra="allow")

    type: NetworkEventType

    @property
    def payload(self) -> dict[str, Any]:
        """Copy of the event fields other than ``type``."""

        return dict(self.model_extra or {})


def event_from_wire(data: Mapping[str, Any]) -> NetworkEvent:
    """Decode ``{"type": ..., **fields}`` into a :class:`NetworkEvent`."""

    raw_type = data.get("type")
    try:
        event_type = NetworkEventType(raw_type)
    except ValueError as e:
        raise WireFormatError(f"Unknown network event type: {raw_type!r}") from e
    return NetworkEvent.model_validate({**data, "type": event_type})
