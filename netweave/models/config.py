from typing import Annotated, Literal

from pydantic import BaseModel, Field

from .common import BackendURL


class ClientSettings(BaseModel):
    """Connection settings for the network service backend."""

    url: BackendURL = "http://localhost/api"
    """Base URL of the backend API."""

    token: str | None = None
    """Bearer token sent with every request."""

    verify_ssl: bool = True
    """Verify the backend TLS certificate."""

    timeout: Annotated[float, Field(gt=0)] = 30.0
    """Request timeout in seconds."""

    transport: Literal["http"] = "http"
    """Transport implementation."""
