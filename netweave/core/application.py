"""Application singleton with dependency injection for controllers."""

from typing import TYPE_CHECKING, Any, Self

from rich.console import Console

from ..controllers.network import NetworkController
from ..models.common import load_settings
from ..models.security import SecurityDecoder, security_from_flags
from ..transports.factory import make_transport


if TYPE_CHECKING:
    from ..models.config import ClientSettings
    from ..transports.base import Transport


class Application:
    """Main application.

    The transport and the security decoder can be injected; otherwise the
    transport is built from the settings on first use.
    """

    _instance: Self | None = None

    def __init__(
        self,
        settings: "ClientSettings | None" = None,
        transport: "Transport | None" = None,
        security_decoder: SecurityDecoder | None = None,
    ) -> None:
        self._console = Console()
        self._controllers: dict[str, Any] = {}

        self._settings = settings
        self._transport = transport
        self._security_decoder: SecurityDecoder = security_decoder or security_from_flags
        self._debug: bool = False

    @classmethod
    def current(cls) -> Self:
        """Get current application instance."""

        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Reset the singleton instance."""

        cls._instance = None

    @property
    def console(self) -> "Console":
        """Get rich console for displaying messages."""

        return self._console

    @property
    def debug(self) -> bool:
        """Get debug mode flag."""

        return self._debug

    @debug.setter
    def debug(self, value: bool) -> None:
        """Set debug mode flag."""

        self._debug = value

    @property
    def settings(self) -> "ClientSettings":
        """Get client settings, loading defaults and environment overrides on first use."""

        if self._settings is None:
            self._settings = load_settings()
        return self._settings

    @settings.setter
    def settings(self, value: "ClientSettings") -> None:
        """Replace the settings; the transport is rebuilt on next use."""

        self._settings = value
        self._transport = None

    @property
    def transport(self) -> "Transport":
        """Get the backend transport."""

        if self._transport is None:
            settings = self.settings
            self._transport = make_transport(
                settings.transport,
                url=settings.url,
                token=settings.token,
                verify_ssl=settings.verify_ssl,
                timeout=settings.timeout,
            )
        return self._transport

    @property
    def security_decoder(self) -> SecurityDecoder:
        """Get the access point security flags decoder."""

        return self._security_decoder

    @property
    def network(self) -> NetworkController:
        """Get network controller."""

        if "network" not in self._controllers:
            self._controllers["network"] = NetworkController(self)
        return self._controllers["network"]
