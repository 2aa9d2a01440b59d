"""Configuration model for the UI websocket bridge."""

from __future__ import annotations

from dataclasses import dataclass


class ServerConfigurationError(Exception):
    """Raised when UI server configuration is invalid."""


DEFAULT_WEBSOCKET_PATH = "/ws"
HEALTHZ_PATH = "/healthz"


@dataclass(frozen=True)
class UIServerConfig:
    """Validated UI server configuration derived from app settings."""
    enabled: bool = True
    host: str = "127.0.0.1"
    port: int = 8765
    websocket_path: str = DEFAULT_WEBSOCKET_PATH

    def __post_init__(self) -> None:
        if not self.host.strip():
            raise ServerConfigurationError("UI_SERVER_HOST cannot be empty")

        if not 1 <= self.port <= 65535:
            raise ServerConfigurationError(
                f"UI_SERVER_PORT must be in [1, 65535], got: {self.port}"
            )

        if not self.websocket_path.startswith("/"):
            raise ServerConfigurationError(
                f"UI_SERVER_WS_PATH must start with '/', got: {self.websocket_path!r}"
            )

        if self.websocket_path == HEALTHZ_PATH:
            raise ServerConfigurationError(
                f"UI_SERVER_WS_PATH cannot be {HEALTHZ_PATH}"
            )

    @classmethod
    def from_settings(cls, settings) -> "UIServerConfig":
        ws_path = settings.ws_path.strip() if settings.ws_path else ""
        return cls(
            enabled=bool(settings.enabled),
            host=settings.host,
            port=settings.port,
            websocket_path=ws_path or DEFAULT_WEBSOCKET_PATH,
        )
