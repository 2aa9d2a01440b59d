"""Configuration model for the D-Bus control service and its client."""

from __future__ import annotations

from dataclasses import dataclass

from contracts.bus_protocol import (
    CONTROL_BUS_NAME,
    CONTROL_INTERFACE,
    CONTROL_OBJECT_PATH,
)

from .errors import ControlConfigurationError

DEFAULT_CONNECT_TIMEOUT_SECONDS = 5.0


@dataclass(frozen=True)
class ControlConfig:
    """Validated control-plane settings derived from app settings."""
    enabled: bool = True
    connect_timeout_seconds: float = DEFAULT_CONNECT_TIMEOUT_SECONDS
    bus_name: str = CONTROL_BUS_NAME
    object_path: str = CONTROL_OBJECT_PATH
    interface_name: str = CONTROL_INTERFACE

    def __post_init__(self) -> None:
        if self.connect_timeout_seconds <= 0:
            raise ControlConfigurationError(
                "CONTROL_CONNECT_TIMEOUT_SECONDS must be greater than zero, "
                f"got: {self.connect_timeout_seconds}"
            )

    @classmethod
    def from_settings(cls, settings) -> "ControlConfig":
        return cls(
            enabled=bool(settings.enabled),
            connect_timeout_seconds=float(settings.connect_timeout_seconds),
        )
