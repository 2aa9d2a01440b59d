"""Dataclass schema objects used by runtime configuration loading."""

from __future__ import annotations

from dataclasses import dataclass, field

DEFAULT_CONFIG_FILE = "config.toml"
CONFIG_DIR_NAME = "pomodoro"


class AppConfigurationError(Exception):
    """Raised when application configuration fails."""


@dataclass(frozen=True)
class UIServerSettings:
    """Websocket bridge values loaded from `[ui_server]`."""
    enabled: bool = True
    host: str = "127.0.0.1"
    port: int = 8765
    ws_path: str = "/ws"


@dataclass(frozen=True)
class ControlSettings:
    """D-Bus control service values loaded from `[control]`."""
    enabled: bool = True
    connect_timeout_seconds: float = 5.0


@dataclass(frozen=True)
class IdleSettings:
    """Idle detection values loaded from `[idle]`."""
    enabled: bool = False
    poll_interval_seconds: float = 10.0
    threshold_seconds: int = 300
    query_timeout_seconds: float = 2.0


@dataclass(frozen=True)
class LoggingSettings:
    level: str = "INFO"


@dataclass(frozen=True)
class AppConfig:
    """Top-level immutable runtime configuration."""
    ui_server: UIServerSettings = field(default_factory=UIServerSettings)
    control: ControlSettings = field(default_factory=ControlSettings)
    idle: IdleSettings = field(default_factory=IdleSettings)
    logging: LoggingSettings = field(default_factory=LoggingSettings)
    source_file: str = ""
