"""Typed parser for config.toml sections into immutable app settings."""

from __future__ import annotations

import logging
from typing import Any, Mapping

from app_config_schema import (
    AppConfig,
    AppConfigurationError,
    ControlSettings,
    IdleSettings,
    LoggingSettings,
    UIServerSettings,
)

_ALLOWED_LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


def parse_app_config(
    raw: Mapping[str, Any],
    *,
    source_file: str,
) -> AppConfig:
    """Parse raw TOML mappings into strongly typed application settings."""
    return AppConfig(
        ui_server=_parse_ui_server_settings(_section(raw, "ui_server")),
        control=_parse_control_settings(_section(raw, "control")),
        idle=_parse_idle_settings(_section(raw, "idle")),
        logging=_parse_logging_settings(_section(raw, "logging")),
        source_file=source_file,
    )


def _parse_ui_server_settings(section: Mapping[str, Any]) -> UIServerSettings:
    return UIServerSettings(
        enabled=_as_bool(section.get("enabled", True), "ui_server.enabled"),
        host=_as_str(section.get("host", "127.0.0.1"), "ui_server.host"),
        port=_as_int(section.get("port", 8765), "ui_server.port"),
        ws_path=_as_str(section.get("ws_path", "/ws"), "ui_server.ws_path"),
    )


def _parse_control_settings(section: Mapping[str, Any]) -> ControlSettings:
    return ControlSettings(
        enabled=_as_bool(section.get("enabled", True), "control.enabled"),
        connect_timeout_seconds=_as_float(
            section.get("connect_timeout_seconds", 5.0),
            "control.connect_timeout_seconds",
        ),
    )


def _parse_idle_settings(section: Mapping[str, Any]) -> IdleSettings:
    return IdleSettings(
        enabled=_as_bool(section.get("enabled", False), "idle.enabled"),
        poll_interval_seconds=_as_float(
            section.get("poll_interval_seconds", 10.0),
            "idle.poll_interval_seconds",
        ),
        threshold_seconds=_as_int(
            section.get("threshold_seconds", 300),
            "idle.threshold_seconds",
        ),
        query_timeout_seconds=_as_float(
            section.get("query_timeout_seconds", 2.0),
            "idle.query_timeout_seconds",
        ),
    )


def _parse_logging_settings(section: Mapping[str, Any]) -> LoggingSettings:
    level = _as_str(section.get("level", "INFO"), "logging.level").upper()
    if level not in _ALLOWED_LOG_LEVELS:
        allowed = ", ".join(_ALLOWED_LOG_LEVELS)
        raise AppConfigurationError(f"logging.level must be one of: {allowed}.")
    return LoggingSettings(level=level)


def log_level(settings: LoggingSettings) -> int:
    return logging.getLevelName(settings.level)


def _section(root: Mapping[str, Any], name: str) -> Mapping[str, Any]:
    raw = root.get(name, {})
    if raw is None:
        return {}
    if not isinstance(raw, Mapping):
        raise AppConfigurationError(f"[{name}] must be a table.")
    return raw


def _as_str(value: Any, field: str) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value.strip()
    raise AppConfigurationError(f"{field} must be a string.")


def _as_bool(value: Any, field: str) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in ("true", "1", "yes", "on"):
            return True
        if lowered in ("false", "0", "no", "off"):
            return False
    raise AppConfigurationError(f"{field} must be a boolean.")


def _as_int(value: Any, field: str) -> int:
    if isinstance(value, bool):
        raise AppConfigurationError(f"{field} must be an integer.")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip(), 10)
        except ValueError as error:
            raise AppConfigurationError(f"{field} must be an integer.") from error
    raise AppConfigurationError(f"{field} must be an integer.")


def _as_float(value: Any, field: str) -> float:
    if isinstance(value, bool):
        raise AppConfigurationError(f"{field} must be a float.")
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError as error:
            raise AppConfigurationError(f"{field} must be a float.") from error
    raise AppConfigurationError(f"{field} must be a float.")
