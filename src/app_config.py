from __future__ import annotations

import os
from pathlib import Path
from typing import Mapping, Optional

try:  # Python 3.11+
    import tomllib
except ModuleNotFoundError:  # pragma: no cover - fallback for older runtimes
    import tomli as tomllib  # type: ignore

from app_config_parser import log_level, parse_app_config
from app_config_schema import (
    CONFIG_DIR_NAME,
    DEFAULT_CONFIG_FILE,
    AppConfig,
    AppConfigurationError,
    ControlSettings,
    IdleSettings,
    LoggingSettings,
    UIServerSettings,
)

CONFIG_ENV_VAR = "POMODORO_CONFIG_FILE"

__all__ = [
    "AppConfig",
    "AppConfigurationError",
    "ControlSettings",
    "IdleSettings",
    "LoggingSettings",
    "UIServerSettings",
    "load_app_config",
    "log_level",
    "resolve_config_path",
]


def resolve_config_path(
    config_path: str | None = None,
    *,
    environ: Optional[Mapping[str, str]] = None,
) -> Optional[Path]:
    """Return the config file to load, or None when only defaults apply.

    An explicit path (argument or environment) is returned even if it does
    not exist so the loader can report it.
    """
    env = environ if environ is not None else os.environ
    explicit = config_path or env.get(CONFIG_ENV_VAR, "").strip()
    if explicit:
        path = Path(explicit).expanduser()
        if not path.is_absolute():
            path = (Path.cwd() / path).resolve()
        return path

    local = Path.cwd() / DEFAULT_CONFIG_FILE
    if local.exists():
        return local

    xdg_home = env.get("XDG_CONFIG_HOME", "").strip()
    config_home = Path(xdg_home).expanduser() if xdg_home else Path.home() / ".config"
    user_config = config_home / CONFIG_DIR_NAME / DEFAULT_CONFIG_FILE
    if user_config.exists():
        return user_config

    return None


def load_app_config(
    config_path: str | None = None,
    *,
    environ: Optional[Mapping[str, str]] = None,
) -> AppConfig:
    path = resolve_config_path(config_path, environ=environ)
    if path is None:
        return AppConfig()
    if not path.exists():
        raise AppConfigurationError(f"Config file not found: {path}")
    if not path.is_file():
        raise AppConfigurationError(f"Config path is not a file: {path}")

    try:
        with open(path, "rb") as fh:
            raw = tomllib.load(fh)
    except Exception as error:
        raise AppConfigurationError(f"Failed to parse config TOML: {error}") from error

    return parse_app_config(raw, source_file=str(path))
