"""Idle detection against the desktop's idle-time oracle."""

from .config import IdleConfig
from .errors import IdleConfigurationError, IdleError, IdleOracleError
from .oracle import IdleOracleLike, ScreenSaverIdleOracle
from .watcher import IdleWatcher

__all__ = [
    "IdleConfig",
    "IdleConfigurationError",
    "IdleError",
    "IdleOracleError",
    "IdleOracleLike",
    "IdleWatcher",
    "ScreenSaverIdleOracle",
]
