class IdleError(Exception):
    """Base exception for idle detection."""


class IdleConfigurationError(IdleError):
    """Raised when idle detection configuration is invalid."""


class IdleOracleError(IdleError):
    """Raised when the desktop idle-time oracle cannot be queried."""
