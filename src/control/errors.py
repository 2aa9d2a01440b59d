class ControlError(Exception):
    """Base exception for the D-Bus control plane."""


class ControlConfigurationError(ControlError):
    """Raised when control service configuration is invalid."""


class ControlServiceError(ControlError):
    """Raised when the control service cannot be brought up."""


class ControlTransportError(ControlServiceError):
    """Raised when the session bus cannot be reached."""


class ControlRegistrationError(ControlServiceError):
    """Raised when the well-known bus name is already owned by another process."""


class ControlNotRunningError(ControlError):
    """Raised by the client when no running instance can be reached."""


class ControlCallError(ControlError):
    """Raised by the client when a call reached the bus but failed."""
