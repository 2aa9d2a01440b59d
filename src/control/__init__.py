"""D-Bus control plane: session-bus service, one-shot client and CLI."""

from .client import DEFAULT_EXTEND_SECONDS, ControlClient, ControlStatus
from .config import ControlConfig
from .errors import (
    ControlCallError,
    ControlConfigurationError,
    ControlError,
    ControlNotRunningError,
    ControlRegistrationError,
    ControlServiceError,
    ControlTransportError,
)
from .service import ControlInterface, ControlService

__all__ = [
    "DEFAULT_EXTEND_SECONDS",
    "ControlCallError",
    "ControlClient",
    "ControlConfig",
    "ControlConfigurationError",
    "ControlError",
    "ControlInterface",
    "ControlNotRunningError",
    "ControlRegistrationError",
    "ControlService",
    "ControlServiceError",
    "ControlStatus",
    "ControlTransportError",
]
