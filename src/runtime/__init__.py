"""Runtime wiring between the UI layer and the control plane."""

from .app import ControlPlane, ControlPlaneBootstrap
from .bridge import UIBridge
from .ui import RuntimeUIPublisher

__all__ = [
    "ControlPlane",
    "ControlPlaneBootstrap",
    "RuntimeUIPublisher",
    "UIBridge",
]
