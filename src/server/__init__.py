"""Websocket bridge between the control plane and the UI layer."""

from .config import ServerConfigurationError, UIServerConfig
from .events import UIMessageError, decode_message, make_event
from .service import UIServer
