"""Websocket event names exchanged with the UI layer."""

from __future__ import annotations

from typing import Any, Protocol

# Outbound: control plane -> UI
EVENT_HELLO = "hello"
EVENT_TOGGLE = "toggle"
EVENT_START = "start"
EVENT_STOP = "stop"
EVENT_SKIP = "skip"
EVENT_RESET = "reset"
EVENT_EXTEND = "extend"
EVENT_IDLE_PAUSE = "idle-pause"
EVENT_IDLE_RESUME = "idle-resume"

# Inbound: UI -> control plane
MESSAGE_UPDATE_TIMER_STATUS = "update_timer_status"
MESSAGE_SET_IDLE_DETECTION = "set_idle_detection"


class EventPublisher(Protocol):
    """Fire-and-forget sink for events addressed to the UI layer."""
    def publish(self, event_type: str, **payload: Any) -> None:
        ...
