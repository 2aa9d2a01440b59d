from __future__ import annotations

from typing import Any, Optional, Protocol


class UIServerLike(Protocol):
    def publish(self, event_type: str, **payload: Any) -> None:
        ...


class RuntimeUIPublisher:
    """Forwards control-plane events to the UI server when one is running."""
    def __init__(self, ui_server: Optional[UIServerLike] = None):
        self._ui_server = ui_server

    def attach(self, ui_server: Optional[UIServerLike]) -> None:
        self._ui_server = ui_server

    def publish(self, event_type: str, **payload: Any) -> None:
        if self._ui_server:
            self._ui_server.publish(event_type, **payload)
