"""Dispatch of inbound UI messages onto the state register and idle watcher."""

from __future__ import annotations

import logging
from typing import Optional, Protocol

from contracts.ui_protocol import (
    MESSAGE_SET_IDLE_DETECTION,
    MESSAGE_UPDATE_TIMER_STATUS,
)
from pomodoro import StateRegister, snapshot_from_payload
from server.events import UIMessageError, decode_message


class IdleSwitchLike(Protocol):
    def set_enabled(self, enabled: bool) -> None:
        ...


class UIBridge:
    """Applies snapshot pushes and idle toggles sent by the UI layer.

    Invalid messages are logged and dropped; they never reach the register.
    """

    def __init__(
        self,
        register: StateRegister,
        idle_switch: Optional[IdleSwitchLike] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self._register = register
        self._idle_switch = idle_switch
        self._logger = logger or logging.getLogger("runtime.bridge")

    def handle_message(self, raw: str) -> None:
        try:
            message_type, payload = decode_message(raw)
        except UIMessageError as error:
            self._logger.warning("Ignoring UI message: %s", error)
            return

        if message_type == MESSAGE_UPDATE_TIMER_STATUS:
            self._update_timer_status(payload)
            return

        if message_type == MESSAGE_SET_IDLE_DETECTION:
            self._set_idle_detection(payload)
            return

        self._logger.warning("Ignoring unknown UI message type: %s", message_type)

    def _update_timer_status(self, payload: dict) -> None:
        try:
            snapshot = snapshot_from_payload(payload)
        except ValueError as error:
            self._logger.warning("Ignoring invalid timer status: %s", error)
            return
        self._register.update(snapshot)

    def _set_idle_detection(self, payload: dict) -> None:
        enabled = payload.get("enabled")
        if not isinstance(enabled, bool):
            self._logger.warning("Ignoring idle detection toggle without boolean 'enabled'")
            return
        if self._idle_switch is None:
            self._logger.debug("Idle detection unavailable; toggle ignored")
            return
        self._idle_switch.set_enabled(enabled)
