"""Thread-safe register holding the latest timer snapshot pushed by the UI."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Optional

from contracts.bus_protocol import U32_MAX

from .constants import (
    DEFAULT_LOCK_TIMEOUT_SECONDS,
    DEFAULT_SESSIONS_COMPLETED,
    DEFAULT_TIME_LEFT_SECONDS,
    MODE_LONG_BREAK,
    MODE_SHORT_BREAK,
    MODE_WORK,
)


def _check_u32(value: Any, field: str) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{field} must be an integer")
    if not 0 <= value <= U32_MAX:
        raise ValueError(f"{field} must be in [0, {U32_MAX}], got: {value}")


class TimerMode(str, Enum):
    WORK = MODE_WORK
    SHORT_BREAK = MODE_SHORT_BREAK
    LONG_BREAK = MODE_LONG_BREAK


@dataclass(frozen=True)
class TimerSnapshot:
    """Immutable view of the timer state as last reported by the UI layer."""
    mode: TimerMode = TimerMode.WORK
    time_left_seconds: int = DEFAULT_TIME_LEFT_SECONDS
    is_active: bool = False
    sessions_completed: int = DEFAULT_SESSIONS_COMPLETED

    def __post_init__(self) -> None:
        if not isinstance(self.mode, TimerMode):
            raise ValueError(f"mode must be a TimerMode, got: {self.mode!r}")
        _check_u32(self.time_left_seconds, "time_left_seconds")
        _check_u32(self.sessions_completed, "sessions_completed")
        if not isinstance(self.is_active, bool):
            raise ValueError("is_active must be a boolean")


DEFAULT_SNAPSHOT = TimerSnapshot()


def snapshot_from_payload(payload: Mapping[str, Any]) -> TimerSnapshot:
    """Build a snapshot from a UI status message, rejecting malformed fields."""
    raw_mode = payload.get("mode")
    try:
        mode = TimerMode(raw_mode)
    except ValueError as error:
        allowed = ", ".join(item.value for item in TimerMode)
        raise ValueError(f"mode must be one of: {allowed}, got: {raw_mode!r}") from error

    return TimerSnapshot(
        mode=mode,
        time_left_seconds=payload.get("time_left"),
        is_active=payload.get("is_active"),
        sessions_completed=payload.get("sessions_completed"),
    )


class StateRegister:
    """Passive cache of the last TimerSnapshot; whole-value replace and read only."""

    def __init__(
        self,
        *,
        lock_timeout_seconds: float = DEFAULT_LOCK_TIMEOUT_SECONDS,
        logger: Optional[logging.Logger] = None,
    ):
        self._lock = threading.Lock()
        self._lock_timeout_seconds = lock_timeout_seconds
        self._logger = logger or logging.getLogger("pomodoro.register")
        self._snapshot = DEFAULT_SNAPSHOT

    def update(self, snapshot: TimerSnapshot) -> None:
        if not isinstance(snapshot, TimerSnapshot):
            raise TypeError("snapshot must be a TimerSnapshot")

        if not self._lock.acquire(timeout=self._lock_timeout_seconds):
            self._logger.error(
                "State lock unavailable after %.1fs; dropping snapshot update",
                self._lock_timeout_seconds,
            )
            return
        try:
            self._snapshot = snapshot
        finally:
            self._lock.release()

    def read(self) -> TimerSnapshot:
        if not self._lock.acquire(timeout=self._lock_timeout_seconds):
            self._logger.error(
                "State lock unavailable after %.1fs; serving default snapshot",
                self._lock_timeout_seconds,
            )
            return DEFAULT_SNAPSHOT
        try:
            return self._snapshot
        finally:
            self._lock.release()

