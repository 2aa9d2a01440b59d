"""Background idle watcher emitting edge-triggered pause/resume events."""

from __future__ import annotations

import logging
import threading
from typing import Optional

from contracts.ui_protocol import EVENT_IDLE_PAUSE, EVENT_IDLE_RESUME, EventPublisher

from .config import IdleConfig
from .errors import IdleOracleError
from .oracle import IdleOracleLike


class IdleWatcher:
    """Polls the idle oracle and publishes `idle-pause` / `idle-resume` on edges.

    The edge state ("was idle") is only touched by `tick()`, which runs on the
    watcher thread. `set_enabled()` may be called from any thread; disabling
    leaves a pending edge reset that the next tick applies.
    """

    def __init__(
        self,
        oracle: IdleOracleLike,
        publisher: EventPublisher,
        config: Optional[IdleConfig] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self._oracle = oracle
        self._publisher = publisher
        self._config = config or IdleConfig()
        self._logger = logger or logging.getLogger("idle")

        self._enabled = threading.Event()
        if self._config.enabled:
            self._enabled.set()
        self._was_idle = False
        self._edge_reset = threading.Event()

        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def is_enabled(self) -> bool:
        return self._enabled.is_set()

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def set_enabled(self, enabled: bool) -> None:
        if enabled:
            self._enabled.set()
        else:
            self._enabled.clear()
            self._edge_reset.set()
        self._logger.info("Idle detection %s", "enabled" if enabled else "disabled")

    def start(self) -> None:
        if self.is_running:
            self._logger.warning("Idle watcher is already running")
            return

        self._stop_event.clear()
        self._thread = threading.Thread(
            target=self._run,
            daemon=True,
            name="idle-watcher",
        )
        self._thread.start()
        self._logger.info(
            "Idle watcher started (interval=%.0fs, threshold=%ss)",
            self._config.poll_interval_seconds,
            self._config.threshold_seconds,
        )

    def stop(self, timeout_seconds: float = 5.0) -> None:
        if self._thread is None:
            return

        self._stop_event.set()
        self._thread.join(timeout=timeout_seconds)
        if self._thread.is_alive():
            self._logger.error(
                "Idle watcher thread did not stop within %.1fs",
                timeout_seconds,
            )
        self._thread = None

    def tick(self) -> Optional[str]:
        """Run one polling cycle; returns the emitted event name, if any."""
        if self._edge_reset.is_set():
            self._edge_reset.clear()
            self._was_idle = False
        if not self._enabled.is_set():
            return None

        try:
            idle_ms = self._oracle.get_session_idle_time_ms()
        except IdleOracleError as error:
            self._logger.debug("Idle time unavailable: %s", error)
            return None

        if not self._enabled.is_set():
            return None

        is_idle = idle_ms // 1000 >= self._config.threshold_seconds

        event: Optional[str] = None
        if is_idle and not self._was_idle:
            event = EVENT_IDLE_PAUSE
        elif not is_idle and self._was_idle:
            event = EVENT_IDLE_RESUME
        self._was_idle = is_idle

        if event is not None:
            self._logger.info("User %s", "went idle" if is_idle else "returned")
            self._publisher.publish(event)
        return event

    def _run(self) -> None:
        try:
            while not self._stop_event.wait(self._config.poll_interval_seconds):
                self.tick()
        finally:
            close = getattr(self._oracle, "close", None)
            if callable(close):
                close()
