"""Startup and shutdown of the control-plane components."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from app_config import AppConfig
from control import ControlConfig, ControlService, ControlServiceError
from control.bus import BusFactory
from idle import IdleConfig, IdleOracleLike, IdleWatcher, ScreenSaverIdleOracle
from pomodoro import StateRegister
from server import UIServer

from .bridge import UIBridge
from .ui import RuntimeUIPublisher


@dataclass(frozen=True)
class ControlPlaneBootstrap:
    """Dependency bundle required to construct the control plane."""
    logger: logging.Logger
    app_config: AppConfig
    ui_server: Optional[UIServer] = None
    idle_oracle: Optional[IdleOracleLike] = None
    control_bus_factory: Optional[BusFactory] = None


class ControlPlane:
    """Owns the register, event sink, D-Bus service and idle watcher.

    Every component failure at startup degrades the matching feature and is
    logged; none of them stops the application.
    """

    def __init__(self, bootstrap: ControlPlaneBootstrap):
        self._logger = bootstrap.logger
        app_config = bootstrap.app_config
        idle_config = IdleConfig.from_settings(app_config.idle)
        control_config = ControlConfig.from_settings(app_config.control)

        self._ui_server = bootstrap.ui_server
        self.register = StateRegister(logger=logging.getLogger("pomodoro.register"))
        self.publisher = RuntimeUIPublisher(bootstrap.ui_server)

        oracle = bootstrap.idle_oracle or ScreenSaverIdleOracle(
            query_timeout_seconds=idle_config.query_timeout_seconds,
            logger=logging.getLogger("idle.oracle"),
        )
        self.idle_watcher = IdleWatcher(
            oracle,
            self.publisher,
            idle_config,
            logger=logging.getLogger("idle"),
        )

        self.control_service: Optional[ControlService] = None
        if control_config.enabled:
            self.control_service = ControlService(
                self.register,
                self.publisher,
                control_config,
                logger=logging.getLogger("control"),
                bus_factory=bootstrap.control_bus_factory,
            )

        self.bridge = UIBridge(
            self.register,
            self.idle_watcher,
            logger=logging.getLogger("runtime.bridge"),
        )
        if self._ui_server is not None:
            self._ui_server.set_message_handler(self.bridge.handle_message)

    @property
    def remote_control_available(self) -> bool:
        return self.control_service is not None and self.control_service.is_running

    def start(self) -> None:
        if self._ui_server is not None:
            try:
                self._logger.info("Starting UI server...")
                self._ui_server.start()
            except Exception as error:
                self._logger.error("UI server startup failed: %s", error)
                self._logger.warning("Continuing without UI server.")
                self.publisher.attach(None)
                self._ui_server = None

        if self.control_service is not None:
            try:
                self.control_service.start()
            except ControlServiceError as error:
                self._logger.error("D-Bus service failed to start: %s", error)
                self._logger.warning("Continuing without remote control.")
        else:
            self._logger.info("Remote control disabled via control.enabled=false")

        self.idle_watcher.start()

    def stop(self) -> None:
        self.idle_watcher.stop()
        if self.control_service is not None:
            self.control_service.stop()
        if self._ui_server is not None:
            self._ui_server.stop()
