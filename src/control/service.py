"""Session-bus service exposing timer commands and read-only timer state.

Annotations on the exported members are D-Bus type signatures consumed by
dbus-fast, so this module does not use postponed annotation evaluation.
"""

import asyncio
import logging
from typing import Any, Optional

from dbus_fast import NameFlag, PropertyAccess, RequestNameReply
from dbus_fast.service import ServiceInterface, dbus_property, method

from contracts.ui_protocol import (
    EVENT_EXTEND,
    EVENT_RESET,
    EVENT_SKIP,
    EVENT_START,
    EVENT_STOP,
    EVENT_TOGGLE,
    EventPublisher,
)
from pomodoro import StateRegister
from server.loop_thread import LoopThreadService

from .bus import BusFactory, connect_session_bus
from .config import ControlConfig
from .errors import (
    ControlRegistrationError,
    ControlServiceError,
    ControlTransportError,
)


class ControlInterface(ServiceInterface):
    """Translates remote calls into UI events and answers property reads."""

    def __init__(
        self,
        register: StateRegister,
        publisher: EventPublisher,
        *,
        interface_name: str,
        logger: Optional[logging.Logger] = None,
    ):
        super().__init__(interface_name)
        self._register = register
        self._publisher = publisher
        self._logger = logger or logging.getLogger("control")

    @method()
    def Toggle(self):
        self._emit(EVENT_TOGGLE)

    @method()
    def Start(self):
        self._emit(EVENT_START)

    @method()
    def Stop(self):
        self._emit(EVENT_STOP)

    @method()
    def Skip(self):
        self._emit(EVENT_SKIP)

    @method()
    def Reset(self):
        self._emit(EVENT_RESET)

    @method()
    def Extend(self, seconds: "u"):
        self._emit(EVENT_EXTEND, seconds=int(seconds))

    @dbus_property(access=PropertyAccess.READ)
    def State(self) -> "s":
        return self._register.read().mode.value

    @dbus_property(access=PropertyAccess.READ)
    def TimeLeft(self) -> "u":
        return self._register.read().time_left_seconds

    @dbus_property(access=PropertyAccess.READ)
    def IsActive(self) -> "b":
        return self._register.read().is_active

    @dbus_property(access=PropertyAccess.READ)
    def SessionsCompleted(self) -> "u":
        return self._register.read().sessions_completed

    def _emit(self, event_type: str, **payload: Any) -> None:
        self._logger.info("D-Bus command received: %s %s", event_type, payload or "")
        self._publisher.publish(event_type, **payload)


class ControlService(LoopThreadService):
    """Keeps the control interface exported on the session bus until stopped."""

    thread_name = "dbus-control"
    service_label = "Control service"

    def __init__(
        self,
        register: StateRegister,
        publisher: EventPublisher,
        config: Optional[ControlConfig] = None,
        logger: Optional[logging.Logger] = None,
        *,
        bus_factory: Optional[BusFactory] = None,
    ):
        super().__init__(logger or logging.getLogger("control"))
        self._config = config or ControlConfig()
        self._bus_factory = bus_factory or connect_session_bus
        self._interface = ControlInterface(
            register,
            publisher,
            interface_name=self._config.interface_name,
            logger=self._logger,
        )

    @property
    def interface(self) -> ControlInterface:
        return self._interface

    def _startup_failure(self, error: Exception) -> Exception:
        if isinstance(error, ControlServiceError):
            return error
        return ControlServiceError(f"Control service failed: {error}")

    async def _serve(self) -> None:
        bus = await self._connect()
        try:
            bus.export(self._config.object_path, self._interface)
            reply = await bus.request_name(self._config.bus_name, NameFlag.DO_NOT_QUEUE)
            if reply not in (
                RequestNameReply.PRIMARY_OWNER,
                RequestNameReply.ALREADY_OWNER,
            ):
                raise ControlRegistrationError(
                    f"Bus name {self._config.bus_name} is already owned "
                    "(is another instance running?)"
                )

            self._logger.info(
                "Control service registered as %s at %s",
                self._config.bus_name,
                self._config.object_path,
            )
            self._mark_started()
            await self._wait_for_stop()
        finally:
            bus.disconnect()

    async def _connect(self) -> Any:
        timeout = self._config.connect_timeout_seconds
        try:
            return await asyncio.wait_for(self._bus_factory(), timeout=timeout)
        except asyncio.TimeoutError as error:
            raise ControlTransportError(
                f"Session bus connection timed out after {timeout:.1f}s"
            ) from error
        except Exception as error:
            raise ControlTransportError(f"Session bus unavailable: {error}") from error
