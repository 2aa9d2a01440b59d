"""One-shot session-bus client for the running pomodoro control service."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Literal, Optional, TypeVar

from dbus_fast import Message, MessageFlag, Variant

from contracts.bus_protocol import (
    DBUS_BUS_NAME,
    DBUS_INTERFACE,
    DBUS_OBJECT_PATH,
    DBUS_PROPERTIES_INTERFACE,
    METHOD_EXTEND,
    METHOD_RESET,
    METHOD_SKIP,
    METHOD_START,
    METHOD_STOP,
    METHOD_TOGGLE,
    STATUS_PROPERTIES,
    U32_MAX,
)

from .bus import (
    BusFactory,
    MessageBusLike,
    connect_session_bus,
    describe_error_reply,
    is_error_reply,
)
from .config import ControlConfig
from .errors import ControlCallError, ControlNotRunningError
from .labels import DEFAULT_LANGUAGE, format_status_line

ControlCommand = Literal["toggle", "start", "stop", "skip", "reset", "extend"]

DEFAULT_EXTEND_SECONDS = 60

COMMAND_METHODS: dict[str, str] = {
    "toggle": METHOD_TOGGLE,
    "start": METHOD_START,
    "stop": METHOD_STOP,
    "skip": METHOD_SKIP,
    "reset": METHOD_RESET,
    "extend": METHOD_EXTEND,
}

_T = TypeVar("_T")


@dataclass(frozen=True)
class ControlStatus:
    """Property values read from the running instance."""
    state: str
    time_left_seconds: int
    is_active: bool
    sessions_completed: int

    def format(self, language: str = DEFAULT_LANGUAGE) -> str:
        return format_status_line(
            mode=self.state,
            time_left_seconds=self.time_left_seconds,
            is_active=self.is_active,
            sessions_completed=self.sessions_completed,
            language=language,
        )


class ControlClient:
    """Connect, issue one call or status read, disconnect. Keeps no state."""

    def __init__(
        self,
        config: Optional[ControlConfig] = None,
        logger: Optional[logging.Logger] = None,
        *,
        bus_factory: Optional[BusFactory] = None,
    ):
        self._config = config or ControlConfig()
        self._logger = logger or logging.getLogger("control.client")
        self._bus_factory = bus_factory or connect_session_bus

    @property
    def config(self) -> ControlConfig:
        return self._config

    def send(self, command: ControlCommand, *, seconds: int = DEFAULT_EXTEND_SECONDS) -> None:
        member = COMMAND_METHODS.get(command)
        if member is None:
            raise ValueError(f"Unsupported command: {command!r}")
        if command == "extend" and not 0 <= int(seconds) <= U32_MAX:
            raise ValueError(f"seconds must be in [0, {U32_MAX}], got: {seconds}")

        async def _call(bus: MessageBusLike) -> None:
            if command == "extend":
                msg = self._method_call(member, signature="u", body=[int(seconds)])
            else:
                msg = self._method_call(member)
            await self._call(bus, msg)

        asyncio.run(self._session(_call))

    def status(self) -> ControlStatus:
        async def _read(bus: MessageBusLike) -> ControlStatus:
            values = [await self._get_property(bus, name) for name in STATUS_PROPERTIES]
            state, time_left, is_active, sessions = values
            return ControlStatus(
                state=str(state),
                time_left_seconds=int(time_left),
                is_active=bool(is_active),
                sessions_completed=int(sessions),
            )

        return asyncio.run(self._session(_read))

    async def _session(self, action: Callable[[MessageBusLike], Awaitable[_T]]) -> _T:
        bus = await self._connect()
        try:
            await self._ensure_service(bus)
            return await action(bus)
        finally:
            bus.disconnect()

    async def _connect(self) -> MessageBusLike:
        timeout = self._config.connect_timeout_seconds
        try:
            return await asyncio.wait_for(self._bus_factory(), timeout=timeout)
        except asyncio.TimeoutError as error:
            self._logger.debug("Session bus connect timed out after %.1fs", timeout)
            raise ControlNotRunningError("Session bus connection timed out") from error
        except Exception as error:
            self._logger.debug("Session bus unavailable: %s", error)
            raise ControlNotRunningError(f"Session bus unavailable: {error}") from error

    async def _ensure_service(self, bus: MessageBusLike) -> None:
        msg = Message(
            destination=DBUS_BUS_NAME,
            path=DBUS_OBJECT_PATH,
            interface=DBUS_INTERFACE,
            member="NameHasOwner",
            signature="s",
            body=[self._config.bus_name],
        )
        reply = await self._call(bus, msg)
        if not reply.body or not reply.body[0]:
            raise ControlNotRunningError(
                f"No process owns {self._config.bus_name} on the session bus"
            )

    async def _get_property(self, bus: MessageBusLike, name: str) -> Any:
        msg = Message(
            destination=self._config.bus_name,
            path=self._config.object_path,
            interface=DBUS_PROPERTIES_INTERFACE,
            member="Get",
            signature="ss",
            body=[self._config.interface_name, name],
        )
        reply = await self._call(bus, msg)
        if not reply.body:
            raise ControlCallError(f"Empty reply for property {name}")
        value = reply.body[0]
        return value.value if isinstance(value, Variant) else value

    def _method_call(
        self,
        member: str,
        *,
        signature: str = "",
        body: Optional[list[Any]] = None,
    ) -> Message:
        return Message(
            destination=self._config.bus_name,
            path=self._config.object_path,
            interface=self._config.interface_name,
            member=member,
            signature=signature,
            body=body or [],
            flags=MessageFlag.NO_REPLY_EXPECTED,
        )

    async def _call(self, bus: MessageBusLike, msg: Message) -> Any:
        try:
            reply = await bus.call(msg)
        except Exception as error:
            raise ControlCallError(str(error)) from error
        if is_error_reply(reply):
            raise ControlCallError(describe_error_reply(reply))
        return reply
