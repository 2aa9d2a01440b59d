"""Session bus connection helpers shared by the control plane and idle oracle."""

from __future__ import annotations

from typing import Any, Awaitable, Callable, Protocol

from dbus_fast import BusType, Message, MessageType
from dbus_fast.aio import MessageBus


class MessageBusLike(Protocol):
    async def call(self, msg: Message) -> Any:
        ...

    def disconnect(self) -> None:
        ...


BusFactory = Callable[[], Awaitable[Any]]


async def connect_session_bus() -> MessageBus:
    """Open a fresh connection to the user's session bus."""
    return await MessageBus(bus_type=BusType.SESSION).connect()


def is_error_reply(reply: Any) -> bool:
    return reply is not None and reply.message_type == MessageType.ERROR


def describe_error_reply(reply: Any) -> str:
    """Render a D-Bus error reply as `<error name>: <message>`."""
    detail = ""
    if reply.body and isinstance(reply.body[0], str):
        detail = reply.body[0]
    if detail:
        return f"{reply.error_name}: {detail}"
    return str(reply.error_name)
