"""Desktop idle-time oracle backed by the freedesktop ScreenSaver interface."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Optional, Protocol

from dbus_fast import Message

from contracts.bus_protocol import (
    METHOD_GET_SESSION_IDLE_TIME,
    SCREENSAVER_BUS_NAME,
    SCREENSAVER_INTERFACE,
    SCREENSAVER_OBJECT_PATH,
)
from control.bus import (
    BusFactory,
    connect_session_bus,
    describe_error_reply,
    is_error_reply,
)

from .config import DEFAULT_QUERY_TIMEOUT_SECONDS
from .errors import IdleOracleError


class IdleOracleLike(Protocol):
    def get_session_idle_time_ms(self) -> int:
        ...


class ScreenSaverIdleOracle:
    """Blocking wrapper around `GetSessionIdleTime` for a single polling thread.

    The oracle owns a private event loop; it must only be called from one
    thread at a time. The bus connection is opened lazily and dropped after
    any failure so the next query reconnects.
    """

    def __init__(
        self,
        *,
        query_timeout_seconds: float = DEFAULT_QUERY_TIMEOUT_SECONDS,
        logger: Optional[logging.Logger] = None,
        bus_factory: Optional[BusFactory] = None,
    ):
        self._query_timeout_seconds = query_timeout_seconds
        self._logger = logger or logging.getLogger("idle.oracle")
        self._bus_factory = bus_factory or connect_session_bus
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._bus: Any = None

    def get_session_idle_time_ms(self) -> int:
        if self._loop is None or self._loop.is_closed():
            self._loop = asyncio.new_event_loop()

        try:
            return self._loop.run_until_complete(
                asyncio.wait_for(self._query(), timeout=self._query_timeout_seconds)
            )
        except IdleOracleError:
            self._drop_connection()
            raise
        except asyncio.TimeoutError as error:
            self._drop_connection()
            raise IdleOracleError(
                f"Idle time query timed out after {self._query_timeout_seconds:.1f}s"
            ) from error
        except Exception as error:
            self._drop_connection()
            raise IdleOracleError(f"Idle time query failed: {error}") from error

    def close(self) -> None:
        self._drop_connection()
        if self._loop is not None and not self._loop.is_closed():
            self._loop.close()
        self._loop = None

    async def _query(self) -> int:
        if self._bus is None:
            self._bus = await self._bus_factory()
            self._logger.debug("Connected to session bus for idle queries")

        reply = await self._bus.call(
            Message(
                destination=SCREENSAVER_BUS_NAME,
                path=SCREENSAVER_OBJECT_PATH,
                interface=SCREENSAVER_INTERFACE,
                member=METHOD_GET_SESSION_IDLE_TIME,
            )
        )
        if reply is None:
            raise IdleOracleError("Idle time query returned no reply")
        if is_error_reply(reply):
            raise IdleOracleError(describe_error_reply(reply))
        value = reply.body[0] if reply.body else None
        if isinstance(value, bool) or not isinstance(value, int):
            raise IdleOracleError(f"Unexpected idle time reply: {reply.body!r}")
        return value

    def _drop_connection(self) -> None:
        bus, self._bus = self._bus, None
        if bus is None:
            return
        try:
            bus.disconnect()
        except Exception as error:
            self._logger.debug("Ignoring idle oracle disconnect failure: %s", error)
