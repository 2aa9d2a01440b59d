from __future__ import annotations

import asyncio
import contextlib
import logging
from typing import Callable, Optional
from urllib.parse import urlsplit

from websockets.asyncio.server import ServerConnection, serve
from websockets.datastructures import Headers
from websockets.exceptions import ConnectionClosed
from websockets.http11 import Request, Response

from contracts.ui_protocol import EVENT_HELLO

from .config import HEALTHZ_PATH, UIServerConfig
from .events import make_event
from .loop_thread import LoopThreadService

MessageHandler = Callable[[str], None]


class UIServer(LoopThreadService):
    """Websocket endpoint the UI layer connects to.

    Control-plane events are broadcast to every connected client; text frames
    sent by clients are handed to the registered message handler on the
    server thread.
    """

    thread_name = "ui-server"
    service_label = "UI server"

    def __init__(
        self,
        config: UIServerConfig,
        logger: Optional[logging.Logger] = None,
        *,
        on_message: Optional[MessageHandler] = None,
    ):
        super().__init__(logger or logging.getLogger("ui_server"))
        self._config = config
        self._on_message = on_message
        self._clients: set[ServerConnection] = set()

    @property
    def host(self) -> str:
        return self._config.host

    @property
    def port(self) -> int:
        return self._config.port

    @property
    def websocket_path(self) -> str:
        return self._config.websocket_path

    def set_message_handler(self, handler: Optional[MessageHandler]) -> None:
        self._on_message = handler

    def publish(self, event_type: str, **payload) -> None:
        """Queue a broadcast onto the server loop without waiting for delivery."""
        loop = self._loop
        if not self.is_running or loop is None:
            return

        message = make_event(event_type, **payload)
        try:
            future = asyncio.run_coroutine_threadsafe(self._broadcast(message), loop)
        except RuntimeError:
            # Loop is closing.
            return
        future.add_done_callback(_discard_result)

    async def _serve(self) -> None:
        async with serve(
            self._handle_client,
            host=self._config.host,
            port=self._config.port,
            process_request=self._route_http,
            logger=self._logger,
        ):
            self._logger.info(
                "UI server listening on ws://%s:%d%s",
                self._config.host,
                self._config.port,
                self._config.websocket_path,
            )
            self._mark_started()
            await self._wait_for_stop()
            await self._disconnect_all()

    async def _handle_client(self, websocket: ServerConnection) -> None:
        self._clients.add(websocket)
        self._logger.info("UI client connected: %s", websocket.remote_address)
        try:
            await websocket.send(make_event(EVENT_HELLO, message="Control plane connected"))
            async for frame in websocket:
                self._dispatch(frame)
        except ConnectionClosed:
            pass
        finally:
            self._clients.discard(websocket)
            self._logger.info("UI client disconnected: %s", websocket.remote_address)

    def _dispatch(self, frame: str | bytes) -> None:
        self._logger.debug("Received from UI: %s", frame)
        if self._on_message is None:
            return
        if isinstance(frame, bytes):
            frame = frame.decode("utf-8", errors="replace")
        try:
            self._on_message(frame)
        except Exception as error:
            self._logger.error("UI message handler failed: %s", error, exc_info=True)

    async def _route_http(
        self,
        connection: ServerConnection,
        request: Request,
    ) -> Response | None:
        del connection
        path = urlsplit(request.path).path
        if path == self._config.websocket_path:
            return None
        if path == HEALTHZ_PATH:
            return _plain_response(200, "OK", b"ok\n")
        return _plain_response(404, "Not Found", b"not found\n")

    async def _broadcast(self, message: str) -> None:
        clients = tuple(self._clients)
        if not clients:
            return

        results = await asyncio.gather(
            *(client.send(message) for client in clients),
            return_exceptions=True,
        )
        for client, result in zip(clients, results):
            if isinstance(result, Exception):
                self._logger.warning("Dropping UI client after send failure: %s", result)
                self._clients.discard(client)

    async def _disconnect_all(self) -> None:
        clients = tuple(self._clients)
        self._clients.clear()
        await asyncio.gather(
            *(client.close(code=1001, reason="Server shutting down") for client in clients),
            return_exceptions=True,
        )


def _plain_response(status_code: int, reason: str, body: bytes) -> Response:
    headers = Headers()
    headers["Content-Type"] = "text/plain; charset=utf-8"
    headers["Content-Length"] = str(len(body))
    headers["Cache-Control"] = "no-store"
    return Response(status_code, reason, headers, body)


def _discard_result(future) -> None:
    with contextlib.suppress(Exception):
        future.result()
