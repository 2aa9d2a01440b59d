"""Base for services that run a private asyncio loop on a daemon thread."""

from __future__ import annotations

import asyncio
import contextlib
import logging
import threading
from typing import Optional


class LoopThreadService:
    """Starts `_serve()` on its own loop and blocks `start()` until it is up.

    Subclasses call `self._mark_started()` once they are ready to accept work
    and then await `self._wait_for_stop()`. Any exception escaping `_serve()`
    before that point is re-raised from `start()` through `_startup_failure`.
    """

    thread_name = "loop-thread"
    service_label = "Service"

    def __init__(self, logger: logging.Logger):
        self._logger = logger
        self._thread: Optional[threading.Thread] = None
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._stop_async: Optional[asyncio.Event] = None
        self._started = threading.Event()
        self._startup_error: Optional[Exception] = None

    @property
    def is_running(self) -> bool:
        return (
            self._thread is not None
            and self._thread.is_alive()
            and self._started.is_set()
            and self._startup_error is None
        )

    def start(self, timeout_seconds: float = 5.0) -> None:
        if self.is_running:
            self._logger.warning("%s is already running", self.service_label)
            return

        self._startup_error = None
        self._started.clear()
        self._thread = threading.Thread(
            target=self._run_loop,
            daemon=True,
            name=self.thread_name,
        )
        self._thread.start()

        if not self._started.wait(timeout_seconds):
            raise self._startup_failure(
                TimeoutError(f"did not start within {timeout_seconds:.1f}s")
            )
        if self._startup_error is not None:
            raise self._startup_failure(self._startup_error)

    def stop(self, timeout_seconds: float = 5.0) -> None:
        if self._thread is None:
            return

        if self._loop is not None and self._stop_async is not None:
            with contextlib.suppress(RuntimeError):
                self._loop.call_soon_threadsafe(self._stop_async.set)

        self._thread.join(timeout=timeout_seconds)
        if self._thread.is_alive():
            self._logger.error(
                "%s thread did not stop within %.1fs",
                self.service_label,
                timeout_seconds,
            )

        self._thread = None
        self._loop = None
        self._stop_async = None

    def _startup_failure(self, error: Exception) -> Exception:
        return RuntimeError(f"{self.service_label} startup failed: {error}")

    async def _serve(self) -> None:
        raise NotImplementedError

    def _mark_started(self) -> None:
        self._started.set()

    async def _wait_for_stop(self) -> None:
        assert self._stop_async is not None
        await self._stop_async.wait()

    def _run_loop(self) -> None:
        loop = asyncio.new_event_loop()
        asyncio.set_event_loop(loop)
        self._loop = loop
        self._stop_async = asyncio.Event()

        try:
            loop.run_until_complete(self._serve())
        except Exception as error:
            self._startup_error = error
            self._logger.error("%s failed: %s", self.service_label, error)
            self._started.set()
        finally:
            pending = asyncio.all_tasks(loop)
            for task in pending:
                task.cancel()
            with contextlib.suppress(Exception):
                loop.run_until_complete(asyncio.gather(*pending, return_exceptions=True))
            loop.close()
