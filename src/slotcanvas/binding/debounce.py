"""Single-timer debouncer on the asyncio event loop."""

from __future__ import annotations

import asyncio
import inspect
import logging
from typing import Any, Awaitable, Callable, Optional, Union

from ..constants import DEBOUNCE_SECONDS

logger = logging.getLogger("slotcanvas.binding")

Callback = Callable[[], Union[Awaitable[Any], Any]]


class Debouncer:
    """Coalesce bursts of triggers into one callback run.

    There is at most one pending timer. ``trigger()`` cancels it and arms a
    new one, so the callback runs once, ``delay`` seconds after the last
    trigger. Async callbacks are scheduled as tasks.

    Usage:
        debouncer = Debouncer(0.3, refresh_preview)
        debouncer.trigger()
        debouncer.trigger()  # replaces the first timer
        await debouncer.flush()
    """

    def __init__(self, delay: float = DEBOUNCE_SECONDS, callback: Optional[Callback] = None):
        self.delay = delay
        self.callback = callback
        self._handle: Optional[asyncio.TimerHandle] = None
        self._task: Optional[asyncio.Task] = None

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def trigger(self) -> None:
        """Arm the timer, discarding any pending one."""
        self.cancel()
        loop = asyncio.get_running_loop()
        self._handle = loop.call_later(self.delay, self._fire)

    def cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _fire(self) -> None:
        self._handle = None
        if self.callback is None:
            return
        result = self.callback()
        if inspect.isawaitable(result):
            self._task = asyncio.ensure_future(result)
            self._task.add_done_callback(self._log_failure)

    @staticmethod
    def _log_failure(task: asyncio.Task) -> None:
        if not task.cancelled() and task.exception() is not None:
            logger.error(f"Debounced callback failed: {task.exception()!r}")

    async def wait(self) -> None:
        """Wait for the most recent callback run to finish."""
        if self._task is not None:
            await asyncio.shield(self._task)

    async def flush(self) -> None:
        """Run a pending callback now instead of at timer expiry."""
        if self._handle is not None:
            self.cancel()
            self._fire()
        await self.wait()
