"""Cancellable delayed execution for re-evaluating form fields after edits."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable, Optional

logger = logging.getLogger(__name__)


class Debouncer:
    """Run at most one scheduled coroutine at a time, after a quiet interval.

    Each ``schedule()`` cancels the outstanding task, whether it is still
    waiting out the delay or already running, then starts a fresh one.
    """

    def __init__(self, delay: float) -> None:
        if delay < 0:
            raise ValueError("delay must be >= 0")
        self.delay = delay
        self._task: Optional[asyncio.Task] = None

    @property
    def pending(self) -> bool:
        """True while a scheduled call has not finished."""
        return self._task is not None and not self._task.done()

    def schedule(self, func: Callable[[], Awaitable[Any]]) -> asyncio.Task:
        """Cancel any outstanding call and schedule *func* after ``delay`` seconds.

        Must be called from within a running event loop.
        """
        self.cancel()
        self._task = asyncio.get_running_loop().create_task(self._run(func))
        return self._task

    def cancel(self) -> None:
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = None

    async def wait(self) -> None:
        """Wait for the outstanding call (if any) to finish or be cancelled."""
        while self._task is not None and not self._task.done():
            task = self._task
            try:
                await task
            except asyncio.CancelledError:
                current = asyncio.current_task()
                if current is not None and current.cancelling():
                    raise
                # superseded by a newer schedule(); keep waiting on that one
                if not task.cancelled():
                    raise

    async def _run(self, func: Callable[[], Awaitable[Any]]) -> Any:
        await asyncio.sleep(self.delay)
        try:
            return await func()
        except asyncio.CancelledError:
            raise
        except Exception:
            logger.exception("Debounced call failed")
            return None
