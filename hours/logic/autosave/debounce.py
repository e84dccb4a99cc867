"""Single-slot delayed task used for debounced auto-save.

At most one timer is armed at a time: every ``trigger()`` replaces the
pending timer, so a burst of edits collapses into one callback run after
the last edit. A callback that has already started is never cancelled; if
it finishes after a newer trigger it is simply superseded by the next run.
"""
import asyncio
import logging
from typing import Awaitable, Callable, Optional, Set

logger = logging.getLogger(__name__)


class DebouncedTask:
    def __init__(self, callback: Callable[[], Awaitable[None]], delay: float):
        self._callback = callback
        self.delay = delay
        self._timer: Optional[asyncio.Task] = None
        self._running: Set[asyncio.Task] = set()

    @property
    def pending(self) -> bool:
        return self._timer is not None and not self._timer.done()

    @property
    def running(self) -> bool:
        return bool(self._running)

    def trigger(self) -> None:
        """Arm the timer, replacing any timer that is still waiting."""
        self.cancel()
        self._timer = asyncio.get_running_loop().create_task(self._wait_then_fire())

    def cancel(self) -> None:
        if self.pending:
            self._timer.cancel()
        self._timer = None

    async def flush(self) -> None:
        """Run the pending callback now instead of waiting for the timer."""
        if not self.pending:
            return
        self.cancel()
        await self._callback()

    async def wait_idle(self) -> None:
        """Wait until no timer is armed and no callback is running."""
        while self.pending or self._running:
            tasks = list(self._running)
            if self.pending:
                tasks.append(self._timer)
            await asyncio.gather(*tasks, return_exceptions=True)

    async def _wait_then_fire(self) -> None:
        await asyncio.sleep(self.delay)
        self._timer = None
        task = asyncio.get_running_loop().create_task(self._callback())
        self._running.add(task)
        task.add_done_callback(self._finished)

    def _finished(self, task: asyncio.Task) -> None:
        self._running.discard(task)
        if not task.cancelled() and task.exception() is not None:
            logger.error("Debounced callback failed: %s", task.exception())


__all__ = ['DebouncedTask']
