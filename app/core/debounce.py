"""Cancellable delayed execution for keystroke-driven work."""

from __future__ import annotations

import asyncio
from typing import Awaitable, Callable, Optional, Set

from app.core.logging import get_logger

log = get_logger("debounce")


class Debouncer:
    """Runs only the most recent scheduled call once its delay has elapsed.

    Each ``schedule()`` cancels the call still waiting out its delay and
    starts a new one. Superseded calls are dropped, never queued. A call
    whose delay has already elapsed is left to finish.
    """

    def __init__(self, delay: float):
        self.delay = max(delay, 0.0)
        self._pending: Optional[asyncio.Task] = None
        self._running: Set[asyncio.Task] = set()

    @property
    def pending(self) -> bool:
        return self._pending is not None and not self._pending.done()

    def schedule(self, action: Callable[[], Awaitable[None]]) -> asyncio.Task:
        self.cancel()
        self._pending = asyncio.create_task(self._run_later(action))
        return self._pending

    def cancel(self) -> bool:
        """Drop the call still in its delay, if any. Returns True when one was dropped."""
        task, self._pending = self._pending, None
        if task is None or task.done():
            return False
        task.cancel()
        return True

    async def _run_later(self, action: Callable[[], Awaitable[None]]) -> None:
        await asyncio.sleep(self.delay)

        # Delay elapsed: detach so a newer schedule() no longer interrupts this call
        task = asyncio.current_task()
        if self._pending is task:
            self._pending = None
        self._running.add(task)
        try:
            await action()
        except asyncio.CancelledError:
            raise
        except Exception as exc:
            log.exception(f"Debounced action failed: {exc}")
        finally:
            self._running.discard(task)

    async def aclose(self) -> None:
        """Cancel everything, including calls already past their delay."""
        tasks = [task for task in [self._pending, *self._running] if task is not None and not task.done()]
        self._pending = None
        for task in tasks:
            task.cancel()
        for task in tasks:
            try:
                await task
            except asyncio.CancelledError:
                pass
