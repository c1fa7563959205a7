"""Periodic tick scheduling for dwell sessions."""

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Protocol
from uuid import UUID

from adventure_tracker.domain.detection import TICK_INTERVAL_SECONDS

_logger = logging.getLogger(__name__)


class TickScheduler(Protocol):
    """Schedules periodic ticks for the active dwell session."""

    def schedule(self, session_id: UUID) -> None:
        """Cancel any pending ticks and start ticking for a session."""

    def cancel(self) -> None:
        """Stop ticking."""


@dataclass
class AsyncioTickScheduler(TickScheduler):
    """Tick scheduler running one asyncio task per session.

    Requests may come from any thread; they are marshalled onto the attached
    event loop in order, so a cancel always lands before the next schedule.
    """

    interval_seconds: float = TICK_INTERVAL_SECONDS
    callback: Callable[[UUID], object] | None = None
    _loop: asyncio.AbstractEventLoop | None = field(default=None, init=False)
    _task: asyncio.Task[None] | None = field(default=None, init=False)

    def bind(self, callback: Callable[[UUID], object]) -> None:
        """Set the function invoked with the session id on every tick."""
        self.callback = callback

    def attach(self, loop: asyncio.AbstractEventLoop) -> None:
        """Attach the event loop that runs tick tasks."""
        self._loop = loop

    def schedule(self, session_id: UUID) -> None:
        """Restart ticking for a new session."""
        if self._loop is None or self._loop.is_closed():
            _logger.debug("Tick scheduler has no event loop; tick not scheduled")
            return
        self._loop.call_soon_threadsafe(self._restart, session_id)

    def cancel(self) -> None:
        """Stop the pending tick task."""
        if self._loop is None or self._loop.is_closed():
            return
        self._loop.call_soon_threadsafe(self._cancel_task)

    async def close(self) -> None:
        """Cancel the running task and detach from the loop."""
        task = self._task
        self._cancel_task()
        if task is not None:
            try:
                await task
            except asyncio.CancelledError:
                pass
        self._loop = None

    def _restart(self, session_id: UUID) -> None:
        self._cancel_task()
        self._task = asyncio.ensure_future(self._run(session_id), loop=self._loop)

    def _cancel_task(self) -> None:
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = None

    async def _run(self, session_id: UUID) -> None:
        while True:
            await asyncio.sleep(self.interval_seconds)
            if self.callback is None:
                continue
            try:
                self.callback(session_id)
            except Exception:
                _logger.exception(
                    "Dwell tick failed", extra={"session_id": str(session_id)}
                )
