"""
asyncio tick scheduler adapter - Implements TickScheduler protocol.

Recurring callbacks are chained loop.call_later() handles on the running
event loop, so ticks are serialized with request handling and never run
concurrently with a session command.
"""

import asyncio
import logging
from collections.abc import Callable

logger = logging.getLogger(__name__)


class RepeatingTick:
    """
    Self-rescheduling callback on an asyncio loop.

    Uses structural subtyping - implements TickHandle without inheriting it.
    """

    def __init__(
        self,
        loop: asyncio.AbstractEventLoop,
        interval: float,
        callback: Callable[[], None],
    ) -> None:
        self._loop = loop
        self._interval = interval
        self._callback = callback
        self._cancelled = False
        self._pending: asyncio.TimerHandle | None = loop.call_later(interval, self._fire)

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        self._cancelled = True
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None

    def _fire(self) -> None:
        # A fire already dequeued by the loop can still run after cancel().
        if self._cancelled:
            return
        self._pending = self._loop.call_later(self._interval, self._fire)
        try:
            self._callback()
        except Exception:
            logger.exception("[COOLDOWN] Tick callback failed, stopping")
            self.cancel()


class AsyncioTickScheduler:
    """
    Implements TickScheduler protocol on the running asyncio loop.

    Uses structural subtyping - no explicit inheritance from Protocol.
    The loop is looked up at registration time, so one scheduler can be
    created before the server loop starts and shared across sessions.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop

    def call_every(self, interval: float, callback: Callable[[], None]) -> RepeatingTick:
        loop = self._loop or asyncio.get_running_loop()
        return RepeatingTick(loop, interval, callback)
