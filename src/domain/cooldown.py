"""
Resend cooldown countdown.

The timer holds the client-side mirror of the server's resend rate limit.
It is pure state driven by a recurring tick from a TickScheduler; it
performs no I/O of its own.

Invariant: resend_allowed is exactly remaining_seconds == 0.
"""

import logging

from .ports import TickHandle, TickScheduler

logger = logging.getLogger(__name__)


def format_remaining(seconds: int) -> str:
    """Render seconds as M:SS, e.g. 65 -> "1:05", 5 -> "0:05"."""
    minutes, secs = divmod(max(seconds, 0), 60)
    return f"{minutes}:{secs:02d}"


class CooldownTimer:
    """
    Countdown governing when a resend becomes available.

    Each start() bumps a generation counter; ticks registered by an earlier
    start() carry the old generation and are ignored, so a superseded or
    cancelled schedule can never move the current countdown.
    """

    def __init__(self, scheduler: TickScheduler, interval: float = 1.0) -> None:
        """
        Args:
            scheduler: Source of the recurring tick
            interval: Seconds between ticks
        """
        self._scheduler = scheduler
        self._interval = interval
        self._remaining = 0
        self._handle: TickHandle | None = None
        self._generation = 0
        self._stopped = False

    @property
    def remaining_seconds(self) -> int:
        return self._remaining

    @property
    def running(self) -> bool:
        return self._remaining > 0

    @property
    def resend_allowed(self) -> bool:
        return not self.running

    @property
    def display(self) -> str:
        return format_remaining(self._remaining)

    def start(self, seconds: int) -> None:
        """
        (Re)arm the countdown to seconds.

        Replaces any countdown already running; the new value is not added
        to the old one.

        Raises:
            ValueError: If seconds is negative
        """
        if seconds < 0:
            raise ValueError(f"cooldown must be >= 0, got {seconds}")

        self._detach()
        self._generation += 1
        self._stopped = False
        self._remaining = seconds

        if seconds > 0:
            generation = self._generation
            self._handle = self._scheduler.call_every(
                self._interval, lambda: self._on_scheduled_tick(generation)
            )
        logger.debug("[COOLDOWN] Armed for %ss", seconds)

    def tick(self) -> None:
        """Advance the countdown by one second. No-op when not running."""
        if self._stopped or not self.running:
            return
        self._remaining -= 1
        if self._remaining == 0:
            self._detach()
            logger.debug("[COOLDOWN] Elapsed, resend available")

    def cancel(self) -> None:
        """
        Stop the recurring tick for session teardown.

        remaining_seconds keeps its last value for display; no further
        tick from any earlier start() will change it.
        """
        self._generation += 1
        self._stopped = True
        self._detach()

    def _on_scheduled_tick(self, generation: int) -> None:
        if generation != self._generation:
            return
        self.tick()

    def _detach(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
