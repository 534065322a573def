"""
Unit tests for the asyncio tick scheduler adapter.

Runs real loop callbacks with a short interval to verify recurring
firing, cancellation and the CooldownTimer integration.
"""

import asyncio

import pytest

from src.adapters.scheduling.asyncio_ticks import AsyncioTickScheduler, RepeatingTick
from src.domain.cooldown import CooldownTimer

INTERVAL = 0.01


class TestRepeatingTick:
    """Tests for RepeatingTick."""

    @pytest.mark.asyncio
    async def test_fires_repeatedly(self) -> None:
        """The callback keeps firing every interval."""
        calls: list[int] = []
        handle = AsyncioTickScheduler().call_every(INTERVAL, lambda: calls.append(1))

        await asyncio.sleep(INTERVAL * 6)
        handle.cancel()

        assert len(calls) >= 3

    @pytest.mark.asyncio
    async def test_cancel_stops_firing(self) -> None:
        """No callback runs after cancel()."""
        calls: list[int] = []
        handle = AsyncioTickScheduler().call_every(INTERVAL, lambda: calls.append(1))

        handle.cancel()
        await asyncio.sleep(INTERVAL * 4)

        assert calls == []
        assert handle.cancelled is True

    @pytest.mark.asyncio
    async def test_dequeued_fire_after_cancel_is_noop(self) -> None:
        """A fire already handed to the loop does nothing once cancelled."""
        calls: list[int] = []
        handle = RepeatingTick(asyncio.get_running_loop(), INTERVAL, lambda: calls.append(1))

        handle.cancel()
        handle._fire()

        assert calls == []

    @pytest.mark.asyncio
    async def test_failing_callback_stops_tick(self) -> None:
        """A callback that raises is logged and the tick stops."""

        def broken() -> None:
            raise RuntimeError("boom")

        handle = AsyncioTickScheduler().call_every(INTERVAL, broken)
        await asyncio.sleep(INTERVAL * 3)

        assert handle.cancelled is True

    def test_requires_running_loop(self) -> None:
        """Without an explicit loop, registration needs a running loop."""
        with pytest.raises(RuntimeError):
            AsyncioTickScheduler().call_every(INTERVAL, lambda: None)


class TestCooldownOnEventLoop:
    """CooldownTimer driven by the real asyncio scheduler."""

    @pytest.mark.asyncio
    async def test_countdown_reaches_zero(self) -> None:
        """The countdown elapses on the loop and allows resend."""
        timer = CooldownTimer(AsyncioTickScheduler(), interval=INTERVAL)
        timer.start(3)

        await asyncio.sleep(INTERVAL * 10)

        assert timer.remaining_seconds == 0
        assert timer.resend_allowed is True

    @pytest.mark.asyncio
    async def test_cancelled_countdown_freezes(self) -> None:
        """After cancel() the loop no longer moves the countdown."""
        timer = CooldownTimer(AsyncioTickScheduler(), interval=INTERVAL)
        timer.start(100)
        timer.cancel()

        await asyncio.sleep(INTERVAL * 5)

        assert timer.remaining_seconds == 100
