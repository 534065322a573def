"""
Shared test fixtures and configuration.

This module provides pytest fixtures for:
- A manually driven tick scheduler (deterministic countdowns)
- A scripted verification API double
- Controller factories wired to both
"""

from collections.abc import Callable
from unittest.mock import AsyncMock, Mock

import pytest

from src.domain.cooldown import CooldownTimer
from src.domain.verification import VerificationSessionController


class ManualTick:
    """TickHandle whose firing is driven by ManualTickScheduler.advance()."""

    def __init__(self, callback: Callable[[], None]) -> None:
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualTickScheduler:
    """TickScheduler that only fires when the test advances it."""

    def __init__(self) -> None:
        self.ticks: list[ManualTick] = []

    def call_every(self, interval: float, callback: Callable[[], None]) -> ManualTick:
        tick = ManualTick(callback)
        self.ticks.append(tick)
        return tick

    @property
    def active(self) -> list[ManualTick]:
        return [t for t in self.ticks if not t.cancelled]

    def advance(self, seconds: int = 1) -> None:
        """Fire every active tick once per elapsed second."""
        for _ in range(seconds):
            for tick in self.active:
                tick.callback()


@pytest.fixture
def scheduler() -> ManualTickScheduler:
    return ManualTickScheduler()


@pytest.fixture
def timer(scheduler: ManualTickScheduler) -> CooldownTimer:
    return CooldownTimer(scheduler)


@pytest.fixture
def api() -> Mock:
    """Verification API double; both calls succeed unless a side_effect is set."""
    double = Mock()
    double.verify_email = AsyncMock(return_value=None)
    double.resend_verification_code = AsyncMock(return_value=None)
    return double


@pytest.fixture
def on_verified() -> Mock:
    return Mock()


@pytest.fixture
def make_controller(
    api: Mock, timer: CooldownTimer, on_verified: Mock
) -> Callable[..., VerificationSessionController]:
    """Build a controller for the shared api/timer doubles."""

    def factory(**kwargs) -> VerificationSessionController:
        kwargs.setdefault("email", "user@x.kz")
        return VerificationSessionController(
            api=api, timer=timer, on_verified=on_verified, **kwargs
        )

    return factory
