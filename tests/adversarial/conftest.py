"""
Shared fixtures for adversarial tests.

Provides a verification API double whose calls block until released,
so tests can pile commands onto an in-flight request.
"""

import asyncio
from unittest.mock import AsyncMock

import pytest

# Module-level marker for all adversarial tests
pytestmark = pytest.mark.adversarial


class GatedApi:
    """Verification API double that holds every call until release()."""

    def __init__(self) -> None:
        self.gate = asyncio.Event()
        self.verify_email = AsyncMock(side_effect=self._verify)
        self.resend_verification_code = AsyncMock(side_effect=self._resend)
        self.outcome: Exception | None = None

    def release(self, outcome: Exception | None = None) -> None:
        self.outcome = outcome
        self.gate.set()

    async def _verify(self, email: str, code: str) -> None:
        await self.gate.wait()
        if self.outcome is not None:
            raise self.outcome

    async def _resend(self, email: str) -> None:
        await self.gate.wait()
        if self.outcome is not None:
            raise self.outcome


@pytest.fixture
def gated_api() -> GatedApi:
    return GatedApi()
