"""
Session registry - Live verification sessions hosted by the API.

Each verification screen instance gets its own controller, timer and
in-flight request. The registry wires those together and guarantees
every timer is cancelled when its session goes away: on success, on an
explicit close, after an idle cutoff, and at application shutdown.
"""

import logging
import secrets
import time
from collections.abc import Callable
from dataclasses import dataclass, field

from src.domain.cooldown import CooldownTimer
from src.domain.exceptions import SessionNotFound
from src.domain.ports import TickScheduler, VerificationApi
from src.domain.reconciler import CooldownReconciler
from src.domain.verification import VerificationSessionController

logger = logging.getLogger(__name__)


@dataclass
class SessionRegistry:
    """
    In-memory map of session id to controller.

    A session is evicted once it is verified, and a session nobody has
    touched for idle_timeout seconds is treated as an abandoned screen.
    """

    api: VerificationApi
    scheduler: TickScheduler
    cooldown_seconds: int = 300
    tick_interval: float = 1.0
    idle_timeout: float = 1800.0
    clock: Callable[[], float] = time.monotonic
    _sessions: dict[str, VerificationSessionController] = field(default_factory=dict)
    _last_seen: dict[str, float] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self._sessions)

    def open(
        self,
        email: str | None = None,
        code_just_sent: bool = True,
        email_locked: bool | None = None,
    ) -> tuple[str, VerificationSessionController]:
        """
        Create and start a verification session.

        Args:
            email: Email handed over by the previous step
            code_just_sent: Start with the resend cooldown already running
            email_locked: Fix the email for the session; defaults to True
                when an email is given. Locked without an email opens the
                session in FAILED_TERMINAL.

        Returns:
            Tuple of (session_id, controller)
        """
        self.evict_idle()

        session_id = secrets.token_urlsafe(16)
        controller = VerificationSessionController(
            api=self.api,
            timer=CooldownTimer(self.scheduler, interval=self.tick_interval),
            on_verified=lambda: self._verified(session_id),
            email=email,
            email_locked=email_locked,
            reconciler=CooldownReconciler(default_cooldown_seconds=self.cooldown_seconds),
        )
        controller.open(code_just_sent=code_just_sent)
        self._sessions[session_id] = controller
        self._last_seen[session_id] = self.clock()
        return session_id, controller

    def get(self, session_id: str) -> VerificationSessionController:
        """
        Look up a live session and mark it as in use.

        Raises:
            SessionNotFound: If no live session has this id
        """
        self.evict_idle()
        try:
            controller = self._sessions[session_id]
        except KeyError:
            raise SessionNotFound(session_id) from None
        self._last_seen[session_id] = self.clock()
        return controller

    def close(self, session_id: str) -> None:
        """
        Tear down a session and forget it.

        Raises:
            SessionNotFound: If no live session has this id
        """
        controller = self._discard(session_id)
        if controller is None:
            raise SessionNotFound(session_id)
        controller.close()

    def close_all(self) -> None:
        while self._sessions:
            session_id = next(iter(self._sessions))
            self._discard(session_id).close()

    def evict_idle(self) -> int:
        """
        Close sessions untouched for longer than idle_timeout.

        Returns:
            Number of sessions evicted
        """
        cutoff = self.clock() - self.idle_timeout
        stale = [sid for sid, seen in self._last_seen.items() if seen < cutoff]
        for session_id in stale:
            self._discard(session_id).close()
        if stale:
            logger.info("[VERIFICATION] Evicted %d idle session(s)", len(stale))
        return len(stale)

    def _discard(self, session_id: str) -> VerificationSessionController | None:
        self._last_seen.pop(session_id, None)
        return self._sessions.pop(session_id, None)

    def _verified(self, session_id: str) -> None:
        # The controller object stays readable, so the caller can still
        # render its SUCCEEDED snapshot after eviction.
        controller = self._discard(session_id)
        if controller is not None:
            controller.close()
        logger.info("[VERIFICATION] Session %s verified", session_id)
