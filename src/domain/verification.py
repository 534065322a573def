"""
Verification session controller - Email verification state machine.

This module orchestrates one email verification attempt sequence: code
entry, submission to the verification service, and rate-limited resends.

Session State Machine
=====================

States:
- ENTERING: User is typing the code (initial state)
- SUBMITTING: verify_email() call in flight
- RESENDING: resend_verification_code() call in flight
- SUCCEEDED: Terminal, email confirmed and host notified
- FAILED_TERMINAL: Email unknown and not editable; blocks submit/resend
  until set_email() supplies one

Transitions:
    ENTERING -> SUBMITTING        (submit with complete code and email)
    SUBMITTING -> SUCCEEDED       (service confirms)
    SUBMITTING -> ENTERING        (service rejects, last_error set)
    ENTERING -> RESENDING         (resend while cooldown elapsed)
    RESENDING -> ENTERING         (always, success or failure)
    FAILED_TERMINAL -> ENTERING   (set_email with a non-empty value)

All commands run on one event loop, so no two handlers touch a session at
once. While a call is in flight, further submit()/resend() calls are
no-ops. Results that arrive after close() are dropped.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from .code_input import is_complete, normalize_code
from .cooldown import CooldownTimer
from .exceptions import VerificationApiError
from .ports import FailureKind, VerificationApi
from .reconciler import CooldownReconciler

logger = logging.getLogger(__name__)

EMAIL_REQUIRED_MESSAGE = "Email is required"
CODE_INCOMPLETE_MESSAGE = "Enter the 6-digit verification code"


class Phase(str, Enum):
    """Phase of a verification session."""

    ENTERING = "ENTERING"
    SUBMITTING = "SUBMITTING"
    RESENDING = "RESENDING"
    SUCCEEDED = "SUCCEEDED"
    FAILED_TERMINAL = "FAILED_TERMINAL"


@dataclass(frozen=True)
class SessionError:
    """User-facing error attached to a session."""

    kind: FailureKind
    message: str


class VerificationSessionController:
    """
    Owns one verification session and its cooldown timer.

    The host reads phase, code, email, last_error and the cooldown
    properties, and drives the session through set_code(), set_email(),
    submit(), resend() and close(). Every command is safe to call
    repeatedly; the controller enforces its own guards.
    """

    def __init__(
        self,
        api: VerificationApi,
        timer: CooldownTimer,
        on_verified: Callable[[], None],
        email: str | None = None,
        email_locked: bool | None = None,
        reconciler: CooldownReconciler | None = None,
    ) -> None:
        """
        Args:
            api: Verification service port
            timer: Cooldown timer owned exclusively by this session
            on_verified: Called once when the email is confirmed
            email: Email supplied by an upstream step, if any
            email_locked: Whether the email is fixed for this session;
                defaults to True when an email was supplied
            reconciler: Rate-limit reconciler; defaults to a 300s window
        """
        self._api = api
        self._timer = timer
        self._on_verified = on_verified
        self._reconciler = reconciler or CooldownReconciler()

        self.email = (email or "").strip()
        self.email_locked = bool(self.email) if email_locked is None else email_locked
        self.code = ""
        self.phase = Phase.ENTERING
        self.last_error: SessionError | None = None
        self._live = True

        if self.email_locked and not self.email:
            self.phase = Phase.FAILED_TERMINAL
            self.last_error = SessionError(FailureKind.VALIDATION, EMAIL_REQUIRED_MESSAGE)

    @property
    def default_cooldown_seconds(self) -> int:
        return self._reconciler.default_cooldown_seconds

    @property
    def remaining_seconds(self) -> int:
        return self._timer.remaining_seconds

    @property
    def resend_allowed(self) -> bool:
        return self._timer.resend_allowed

    @property
    def cooldown_display(self) -> str:
        return self._timer.display

    @property
    def live(self) -> bool:
        return self._live

    @property
    def busy(self) -> bool:
        return self.phase in (Phase.SUBMITTING, Phase.RESENDING)

    @property
    def submit_enabled(self) -> bool:
        return self.phase is Phase.ENTERING and bool(self.email) and is_complete(self.code)

    @property
    def resend_enabled(self) -> bool:
        return self.phase is Phase.ENTERING and bool(self.email) and self.resend_allowed

    def open(self, code_just_sent: bool = True) -> None:
        """
        Start the session's cooldown.

        Args:
            code_just_sent: A code was issued right before entering the
                session (e.g. at registration), so resend starts blocked
                for the default window
        """
        self._timer.start(self.default_cooldown_seconds if code_just_sent else 0)
        logger.info("[VERIFICATION] Session opened for %s", self.email or "<no email>")

    def set_code(self, raw: str) -> None:
        """
        Replace the code with the normalized form of raw input.

        In FAILED_TERMINAL the missing-email error stays until set_email()
        resolves it.
        """
        if self._frozen():
            return
        self.code = normalize_code(raw)
        if self.phase is not Phase.FAILED_TERMINAL:
            self.last_error = None

    def set_email(self, raw: str) -> None:
        """
        Replace the email while it is still editable.

        In FAILED_TERMINAL a non-empty email unlocks the field and returns
        the session to ENTERING.
        """
        if self._frozen():
            return
        email = raw.strip()
        if self.phase is Phase.FAILED_TERMINAL:
            if not email:
                return
            self.email_locked = False
            self.phase = Phase.ENTERING
        elif self.email_locked:
            return
        self.email = email
        self.last_error = None

    async def submit(self) -> Phase:
        """
        Send the code to the verification service.

        Incomplete input is rejected locally without a network call.

        Returns:
            The phase after the call completes
        """
        if self._frozen() or self.phase is Phase.FAILED_TERMINAL:
            return self.phase
        if not self.email:
            self.last_error = SessionError(FailureKind.VALIDATION, EMAIL_REQUIRED_MESSAGE)
            return self.phase
        if not is_complete(self.code):
            self.last_error = SessionError(FailureKind.VALIDATION, CODE_INCOMPLETE_MESSAGE)
            return self.phase

        self.phase = Phase.SUBMITTING
        self.last_error = None
        email, code = self.email, self.code

        try:
            await self._api.verify_email(email, code)
        except VerificationApiError as exc:
            if self._accepting_result("verify"):
                self._submit_failed(exc)
        else:
            if self._accepting_result("verify"):
                self._submit_succeeded()
        finally:
            if self._live and self.phase is Phase.SUBMITTING:
                self.phase = Phase.ENTERING

        return self.phase

    async def resend(self) -> Phase:
        """
        Ask the verification service for a new code.

        A strict no-op while the cooldown is active or a call is in flight.

        Returns:
            The phase after the call completes
        """
        if self._frozen() or self.phase is Phase.FAILED_TERMINAL:
            return self.phase
        if not self.resend_allowed:
            logger.debug("[RESEND] Suppressed, %ss of cooldown left", self.remaining_seconds)
            return self.phase
        if not self.email:
            self.last_error = SessionError(FailureKind.VALIDATION, EMAIL_REQUIRED_MESSAGE)
            return self.phase

        self.phase = Phase.RESENDING
        self.last_error = None

        try:
            await self._api.resend_verification_code(self.email)
        except VerificationApiError as exc:
            if self._accepting_result("resend"):
                self.last_error = SessionError(exc.kind, exc.message)
                self._reconciler.reconcile(exc, self._timer)
        else:
            if self._accepting_result("resend"):
                self._timer.start(self.default_cooldown_seconds)
                self.code = ""
                logger.info("[RESEND] New code requested for %s", self.email)
        finally:
            if self._live and self.phase is Phase.RESENDING:
                self.phase = Phase.ENTERING

        return self.phase

    def close(self) -> None:
        """Tear the session down. Idempotent."""
        if not self._live:
            return
        self._live = False
        self._timer.cancel()
        logger.info("[VERIFICATION] Session closed for %s", self.email or "<no email>")

    def _submit_succeeded(self) -> None:
        self.phase = Phase.SUCCEEDED
        self._timer.cancel()
        logger.info("[VERIFICATION] Email verified: %s", self.email)
        self._on_verified()

    def _submit_failed(self, exc: VerificationApiError) -> None:
        self.phase = Phase.ENTERING
        self.last_error = SessionError(exc.kind, exc.message)
        if exc.kind is FailureKind.EXPIRED_CODE:
            self.code = ""
        logger.info("[VERIFICATION] Rejected (%s) for %s", exc.kind.value, self.email)

    def _frozen(self) -> bool:
        if not self._live or self.phase is Phase.SUCCEEDED:
            return True
        if self.busy:
            logger.debug("[VERIFICATION] Ignoring command while %s", self.phase.value)
            return True
        return False

    def _accepting_result(self, operation: str) -> bool:
        if not self._live:
            logger.debug("[VERIFICATION] Dropping late %s result for closed session", operation)
        return self._live
