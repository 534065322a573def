"""
Port interfaces - Protocol definitions for infrastructure abstraction.

This module defines the interfaces (ports) that the verification domain
requires from infrastructure. Adapters implement these protocols.
"""

from collections.abc import Callable
from enum import Enum
from typing import Protocol


class FailureKind(str, Enum):
    """
    Classification of verification failures.

    VALIDATION is produced locally and never reaches the network.
    The remaining kinds classify rejections from the verification service;
    UNKNOWN is handled the same way as INVALID_CODE.
    """

    VALIDATION = "validation"
    INVALID_CODE = "invalid_code"
    EXPIRED_CODE = "expired_code"
    RATE_LIMITED = "rate_limited"
    UNKNOWN = "unknown"


class VerificationApi(Protocol):
    """Port interface for the remote verification service."""

    async def verify_email(self, email: str, code: str) -> None:
        """
        Confirm an email address with a one-time code.

        Args:
            email: Email address being verified
            code: 6-digit one-time code

        Raises:
            InvalidCode: Code does not match
            CodeExpired: Code is past its expiry
            UnknownFailure: Any other rejection or transport failure
        """
        ...

    async def resend_verification_code(self, email: str) -> None:
        """
        Ask the service to issue a fresh one-time code.

        Args:
            email: Email address to send the new code to

        Raises:
            RateLimited: Resend cooldown still active on the server
            UnknownFailure: Any other rejection or transport failure
        """
        ...


class TickHandle(Protocol):
    """Handle for a recurring callback registered with a TickScheduler."""

    def cancel(self) -> None:
        """Stop the recurring callback. Pending invocations become no-ops."""
        ...


class TickScheduler(Protocol):
    """Port interface for a recurring clock on the session's event loop."""

    def call_every(self, interval: float, callback: Callable[[], None]) -> TickHandle:
        """
        Invoke callback every interval seconds until the handle is cancelled.

        The first invocation happens one interval after registration.
        """
        ...
