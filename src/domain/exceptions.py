"""
Domain exceptions - Semantic error types for email verification.

This module defines the failures the verification API port may raise.
Adapters translate transport-level problems into these types so the
session controller never sees infrastructure details.
"""

from .ports import FailureKind


class VerificationError(Exception):
    """Base class for verification domain errors."""

    pass


class VerificationApiError(VerificationError):
    """
    Rejection reported by the verification service.

    The message is the human-readable text the service returned and is
    shown to the user verbatim. Subclasses pin the failure kind.
    """

    kind: FailureKind = FailureKind.UNKNOWN

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidCode(VerificationApiError):
    """Submitted code does not match the issued one."""

    kind = FailureKind.INVALID_CODE


class CodeExpired(VerificationApiError):
    """Issued code is past its expiry; a new one must be requested."""

    kind = FailureKind.EXPIRED_CODE


class RateLimited(VerificationApiError):
    """Service refused a resend because the cooldown is still active."""

    kind = FailureKind.RATE_LIMITED


class UnknownFailure(VerificationApiError):
    """Any other rejection, including an unreachable service."""

    kind = FailureKind.UNKNOWN


class SessionNotFound(VerificationError):
    """No live verification session exists for the given id."""

    pass
