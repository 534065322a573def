"""
Domain layer - Pure verification logic with zero framework imports.

This package contains the email verification state machine, the resend
cooldown countdown and its reconciliation with server rate-limit feedback.
It defines its own port interfaces for the verification service and the
tick clock, keeping infrastructure out of the domain.
"""

from .code_input import CODE_LENGTH, is_complete, normalize_code
from .cooldown import CooldownTimer, format_remaining
from .exceptions import (
    CodeExpired,
    InvalidCode,
    RateLimited,
    SessionNotFound,
    UnknownFailure,
    VerificationApiError,
    VerificationError,
)
from .ports import FailureKind, TickHandle, TickScheduler, VerificationApi
from .reconciler import DEFAULT_COOLDOWN_SECONDS, CooldownReconciler, parse_wait_seconds
from .verification import Phase, SessionError, VerificationSessionController

__all__ = [
    "CODE_LENGTH",
    "CodeExpired",
    "CooldownReconciler",
    "CooldownTimer",
    "DEFAULT_COOLDOWN_SECONDS",
    "FailureKind",
    "InvalidCode",
    "Phase",
    "RateLimited",
    "SessionError",
    "SessionNotFound",
    "TickHandle",
    "TickScheduler",
    "UnknownFailure",
    "VerificationApi",
    "VerificationApiError",
    "VerificationError",
    "VerificationSessionController",
    "format_remaining",
    "is_complete",
    "normalize_code",
    "parse_wait_seconds",
]
