"""
Cooldown reconciliation against server rate-limit feedback.

The server is the source of truth for the resend rate limit. When it
rejects a resend, its message may carry the remaining wait
("Please wait 4:32 before requesting a new code"); the reconciler re-arms
the client countdown to match. Any ambiguity re-arms to the full default
window so the client errs toward sending less, never more.
"""

import logging
import re
from dataclasses import dataclass

from .cooldown import CooldownTimer
from .exceptions import VerificationApiError
from .ports import FailureKind

logger = logging.getLogger(__name__)

DEFAULT_COOLDOWN_SECONDS = 300

_WAIT_PATTERN = re.compile(r"(\d+):(\d{2})(?!\d)")


def parse_wait_seconds(message: str) -> int | None:
    """
    Extract an embedded M:SS wait from message.

    Returns:
        Total seconds, or None if the message carries no wait time
    """
    match = _WAIT_PATTERN.search(message)
    if match is None:
        return None
    minutes, seconds = match.groups()
    return int(minutes) * 60 + int(seconds)


@dataclass
class CooldownReconciler:
    """Re-arms a CooldownTimer from a rejected resend."""

    default_cooldown_seconds: int = DEFAULT_COOLDOWN_SECONDS

    def reconcile(self, failure: VerificationApiError, timer: CooldownTimer) -> int | None:
        """
        Resynchronize timer with the server after a failed resend.

        Args:
            failure: The rejection raised by the verification service
            timer: The session's cooldown timer

        Returns:
            Seconds the timer was re-armed to, or None if untouched
        """
        if failure.kind is not FailureKind.RATE_LIMITED:
            return None

        wait = parse_wait_seconds(failure.message)
        if wait is None:
            wait = self.default_cooldown_seconds
            logger.warning("[COOLDOWN] Rate limited without wait time, using default %ss", wait)
        else:
            logger.warning("[COOLDOWN] Rate limited, server reports %ss remaining", wait)

        timer.start(wait)
        return wait
