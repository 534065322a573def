"""
Campus backend adapter - Implements VerificationApi protocol over HTTP.

Talks to the campus-events backend auth endpoints with httpx and maps
every non-2xx response and transport failure to a domain
VerificationApiError, so callers never handle httpx types.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from src.domain.exceptions import (
    CodeExpired,
    InvalidCode,
    RateLimited,
    UnknownFailure,
    VerificationApiError,
)

logger = logging.getLogger(__name__)

VERIFY_EMAIL_PATH = "/auth/verify-email"
RESEND_CODE_PATH = "/auth/resend-code"

UNREACHABLE_MESSAGE = "Unable to reach the verification service"


def extract_message(response: httpx.Response) -> str:
    """
    Pull the human-readable error message out of an error response.

    The backend sends {"message": "..."} or, for DTO validation failures,
    {"message": ["...", ...]}. Falls back to the HTTP reason phrase.
    """
    try:
        body: Any = response.json()
    except ValueError:
        body = None

    if isinstance(body, dict):
        message = body.get("message")
        if isinstance(message, list) and message:
            message = message[0]
        if isinstance(message, str) and message:
            return message

    return response.reason_phrase or f"Request failed with status {response.status_code}"


def classify_failure(status_code: int, message: str) -> VerificationApiError:
    """
    Map an error response to the matching domain failure.

    The backend reports a resend cooldown as a 400 whose message asks the
    user to wait, and its throttler answers 429; both are rate limits.
    """
    lowered = message.lower()
    if status_code == httpx.codes.TOO_MANY_REQUESTS or "wait" in lowered:
        return RateLimited(message)
    if "expired" in lowered:
        return CodeExpired(message)
    if "invalid" in lowered and "code" in lowered:
        return InvalidCode(message)
    return UnknownFailure(message)


class CampusAuthClient:
    """
    Implements VerificationApi protocol via the campus backend REST API.

    Uses structural subtyping - no explicit inheritance from Protocol.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        http: httpx.AsyncClient | None = None,
    ) -> None:
        """
        Args:
            base_url: Backend API root, e.g. http://localhost:3001/api
            timeout: Per-request timeout in seconds
            http: Preconfigured client, mainly for tests
        """
        self.http = http or httpx.AsyncClient(base_url=base_url, timeout=timeout)

    async def aclose(self) -> None:
        await self.http.aclose()

    async def verify_email(self, email: str, code: str) -> None:
        await self._post(VERIFY_EMAIL_PATH, {"email": email, "code": code})

    async def resend_verification_code(self, email: str) -> None:
        await self._post(RESEND_CODE_PATH, {"email": email})

    async def _post(self, path: str, payload: dict[str, str]) -> None:
        try:
            response = await self.http.post(path, json=payload)
        except httpx.HTTPError as exc:
            logger.warning("[CAMPUS API] %s failed: %s", path, exc)
            raise UnknownFailure(UNREACHABLE_MESSAGE) from exc

        if response.is_success:
            return

        failure = classify_failure(response.status_code, extract_message(response))
        logger.info(
            "[CAMPUS API] %s rejected with %s (%s)",
            path,
            response.status_code,
            failure.kind.value,
        )
        raise failure
