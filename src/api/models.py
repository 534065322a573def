"""
API request and response models.

Pydantic models for FastAPI endpoint validation and OpenAPI schema generation.
"""

from pydantic import BaseModel, Field

from src.domain.ports import FailureKind
from src.domain.verification import Phase, VerificationSessionController


class OpenSessionRequest(BaseModel):
    """Request model for opening a verification session."""

    email: str | None = Field(
        default=None,
        description="Email handed over by the previous step; locks the email field",
    )
    code_just_sent: bool = Field(
        default=True,
        description="A code was just issued, start with the resend cooldown running",
    )
    email_locked: bool | None = Field(
        default=None,
        description="Fix the email for the session; defaults to true when an email is given",
    )


class SetCodeRequest(BaseModel):
    """Request model for code input. Non-digits are stripped server-side."""

    code: str = Field(..., max_length=64, description="Raw code field contents")


class SetEmailRequest(BaseModel):
    """Request model for email input."""

    email: str = Field(..., max_length=320)


class SessionErrorModel(BaseModel):
    """User-facing error attached to a session."""

    kind: FailureKind
    message: str


class SessionResponse(BaseModel):
    """Snapshot of a verification session for rendering."""

    id: str
    email: str
    email_locked: bool
    code: str
    phase: Phase
    last_error: SessionErrorModel | None
    remaining_seconds: int
    resend_allowed: bool
    cooldown_display: str = Field(..., description="Remaining cooldown as M:SS")
    submit_enabled: bool
    resend_enabled: bool

    @classmethod
    def from_controller(
        cls, session_id: str, controller: VerificationSessionController
    ) -> "SessionResponse":
        error = controller.last_error
        return cls(
            id=session_id,
            email=controller.email,
            email_locked=controller.email_locked,
            code=controller.code,
            phase=controller.phase,
            last_error=(
                SessionErrorModel(kind=error.kind, message=error.message) if error else None
            ),
            remaining_seconds=controller.remaining_seconds,
            resend_allowed=controller.resend_allowed,
            cooldown_display=controller.cooldown_display,
            submit_enabled=controller.submit_enabled,
            resend_enabled=controller.resend_enabled,
        )


class ErrorResponse(BaseModel):
    """Standard error response model."""

    detail: str
