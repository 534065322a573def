"""
API v1 routes.

Defines REST endpoints a verification screen uses to drive its session.
Every command answers with the session snapshot the screen re-renders from.
"""

from fastapi import APIRouter, Depends, HTTPException, Response, status

from src.api.dependencies import get_registry, get_session
from src.api.models import (
    ErrorResponse,
    OpenSessionRequest,
    SessionResponse,
    SetCodeRequest,
    SetEmailRequest,
)
from src.api.sessions import SessionRegistry
from src.domain.exceptions import SessionNotFound
from src.domain.verification import VerificationSessionController

router = APIRouter(tags=["v1"])

_not_found = {404: {"model": ErrorResponse, "description": "Verification session not found"}}


@router.post(
    "/sessions",
    response_model=SessionResponse,
    status_code=status.HTTP_201_CREATED,
    responses={422: {"description": "Validation error"}},
    summary="Open a verification session",
    description="Start a verification session, optionally for an email handed over "
    "by registration. By default the resend cooldown starts running because a code "
    "was just sent.",
)
async def open_session(
    request_data: OpenSessionRequest,
    registry: SessionRegistry = Depends(get_registry),
) -> SessionResponse:
    session_id, controller = registry.open(
        email=request_data.email,
        code_just_sent=request_data.code_just_sent,
        email_locked=request_data.email_locked,
    )
    return SessionResponse.from_controller(session_id, controller)


@router.get(
    "/sessions/{session_id}",
    response_model=SessionResponse,
    responses=_not_found,
    summary="Read session state",
)
async def read_session(
    session_id: str,
    controller: VerificationSessionController = Depends(get_session),
) -> SessionResponse:
    return SessionResponse.from_controller(session_id, controller)


@router.put(
    "/sessions/{session_id}/code",
    response_model=SessionResponse,
    responses=_not_found,
    summary="Update the code field",
    description="Non-digits are stripped and the code is truncated to 6 digits.",
)
async def set_code(
    session_id: str,
    request_data: SetCodeRequest,
    controller: VerificationSessionController = Depends(get_session),
) -> SessionResponse:
    controller.set_code(request_data.code)
    return SessionResponse.from_controller(session_id, controller)


@router.put(
    "/sessions/{session_id}/email",
    response_model=SessionResponse,
    responses=_not_found,
    summary="Update the email field",
    description="Ignored when the email was handed over by a previous step.",
)
async def set_email(
    session_id: str,
    request_data: SetEmailRequest,
    controller: VerificationSessionController = Depends(get_session),
) -> SessionResponse:
    controller.set_email(request_data.email)
    return SessionResponse.from_controller(session_id, controller)


@router.post(
    "/sessions/{session_id}/submit",
    response_model=SessionResponse,
    responses=_not_found,
    summary="Submit the code",
    description="Incomplete input is rejected without contacting the backend; "
    "rejections are reported in last_error.",
)
async def submit(
    session_id: str,
    controller: VerificationSessionController = Depends(get_session),
) -> SessionResponse:
    await controller.submit()
    return SessionResponse.from_controller(session_id, controller)


@router.post(
    "/sessions/{session_id}/resend",
    response_model=SessionResponse,
    responses=_not_found,
    summary="Request a new code",
    description="Does nothing while the resend cooldown is running.",
)
async def resend(
    session_id: str,
    controller: VerificationSessionController = Depends(get_session),
) -> SessionResponse:
    await controller.resend()
    return SessionResponse.from_controller(session_id, controller)


@router.delete(
    "/sessions/{session_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses=_not_found,
    summary="Close a session",
)
async def close_session(
    session_id: str,
    registry: SessionRegistry = Depends(get_registry),
) -> Response:
    try:
        registry.close(session_id)
    except SessionNotFound:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Verification session not found",
        ) from None
    return Response(status_code=status.HTTP_204_NO_CONTENT)
