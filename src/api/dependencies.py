"""
FastAPI dependencies - Dependency injection factories.

This module provides Depends() factories for injecting the session
registry and the live session controller into routes.
"""

from fastapi import Depends, HTTPException, Request, status

from src.api.sessions import SessionRegistry
from src.domain.exceptions import SessionNotFound
from src.domain.verification import VerificationSessionController


def get_registry(request: Request) -> SessionRegistry:
    """
    Get session registry from app state.

    The registry is created during app lifespan startup and stored in app.state.
    """
    return request.app.state.sessions


def get_session(
    session_id: str,
    registry: SessionRegistry = Depends(get_registry),
) -> VerificationSessionController:
    """Resolve the path's session id to its live controller, 404 otherwise."""
    try:
        return registry.get(session_id)
    except SessionNotFound:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Verification session not found",
        ) from None
