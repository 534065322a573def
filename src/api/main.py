"""
FastAPI application factory and configuration.

This module creates the FastAPI application instance and its lifespan,
which owns the backend HTTP client and the registry of live sessions.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request

from src.adapters.http.campus import CampusAuthClient
from src.adapters.scheduling.asyncio_ticks import AsyncioTickScheduler
from src.api.sessions import SessionRegistry
from src.api.v1 import router as v1_router
from src.config.settings import get_settings

logger = logging.getLogger(__name__)

# OpenAPI tags for documentation grouping
tags_metadata = [
    {
        "name": "v1",
        "description": "Email verification sessions - code entry, submission and resend cooldown",
    },
]


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    FastAPI lifespan context manager.

    Manages application startup and shutdown:
    - Creates the campus backend client and session registry on startup
    - Closes every live session (cancelling its cooldown) on shutdown
    - Closes the backend client on shutdown
    """
    settings = get_settings()

    logger.info("Starting application...")
    logger.info("Using campus backend at %s", settings.api_base_url)

    client = CampusAuthClient(
        base_url=settings.api_base_url,
        timeout=settings.api_timeout_seconds,
    )

    # Store registry in app state for dependency injection
    app.state.sessions = SessionRegistry(
        api=client,
        scheduler=AsyncioTickScheduler(),
        cooldown_seconds=settings.resend_cooldown_seconds,
        tick_interval=settings.tick_interval_seconds,
        idle_timeout=settings.session_idle_timeout_seconds,
    )

    logger.info("Application startup complete")

    yield

    # Shutdown
    logger.info("Shutting down application...")
    app.state.sessions.close_all()
    await client.aclose()
    logger.info("Campus backend client closed")


app = FastAPI(
    title="campus-verify",
    description="Email verification sessions with a server-reconciled resend cooldown",
    version="0.1.0",
    openapi_tags=tags_metadata,
    lifespan=lifespan,
)

# Include v1 API routes
app.include_router(v1_router, prefix="/v1")


@app.get("/health")
async def health_check(request: Request) -> dict[str, str | int]:
    """
    Health check endpoint.

    Returns 200 OK with the number of live verification sessions.
    """
    return {"status": "healthy", "sessions": len(request.app.state.sessions)}
