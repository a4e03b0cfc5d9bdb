"""
FastAPI application factory and configuration.

This module creates the FastAPI application instance,
configures exception handlers, and lifespan events.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request

from src.api.auth import router as auth_router
from src.api.dependencies import (
    create_auth_service,
    create_mail_transport,
    create_user_repository,
)
from src.api.errors import register_exception_handlers
from src.config.settings import get_settings

logger = logging.getLogger(__name__)

# OpenAPI tags for documentation grouping
tags_metadata = [
    {
        "name": "auth",
        "description": "Email-verified signup and login - request a code, verify it, "
        "create the account, log in",
    },
]


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    FastAPI lifespan context manager.

    Manages application startup and shutdown:
    - Loads the user store on startup
    - Opens the mail transport on startup
    - Closes the mail transport on shutdown
    """
    settings = get_settings()
    logging.basicConfig(level=settings.log_level)

    logger.info("Starting application...")
    logger.info("Loading user store from %s", settings.users_db_path)
    user_repository = create_user_repository(settings)

    logger.info("Opening %s mail transport", settings.mail_backend)
    mail_transport = create_mail_transport(settings)

    # Store service state in app state for dependency injection
    app.state.user_repository = user_repository
    app.state.mail_transport = mail_transport
    app.state.auth_service = create_auth_service(settings, user_repository, mail_transport)

    logger.info("Application startup complete")

    try:
        yield
    finally:
        logger.info("Shutting down application...")
        mail_transport.close()


app = FastAPI(
    title="emailgate",
    description="Email-verified signup and login API",
    version="0.1.0",
    openapi_tags=tags_metadata,
    lifespan=lifespan,
)

register_exception_handlers(app)

app.include_router(auth_router, prefix="/api/auth")


@app.get("/health")
def health_check(request: Request) -> dict[str, str | int]:
    """
    Health check endpoint.

    Returns 200 OK with the number of registered accounts.
    """
    return {"status": "healthy", "users": len(request.app.state.user_repository)}
