"""
API error handling - Maps failures to {"error": ...} JSON responses.

Domain exceptions carry their user-facing message; this module only
decides the status code. Framework errors (bad bodies, unknown routes)
are reshaped to the same body format.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.domain.exceptions import (
    AuthError,
    InvalidCredentials,
    InvalidVerificationCode,
    MailDeliveryFailed,
    MissingFields,
    PersistenceError,
    UserAlreadyExists,
    VerificationExpired,
    VerificationNotFound,
    VerificationRequired,
)

logger = logging.getLogger(__name__)

STATUS_BY_ERROR: dict[type[AuthError], int] = {
    MissingFields: status.HTTP_400_BAD_REQUEST,
    VerificationExpired: status.HTTP_400_BAD_REQUEST,
    InvalidVerificationCode: status.HTTP_400_BAD_REQUEST,
    VerificationRequired: status.HTTP_400_BAD_REQUEST,
    InvalidCredentials: status.HTTP_401_UNAUTHORIZED,
    VerificationNotFound: status.HTTP_404_NOT_FOUND,
    UserAlreadyExists: status.HTTP_409_CONFLICT,
    MailDeliveryFailed: status.HTTP_500_INTERNAL_SERVER_ERROR,
    PersistenceError: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def status_for(exc: AuthError) -> int:
    """HTTP status for a domain error, 500 for anything unmapped."""
    for error_type in type(exc).__mro__:
        if error_type in STATUS_BY_ERROR:
            return STATUS_BY_ERROR[error_type]
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


async def auth_error_handler(request: Request, exc: AuthError) -> JSONResponse:
    status_code = status_for(exc)
    if status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return error_response(status_code, exc.message)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return error_response(status.HTTP_400_BAD_REQUEST, "invalid request body")


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Install the error handlers on an application."""
    app.add_exception_handler(AuthError, auth_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
