"""
FastAPI dependencies - Dependency injection factories.

This module provides the factories that build the process-wide auth
service at startup and the Depends() functions that hand it to routes.
"""

from fastapi import Depends, Header, HTTPException, Request, status

from src.adapters.repository.json_file import JsonUserRepository
from src.adapters.smtp.console import ConsoleMailTransport
from src.adapters.smtp.smtp import SmtpMailTransport
from src.config.settings import Settings
from src.domain.auth import AuthService
from src.domain.ports import Account, MailTransport, UserRepository


def create_mail_transport(settings: Settings) -> ConsoleMailTransport | SmtpMailTransport:
    """
    Build the configured mail transport.

    The SMTP transport is opened eagerly so an initialization failure
    is logged at startup; it is still reported per request afterwards.
    """
    if settings.mail_backend == "console":
        return ConsoleMailTransport()
    transport = SmtpMailTransport.from_settings(settings)
    transport.open()
    return transport


def create_user_repository(settings: Settings) -> JsonUserRepository:
    """Build the user repository and load existing accounts."""
    repository = JsonUserRepository(settings.users_db_path)
    repository.load()
    return repository


def create_auth_service(
    settings: Settings,
    user_repository: UserRepository,
    mail_transport: MailTransport,
) -> AuthService:
    """Wire the domain service for one process."""
    return AuthService(
        user_repository=user_repository,
        mail_transport=mail_transport,
        ttl_seconds=settings.verification_ttl_seconds,
        product_name=settings.product_name,
    )


def get_auth_service(request: Request) -> AuthService:
    """
    Get the auth service from app state.

    The service is created during app lifespan startup and stored in app.state.
    """
    return request.app.state.auth_service


def get_current_account(
    authorization: str | None = Header(None),
    service: AuthService = Depends(get_auth_service),
) -> Account:
    """
    Resolve the bearer token in the Authorization header.

    Raises:
        HTTPException: 401 if the header is missing, malformed or names
            no registered account
    """
    account = service.identify(authorization)
    if account is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="unauthorized",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return account
