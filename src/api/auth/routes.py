"""
Auth routes.

Defines the REST endpoints of the email-verified signup flow:
- POST /request-verification - Email a one-time code
- POST /verify-code - Confirm the code
- POST /signup - Create the account for a verified email
- POST /login - Exchange credentials for a token
- GET /me - Describe the account behind a bearer token

Routes are synchronous so FastAPI runs them on its worker threadpool;
mail delivery blocks a worker, not the event loop. Domain errors are
turned into responses by src.api.errors.
"""

from fastapi import APIRouter, Depends

from src.api.dependencies import get_auth_service, get_current_account
from src.api.models import (
    AccountResponse,
    AuthResponse,
    ErrorResponse,
    LoginRequest,
    MessageResponse,
    RequestVerificationRequest,
    SignupRequest,
    VerifyCodeRequest,
)
from src.domain.auth import AuthService
from src.domain.ports import Account

router = APIRouter(tags=["auth"])


@router.post(
    "/request-verification",
    response_model=MessageResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Email missing"},
        409: {"model": ErrorResponse, "description": "User already exists"},
        500: {"model": ErrorResponse, "description": "Verification email could not be sent"},
    },
    summary="Request a verification code",
    description="Send a 6-digit verification code to the given email. "
    "The code is valid for 10 minutes; requesting again replaces it.",
)
def request_verification(
    request_data: RequestVerificationRequest,
    service: AuthService = Depends(get_auth_service),
) -> MessageResponse:
    service.request_verification(request_data.email)
    return MessageResponse(message="verification code sent")


@router.post(
    "/verify-code",
    response_model=MessageResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Missing fields, expired or invalid code"},
        404: {"model": ErrorResponse, "description": "No pending verification"},
    },
    summary="Verify an email with its code",
)
def verify_code(
    request_data: VerifyCodeRequest,
    service: AuthService = Depends(get_auth_service),
) -> MessageResponse:
    """
    Confirm possession of an email address.

    - **email**: Address the code was sent to
    - **code**: 6-digit code from the email

    A wrong code can be retried until the code expires.
    """
    service.verify_code(request_data.email, request_data.code)
    return MessageResponse(message="email verified")


@router.post(
    "/signup",
    response_model=AuthResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Missing fields or email not verified"},
        409: {"model": ErrorResponse, "description": "User already exists"},
        500: {"model": ErrorResponse, "description": "Account could not be saved"},
    },
    summary="Create an account",
    description="Register a verified email. The verification is consumed.",
)
def signup(
    request_data: SignupRequest,
    service: AuthService = Depends(get_auth_service),
) -> AuthResponse:
    result = service.signup(request_data.email, request_data.password, request_data.name)
    return AuthResponse(token=result.token, name=result.name, email=result.email)


@router.post(
    "/login",
    response_model=AuthResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Missing fields"},
        401: {"model": ErrorResponse, "description": "Invalid credentials"},
    },
    summary="Log in",
)
def login(
    request_data: LoginRequest,
    service: AuthService = Depends(get_auth_service),
) -> AuthResponse:
    """
    Exchange email and password for a bearer token.

    Unknown emails and wrong passwords get the same response.
    """
    result = service.login(request_data.email, request_data.password)
    return AuthResponse(token=result.token, name=result.name, email=result.email)


@router.get(
    "/me",
    response_model=AccountResponse,
    responses={401: {"model": ErrorResponse, "description": "Missing or invalid token"}},
    summary="Current account",
)
def me(account: Account = Depends(get_current_account)) -> AccountResponse:
    """Describe the account named by the "Authorization: Bearer <token>" header."""
    return AccountResponse(name=account.name, email=account.email)
