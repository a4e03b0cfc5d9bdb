"""
API request and response models.

Pydantic models for FastAPI endpoint validation and OpenAPI schema generation.

Request fields are optional at the schema level: emptiness and presence
are checked by the domain service so that missing fields get the same
400 message as blank ones. Numbers are accepted where strings are
expected (a code posted as 42 becomes "42").
"""

from pydantic import BaseModel, ConfigDict, Field


class _AuthRequest(BaseModel):
    model_config = ConfigDict(coerce_numbers_to_str=True)


class RequestVerificationRequest(_AuthRequest):
    """Request model for sending a verification code."""

    email: str | None = Field(None, description="Email address to verify")


class VerifyCodeRequest(_AuthRequest):
    """Request model for confirming a verification code."""

    email: str | None = None
    code: str | None = Field(None, description="6-digit code from the verification email")


class SignupRequest(_AuthRequest):
    """Request model for account registration."""

    email: str | None = None
    password: str | None = None
    name: str | None = None


class LoginRequest(_AuthRequest):
    """Request model for login. Values are compared exactly as sent."""

    email: str | None = None
    password: str | None = None


class MessageResponse(BaseModel):
    """Response model for steps that only acknowledge."""

    message: str


class AuthResponse(BaseModel):
    """Response model for successful signup or login."""

    token: str
    name: str
    email: str


class AccountResponse(BaseModel):
    """Response model describing the authenticated account."""

    name: str
    email: str


class ErrorResponse(BaseModel):
    """Standard error response model."""

    error: str
