"""
Domain exceptions - Semantic error types for the auth lifecycle.

This module defines domain-specific exceptions that communicate
business rule violations without leaking infrastructure details.
Each exception carries the user-facing message returned by the API.
"""


class AuthError(Exception):
    """Base class for auth domain errors."""

    default_message = "request failed"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class MissingFields(AuthError):
    """Required request fields are absent or empty after trimming."""

    default_message = "required fields missing"


class UserAlreadyExists(AuthError):
    """An account is already registered for the email."""

    default_message = "user already exists"


class VerificationNotFound(AuthError):
    """No pending verification exists for the email."""

    default_message = "verification not found"


class VerificationExpired(AuthError):
    """The pending verification outlived its TTL and was discarded."""

    default_message = "verification expired"


class InvalidVerificationCode(AuthError):
    """Submitted code does not match the pending verification."""

    default_message = "invalid verification code"


class VerificationRequired(AuthError):
    """Signup attempted without a verified, unexpired pending record."""

    default_message = "email must be verified before signup"


class InvalidCredentials(AuthError):
    """Unknown email or wrong password (deliberately undifferentiated)."""

    default_message = "invalid credentials"


class MailDeliveryFailed(AuthError):
    """Verification email could not be sent.

    The transport's reason is kept on ``reason`` for logging; the
    user-facing message stays generic.
    """

    default_message = "failed to send verification email"

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__()


class PersistenceError(AuthError):
    """Writing the user store to durable storage failed."""

    default_message = "failed to save account"
