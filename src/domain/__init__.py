"""
Domain layer - Pure business logic with zero framework imports.

This package contains the core verification and credential lifecycle:
code generation, the pending verification registry, token handling and
the AuthService that orchestrates them. It defines its own port
interfaces for storage and mail delivery.
"""

from .auth import AuthResult, AuthService
from .exceptions import (
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
from .ports import (
    Account,
    MailTransport,
    PendingVerification,
    SendResult,
    UserRepository,
    VerifyResult,
)
from .verification import VerificationRegistry

__all__ = [
    "Account",
    "AuthError",
    "AuthResult",
    "AuthService",
    "InvalidCredentials",
    "InvalidVerificationCode",
    "MailDeliveryFailed",
    "MailTransport",
    "MissingFields",
    "PendingVerification",
    "PersistenceError",
    "SendResult",
    "UserAlreadyExists",
    "UserRepository",
    "VerificationExpired",
    "VerificationNotFound",
    "VerificationRegistry",
    "VerificationRequired",
    "VerifyResult",
]
