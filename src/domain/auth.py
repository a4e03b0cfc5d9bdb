"""
Auth domain service - Email verification and credential lifecycle.

This module contains the core business logic for signup and login,
orchestrating the user repository, the verification registry and the
mail transport.

Per-Email State Machine
=======================

States (derived from the two stores):
- NO_ACCOUNT: no account, no pending verification
- PENDING_UNVERIFIED: code emailed, not yet confirmed
- PENDING_VERIFIED: code confirmed within the TTL
- REGISTERED: account stored (terminal)

Transitions:
    NO_ACCOUNT         -> PENDING_UNVERIFIED  (request_verification, mail sent)
    PENDING_*          -> PENDING_UNVERIFIED  (request_verification again)
    PENDING_UNVERIFIED -> PENDING_VERIFIED    (verify_code, matching code)
    PENDING_UNVERIFIED -> NO_ACCOUNT          (verify_code after TTL)
    PENDING_VERIFIED   -> REGISTERED          (signup)

Concurrency
===========

One lock covers both stores. Every check-then-act sequence runs inside
it. Mail delivery never happens while the lock is held, so a slow SMTP
server cannot stall unrelated requests.
"""

import logging
import threading
from dataclasses import dataclass, field

from .codes import build_verification_message, generate_verification_code
from .exceptions import (
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
from .ports import Account, MailTransport, UserRepository, VerifyResult
from .tokens import make_token, parse_token
from .verification import VerificationRegistry

logger = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = 600


@dataclass(frozen=True)
class AuthResult:
    """Successful signup or login."""

    token: str
    name: str
    email: str


@dataclass
class AuthService:
    """
    Domain service for email-verified signup and login.

    Owns the verification registry and the lock guarding it together
    with the user repository. Construct once per process and share it
    between request handlers.
    """

    user_repository: UserRepository
    mail_transport: MailTransport
    registry: VerificationRegistry = field(default_factory=VerificationRegistry)
    ttl_seconds: int = DEFAULT_TTL_SECONDS
    product_name: str = "RateMyLandlord"
    _lock: threading.Lock = field(default_factory=threading.Lock, init=False, repr=False)

    def request_verification(self, email: str | None) -> str:
        """
        Email a fresh verification code.

        Args:
            email: Address to verify (surrounding whitespace ignored)

        Returns:
            Trimmed email address

        Raises:
            MissingFields: If email is empty
            UserAlreadyExists: If an account already uses the email
            MailDeliveryFailed: If the code could not be sent
        """
        email = _trim(email)
        if not email:
            raise MissingFields("email is required")

        with self._lock:
            if self.user_repository.find(email) is not None:
                raise UserAlreadyExists()

        code = generate_verification_code()
        subject, body = build_verification_message(code, self.ttl_seconds, self.product_name)
        result = self.mail_transport.send(email, subject, body)
        if not result.ok:
            logger.error("Failed to send verification email to %s: %s", email, result.reason)
            raise MailDeliveryFailed(result.reason or "unknown transport error")

        with self._lock:
            self.registry.begin(email, code, self.ttl_seconds)

        logger.info("Verification code emailed to %s", email)
        return email

    def verify_code(self, email: str | None, code: str | None) -> str:
        """
        Confirm possession of an email with the code sent to it.

        Returns:
            Trimmed email address

        Raises:
            MissingFields: If email or code is empty
            VerificationNotFound: If no verification is pending
            VerificationExpired: If the code outlived its TTL
            InvalidVerificationCode: If the code does not match
        """
        email = _trim(email)
        code = _trim(code)
        if not email or not code:
            raise MissingFields("email and code are required")

        with self._lock:
            result = self.registry.confirm(email, code)

        if result == VerifyResult.NOT_FOUND:
            raise VerificationNotFound()
        if result == VerifyResult.EXPIRED:
            logger.info("Verification for %s expired", email)
            raise VerificationExpired()
        if result == VerifyResult.MISMATCH:
            raise InvalidVerificationCode()

        logger.info("Email %s verified", email)
        return email

    def signup(self, email: str | None, password: str | None, name: str | None) -> AuthResult:
        """
        Register an account for a verified email.

        The password is stored exactly as given; only its emptiness after
        trimming is checked.

        Raises:
            MissingFields: If any field is empty
            UserAlreadyExists: If the email is already registered
            VerificationRequired: If the email has no verified, unexpired record
            PersistenceError: If the user store could not be written
        """
        email = _trim(email)
        name = _trim(name)
        password = password or ""
        if not email or not name or not password.strip():
            raise MissingFields("name, email and password required")

        account = Account(email=email, password=password, name=name)
        with self._lock:
            # Checked before consuming so a losing concurrent signup reports a conflict.
            if self.user_repository.find(email) is not None:
                raise UserAlreadyExists()

            if self.registry.take_if_verified(email) is None:
                raise VerificationRequired()

            self.user_repository.insert(account)
            try:
                self.user_repository.persist_all()
            except PersistenceError:
                self.user_repository.remove(email)
                logger.exception("Failed to persist account for %s", email)
                raise

        logger.info("Account created for %s", email)
        return AuthResult(token=make_token(email), name=name, email=email)

    def login(self, email: str | None, password: str | None) -> AuthResult:
        """
        Check credentials against the stored account.

        Inputs are compared exactly as received: a whitespace-padded
        password is a different password.

        Raises:
            MissingFields: If email or password is absent
            InvalidCredentials: Unknown email or wrong password (same error)
        """
        if email is None or password is None:
            raise MissingFields("email and password required")

        with self._lock:
            account = self.user_repository.find(email)

        if account is None or account.password != password:
            raise InvalidCredentials()

        return AuthResult(token=make_token(account.email), name=account.name, email=account.email)

    def identify(self, authorization: str | None) -> Account | None:
        """Resolve a "Bearer <token>" header value to its account, if any."""
        email = parse_token(authorization)
        if email is None:
            return None
        with self._lock:
            return self.user_repository.find(email)


def _trim(value: str | None) -> str:
    return (value or "").strip()
