"""
Port interfaces - Protocol definitions for infrastructure abstraction.

This module defines the value types shared across the domain and the
interfaces (ports) that the domain requires from infrastructure.
Adapters implement these protocols.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Protocol


class VerifyResult(Enum):
    """
    Result of a verification attempt.

    Used by VerificationRegistry.confirm() to indicate success or the
    specific failure reason.
    """

    VERIFIED = "verified"
    NOT_FOUND = "not_found"
    EXPIRED = "expired"
    MISMATCH = "mismatch"


@dataclass(frozen=True)
class Account:
    """Registered account. Never mutated after creation."""

    email: str
    password: str
    name: str


@dataclass
class PendingVerification:
    """
    Time-boxed, single-use proof of control over an email address.

    expires_at is measured on the registry's monotonic clock.
    """

    code: str
    expires_at: float
    verified: bool = False


@dataclass(frozen=True)
class SendResult:
    """Outcome of a mail delivery attempt."""

    ok: bool
    reason: str | None = None

    @classmethod
    def success(cls) -> "SendResult":
        return cls(ok=True)

    @classmethod
    def failure(cls, reason: str) -> "SendResult":
        return cls(ok=False, reason=reason)


class UserRepository(Protocol):
    """Port interface for durable account storage."""

    def load(self) -> None:
        """
        Replace in-memory content with the records in durable storage.

        Missing or unreadable storage means "no users", never an error.
        """
        ...

    def find(self, email: str) -> Account | None:
        """Return the account for email, or None."""
        ...

    def insert(self, account: Account) -> None:
        """
        Add an account.

        Not atomic: callers check find() first while holding their lock.
        """
        ...

    def remove(self, email: str) -> None:
        """Drop an account from memory (used to roll back a failed insert)."""
        ...

    def persist_all(self) -> None:
        """
        Overwrite durable storage with the full in-memory set.

        Raises:
            PersistenceError: If the write fails
        """
        ...


class MailTransport(Protocol):
    """Port interface for email delivery."""

    def send(self, recipient: str, subject: str, body: str) -> SendResult:
        """
        Deliver a plaintext message, blocking until accepted or rejected.

        Delivery problems are reported through the result, never raised.

        Args:
            recipient: Recipient email address
            subject: Message subject line
            body: Plaintext message body

        Returns:
            SendResult describing success or the failure reason
        """
        ...
