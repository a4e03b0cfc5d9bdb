"""
Verification registry - Pending verification state machine.

Pending Verification Lifecycle
==============================

    (none) --begin--> UNVERIFIED --confirm(match)--> VERIFIED --take--> (none)

- begin() always installs a fresh UNVERIFIED record, discarding any
  previous record for the email.
- confirm() with a wrong code leaves the record in place so the user
  can retry until the TTL lapses.
- Expiry is detected lazily: confirm() deletes an expired record, and
  take_if_verified() refuses one. There is no background sweep, so
  abandoned records for distinct emails accumulate until overwritten.

The registry is not synchronized. AuthService holds its lock around
every call.
"""

import secrets
import time
from collections.abc import Callable

from .ports import PendingVerification, VerifyResult


class VerificationRegistry:
    """In-memory mapping from email to its pending verification."""

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._pending: dict[str, PendingVerification] = {}

    def begin(self, email: str, code: str, ttl_seconds: float) -> None:
        """Install a fresh unverified record, overwriting any existing one."""
        self._pending[email] = PendingVerification(
            code=code,
            expires_at=self._clock() + ttl_seconds,
        )

    def confirm(self, email: str, code: str) -> VerifyResult:
        """
        Check a submitted code against the pending record.

        Returns:
            VERIFIED: code matched within the TTL, record marked verified
            NOT_FOUND: no pending record for email
            EXPIRED: TTL lapsed, record deleted
            MISMATCH: wrong code, record retained
        """
        pending = self._pending.get(email)
        if pending is None:
            return VerifyResult.NOT_FOUND

        if self._clock() > pending.expires_at:
            del self._pending[email]
            return VerifyResult.EXPIRED

        if not secrets.compare_digest(pending.code.encode(), code.encode()):
            return VerifyResult.MISMATCH

        pending.verified = True
        return VerifyResult.VERIFIED

    def take_if_verified(self, email: str) -> PendingVerification | None:
        """
        Remove and return the record if it is verified and unexpired.

        Any other state returns None and leaves the registry untouched.
        """
        pending = self._pending.get(email)
        if pending is None or not pending.verified:
            return None
        if self._clock() > pending.expires_at:
            return None
        return self._pending.pop(email)

    def get(self, email: str) -> PendingVerification | None:
        return self._pending.get(email)

    def __contains__(self, email: object) -> bool:
        return email in self._pending

    def __len__(self) -> int:
        return len(self._pending)
