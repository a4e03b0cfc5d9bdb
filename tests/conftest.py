"""
Shared test fixtures and configuration.

This module provides pytest fixtures for:
- A controllable monotonic clock for TTL tests
- A recording mail transport that captures sent codes
- A JSON user repository in a temporary directory
- A fully wired AuthService
"""

import re
import threading
from pathlib import Path

import pytest

from src.adapters.repository.json_file import JsonUserRepository
from src.domain.auth import AuthService
from src.domain.ports import SendResult
from src.domain.verification import VerificationRegistry

CODE_PATTERN = re.compile(r"verification code is: (\d{6})")


class FakeClock:
    """Monotonic clock that only moves when told to."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class RecordingMailTransport:
    """Mail transport that records messages instead of sending them."""

    def __init__(self) -> None:
        self.sent: list[tuple[str, str, str]] = []
        self.failure_reason: str | None = None
        self._lock = threading.Lock()

    def send(self, recipient: str, subject: str, body: str) -> SendResult:
        if self.failure_reason is not None:
            return SendResult.failure(self.failure_reason)
        with self._lock:
            self.sent.append((recipient, subject, body))
        return SendResult.success()

    def close(self) -> None:
        pass

    def last_code_for(self, recipient: str) -> str:
        """Code in the most recent message sent to recipient."""
        for to, _subject, body in reversed(self.sent):
            if to == recipient:
                match = CODE_PATTERN.search(body)
                assert match is not None, body
                return match.group(1)
        raise AssertionError(f"no mail sent to {recipient}")


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def mail_transport() -> RecordingMailTransport:
    return RecordingMailTransport()


@pytest.fixture
def users_path(tmp_path: Path) -> Path:
    return tmp_path / "users.json"


@pytest.fixture
def user_repository(users_path: Path) -> JsonUserRepository:
    repository = JsonUserRepository(users_path)
    repository.load()
    return repository


@pytest.fixture
def registry(clock: FakeClock) -> VerificationRegistry:
    return VerificationRegistry(clock=clock)


@pytest.fixture
def service(
    user_repository: JsonUserRepository,
    mail_transport: RecordingMailTransport,
    registry: VerificationRegistry,
) -> AuthService:
    """AuthService wired to in-test collaborators with a 10 minute TTL."""
    return AuthService(
        user_repository=user_repository,
        mail_transport=mail_transport,
        registry=registry,
        ttl_seconds=600,
    )
