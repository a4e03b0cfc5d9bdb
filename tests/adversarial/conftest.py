"""
Shared fixtures for adversarial tests.

Provides helpers that drive emails into the verified state so race
tests can start from the interesting point.
"""

import pytest

from src.domain.auth import AuthService

# Module-level marker for all adversarial tests
pytestmark = pytest.mark.adversarial


@pytest.fixture
def verify_email(service: AuthService, mail_transport):
    """Return a helper that requests and confirms a code for an email."""

    def _verify(email: str) -> None:
        service.request_verification(email)
        service.verify_code(email, mail_transport.last_code_for(email))

    return _verify
