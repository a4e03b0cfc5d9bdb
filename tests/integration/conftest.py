"""
Shared fixtures for integration tests.

Runs the real application (lifespan included) against a user file in
tmp_path, with mail captured by the recording transport.
"""

from collections.abc import Generator
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from src.api.main import app
from src.config.settings import get_settings


@pytest.fixture
def client(
    users_path: Path, mail_transport, monkeypatch: pytest.MonkeyPatch
) -> Generator[TestClient, None, None]:
    """Start the application and route verification mail to the recorder."""
    monkeypatch.setenv("USERS_DB_PATH", str(users_path))
    monkeypatch.setenv("MAIL_BACKEND", "console")
    get_settings.cache_clear()

    with TestClient(app) as test_client:
        app.state.auth_service.mail_transport = mail_transport
        yield test_client

    get_settings.cache_clear()
