"""Pytest fixtures for API tests.

The app runs against a SQLite file in the test's temporary directory and
a recording notifier, so verification links can be read back.
"""

from typing import Callable
from urllib.parse import parse_qs, urlparse

import pytest
from fastapi.testclient import TestClient
from pydantic import SecretStr

from tessera.presentation.api.app import create_app
from tessera.presentation.api.config import API_V1_PREFIX
from tessera_config.settings import Settings
from tests.shared.fixtures.fakes import RecordingNotifier

ALICE = {
    "first_name": "Alice",
    "last_name": "Liddell",
    "email": "alice@example.com",
    "password": "Password123",
}


@pytest.fixture
def api_v1_prefix() -> str:
    """Get the API v1 prefix for building URLs."""
    return API_V1_PREFIX


@pytest.fixture
def api_settings(tmp_path) -> Settings:
    """Test API settings with debug enabled."""
    return Settings(
        jwt_secret_key=SecretStr("test-jwt-secret-for-testing-only"),
        database_url_override=f"sqlite+aiosqlite:///{tmp_path / 'tessera.db'}",
        server_domain="http://testserver",
        api_debug=True,
        api_cors_origins="http://localhost:3000",
        api_cookie_secure=False,  # Allow HTTP in tests
        password_hash_rounds=4,
        mail_from_email="no-reply@tessera.test",
    )


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def test_client(api_settings, notifier):
    """Create a test client; entering it runs the lifespan (creates tables)."""
    app = create_app(settings=api_settings, notifier=notifier)
    with TestClient(app) as client:
        yield client


def _last_verification_token(notifier: RecordingNotifier) -> str:
    url = notifier.sent[-1].data["url"]
    return parse_qs(urlparse(url).query)["token"][0]


@pytest.fixture
def verification_token(notifier) -> Callable[[], str]:
    """Read the token from the last verification email sent."""
    return lambda: _last_verification_token(notifier)


@pytest.fixture
def alice() -> dict:
    return dict(ALICE)


@pytest.fixture
def registered_account(test_client, notifier, api_v1_prefix) -> dict:
    """Alice, signed up but not yet verified."""
    response = test_client.post(f"{api_v1_prefix}/auth/sign-up", json=ALICE)
    assert response.status_code == 201
    return response.json()


@pytest.fixture
def active_account(test_client, notifier, registered_account, api_v1_prefix) -> dict:
    """Alice, verified."""
    response = test_client.get(
        f"{api_v1_prefix}/auth/verify",
        params={"token": _last_verification_token(notifier)},
    )
    assert response.status_code == 200
    return registered_account


@pytest.fixture
def signed_in_client(test_client, active_account, api_v1_prefix) -> TestClient:
    """A client holding Alice's session cookie."""
    response = test_client.post(
        f"{api_v1_prefix}/auth/sign-in",
        json={"email": ALICE["email"], "password": ALICE["password"]},
    )
    assert response.status_code == 200
    return test_client
