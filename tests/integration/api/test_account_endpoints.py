"""API tests for the account, OAuth and health endpoints."""

from unittest.mock import AsyncMock, Mock
from uuid import UUID, uuid4

import pytest
from authlib.integrations.starlette_client import OAuthError
from fastapi.testclient import TestClient

from tessera.presentation.api.dependencies import get_oauth_registry
from tessera_identity.infrastructure.oauth import (
    GoogleStrategy,
    OAuthProviderRegistry,
)


class TestCurrentAccount:
    """Tests for GET /api/v1/users/me."""

    def test_me_with_session_cookie(
        self, signed_in_client: TestClient, active_account, api_v1_prefix
    ):
        response = signed_in_client.get(f"{api_v1_prefix}/users/me")

        assert response.status_code == 200
        data = response.json()
        assert data["id"] == active_account["id"]
        assert data["email"] == "alice@example.com"
        assert data["is_active"] is True
        assert "password_hash" not in data

    def test_me_with_bearer_token(
        self, test_client: TestClient, active_account, api_v1_prefix
    ):
        jwt_service = test_client.app.state.jwt_service
        token = jwt_service.create_access_token(UUID(active_account["id"]))

        response = test_client.get(
            f"{api_v1_prefix}/users/me",
            headers={"Authorization": f"Bearer {token}"},
        )

        assert response.status_code == 200
        assert response.json()["id"] == active_account["id"]

    def test_me_without_session(self, test_client: TestClient, api_v1_prefix):
        response = test_client.get(f"{api_v1_prefix}/users/me")

        assert response.status_code == 401

    def test_me_with_invalid_token(self, test_client: TestClient, api_v1_prefix):
        response = test_client.get(
            f"{api_v1_prefix}/users/me",
            headers={"Authorization": "Bearer not-a-token"},
        )

        assert response.status_code == 401
        assert response.json()["code"] == "INVALID_TOKEN"

    def test_me_for_deleted_account(self, test_client: TestClient, api_v1_prefix):
        token = test_client.app.state.jwt_service.create_access_token(uuid4())

        response = test_client.get(
            f"{api_v1_prefix}/users/me",
            headers={"Authorization": f"Bearer {token}"},
        )

        assert response.status_code == 401
        assert response.json()["code"] == "INVALID_TOKEN"

    def test_me_with_verification_link_token(
        self,
        test_client: TestClient,
        registered_account,
        verification_token,
        api_v1_prefix,
    ):
        response = test_client.get(
            f"{api_v1_prefix}/users/me",
            headers={"Authorization": f"Bearer {verification_token()}"},
        )

        assert response.status_code == 401
        assert response.json()["code"] == "INVALID_TOKEN"


class TestOAuthRoutes:
    """OAuth routes with no provider configured."""

    def test_no_providers_listed(self, test_client: TestClient, api_v1_prefix):
        response = test_client.get(f"{api_v1_prefix}/auth/oauth/providers")

        assert response.status_code == 200
        assert response.json() == {"providers": []}

    def test_unconfigured_provider_is_not_found(
        self, test_client: TestClient, api_v1_prefix
    ):
        response = test_client.get(
            f"{api_v1_prefix}/auth/oauth/google",
            follow_redirects=False,
        )

        assert response.status_code == 404

    def test_unconfigured_callback_is_not_found(
        self, test_client: TestClient, api_v1_prefix
    ):
        response = test_client.get(f"{api_v1_prefix}/auth/oauth/google/callback")

        assert response.status_code == 404


GOOGLE_USERINFO = {
    "sub": "google-sub-1",
    "email": "bob@gmail.com",
    "email_verified": True,
    "given_name": "Bob",
    "family_name": "Builder",
}


class TestOAuthCallback:
    """OAuth callback with a stubbed Google client."""

    @pytest.fixture
    def google_client(self, test_client: TestClient) -> Mock:
        client = Mock()
        client.authorize_access_token = AsyncMock(
            return_value={"access_token": "abc", "userinfo": GOOGLE_USERINFO},
        )
        registry = OAuthProviderRegistry(
            oauth=None,
            clients={"google": client},
            strategies={"google": GoogleStrategy()},
        )
        test_client.app.dependency_overrides[get_oauth_registry] = lambda: registry
        yield client
        test_client.app.dependency_overrides.clear()

    def test_first_login_creates_active_account(
        self, test_client: TestClient, google_client, api_v1_prefix
    ):
        response = test_client.get(f"{api_v1_prefix}/auth/oauth/google/callback")

        assert response.status_code == 200
        assert "access_token" in response.cookies

        me = test_client.get(f"{api_v1_prefix}/users/me")
        assert me.status_code == 200
        assert me.json()["email"] == "bob@gmail.com"
        assert me.json()["provider"] == "google"
        assert me.json()["is_active"] is True

    def test_second_login_reuses_account(
        self, test_client: TestClient, google_client, api_v1_prefix
    ):
        url = f"{api_v1_prefix}/auth/oauth/google/callback"

        first = test_client.get(url)
        second = test_client.get(url)

        assert first.json()["id"] == second.json()["id"]

    def test_password_sign_in_refused_for_oauth_account(
        self, test_client: TestClient, google_client, api_v1_prefix
    ):
        test_client.get(f"{api_v1_prefix}/auth/oauth/google/callback")

        response = test_client.post(
            f"{api_v1_prefix}/auth/sign-in",
            json={"email": "bob@gmail.com", "password": "Password123"},
        )

        assert response.status_code == 403
        assert response.json()["code"] == "EMAIL_LINKED_TO_OAUTH"

    def test_provider_error_is_unauthorized(
        self, test_client: TestClient, google_client, api_v1_prefix
    ):
        google_client.authorize_access_token.side_effect = OAuthError(
            error="access_denied",
        )

        response = test_client.get(f"{api_v1_prefix}/auth/oauth/google/callback")

        assert response.status_code == 401
        assert response.json()["code"] == "OAUTH_FAILED"

    def test_unverified_google_email_does_not_sign_in_existing_account(
        self,
        test_client: TestClient,
        google_client,
        active_account,
        api_v1_prefix,
    ):
        google_client.authorize_access_token.return_value = {
            "access_token": "abc",
            "userinfo": {
                "sub": "other-google-sub",
                "email": "alice@example.com",
                "email_verified": False,
            },
        }

        response = test_client.get(f"{api_v1_prefix}/auth/oauth/google/callback")

        assert response.status_code == 401
        assert response.json()["code"] == "OAUTH_FAILED"
        assert "access_token" not in response.cookies

    def test_profile_without_email_is_unauthorized(
        self, test_client: TestClient, google_client, api_v1_prefix
    ):
        google_client.authorize_access_token.return_value = {
            "access_token": "abc",
            "userinfo": {"sub": "google-sub-2"},
        }

        response = test_client.get(f"{api_v1_prefix}/auth/oauth/google/callback")

        assert response.status_code == 401


class TestHealth:
    def test_health_check(self, test_client: TestClient):
        response = test_client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"
        assert response.json()["api_versions"] == ["v1"]
