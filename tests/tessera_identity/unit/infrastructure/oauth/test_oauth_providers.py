"""Unit tests for OAuth provider strategies and registration."""

from unittest.mock import AsyncMock, Mock

import pytest
from pydantic import SecretStr

from tessera_config.settings import Settings
from tessera_identity.infrastructure.oauth import (
    PROVIDER_STRATEGIES,
    GoogleStrategy,
    MicrosoftStrategy,
    identity_from_google,
    identity_from_microsoft,
    init_oauth,
)


def _settings(**overrides) -> Settings:
    return Settings(
        jwt_secret_key=SecretStr("test-jwt-secret-for-testing-only"),
        **overrides,
    )


class TestGoogleProfile:
    def test_identity_from_userinfo(self):
        identity = identity_from_google(
            {
                "sub": "1234567890",
                "email": "Bob@Gmail.com",
                "email_verified": True,
                "given_name": "Bob",
                "family_name": "Builder",
            },
        )

        assert identity.provider == "google"
        assert identity.provider_id == "1234567890"
        assert identity.email.value == "bob@gmail.com"
        assert identity.first_name == "Bob"
        assert identity.last_name == "Builder"
        assert identity.email_verified is True

    def test_missing_names_default_to_empty(self):
        identity = identity_from_google(
            {"sub": "1", "email": "bob@gmail.com", "email_verified": True},
        )

        assert identity.first_name == ""
        assert identity.last_name == ""

    @pytest.mark.parametrize(
        "userinfo",
        [{"sub": "1"}, {"email": "bob@gmail.com"}, {"sub": "1", "email": ""}],
    )
    def test_missing_subject_or_email_raises(self, userinfo):
        with pytest.raises(ValueError):
            identity_from_google(userinfo)

    @pytest.mark.parametrize("verified", [False, None, "true"])
    def test_unverified_email_raises(self, verified):
        userinfo = {"sub": "1", "email": "alice@example.com"}
        if verified is not None:
            userinfo["email_verified"] = verified

        with pytest.raises(ValueError, match="not verified"):
            identity_from_google(userinfo)

    @pytest.mark.asyncio
    async def test_fetch_identity_prefers_id_token_claims(self):
        client = Mock()
        client.userinfo = AsyncMock()
        token = {
            "userinfo": {"sub": "1", "email": "bob@gmail.com", "email_verified": True},
        }

        identity = await GoogleStrategy().fetch_identity(client, token)

        assert identity.provider_id == "1"
        client.userinfo.assert_not_called()

    @pytest.mark.asyncio
    async def test_fetch_identity_falls_back_to_userinfo_endpoint(self):
        client = Mock()
        client.userinfo = AsyncMock(
            return_value={"sub": "2", "email": "bob@gmail.com", "email_verified": True},
        )
        token = {"access_token": "abc"}

        identity = await GoogleStrategy().fetch_identity(client, token)

        assert identity.provider_id == "2"
        client.userinfo.assert_awaited_once_with(token=token)


class TestMicrosoftProfile:
    def test_identity_from_graph_profile(self):
        identity = identity_from_microsoft(
            {
                "id": "ms-object-id",
                "mail": "Bob@Contoso.com",
                "givenName": "Bob",
                "surname": "Builder",
            },
        )

        assert identity.provider == "microsoft"
        assert identity.provider_id == "ms-object-id"
        assert identity.email.value == "bob@contoso.com"

    def test_graph_email_is_never_verified(self):
        identity = identity_from_microsoft(
            {"id": "ms-object-id", "mail": "alice@example.com"},
        )

        assert identity.email_verified is False

    def test_user_principal_name_used_without_mailbox(self):
        identity = identity_from_microsoft(
            {
                "id": "ms-object-id",
                "mail": None,
                "userPrincipalName": "bob@contoso.com",
            },
        )

        assert identity.email.value == "bob@contoso.com"

    def test_missing_email_raises(self):
        with pytest.raises(ValueError):
            identity_from_microsoft({"id": "ms-object-id"})

    @pytest.mark.asyncio
    async def test_fetch_identity_reads_graph_me(self):
        response = Mock()
        response.json.return_value = {"id": "ms-1", "mail": "bob@contoso.com"}
        client = Mock()
        client.get = AsyncMock(return_value=response)
        token = {"access_token": "abc"}

        identity = await MicrosoftStrategy().fetch_identity(client, token)

        assert identity.provider_id == "ms-1"
        client.get.assert_awaited_once_with("me", token=token)
        response.raise_for_status.assert_called_once()


class TestInitOAuth:
    def test_no_credentials_registers_nothing(self):
        registry = init_oauth(_settings())

        assert registry.providers == []
        assert "google" not in registry

    def test_configured_providers_are_registered(self):
        registry = init_oauth(
            _settings(
                oauth_google_client_id="google-client",
                oauth_google_client_secret=SecretStr("google-secret"),
                oauth_microsoft_client_id="ms-client",
                oauth_microsoft_client_secret=SecretStr("ms-secret"),
            ),
        )

        assert registry.providers == ["google", "microsoft"]
        client, strategy = registry.get("microsoft")
        assert strategy is PROVIDER_STRATEGIES["microsoft"]
        assert client is not None

    def test_client_id_without_secret_is_not_configured(self):
        registry = init_oauth(_settings(oauth_google_client_id="google-client"))

        assert "google" not in registry

    def test_unknown_provider_raises_key_error(self):
        registry = init_oauth(_settings())

        with pytest.raises(KeyError):
            registry.get("github")
