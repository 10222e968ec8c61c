"""OAuth provider strategies and Authlib client registration.

Each supported provider is a strategy that knows how to register its
Authlib client and how to turn the provider's profile into an
ExternalIdentity. Only providers with configured credentials are
registered.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any

from authlib.integrations.starlette_client import OAuth

from tessera_config.settings import Settings
from tessera_identity.domain.account import Email, ExternalIdentity

logger = logging.getLogger(__name__)


class OAuthProviderStrategy(ABC):
    """Encapsulates everything that differs between OAuth providers."""

    key: str

    @abstractmethod
    def is_configured(self, settings: Settings) -> bool:
        """True when client credentials for this provider are set."""

    @abstractmethod
    def register(self, oauth: OAuth, settings: Settings) -> Any:
        """Register the Authlib client and return it."""

    @abstractmethod
    async def fetch_identity(
        self,
        client: Any,
        token: dict[str, Any],
    ) -> ExternalIdentity:
        """Build the external identity from a freshly issued token.

        Raises
        ------
        ValueError
            If the provider did not return an email or subject id, or
            reports the email as unverified
        """


class GoogleStrategy(OAuthProviderStrategy):
    key = "google"

    def is_configured(self, settings: Settings) -> bool:
        return bool(
            settings.oauth_google_client_id and settings.oauth_google_client_secret,
        )

    def register(self, oauth: OAuth, settings: Settings) -> Any:
        secret = settings.oauth_google_client_secret
        return oauth.register(
            name=self.key,
            client_id=settings.oauth_google_client_id,
            client_secret=secret.get_secret_value() if secret else "",
            server_metadata_url=(
                "https://accounts.google.com/.well-known/openid-configuration"
            ),
            client_kwargs={"scope": "openid email profile"},
        )

    async def fetch_identity(
        self,
        client: Any,
        token: dict[str, Any],
    ) -> ExternalIdentity:
        userinfo = token.get("userinfo")
        if userinfo is None:
            userinfo = await client.userinfo(token=token)
        return identity_from_google(userinfo)


class MicrosoftStrategy(OAuthProviderStrategy):
    """Microsoft identity platform (v2.0), profile read from Microsoft Graph."""

    key = "microsoft"

    def is_configured(self, settings: Settings) -> bool:
        return bool(
            settings.oauth_microsoft_client_id
            and settings.oauth_microsoft_client_secret,
        )

    def register(self, oauth: OAuth, settings: Settings) -> Any:
        secret = settings.oauth_microsoft_client_secret
        base = f"https://login.microsoftonline.com/{settings.oauth_microsoft_tenant}"
        return oauth.register(
            name=self.key,
            client_id=settings.oauth_microsoft_client_id,
            client_secret=secret.get_secret_value() if secret else "",
            authorize_url=f"{base}/oauth2/v2.0/authorize",
            access_token_url=f"{base}/oauth2/v2.0/token",
            api_base_url="https://graph.microsoft.com/v1.0/",
            client_kwargs={"scope": "User.Read"},
        )

    async def fetch_identity(
        self,
        client: Any,
        token: dict[str, Any],
    ) -> ExternalIdentity:
        resp = await client.get("me", token=token)
        resp.raise_for_status()
        return identity_from_microsoft(resp.json())


PROVIDER_STRATEGIES: dict[str, OAuthProviderStrategy] = {
    s.key: s() for s in [GoogleStrategy, MicrosoftStrategy]
}


def identity_from_google(userinfo: dict[str, Any]) -> ExternalIdentity:
    subject = str(userinfo.get("sub") or "")
    email = (userinfo.get("email") or "").strip()
    if not subject or not email:
        msg = "Google profile is missing the subject or email"
        raise ValueError(msg)
    if userinfo.get("email_verified") is not True:
        msg = "Google has not verified the email"
        raise ValueError(msg)

    return ExternalIdentity(
        first_name=userinfo.get("given_name") or "",
        last_name=userinfo.get("family_name") or "",
        email=Email(email),
        provider=GoogleStrategy.key,
        provider_id=subject,
        email_verified=True,
    )


def identity_from_microsoft(profile: dict[str, Any]) -> ExternalIdentity:
    """Build the identity from a Graph ``/me`` profile.

    Tenant admins can set ``mail`` and ``userPrincipalName`` to any
    address, so the email is never treated as verified.
    """
    subject = str(profile.get("id") or "")
    # Work accounts without a mailbox only expose userPrincipalName
    email = (profile.get("mail") or profile.get("userPrincipalName") or "").strip()
    if not subject or not email:
        msg = "Microsoft profile is missing the id or email"
        raise ValueError(msg)

    return ExternalIdentity(
        first_name=profile.get("givenName") or "",
        last_name=profile.get("surname") or "",
        email=Email(email),
        provider=MicrosoftStrategy.key,
        provider_id=subject,
        email_verified=False,
    )


class OAuthProviderRegistry:
    """The Authlib clients registered for this process, by provider key."""

    def __init__(
        self,
        oauth: OAuth,
        clients: dict[str, Any],
        strategies: dict[str, OAuthProviderStrategy] = PROVIDER_STRATEGIES,
    ):
        self._oauth = oauth
        self._clients = clients
        self._strategies = strategies

    @property
    def providers(self) -> list[str]:
        return sorted(self._clients)

    def get(self, provider: str) -> tuple[Any, OAuthProviderStrategy]:
        """Return the client and strategy for a provider.

        Raises
        ------
        KeyError
            If the provider is unknown or not configured
        """
        return self._clients[provider], self._strategies[provider]

    def __contains__(self, provider: object) -> bool:
        return provider in self._clients


def init_oauth(settings: Settings) -> OAuthProviderRegistry:
    """Register an Authlib client for every configured provider."""
    oauth = OAuth()
    clients: dict[str, Any] = {}

    for key, strategy in PROVIDER_STRATEGIES.items():
        if not strategy.is_configured(settings):
            continue
        clients[key] = strategy.register(oauth, settings)
        logger.info("OAuth provider registered: %s", key)

    if not clients:
        logger.info("No OAuth providers configured")

    return OAuthProviderRegistry(oauth, clients)
