"""OAuth provider integration (Authlib)."""

from tessera_identity.infrastructure.oauth.providers import (
    PROVIDER_STRATEGIES,
    GoogleStrategy,
    MicrosoftStrategy,
    OAuthProviderRegistry,
    OAuthProviderStrategy,
    identity_from_google,
    identity_from_microsoft,
    init_oauth,
)

__all__ = [
    "PROVIDER_STRATEGIES",
    "GoogleStrategy",
    "MicrosoftStrategy",
    "OAuthProviderRegistry",
    "OAuthProviderStrategy",
    "identity_from_google",
    "identity_from_microsoft",
    "init_oauth",
]
