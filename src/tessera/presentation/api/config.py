"""API configuration adapter.

Bridges the tessera_config settings with the API layer. The settings a
running app uses are the ones it was created with, stored on app.state.
"""

from fastapi import Request

from tessera_config.settings import Settings

API_VERSION = "1.0.0"
API_V1_PREFIX = "/api/v1"

ACCESS_TOKEN_COOKIE = "access_token"  # NOQA: S105
OAUTH_STATE_COOKIE = "oauth_state"
OAUTH_STATE_MAX_AGE_SECONDS = 5 * 60


def get_api_settings(request: Request) -> Settings:
    """Get the settings of the running application."""
    return request.app.state.settings


def verification_url(settings: Settings) -> str:
    """Absolute URL of the account verification endpoint."""
    return f"{settings.server_domain.rstrip('/')}{API_V1_PREFIX}/auth/verify"


def oauth_callback_url(settings: Settings, provider: str) -> str:
    """Absolute URL the provider redirects to after consent."""
    return (
        f"{settings.oauth_callback_base_url}{API_V1_PREFIX}"
        f"/auth/oauth/{provider}/callback"
    )
