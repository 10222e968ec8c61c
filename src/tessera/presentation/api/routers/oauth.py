"""OAuth login routes (Google, Microsoft)."""

import logging
from typing import Any

import httpx
from authlib.integrations.starlette_client import OAuthError
from fastapi import APIRouter, HTTPException, Request, Response, status

from tessera.presentation.api.config import oauth_callback_url
from tessera.presentation.api.dependencies import (
    AuthService,
    JWTServiceDep,
    OAuthRegistryDep,
    SettingsDep,
)
from tessera.presentation.api.routers.auth import issue_session
from tessera.presentation.api.schemas.auth import SessionResponse
from tessera_identity.exceptions import OAuthAuthenticationError
from tessera_identity.infrastructure.oauth import (
    OAuthProviderRegistry,
    OAuthProviderStrategy,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def _provider_or_404(
    registry: OAuthProviderRegistry,
    provider: str,
) -> tuple[Any, OAuthProviderStrategy]:
    if provider not in registry:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"OAuth provider not available: {provider}",
        )
    return registry.get(provider)


@router.get("/oauth/providers", summary="List configured OAuth providers")
async def list_providers(registry: OAuthRegistryDep) -> dict[str, list[str]]:
    return {"providers": registry.providers}


@router.get(
    "/oauth/{provider}",
    summary="Start an OAuth login",
    responses={
        302: {"description": "Redirect to the provider's consent page"},
        404: {"description": "Provider not configured"},
    },
)
async def oauth_login(
    provider: str,
    request: Request,
    registry: OAuthRegistryDep,
    settings: SettingsDep,
) -> Response:
    """Redirect to the provider. The CSRF state travels in the session cookie."""
    client, _ = _provider_or_404(registry, provider)
    return await client.authorize_redirect(
        request,
        oauth_callback_url(settings, provider),
    )


@router.get(
    "/oauth/{provider}/callback",
    summary="Complete an OAuth login",
    responses={
        200: {"description": "Signed in, session cookie set"},
        401: {"description": "Provider rejected the login or returned no email"},
        404: {"description": "Provider not configured"},
    },
)
async def oauth_callback(
    provider: str,
    request: Request,
    response: Response,
    registry: OAuthRegistryDep,
    auth_service: AuthService,
    jwt_service: JWTServiceDep,
    settings: SettingsDep,
) -> SessionResponse:
    """
    Exchange the authorization code and sign the account in.

    The first login with an identity creates an active account without
    a password.
    """
    client, strategy = _provider_or_404(registry, provider)

    try:
        token = await client.authorize_access_token(request)
        identity = await strategy.fetch_identity(client, token)
    except (OAuthError, httpx.HTTPError, ValueError) as e:
        logger.warning("OAuth callback failed for %s: %s", provider, e)
        raise OAuthAuthenticationError(provider, str(e)) from e

    result = await auth_service.handle_oauth_user(identity)
    logger.info("OAuth login via %s for account %s", provider, result.id)
    return issue_session(response, result.id, jwt_service, settings)
