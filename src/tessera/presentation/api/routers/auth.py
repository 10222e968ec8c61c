"""Authentication router for sign-up, verification and session cookies."""

import logging
from uuid import UUID

from fastapi import APIRouter, Cookie, HTTPException, Query, Response, status

from tessera.presentation.api.config import ACCESS_TOKEN_COOKIE
from tessera.presentation.api.dependencies import (
    AuthService,
    JWTServiceDep,
    SettingsDep,
)
from tessera.presentation.api.schemas.auth import (
    AccountResponse,
    ActivationResponse,
    MessageResponse,
    PasswordResetRequest,
    ResendVerificationRequest,
    SessionResponse,
    SignInRequest,
    SignUpRequest,
)
from tessera_auth import JWTService
from tessera_config.settings import Settings

logger = logging.getLogger(__name__)

router = APIRouter()


def set_access_token_cookie(
    response: Response,
    token: str,
    settings: Settings,
) -> None:
    """Set the session token as an HttpOnly cookie.

    This cookie is:
    - HttpOnly: Not accessible to JavaScript
    - Secure: Only sent over HTTPS (when cookie_secure=True)
    - SameSite: Per settings
    """
    response.set_cookie(
        key=ACCESS_TOKEN_COOKIE,
        value=token,
        httponly=True,
        secure=settings.api_cookie_secure,
        samesite=settings.api_cookie_samesite,
        max_age=settings.jwt_access_token_expire_minutes * 60,
        path="/",
        domain=settings.api_cookie_domain,
    )


def _clear_access_token_cookie(response: Response, settings: Settings) -> None:
    """Clear the session cookie (for sign-out)."""
    response.delete_cookie(
        key=ACCESS_TOKEN_COOKIE,
        path="/",
        domain=settings.api_cookie_domain,
    )


def issue_session(
    response: Response,
    account_id: UUID,
    jwt_service: JWTService,
    settings: Settings,
) -> SessionResponse:
    """Mint a session token, set it as the cookie and describe it."""
    token = jwt_service.create_access_token(account_id)
    set_access_token_cookie(response, token, settings)
    return SessionResponse(
        id=account_id,
        expires_in=int(jwt_service.access_token_ttl.total_seconds()),
    )


@router.post(
    "/sign-up",
    status_code=status.HTTP_201_CREATED,
    summary="Register a new account",
    responses={
        201: {"description": "Account created, verification email sent"},
        409: {"description": "Email already registered"},
        500: {"description": "Account could not be stored or email not sent"},
    },
)
async def sign_up(
    request: SignUpRequest,
    auth_service: AuthService,
) -> AccountResponse:
    """
    Register with email and password.

    The account stays inactive until the link in the verification email
    is opened. If the email cannot be sent, nothing is stored.
    """
    account = await auth_service.register_user(request.to_data())
    return AccountResponse.from_account(account)


@router.get(
    "/verify",
    summary="Activate an account",
    responses={
        200: {"description": "Account activated"},
        400: {"description": "Missing token"},
        401: {"description": "Invalid or expired token"},
        404: {"description": "Account no longer exists"},
    },
)
async def verify(
    auth_service: AuthService,
    token: str | None = Query(default=None),
) -> ActivationResponse:
    """Activate the account named by the token from the verification email."""
    if not token:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Missing verification token",
        )

    account_id = await auth_service.activate_account(token)
    return ActivationResponse(id=account_id)


@router.post(
    "/sign-in",
    summary="Sign in with email and password",
    responses={
        200: {"description": "Signed in, session cookie set"},
        401: {"description": "Incorrect password"},
        403: {"description": "Account not active or linked to an OAuth provider"},
        404: {"description": "No account with this email"},
    },
)
async def sign_in(
    request: SignInRequest,
    response: Response,
    auth_service: AuthService,
    jwt_service: JWTServiceDep,
    settings: SettingsDep,
) -> SessionResponse:
    """
    Authenticate with email and password.

    On success the session token is set as the HttpOnly ``access_token``
    cookie.
    """
    account_id = await auth_service.login_user(request.to_data())
    return issue_session(response, account_id, jwt_service, settings)


@router.post("/sign-out", summary="Clear the session cookie")
async def sign_out(response: Response, settings: SettingsDep) -> MessageResponse:
    """
    Clear the session cookie.

    Tokens are not revoked server side; a copied token stays valid until
    it expires.
    """
    _clear_access_token_cookie(response, settings)
    return MessageResponse(message="Signed out")


@router.post(
    "/refresh",
    summary="Renew the session cookie",
    responses={
        200: {"description": "New session cookie set"},
        401: {"description": "Missing, invalid or expired session"},
    },
)
async def refresh(
    response: Response,
    auth_service: AuthService,
    jwt_service: JWTServiceDep,
    settings: SettingsDep,
    access_token: str | None = Cookie(default=None),
) -> SessionResponse:
    """Issue a fresh session token for a still-valid session cookie."""
    if not access_token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="No session",
            headers={"WWW-Authenticate": "Bearer"},
        )

    account = await auth_service.resolve_session(access_token)
    logger.debug("Session refreshed for account: %s", account.id)
    return issue_session(response, account.id, jwt_service, settings)


@router.post(
    "/reset-password",
    summary="Change password",
    responses={
        200: {"description": "Password changed"},
        401: {"description": "Current password is incorrect"},
        404: {"description": "No account with this email"},
    },
)
async def reset_password(
    request: PasswordResetRequest,
    auth_service: AuthService,
) -> MessageResponse:
    """Change the password after checking the current one."""
    await auth_service.reset_password(request.to_data())
    return MessageResponse(message="Password changed")


@router.post(
    "/resend-verification",
    status_code=status.HTTP_202_ACCEPTED,
    summary="Send the verification email again",
)
async def resend_verification(
    request: ResendVerificationRequest,
    auth_service: AuthService,
) -> MessageResponse:
    """
    Send a new verification link to an inactive account.

    The response is the same whether or not the email is registered.
    """
    await auth_service.resend_verification_email(request.email)
    return MessageResponse(
        message="If the account exists and is not active, a new link was sent",
    )
