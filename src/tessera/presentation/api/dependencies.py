"""FastAPI dependency injection for the Tessera API.

Long-lived handles (engine, session maker, token and password services,
notifier, OAuth clients) are built once by ``create_app`` and stored on
``app.state``. The providers below hand them, or per-request objects
built from them, to the routers.
"""

import logging
from pathlib import Path
from typing import Annotated, AsyncGenerator

from fastapi import Cookie, Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from tessera.infrastructure.persistence.sqlalchemy.models import Base
from tessera.presentation.api.config import get_api_settings, verification_url
from tessera_auth import JWTService, PasswordHashingService
from tessera_config.settings import Settings
from tessera_identity.application.ports import Notifier
from tessera_identity.application.services import (
    AuthenticationService,
    IdentityReconciler,
)
from tessera_identity.domain.account import Account
from tessera_identity.infrastructure.oauth import OAuthProviderRegistry
from tessera_identity.infrastructure.persistence.sqlalchemy import (
    AccountModel,  # NOQA: F401  (registers the accounts table on Base.metadata)
    AccountRepositorySQLAlchemy,
    SQLAlchemyTransactionManager,
)

logger = logging.getLogger(__name__)

# Security scheme for Bearer tokens (the cookie is preferred)
security = HTTPBearer(auto_error=False)

SettingsDep = Annotated[Settings, Depends(get_api_settings)]


# -----------------------------------------------------------------------------
# Startup construction
# -----------------------------------------------------------------------------


def create_engine(settings: Settings) -> AsyncEngine:
    """Create the async engine for the configured database.

    The engine owns the connection pool and is shared by all requests.
    """
    url = settings.database_url

    # Ensure data directory exists for SQLite
    if url.startswith("sqlite") and ":memory:" not in url:
        db_path = url.split("///")[-1]
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)

    return create_async_engine(
        url,
        echo=False,
        pool_pre_ping=True,  # Verify connections before use
    )


def create_session_maker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


def create_jwt_service(settings: Settings) -> JWTService:
    return JWTService(
        secret_key=settings.jwt_secret_key.get_secret_value(),
        issuer=settings.jwt_issuer,
        access_token_expire_minutes=settings.jwt_access_token_expire_minutes,
        verification_token_expire_hours=settings.jwt_verification_token_expire_hours,
    )


def create_password_service(settings: Settings) -> PasswordHashingService:
    return PasswordHashingService(rounds=settings.password_hash_rounds)


async def create_tables(engine: AsyncEngine) -> None:
    """
    Create all database tables (idempotent).

    Uses SQLAlchemy's create_all() which only creates missing tables.
    Existing tables and their data are never modified or deleted.
    """
    logger.info("Ensuring all database tables exist...")

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    logger.info("Database schema is up to date")


async def drop_tables(engine: AsyncEngine) -> None:
    """
    Drop all database tables (USE WITH CAUTION!).

    This is primarily for testing and development reset scenarios.
    """
    logger.warning("Dropping all database tables...")

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    logger.info("Database tables dropped successfully")


# -----------------------------------------------------------------------------
# Database Session
# -----------------------------------------------------------------------------


async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    Database session dependency.

    Creates an async session for the request using the shared engine/pool.

    Yields
    ------
    AsyncSession for database operations
    """
    session_maker: async_sessionmaker[AsyncSession] = request.app.state.session_maker
    async with session_maker() as session:
        yield session


# Type alias for injected session
DBSession = Annotated[AsyncSession, Depends(get_db_session)]


# -----------------------------------------------------------------------------
# Authentication Services
# -----------------------------------------------------------------------------


def get_jwt_service(request: Request) -> JWTService:
    return request.app.state.jwt_service


def get_password_service(request: Request) -> PasswordHashingService:
    return request.app.state.password_service


def get_notifier(request: Request) -> Notifier:
    return request.app.state.notifier


def get_oauth_registry(request: Request) -> OAuthProviderRegistry:
    return request.app.state.oauth


JWTServiceDep = Annotated[JWTService, Depends(get_jwt_service)]
OAuthRegistryDep = Annotated[OAuthProviderRegistry, Depends(get_oauth_registry)]


async def get_authentication_service(
    session: DBSession,
    settings: SettingsDep,
    jwt_service: JWTService = Depends(get_jwt_service),
    password_service: PasswordHashingService = Depends(get_password_service),
    notifier: Notifier = Depends(get_notifier),
) -> AuthenticationService:
    """
    Get the authentication service bound to this request's session.

    The repository and the transaction manager share the session, so
    everything the service does in one request is one unit of work.
    """
    account_repo = AccountRepositorySQLAlchemy(session)
    transaction_manager = SQLAlchemyTransactionManager(session)

    return AuthenticationService(
        account_repository=account_repo,
        transaction_manager=transaction_manager,
        password_service=password_service,
        jwt_service=jwt_service,
        notifier=notifier,
        identity_reconciler=IdentityReconciler(account_repo, transaction_manager),
        verification_url=verification_url(settings),
        mail_from=settings.mail_from_email,
    )


# Type alias for injected auth service
AuthService = Annotated[AuthenticationService, Depends(get_authentication_service)]


# -----------------------------------------------------------------------------
# Current Account (session token)
# -----------------------------------------------------------------------------


async def get_current_account(
    auth_service: AuthService,
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    access_token: str | None = Cookie(default=None),
) -> Account:
    """
    FastAPI dependency to get the account behind the session token.

    The token is read from the ``access_token`` cookie, falling back to
    an ``Authorization: Bearer`` header.

    Raises
    ------
    HTTPException
        401 if no token is present
    InvalidTokenError
        If the token is invalid or its account no longer exists
    """
    token = access_token or (credentials.credentials if credentials else None)
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return await auth_service.resolve_session(token)


# Type alias for injected current account
CurrentAccount = Annotated[Account, Depends(get_current_account)]
