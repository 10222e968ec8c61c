"""FastAPI application factory.

Creates and configures the FastAPI application with all routers,
middleware, and exception handlers.

API Versioning:
    All API endpoints are versioned under /api/v1/ prefix.
    The health check endpoint remains unversioned at /health.
"""

import logging
import sys
from contextlib import asynccontextmanager
from functools import lru_cache
from typing import AsyncGenerator

from fastapi import APIRouter, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.ext.asyncio import AsyncEngine
from starlette.middleware.sessions import SessionMiddleware

from tessera.presentation.api.config import (
    API_V1_PREFIX,
    API_VERSION,
    OAUTH_STATE_COOKIE,
    OAUTH_STATE_MAX_AGE_SECONDS,
)
from tessera.presentation.api.dependencies import (
    create_engine,
    create_jwt_service,
    create_password_service,
    create_session_maker,
    create_tables,
)
from tessera.presentation.api.exception_handlers import setup_exception_handlers
from tessera.presentation.api.routers import auth_router, oauth_router, users_router
from tessera_config.settings import Settings, get_settings
from tessera_identity.application.ports import Notifier
from tessera_identity.infrastructure.email import create_notifier
from tessera_identity.infrastructure.oauth import init_oauth


@lru_cache(maxsize=1)
def configure_logging(log_level_name: str) -> None:
    """Configure application logging once per process.

    Sets up logging for the tessera packages with:
    - Console output with timestamps and module names
    - Configurable log level for tessera modules
    - WARNING level for noisy third-party libraries
    """
    log_level = getattr(logging, log_level_name.upper(), logging.INFO)

    log_format = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
    date_format = "%Y-%m-%d %H:%M:%S"

    logging.basicConfig(
        level=log_level,
        format=log_format,
        datefmt=date_format,
        stream=sys.stdout,
        force=True,  # Override any existing config
    )

    for name in ("tessera", "tessera_auth", "tessera_identity", "tessera_config"):
        logging.getLogger(name).setLevel(log_level)

    # Quiet down noisy third-party loggers
    for name in ("httpx", "httpcore", "sqlalchemy.engine", "aiosqlite", "botocore"):
        logging.getLogger(name).setLevel(logging.WARNING)


logger = logging.getLogger(__name__)

OPENAPI_TAGS = [
    {
        "name": "Authentication",
        "description": """Account registration and session management.

**Registration:**
- Sign up with email and password
- Activate the account through the emailed link (valid 48 hours)

**Sessions:**
- Sign in to receive an HttpOnly `access_token` cookie
- Sign in with Google or Microsoft (accounts are created on first login)

**Security:**
- Passwords are hashed with bcrypt
- Session tokens are HS256 JWTs, revoked only by expiry
""",
    },
    {
        "name": "Users",
        "description": "The signed-in account.",
    },
    {
        "name": "Health",
        "description": "Service health monitoring endpoints.",
    },
]


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    logger.info("Starting Tessera API v%s...", API_VERSION)
    engine: AsyncEngine = app.state.engine
    await _init_database_schema(engine)
    yield

    logger.info("Shutting down Tessera API...")
    await engine.dispose()
    logger.info("Database connections closed")


async def _init_database_schema(engine: AsyncEngine) -> None:
    """Initialize database schema (if not existent) and verify connectivity."""
    try:
        await create_tables(engine)
    except ConnectionRefusedError:
        logger.critical("Could not connect to the database.")
        raise SystemExit(1) from None


def create_v1_router() -> APIRouter:
    """Create the v1 API router with all endpoints."""
    v1_router = APIRouter()

    v1_router.include_router(auth_router, prefix="/auth", tags=["Authentication"])
    v1_router.include_router(oauth_router, prefix="/auth", tags=["Authentication"])
    v1_router.include_router(users_router, prefix="/users", tags=["Users"])

    return v1_router


def create_app(
    settings: Settings | None = None,
    notifier: Notifier | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Parameters
    ----------
    settings
        Optional settings override for testing.
    notifier
        Optional notifier override; by default the variant named by
        ``settings.mail_provider`` is built.

    Returns
    -------
    Configured FastAPI application instance.
    """
    if settings is None:
        settings = get_settings()

    configure_logging(settings.log_level)

    app = FastAPI(
        title=f"{settings.app_name} API",
        description="Account registration, login and session tokens.",
        version=API_VERSION,
        docs_url="/docs" if settings.api_debug else None,
        redoc_url="/redoc" if settings.api_debug else None,
        openapi_url="/openapi.json" if settings.api_debug else None,
        lifespan=lifespan,
        openapi_tags=OPENAPI_TAGS,
    )

    # Long-lived handles, built once and shared by all requests
    engine = create_engine(settings)
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_maker = create_session_maker(engine)
    app.state.jwt_service = create_jwt_service(settings)
    app.state.password_service = create_password_service(settings)
    app.state.notifier = notifier or create_notifier(settings)
    app.state.oauth = init_oauth(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Holds the OAuth state between the redirect and the callback
    app.add_middleware(
        SessionMiddleware,
        secret_key=settings.session_signing_key,
        session_cookie=OAUTH_STATE_COOKIE,
        max_age=OAUTH_STATE_MAX_AGE_SECONDS,
        same_site="lax",
        https_only=settings.api_cookie_secure,
    )

    setup_exception_handlers(app)

    app.include_router(create_v1_router(), prefix=API_V1_PREFIX)

    # Health check endpoint (unversioned - always accessible)
    @app.get("/health", tags=["Health"])
    async def health_check() -> dict:
        """Health check endpoint for load balancers and monitoring."""
        return {
            "status": "healthy",
            "version": API_VERSION,
            "api_versions": ["v1"],
        }

    return app
