"""Application settings loaded from environment variables.

Configuration file discovery (in priority order):
1. OS environment variables (always highest priority)
2. TESSERA_ENV_FILE environment variable (path to .env file)
3. config/.env.dev - local development
4. config/.env - production/Docker

Uses pydantic-settings for automatic type coercion and validation.
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Literal

from pydantic import SecretStr, computed_field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def _find_project_root() -> Path:
    """Find the project root directory."""
    current = Path(__file__).resolve().parent

    for parent in [current, *current.parents]:
        if (parent / "config").is_dir():
            return parent
        if (parent / "pyproject.toml").is_file():
            return parent
        if parent == Path("/app"):
            return parent

    return Path(__file__).resolve().parents[2]


def get_config_dir() -> Path:
    """Get the config directory path."""
    return _find_project_root() / "config"


def _resolve_env_file_path() -> Path | None:
    """Resolve the .env file path.

    Priority:
    1. TESSERA_ENV_FILE env var (relative paths resolve from the project root)
    2. config/.env.dev (local development)
    3. config/.env (production)
    """
    env_file_path = os.environ.get("TESSERA_ENV_FILE")
    if env_file_path:
        path = Path(env_file_path)
        if not path.is_absolute():
            path = _find_project_root() / path
        if path.exists():
            return path

    config_dir = get_config_dir()

    dev_env = config_dir / ".env.dev"
    if dev_env.exists():
        return dev_env

    prod_env = config_dir / ".env"
    if prod_env.exists():
        return prod_env

    return None


class Settings(BaseSettings):
    """Application configuration loaded from environment variables.

    Values are loaded from:
    1. OS environment variables (highest priority)
    2. .env file (config/.env.dev or config/.env)
    3. Default values
    """

    model_config = SettingsConfigDict(
        env_file=_resolve_env_file_path(),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Security (MUST be set - app fails without it)
    jwt_secret_key: SecretStr  # Secret for signing identity tokens
    session_secret_key: SecretStr = SecretStr("")  # Signs the OAuth state cookie

    # Application
    app_name: str = "Tessera"
    debug: bool = False
    server_domain: str = "http://localhost:8000"  # Base URL for email links

    # Database (POSTGRES_ prefix)
    postgres_host: str = "localhost"
    postgres_port: int = 5432
    postgres_user: str = "postgres"
    postgres_password: SecretStr = SecretStr("")
    postgres_db: str = "tessera"
    database_url_override: str = ""  # e.g. sqlite+aiosqlite:///./data/tessera.db

    # API (API_ prefix)
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    api_debug: bool = False
    api_cors_origins: str = ""  # Empty = no CORS allowed
    api_cookie_secure: bool = True
    api_cookie_samesite: Literal["lax", "strict", "none"] = "lax"
    api_cookie_domain: str | None = None

    @field_validator("api_cors_origins", mode="before")
    @classmethod
    def _validate_cors_origins(cls, v: Any) -> str:
        """Ensure cors_origins is stored as comma-separated string."""
        if isinstance(v, list):
            return ",".join(v)
        return str(v) if v else ""

    # JWT
    jwt_issuer: str = "tessera"
    jwt_access_token_expire_minutes: int = 15
    jwt_verification_token_expire_hours: int = 48

    # Passwords
    password_hash_rounds: int = 12

    # Mail (MAIL_ prefix)
    mail_provider: Literal["smtp", "ses"] = "smtp"
    mail_from_email: str = "no-reply@example.com"
    mail_from_name: str = "Tessera"
    mail_timeout_seconds: float = 10.0

    # SMTP (SMTP_ prefix)
    smtp_host: str = "localhost"
    smtp_port: int = 587
    smtp_user: str = ""
    smtp_password: SecretStr | None = None
    smtp_use_tls: bool = True
    smtp_starttls: bool = True

    # Amazon SES (SES_ prefix)
    ses_region: str = "eu-west-2"

    # OAuth (OAUTH_ prefix)
    oauth_google_client_id: str = ""
    oauth_google_client_secret: SecretStr | None = None
    oauth_microsoft_client_id: str = ""
    oauth_microsoft_client_secret: SecretStr | None = None
    oauth_microsoft_tenant: str = "common"
    oauth_redirect_base_url: str = ""  # Defaults to server_domain

    # Logging (LOG_ prefix)
    log_level: str = "INFO"

    # Computed properties
    @computed_field  # type: ignore[prop-decorator]
    @property
    def database_url(self) -> str:
        """Construct the database URL from components."""
        if self.database_url_override:
            return self.database_url_override
        return (
            f"postgresql+asyncpg://{self.postgres_user}:"
            f"{self.postgres_password.get_secret_value()}"
            f"@{self.postgres_host}:{self.postgres_port}/{self.postgres_db}"
        )

    @computed_field  # type: ignore[prop-decorator]
    @property
    def cors_origins(self) -> list[str]:
        """Parse CORS origins from comma-separated string."""
        return [o.strip() for o in self.api_cors_origins.split(",") if o.strip()]

    @property
    def oauth_callback_base_url(self) -> str:
        """Base URL the OAuth providers redirect back to."""
        return (self.oauth_redirect_base_url or self.server_domain).rstrip("/")

    @property
    def session_signing_key(self) -> str:
        """Key for the signed session cookie (falls back to the JWT secret)."""
        return (
            self.session_secret_key.get_secret_value()
            or self.jwt_secret_key.get_secret_value()
        )


@lru_cache()
def get_settings() -> Settings:
    """Return cached application settings.

    The required jwt_secret_key must be provided via environment
    variables or .env file.
    """
    return Settings()  # type: ignore[call-arg]  # pydantic-settings loads from env


def clear_settings_cache() -> None:
    """Clear the settings cache (useful for tests)."""
    get_settings.cache_clear()
