"""
Pytest configuration for tessera_identity persistence tests.

SQLite-backed tests always run; PostgreSQL tests use Testcontainers and
are marked ``integration``.
"""

# Re-export shared database fixtures
from tests.shared.fixtures.database import (
    async_engine,
    db_session,
    postgres_container,
    sqlite_session,
)

__all__ = [
    "async_engine",
    "db_session",
    "postgres_container",
    "sqlite_session",
]
