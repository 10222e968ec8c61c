"""
Database fixtures for persistence tests.

Two flavours are provided:
- ``sqlite_session``: an in-memory aiosqlite database, fast and always on
- ``db_session``: an ephemeral PostgreSQL started with Testcontainers,
  used by tests marked ``integration``

Usage:
    # In your conftest.py
    from tests.shared.fixtures.database import db_session

    async def test_something(db_session):
        repo = AccountRepositorySQLAlchemy(db_session)
        await repo.insert(account)
"""

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool, StaticPool
from testcontainers.postgres import PostgresContainer

from tessera.infrastructure.persistence.sqlalchemy.models.base import Base

# Use same Postgres version as production
POSTGRES_IMAGE = "postgres:18-alpine"


def _register_models() -> None:
    # Import models to register them with Base.metadata
    import tessera_identity.infrastructure.persistence.sqlalchemy.models  # noqa: F401


@pytest.fixture(scope="session")
def postgres_container():
    """
    Start a PostgreSQL container for the test session.

    The container is shared across all tests in the session for performance.
    Each test gets a clean database state via table drop/create.
    """
    with PostgresContainer(POSTGRES_IMAGE) as postgres:
        yield postgres


@pytest.fixture(scope="session")
def async_engine(postgres_container):
    """
    Create an async SQLAlchemy engine connected to the test container.

    Session-scoped to avoid recreating the engine for each test.
    """
    connection_url = postgres_container.get_connection_url()
    # Testcontainers may return postgresql+psycopg2:// or postgresql://
    async_url = connection_url.replace(
        "postgresql+psycopg2://", "postgresql+asyncpg://"
    )
    async_url = async_url.replace("postgresql://", "postgresql+asyncpg://")

    return create_async_engine(
        async_url,
        echo=False,
        poolclass=NullPool,  # Avoid connection pool issues in tests
    )


@pytest_asyncio.fixture(scope="function")
async def db_session(async_engine):
    """
    Provide an isolated PostgreSQL session for each test.

    Tables are dropped and recreated before the test and dropped after it.
    """
    _register_models()

    async with async_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)

    session_maker = async_sessionmaker(
        async_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with session_maker() as session:
        yield session
        await session.rollback()

    async with async_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest_asyncio.fixture(scope="function")
async def sqlite_session():
    """Provide a session on a fresh in-memory SQLite database."""
    _register_models()

    # One shared connection, otherwise every checkout sees an empty database
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_maker = async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with session_maker() as session:
        yield session

    await engine.dispose()
