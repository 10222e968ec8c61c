"""Shared pytest fixtures for all test domains."""

from tests.shared.fixtures.database import (
    async_engine,
    db_session,
    postgres_container,
    sqlite_session,
)
from tests.shared.fixtures.factories import TestAccountFactory
from tests.shared.fixtures.fakes import (
    RecordingNotifier,
    RecordingTransactionManager,
)

__all__ = [
    "async_engine",
    "db_session",
    "postgres_container",
    "sqlite_session",
    "TestAccountFactory",
    "RecordingNotifier",
    "RecordingTransactionManager",
]
