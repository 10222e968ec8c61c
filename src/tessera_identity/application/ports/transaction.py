"""Transaction boundary port."""

from abc import ABC, abstractmethod
from contextlib import asynccontextmanager
from typing import AsyncIterator


class TransactionManager(ABC):
    """Begin, commit and roll back the unit of work of one request."""

    @abstractmethod
    async def begin(self) -> None:
        """Start a transaction if none is open."""

    @abstractmethod
    async def commit(self) -> None:
        """Commit the open transaction."""

    @abstractmethod
    async def rollback(self) -> None:
        """Roll back the open transaction."""

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[None]:
        """Scope a unit of work.

        Commits when the block exits normally. Any exception raised in the
        block or by the commit itself, including cancellation, rolls the
        transaction back before it propagates.
        """
        await self.begin()
        try:
            yield
            await self.commit()
        except BaseException:
            await self.rollback()
            raise
