"""SQLAlchemy implementation of the TransactionManager port."""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from tessera_identity.application.ports import TransactionManager

logger = logging.getLogger(__name__)


class SQLAlchemyTransactionManager(TransactionManager):
    """Transaction boundary over the request's AsyncSession."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def begin(self) -> None:
        if not self._session.in_transaction():
            await self._session.begin()

    async def commit(self) -> None:
        await self._session.commit()

    async def rollback(self) -> None:
        logger.debug("Rolling back transaction")
        await self._session.rollback()
