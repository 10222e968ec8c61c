"""SQLAlchemy implementation of AccountRepository."""

import logging
from typing import Any, Union
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from tessera.domain.shared.time import ensure_tz_aware, utc_now
from tessera_identity.domain.account import (
    UPDATABLE_FIELDS,
    Account,
    AccountNotFoundError,
    AccountRepository,
    DuplicateAccountError,
    Email,
)
from tessera_identity.infrastructure.persistence.sqlalchemy.models import AccountModel

logger = logging.getLogger(__name__)


class AccountRepositorySQLAlchemy(AccountRepository):
    """SQLAlchemy implementation of the AccountRepository interface.

    Writes are flushed, never committed. The caller's transaction manager
    owns the commit.
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def insert(self, account: Account) -> Account:
        if await self._find_model_by_email(account.email) is not None:
            raise DuplicateAccountError(account.email)

        model = self._map_to_model(account)
        self._session.add(model)
        try:
            await self._session.flush()
        except IntegrityError as e:
            # Lost a race against a concurrent insert of the same email
            if "unique" in str(e).lower() or "23505" in str(e):
                raise DuplicateAccountError(account.email) from e
            raise

        logger.info("Created account: %s", account.id)
        return self._map_to_domain(model)

    async def find_by_id(self, account_id: UUID) -> Account | None:
        stmt = select(AccountModel).where(AccountModel.id == account_id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if model is None:
            return None

        return self._map_to_domain(model)

    async def find_by_email(self, email: Union[str, Email]) -> Account | None:
        email_value = email.value if isinstance(email, Email) else Email(email).value
        model = await self._find_model_by_email(email_value)

        if model is None:
            return None

        return self._map_to_domain(model)

    async def update(self, account_id: UUID, fields: dict[str, Any]) -> None:
        unknown = set(fields) - UPDATABLE_FIELDS
        if unknown:
            msg = f"Cannot update account fields: {', '.join(sorted(unknown))}"
            raise ValueError(msg)

        stmt = (
            update(AccountModel)
            .where(AccountModel.id == account_id)
            .values(**fields, updated_at=utc_now())
            .execution_options(synchronize_session="fetch")
        )
        result = await self._session.execute(stmt)

        if result.rowcount == 0:
            raise AccountNotFoundError(str(account_id))

        logger.debug("Updated account %s: %s", account_id, sorted(fields))

    async def _find_model_by_email(self, email_value: str) -> AccountModel | None:
        stmt = select(AccountModel).where(AccountModel.email == email_value)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    def _map_to_domain(self, model: AccountModel) -> Account:
        return Account.reconstitute(
            id=model.id,
            email=model.email,
            first_name=model.first_name,
            last_name=model.last_name,
            password_hash=model.password_hash,
            phone_number=model.phone_number,
            is_active=model.is_active,
            provider=model.provider,
            provider_id=model.provider_id,
            # SQLite drops the offset
            created_at=ensure_tz_aware(model.created_at),
            updated_at=ensure_tz_aware(model.updated_at),
        )

    def _map_to_model(self, account: Account) -> AccountModel:
        return AccountModel(
            id=account.id,
            email=account.email,
            first_name=account.first_name,
            last_name=account.last_name,
            password_hash=account.password_hash,
            phone_number=account.phone_number,
            is_active=account.is_active,
            provider=account.provider,
            provider_id=account.provider_id,
            created_at=account.created_at,
            updated_at=account.updated_at,
        )
