"""Account repository interface."""

from abc import ABC, abstractmethod
from typing import Any, Optional, Union
from uuid import UUID

from tessera_identity.domain.account.aggregates.account import Account
from tessera_identity.domain.account.value_objects import Email

# Fields a partial update may touch. Identity fields (id, email) and
# timestamps are managed by the repository itself.
UPDATABLE_FIELDS = frozenset(
    {
        "first_name",
        "last_name",
        "password_hash",
        "phone_number",
        "is_active",
        "provider",
        "provider_id",
    },
)


class AccountRepository(ABC):
    """Repository interface for Account aggregates.

    Accounts are never deleted. Implementations operate inside the
    caller's transaction and never commit on their own.
    """

    @abstractmethod
    async def insert(self, account: Account) -> Account:
        """Persist a new account.

        Raises
        ------
        DuplicateAccountError
            If an account with the same email already exists
        """

    @abstractmethod
    async def find_by_id(self, account_id: UUID) -> Optional[Account]:
        """Find an account by its id."""

    @abstractmethod
    async def find_by_email(self, email: Union[str, Email]) -> Optional[Account]:
        """Find an account by email (case-insensitive)."""

    @abstractmethod
    async def update(self, account_id: UUID, fields: dict[str, Any]) -> None:
        """Apply a partial update to an account.

        Raises
        ------
        AccountNotFoundError
            If no account has the given id
        ValueError
            If a field is not in ``UPDATABLE_FIELDS``
        """
