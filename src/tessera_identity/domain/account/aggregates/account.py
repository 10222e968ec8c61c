"""Account aggregate."""

from datetime import datetime
from typing import Union
from uuid import UUID, uuid4

from tessera.domain.shared.time import utc_now
from tessera_identity.domain.account.value_objects import Email, ExternalIdentity


class Account:
    """
    Account aggregate root.

    A local account signs in with a password and starts inactive until the
    owner follows the verification link. An account created from an OAuth
    identity has no password and is active from the start.
    """

    def __init__(  # NOQA: PLR0913
        self,
        email: Union[str, Email],
        first_name: str,
        last_name: str = "",
        password_hash: str | None = None,
        phone_number: str = "",
        is_active: bool = False,
        provider: str | None = None,
        provider_id: str | None = None,
        id: UUID | None = None,
        created_at: datetime | None = None,
        updated_at: datetime | None = None,
    ):
        self._id = id or uuid4()
        self._email = email if isinstance(email, Email) else Email(email)
        self._first_name = first_name
        self._last_name = last_name
        self._password_hash = password_hash
        self._phone_number = phone_number
        self._is_active = is_active
        self._provider = provider or None
        self._provider_id = provider_id or None
        self._created_at = created_at or utc_now()
        self._updated_at = updated_at or utc_now()

    @property
    def id(self) -> UUID:
        return self._id

    @property
    def email(self) -> str:
        return self._email.value

    @property
    def first_name(self) -> str:
        return self._first_name

    @property
    def last_name(self) -> str:
        return self._last_name

    @property
    def password_hash(self) -> str | None:
        return self._password_hash

    @property
    def phone_number(self) -> str:
        return self._phone_number

    @property
    def is_active(self) -> bool:
        return self._is_active

    @property
    def provider(self) -> str | None:
        return self._provider

    @property
    def provider_id(self) -> str | None:
        return self._provider_id

    @property
    def is_oauth(self) -> bool:
        """True when the account is bound to an OAuth provider."""
        return bool(self._provider)

    @property
    def created_at(self) -> datetime:
        return self._created_at

    @property
    def updated_at(self) -> datetime:
        return self._updated_at

    @classmethod
    def create(
        cls,
        email: Union[str, Email],
        first_name: str,
        last_name: str,
        password_hash: str,
        phone_number: str = "",
    ) -> "Account":
        """Create a local account. It stays inactive until verified."""
        return cls(
            email=email,
            first_name=first_name,
            last_name=last_name,
            password_hash=password_hash,
            phone_number=phone_number,
            is_active=False,
        )

    @classmethod
    def create_from_external(cls, identity: ExternalIdentity) -> "Account":
        """Create an active, password-less account from an OAuth identity."""
        return cls(
            email=identity.email,
            first_name=identity.first_name,
            last_name=identity.last_name,
            password_hash=None,
            is_active=True,
            provider=identity.provider,
            provider_id=identity.provider_id,
        )

    @classmethod
    def reconstitute(  # NOQA: PLR0913
        cls,
        id: UUID,
        email: Union[str, Email],
        first_name: str,
        last_name: str,
        password_hash: str | None,
        phone_number: str,
        is_active: bool,
        provider: str | None,
        provider_id: str | None,
        created_at: datetime,
        updated_at: datetime,
    ) -> "Account":
        return cls(
            id=id,
            email=email,
            first_name=first_name,
            last_name=last_name,
            password_hash=password_hash,
            phone_number=phone_number,
            is_active=is_active,
            provider=provider,
            provider_id=provider_id,
            created_at=created_at,
            updated_at=updated_at,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Account):
            return NotImplemented
        return self._id == other._id

    def __hash__(self) -> int:
        return hash(self._id)

    def __repr__(self) -> str:
        return (
            f"Account(id={self._id}, email={self._email.value}, "
            f"active={self._is_active}, provider={self._provider})"
        )
