"""DTOs passed between the HTTP layer and the authentication service."""

from dataclasses import dataclass
from typing import Any
from uuid import UUID

from tessera_identity.domain.account import Account


@dataclass(frozen=True)
class SignUpData:
    """Validated sign-up input."""

    first_name: str
    last_name: str
    email: str
    password: str
    phone_number: str = ""


@dataclass(frozen=True)
class SignInData:
    """Validated password sign-in input."""

    email: str
    password: str


@dataclass(frozen=True)
class PasswordResetData:
    """Validated password change input."""

    email: str
    current_password: str
    new_password: str


@dataclass(frozen=True)
class OAuthResult:
    """Public view of an account reached through an OAuth login.

    Never carries the password hash.
    """

    id: UUID
    first_name: str
    last_name: str
    email: str
    provider: str | None
    provider_id: str | None

    @classmethod
    def from_account(cls, account: Account) -> "OAuthResult":
        return cls(
            id=account.id,
            first_name=account.first_name,
            last_name=account.last_name,
            email=account.email,
            provider=account.provider,
            provider_id=account.provider_id,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": str(self.id),
            "first_name": self.first_name,
            "last_name": self.last_name,
            "email": self.email,
            "provider": self.provider,
            "provider_id": self.provider_id,
        }
