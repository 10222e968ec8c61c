"""
Test data factories for creating deterministic test entities.

Usage:
    from tests.shared.fixtures.factories import TestAccountFactory

    def test_something():
        account = TestAccountFactory.alice(is_active=True)
"""

from dataclasses import dataclass
from uuid import UUID

from tessera_identity.domain.account import Account, Email, ExternalIdentity


@dataclass(frozen=True)
class TestAccountFactory:
    """Factory for accounts with fixed, recognizable ids."""

    __test__ = False  # not a test class

    ALICE_ID = UUID("aaaaaaaa-aaaa-aaaa-aaaa-aaaaaaaaaaaa")
    ALICE_EMAIL = "alice@example.com"

    BOB_ID = UUID("bbbbbbbb-bbbb-bbbb-bbbb-bbbbbbbbbbbb")
    BOB_EMAIL = "bob@example.com"

    @classmethod
    def alice(
        cls,
        password_hash: str | None = "$2b$04$stored-hash",
        is_active: bool = False,
    ) -> Account:
        """A local account registered with a password."""
        return Account(
            id=cls.ALICE_ID,
            email=cls.ALICE_EMAIL,
            first_name="Alice",
            last_name="Liddell",
            password_hash=password_hash,
            is_active=is_active,
        )

    @classmethod
    def bob_google(cls) -> Account:
        """An account created through a Google login."""
        return Account(
            id=cls.BOB_ID,
            email=cls.BOB_EMAIL,
            first_name="Bob",
            last_name="Builder",
            password_hash=None,
            is_active=True,
            provider="google",
            provider_id="google-sub-1",
        )

    @classmethod
    def bob_identity(
        cls,
        provider: str = "google",
        email_verified: bool = True,
    ) -> ExternalIdentity:
        return ExternalIdentity(
            first_name="Bob",
            last_name="Builder",
            email=Email(cls.BOB_EMAIL),
            provider=provider,
            provider_id=f"{provider}-sub-1",
            email_verified=email_verified,
        )
