"""Maps external OAuth identities onto local accounts."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from tessera_identity.domain.account import (
    Account,
    DuplicateAccountError,
    ExternalIdentity,
)
from tessera_identity.exceptions import InternalError, OAuthAuthenticationError

if TYPE_CHECKING:
    from tessera_identity.application.ports import TransactionManager
    from tessera_identity.domain.account import AccountRepository

logger = logging.getLogger(__name__)


class IdentityReconciler:
    """Create-or-fetch the account behind an OAuth identity.

    Creation is attempted first and the unique email constraint decides
    whether the account already exists, so two concurrent first logins
    with the same identity resolve to the same account.

    An existing account is returned unchanged when it belongs to the same
    provider identity. An account created locally or through another
    provider is reached by email only when the provider has verified that
    email.
    """

    def __init__(
        self,
        account_repository: AccountRepository,
        transaction_manager: TransactionManager,
    ):
        self._account_repo = account_repository
        self._transactions = transaction_manager

    async def reconcile(self, identity: ExternalIdentity) -> Account:
        """Return the account for an external identity, creating it if needed.

        Parameters
        ----------
        identity
            The identity asserted by the OAuth provider

        Returns
        -------
        The newly created active account, or the existing account with the
        same email

        Raises
        ------
        InternalError
            If the account exists by constraint but cannot be read back
        OAuthAuthenticationError
            If the email belongs to another account and the provider did
            not verify it
        """
        try:
            async with self._transactions.transaction():
                account = await self._account_repo.insert(
                    Account.create_from_external(identity),
                )
        except DuplicateAccountError:
            existing = await self._account_repo.find_by_email(identity.email)
            if existing is None:
                msg = "Account reported as duplicate but could not be loaded"
                raise InternalError(msg, {"email": identity.email.value}) from None

            if (existing.provider, existing.provider_id) != (
                identity.provider,
                identity.provider_id,
            ):
                if not identity.email_verified:
                    logger.warning(
                        "OAuth login via %s refused: unverified email of "
                        "account %s",
                        identity.provider,
                        existing.id,
                    )
                    raise OAuthAuthenticationError(
                        identity.provider,
                        "email is not verified by the provider",
                    ) from None
                logger.warning(
                    "OAuth login via %s matched account %s by email "
                    "(account provider: %s)",
                    identity.provider,
                    existing.id,
                    existing.provider or "local",
                )
            return existing

        logger.info(
            "Created account %s from %s identity",
            account.id,
            identity.provider,
        )
        return account
