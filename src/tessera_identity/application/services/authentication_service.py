"""Authentication service for registration, activation and login."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import TYPE_CHECKING, Iterator
from urllib.parse import urlencode
from uuid import UUID

from tessera_auth import (
    AuthError,
    InvalidTokenError,
    JWTService,
    PasswordHashingService,
    TokenPurpose,
)
from tessera_identity.application.dtos import (
    OAuthResult,
    PasswordResetData,
    SignInData,
    SignUpData,
)
from tessera_identity.application.ports import (
    USER_VERIFICATION,
    EmailMessage,
)
from tessera_identity.domain.account import (
    Account,
    AccountNotActiveError,
    AccountNotFoundError,
    EmailLinkedToOAuthError,
    ExternalIdentity,
    InvalidEmailError,
)
from tessera_identity.exceptions import InternalError

if TYPE_CHECKING:
    from tessera_identity.application.ports import Notifier, TransactionManager
    from tessera_identity.application.services.identity_reconciler import (
        IdentityReconciler,
    )
    from tessera_identity.domain.account import AccountRepository

logger = logging.getLogger(__name__)


@contextmanager
def _internal_errors(operation: str) -> Iterator[None]:
    """Let business errors through, wrap anything unexpected."""
    try:
        yield
    except (AuthError, InvalidEmailError):
        raise
    except Exception as e:
        logger.exception("Unexpected failure during %s", operation)
        raise InternalError(details={"operation": operation}) from e


class AuthenticationService:
    """
    Application service for account authentication.

    Orchestrates tessera_auth primitives (password hashing, identity
    tokens) with the account store and the notifier to provide:
    - Registration with an email verification link
    - Account activation
    - Password login
    - Password change
    - OAuth login handoff

    The service holds no per-request state. Every collaborator, including
    the request's transaction manager, is passed in by the caller.
    """

    def __init__(  # NOQA: PLR0913
        self,
        account_repository: AccountRepository,
        transaction_manager: TransactionManager,
        password_service: PasswordHashingService,
        jwt_service: JWTService,
        notifier: Notifier,
        identity_reconciler: IdentityReconciler,
        verification_url: str,
        mail_from: str,
    ):
        self._account_repo = account_repository
        self._transactions = transaction_manager
        self._password_service = password_service
        self._jwt_service = jwt_service
        self._notifier = notifier
        self._reconciler = identity_reconciler
        self._verification_url = verification_url
        self._mail_from = mail_from

    async def register_user(self, data: SignUpData) -> Account:
        """Create an inactive local account and send its verification email.

        The insert and the email share one transaction: if the email
        cannot be sent, the account is not stored.

        Raises
        ------
        DuplicateAccountError
            If an account with this email exists
        InternalError
            If hashing, storing or sending fails
        """
        with _internal_errors("registration"):
            password_hash = self._password_service.hash(data.password)
            account = Account.create(
                email=data.email,
                first_name=data.first_name,
                last_name=data.last_name,
                password_hash=password_hash,
                phone_number=data.phone_number,
            )

            async with self._transactions.transaction():
                account = await self._account_repo.insert(account)
                await self.send_account_verification_email(account)

        logger.info("Account registered: %s", account.id)
        return account

    async def activate_account(self, token: str) -> UUID:
        """Activate the account named by a verification token.

        Activating an already active account is a no-op in effect.

        Raises
        ------
        InvalidTokenError
            If the token is not trustworthy
        AccountNotFoundError
            If the token's account does not exist
        """
        account_id = self._account_id_from_token(token, TokenPurpose.VERIFICATION)

        with _internal_errors("activation"):
            async with self._transactions.transaction():
                await self._account_repo.update(account_id, {"is_active": True})

        logger.info("Account activated: %s", account_id)
        return account_id

    async def login_user(self, data: SignInData) -> UUID:
        """Check password credentials and return the account id.

        Checks run in a fixed order, so an OAuth-only or inactive account
        is reported as such even when the password is wrong.

        Raises
        ------
        AccountNotFoundError
            If no account has this email
        EmailLinkedToOAuthError
            If the account signs in through an OAuth provider
        AccountNotActiveError
            If the account was never activated
        IncorrectCredentialError
            If the password does not match
        """
        with _internal_errors("login"):
            account = await self._account_repo.find_by_email(data.email)
            if account is None:
                raise AccountNotFoundError(data.email)

            if account.is_oauth:
                raise EmailLinkedToOAuthError(account.provider or "")

            if not account.is_active:
                raise AccountNotActiveError(str(account.id))

            self._password_service.verify(account.password_hash, data.password)

            if account.password_hash and self._password_service.needs_rehash(
                account.password_hash,
            ):
                await self._rehash_password(account.id, data.password)

        logger.info("Account logged in: %s", account.id)
        return account.id

    async def reset_password(self, data: PasswordResetData) -> None:
        """Replace an account's password after checking the current one.

        Raises
        ------
        AccountNotFoundError
            If no account has this email
        IncorrectCredentialError
            If the current password does not match
        """
        with _internal_errors("password reset"):
            account = await self._account_repo.find_by_email(data.email)
            if account is None:
                raise AccountNotFoundError(data.email)

            self._password_service.verify(
                account.password_hash,
                data.current_password,
            )
            new_hash = self._password_service.hash(data.new_password)

            async with self._transactions.transaction():
                await self._account_repo.update(
                    account.id,
                    {"password_hash": new_hash},
                )

        logger.info("Password changed for account: %s", account.id)

    async def handle_oauth_user(self, identity: ExternalIdentity) -> OAuthResult:
        """Resolve an OAuth identity to an account (created on first login)."""
        with _internal_errors("oauth login"):
            account = await self._reconciler.reconcile(identity)
        return OAuthResult.from_account(account)

    async def send_account_verification_email(self, account: Account) -> None:
        """Send the email carrying the account's activation link.

        Raises
        ------
        NotificationError
            If the notifier cannot deliver the message
        """
        token = self._jwt_service.create_verification_token(account.id)
        url = f"{self._verification_url}?{urlencode({'token': token})}"

        await self._notifier.send(
            EmailMessage(
                to=account.email,
                from_address=self._mail_from,
                subject=USER_VERIFICATION.subject,
                template=USER_VERIFICATION.name,
                data={"name": account.first_name, "url": url},
            ),
        )
        logger.debug("Verification email sent for account: %s", account.id)

    async def resend_verification_email(self, email: str) -> None:
        """Send a fresh verification email to an inactive local account.

        Does nothing for unknown, active or OAuth accounts, so callers
        learn nothing about which emails are registered.
        """
        with _internal_errors("verification resend"):
            account = await self._account_repo.find_by_email(email)
            if account is None or account.is_active or account.is_oauth:
                logger.debug("Verification resend skipped for %s", email)
                return

            await self.send_account_verification_email(account)

    async def get_account(self, account_id: UUID) -> Account:
        """Load an account by id.

        Raises
        ------
        AccountNotFoundError
            If the account does not exist
        """
        with _internal_errors("account lookup"):
            account = await self._account_repo.find_by_id(account_id)
        if account is None:
            raise AccountNotFoundError(str(account_id))
        return account

    async def resolve_session(self, token: str) -> Account:
        """Return the account a session token speaks for.

        Raises
        ------
        InvalidTokenError
            If the token is not trustworthy or its account no longer exists
        """
        account_id = self._account_id_from_token(token, TokenPurpose.SESSION)
        with _internal_errors("session lookup"):
            account = await self._account_repo.find_by_id(account_id)
        if account is None:
            raise InvalidTokenError
        return account

    def _account_id_from_token(self, token: str, purpose: TokenPurpose) -> UUID:
        subject = self._jwt_service.verify(token, purpose)
        try:
            return UUID(subject)
        except ValueError as e:
            raise InvalidTokenError from e

    async def _rehash_password(self, account_id: UUID, password: str) -> None:
        """Store a hash at the configured cost. Failures leave the old hash."""
        try:
            new_hash = self._password_service.hash(password)
            async with self._transactions.transaction():
                await self._account_repo.update(
                    account_id,
                    {"password_hash": new_hash},
                )
        except Exception:
            logger.warning(
                "Password hash upgrade failed for account: %s",
                account_id,
                exc_info=True,
            )
            return
        logger.info("Password hash upgraded for account: %s", account_id)
