"""Tessera Identity - Accounts, registration and login.

This package handles all account-related concerns:
- Account aggregate and repository interface
- Registration with email verification and activation
- Password login and password change
- OAuth identity reconciliation
- Email notifications (SMTP or Amazon SES)
"""

from tessera_identity.application.dtos import (
    OAuthResult,
    PasswordResetData,
    SignInData,
    SignUpData,
)
from tessera_identity.application.ports import (
    EmailMessage,
    Notifier,
    TransactionManager,
)
from tessera_identity.application.services import (
    AuthenticationService,
    IdentityReconciler,
)
from tessera_identity.domain.account import (
    Account,
    AccountNotActiveError,
    AccountNotFoundError,
    AccountRepository,
    DuplicateAccountError,
    Email,
    EmailLinkedToOAuthError,
    ExternalIdentity,
    InvalidEmailError,
)
from tessera_identity.exceptions import (
    InternalError,
    NotificationError,
    OAuthAuthenticationError,
)

__all__ = [
    # Services
    "AuthenticationService",
    "IdentityReconciler",
    # DTOs
    "OAuthResult",
    "PasswordResetData",
    "SignInData",
    "SignUpData",
    # Ports
    "EmailMessage",
    "Notifier",
    "TransactionManager",
    # Domain
    "Account",
    "AccountRepository",
    "Email",
    "ExternalIdentity",
    # Exceptions
    "AccountNotActiveError",
    "AccountNotFoundError",
    "DuplicateAccountError",
    "EmailLinkedToOAuthError",
    "InternalError",
    "InvalidEmailError",
    "NotificationError",
    "OAuthAuthenticationError",
]
