"""Account domain.

This domain handles:
- Account aggregate (flat identity, credential and activation fields)
- Email and external (OAuth) identity value objects
- The repository interface accounts are stored through
"""

from tessera_identity.domain.account.aggregates import Account
from tessera_identity.domain.account.exceptions import (
    AccountNotActiveError,
    AccountNotFoundError,
    DuplicateAccountError,
    EmailLinkedToOAuthError,
    InvalidEmailError,
)
from tessera_identity.domain.account.repositories import (
    UPDATABLE_FIELDS,
    AccountRepository,
)
from tessera_identity.domain.account.value_objects import Email, ExternalIdentity

__all__ = [
    "UPDATABLE_FIELDS",
    "Account",
    "AccountNotActiveError",
    "AccountNotFoundError",
    "AccountRepository",
    "DuplicateAccountError",
    "Email",
    "EmailLinkedToOAuthError",
    "ExternalIdentity",
    "InvalidEmailError",
]
