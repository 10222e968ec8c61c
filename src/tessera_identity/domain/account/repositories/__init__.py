from tessera_identity.domain.account.repositories.account_repository import (
    UPDATABLE_FIELDS,
    AccountRepository,
)

__all__ = [
    "UPDATABLE_FIELDS",
    "AccountRepository",
]
