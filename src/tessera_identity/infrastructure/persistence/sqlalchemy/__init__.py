"""SQLAlchemy persistence for the identity package."""

from tessera_identity.infrastructure.persistence.sqlalchemy.models import AccountModel
from tessera_identity.infrastructure.persistence.sqlalchemy.repositories import (
    AccountRepositorySQLAlchemy,
)
from tessera_identity.infrastructure.persistence.sqlalchemy.transaction_manager import (  # NOQA: E501
    SQLAlchemyTransactionManager,
)

__all__ = [
    "AccountModel",
    "AccountRepositorySQLAlchemy",
    "SQLAlchemyTransactionManager",
]
