from tessera_identity.infrastructure.persistence.sqlalchemy.repositories.account_repository import (  # NOQA: E501
    AccountRepositorySQLAlchemy,
)

__all__ = ["AccountRepositorySQLAlchemy"]
