"""SQLAlchemy models for identity persistence."""

from tessera_identity.infrastructure.persistence.sqlalchemy.models.account_model import (  # NOQA: E501
    AccountModel,
)

__all__ = ["AccountModel"]
