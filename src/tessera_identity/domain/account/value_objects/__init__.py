"""Account value objects."""

from tessera_identity.domain.account.value_objects.email import Email
from tessera_identity.domain.account.value_objects.external_identity import (
    ExternalIdentity,
)

__all__ = [
    "Email",
    "ExternalIdentity",
]
