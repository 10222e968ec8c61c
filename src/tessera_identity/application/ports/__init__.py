"""Ports the identity application layer depends on."""

from tessera_identity.application.ports.notifier import (
    EMAIL_TEMPLATES,
    USER_VERIFICATION,
    EmailMessage,
    EmailTemplate,
    Notifier,
)
from tessera_identity.application.ports.transaction import TransactionManager

__all__ = [
    "EMAIL_TEMPLATES",
    "USER_VERIFICATION",
    "EmailMessage",
    "EmailTemplate",
    "Notifier",
    "TransactionManager",
]
