"""Email delivery for identity notifications."""

from tessera_identity.infrastructure.email.factory import create_notifier
from tessera_identity.infrastructure.email.ses_notifier import (
    SESNotifier,
    create_ses_client,
)
from tessera_identity.infrastructure.email.smtp_notifier import SMTPNotifier

__all__ = [
    "SESNotifier",
    "SMTPNotifier",
    "create_notifier",
    "create_ses_client",
]
