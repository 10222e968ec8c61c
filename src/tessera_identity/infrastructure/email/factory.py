"""Notifier selection by configuration."""

import logging

from tessera_config.settings import Settings
from tessera_identity.application.ports import Notifier
from tessera_identity.infrastructure.email.ses_notifier import (
    SESNotifier,
    create_ses_client,
)
from tessera_identity.infrastructure.email.smtp_notifier import SMTPNotifier

logger = logging.getLogger(__name__)


def create_notifier(settings: Settings) -> Notifier:
    """Build the notifier named by ``settings.mail_provider``.

    Called once when the application starts; the result is shared by
    all requests.
    """
    if settings.mail_provider == "ses":
        logger.info("Using Amazon SES notifier (region: %s)", settings.ses_region)
        return SESNotifier(client=create_ses_client(settings))

    logger.info(
        "Using SMTP notifier (%s:%s)",
        settings.smtp_host,
        settings.smtp_port,
    )
    return SMTPNotifier(settings)
