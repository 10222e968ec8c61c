"""Amazon SES notifier using server-side templates."""

import asyncio
import json
import logging
from typing import Any

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from tessera_config.settings import Settings
from tessera_identity.application.ports import EmailMessage, Notifier
from tessera_identity.exceptions import NotificationError

logger = logging.getLogger(__name__)


def create_ses_client(settings: Settings) -> Any:
    """Build the SES client once at startup.

    Parameters
    ----------
    settings
        Application settings (region and mail timeout)

    Returns
    -------
    A boto3 SES client. Credentials come from the standard AWS chain.
    """
    config = Config(
        region_name=settings.ses_region,
        connect_timeout=settings.mail_timeout_seconds,
        read_timeout=settings.mail_timeout_seconds,
        retries={"max_attempts": 2, "mode": "standard"},
    )
    return boto3.client("ses", config=config)


class SESNotifier(Notifier):
    """Sends templated emails through Amazon SES.

    The template named by the message must exist in SES; its subject is
    defined there, so ``EmailMessage.subject`` is not transmitted. The
    client's connect and read timeouts bound each attempt.
    """

    def __init__(self, client: Any):
        self._client = client

    async def send(self, message: EmailMessage) -> None:
        try:
            response = await asyncio.to_thread(
                self._client.send_templated_email,
                Source=message.from_address,
                Destination={"ToAddresses": [message.to]},
                Template=message.template,
                TemplateData=json.dumps(message.data),
            )
        except (BotoCoreError, ClientError) as e:
            logger.error("SES rejected email to %s: %s", message.to, e)
            raise NotificationError(recipient=message.to) from e

        logger.info(
            "Email sent to %s via SES (template: %s, message id: %s)",
            message.to,
            message.template,
            response.get("MessageId"),
        )
