"""SMTP notifier rendering Jinja2 templates."""

import asyncio
import logging
import smtplib
import ssl
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, TemplateError, select_autoescape

from tessera_config.settings import Settings
from tessera_identity.application.ports import EmailMessage, Notifier
from tessera_identity.exceptions import NotificationError

logger = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).resolve().parent / "templates"


class SMTPNotifier(Notifier):
    """Sends multipart (text + HTML) emails through an SMTP relay.

    smtplib is blocking, so delivery runs in a worker thread. Every socket
    operation is bounded by the configured mail timeout, so a stalled relay
    fails the send instead of delivering after the caller gave up.
    """

    def __init__(self, settings: Settings, template_dir: Path = TEMPLATE_DIR):
        self._settings = settings
        self._timeout = settings.mail_timeout_seconds
        self._jinja = Environment(
            loader=FileSystemLoader(str(template_dir)),
            autoescape=select_autoescape(["html", "xml"]),
        )

    def render(self, message: EmailMessage) -> MIMEMultipart:
        """Render a message into a MIME document.

        Raises
        ------
        NotificationError
            If the template is missing or fails to render
        """
        try:
            text_body = self._jinja.get_template(f"{message.template}.txt").render(
                **message.data,
            )
            html_body = self._jinja.get_template(f"{message.template}.html").render(
                **message.data,
            )
        except TemplateError as e:
            logger.error("Failed to render template %s: %s", message.template, e)
            raise NotificationError(
                f"Failed to render email template {message.template}",
                recipient=message.to,
            ) from e

        msg = MIMEMultipart("alternative")
        msg["Subject"] = message.subject
        msg["From"] = f"{self._settings.mail_from_name} <{message.from_address}>"
        msg["To"] = message.to
        msg.attach(MIMEText(text_body, "plain"))
        msg.attach(MIMEText(html_body, "html"))
        return msg

    async def send(self, message: EmailMessage) -> None:
        mime = self.render(message)
        try:
            await asyncio.to_thread(self._deliver, mime)
        except (smtplib.SMTPException, OSError) as e:
            logger.error("Failed to send email to %s: %s", message.to, e)
            raise NotificationError(recipient=message.to) from e

        logger.info("Email sent to %s (template: %s)", message.to, message.template)

    def _deliver(self, mime: MIMEMultipart) -> None:
        settings = self._settings
        smtp_password = (
            settings.smtp_password.get_secret_value() if settings.smtp_password else ""
        )

        if settings.smtp_use_tls and not settings.smtp_starttls:
            # Implicit TLS (port 465)
            context = ssl.create_default_context()
            with smtplib.SMTP_SSL(
                settings.smtp_host,
                settings.smtp_port,
                context=context,
                timeout=self._timeout,
            ) as server:
                if settings.smtp_user:
                    server.login(settings.smtp_user, smtp_password)
                server.send_message(mime)
            return

        # STARTTLS (port 587) or plain
        with smtplib.SMTP(
            settings.smtp_host,
            settings.smtp_port,
            timeout=self._timeout,
        ) as server:
            if settings.smtp_starttls:
                server.starttls(context=ssl.create_default_context())
            if settings.smtp_user:
                server.login(settings.smtp_user, smtp_password)
            server.send_message(mime)
