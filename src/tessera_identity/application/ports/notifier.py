"""Notifier port for the application layer.

Abstracts delivery of templated emails so the orchestrator does not know
whether messages leave through SMTP or Amazon SES.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class EmailTemplate:
    """A named message template and its subject line."""

    name: str
    subject: str


USER_VERIFICATION = EmailTemplate(
    name="email-verification",
    subject="Verify your account",
)

EMAIL_TEMPLATES: dict[str, EmailTemplate] = {
    "user_verification": USER_VERIFICATION,
}


@dataclass(frozen=True)
class EmailMessage:
    """A templated email ready to be handed to a notifier."""

    to: str
    from_address: str
    subject: str
    template: str
    data: dict[str, Any] = field(default_factory=dict)


class Notifier(ABC):
    """Delivers templated messages to an address."""

    @abstractmethod
    async def send(self, message: EmailMessage) -> None:
        """Send a message.

        Raises
        ------
        NotificationError
            If the message could not be handed to the mail provider
        """
