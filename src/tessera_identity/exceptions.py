"""Identity application exceptions.

Failures of collaborators (store, notifier, hashing backend, OAuth
provider) surface as one of these. Account business errors live in
``tessera_identity.domain.account.exceptions``.
"""

from typing import Any

from tessera_auth.exceptions import AuthError, ErrorCode


class InternalError(AuthError):
    """Wraps an unexpected failure of the store, notifier or hasher."""

    def __init__(
        self,
        message: str = "An internal error occurred",
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, ErrorCode.INTERNAL_ERROR, details)


class NotificationError(InternalError):
    """Raised when an email could not be delivered to the provider."""

    def __init__(self, message: str = "Failed to send email", recipient: str = ""):
        self.recipient = recipient
        super().__init__(message, {"recipient": recipient})


class OAuthAuthenticationError(AuthError):
    """Raised when an OAuth provider does not return a usable identity."""

    def __init__(self, provider: str, reason: str = ""):
        self.provider = provider
        super().__init__(
            f"Authentication with {provider} failed",
            ErrorCode.OAUTH_FAILED,
            {"provider": provider, "reason": reason},
        )
