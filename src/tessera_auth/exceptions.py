"""Authentication exceptions and error codes.

Every failure the auth core reports carries a stable ``ErrorCode`` so the
presentation layer can map it to a response without inspecting messages.
The identity package extends this hierarchy with account-level errors.
"""

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Stable error codes for API clients.

    These codes are part of the public API contract. Should not be changed.
    """

    # Validation (400)
    VALIDATION_ERROR = "VALIDATION_ERROR"

    # Authentication (401)
    INCORRECT_CREDENTIAL = "INCORRECT_CREDENTIAL"
    INVALID_TOKEN = "INVALID_TOKEN"
    OAUTH_FAILED = "OAUTH_FAILED"

    # Account state (403)
    ACCOUNT_NOT_ACTIVE = "ACCOUNT_NOT_ACTIVE"
    EMAIL_LINKED_TO_OAUTH = "EMAIL_LINKED_TO_OAUTH"

    # Not found (404)
    ACCOUNT_NOT_FOUND = "ACCOUNT_NOT_FOUND"

    # Conflict (409)
    DUPLICATE_ACCOUNT = "DUPLICATE_ACCOUNT"

    # Internal (500)
    INTERNAL_ERROR = "INTERNAL_ERROR"


class AuthError(Exception):
    """Base exception for all authentication and account errors.

    Attributes
    ----------
    message
        Human-readable description, safe to return to clients
    code
        Machine-readable error code
    details
        Extra context for logs (never sent to clients)
    """

    def __init__(
        self,
        message: str = "Authentication error",
        code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"code={self.code.value!r}, "
            f"details={self.details!r})"
        )


class InvalidTokenError(AuthError):
    """Raised when an identity token fails verification for any reason.

    The message is deliberately the same for every failure mode.
    """

    def __init__(self, message: str = "Invalid or expired token"):
        super().__init__(message, ErrorCode.INVALID_TOKEN)


class IncorrectCredentialError(AuthError):
    """Raised when a password does not match the stored hash."""

    def __init__(self, message: str = "Incorrect email or password"):
        super().__init__(message, ErrorCode.INCORRECT_CREDENTIAL)


class PasswordHashingError(AuthError):
    """Raised when the hashing backend cannot produce a hash."""

    def __init__(self, message: str = "Failed to hash password"):
        super().__init__(message, ErrorCode.INTERNAL_ERROR)
