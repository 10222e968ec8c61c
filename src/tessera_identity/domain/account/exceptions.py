"""Account domain exceptions.

Business errors raised by the account domain. They carry an ``ErrorCode``
and propagate unchanged to the presentation layer.
"""

from tessera_auth.exceptions import AuthError, ErrorCode


class InvalidEmailError(ValueError):
    """Raised when email format is invalid."""

    def __init__(self, message: str) -> None:
        super().__init__(message)


class DuplicateAccountError(AuthError):
    """An account with this email already exists."""

    def __init__(self, email: str) -> None:
        self.email = email
        super().__init__(
            "An account with this email already exists",
            ErrorCode.DUPLICATE_ACCOUNT,
            {"email": email},
        )


class AccountNotFoundError(AuthError):
    """No account matches the given email or id."""

    def __init__(self, identifier: str) -> None:
        self.identifier = identifier
        super().__init__(
            "Account not found",
            ErrorCode.ACCOUNT_NOT_FOUND,
            {"identifier": identifier},
        )


class AccountNotActiveError(AuthError):
    """The account has not been activated yet."""

    def __init__(self, account_id: str) -> None:
        self.account_id = account_id
        super().__init__(
            "Account is not active. Check your inbox for the verification email",
            ErrorCode.ACCOUNT_NOT_ACTIVE,
            {"account_id": account_id},
        )


class EmailLinkedToOAuthError(AuthError):
    """The account signs in through an OAuth provider, not a password."""

    def __init__(self, provider: str) -> None:
        self.provider = provider
        super().__init__(
            f"This email is linked to a {provider} account. Sign in with {provider}",
            ErrorCode.EMAIL_LINKED_TO_OAUTH,
            {"provider": provider},
        )
