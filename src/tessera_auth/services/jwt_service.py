"""JWT token service.

Provides issuing and verification of signed, time-bounded identity tokens.
"""

import logging
from datetime import datetime, timedelta, timezone
from uuid import UUID

import jwt

from tessera_auth.exceptions import InvalidTokenError
from tessera_auth.schemas import TokenPayload, TokenPurpose

logger = logging.getLogger(__name__)


class JWTService:
    """Service for identity token creation and verification.

    A token carries the account id (``sub``), the issuer, its validity
    window and its purpose (``aud``). A token is only accepted for the
    purpose it was issued for, so an account-verification link cannot be
    used as a session.

    Examples
    --------
    >>> service = JWTService(secret_key="your-secret-key")
    >>> token = service.issue("42", timedelta(minutes=5))
    >>> service.verify(token)
    '42'
    """

    DEFAULT_ISSUER = "tessera"
    DEFAULT_ACCESS_EXPIRE_MINUTES = 15
    DEFAULT_VERIFICATION_EXPIRE_HOURS = 48
    ALGORITHM = "HS256"
    REQUIRED_CLAIMS = ("sub", "aud", "iat", "exp")

    def __init__(
        self,
        secret_key: str,
        issuer: str = DEFAULT_ISSUER,
        access_token_expire_minutes: int = DEFAULT_ACCESS_EXPIRE_MINUTES,
        verification_token_expire_hours: int = DEFAULT_VERIFICATION_EXPIRE_HOURS,
    ):
        """Initialize the JWT service.

        Parameters
        ----------
        secret_key
            Secret key for signing tokens. Must be kept secure.
        issuer
            Value of the ``iss`` claim, checked on verification
        access_token_expire_minutes
            Lifetime of session tokens (default 15)
        verification_token_expire_hours
            Lifetime of account-verification tokens (default 48)
        """
        if not secret_key:
            msg = "JWT secret key cannot be empty"
            raise ValueError(msg)

        self._secret_key = secret_key
        self._issuer = issuer
        self._access_expire = timedelta(minutes=access_token_expire_minutes)
        self._verification_expire = timedelta(hours=verification_token_expire_hours)

    @property
    def access_token_ttl(self) -> timedelta:
        return self._access_expire

    @property
    def verification_token_ttl(self) -> timedelta:
        return self._verification_expire

    def issue(
        self,
        subject: str,
        ttl: timedelta,
        purpose: TokenPurpose = TokenPurpose.SESSION,
    ) -> str:
        """Create a signed token for a subject.

        Parameters
        ----------
        subject
            The account id the token speaks for
        ttl
            Time until the token expires
        purpose
            What the token may be used for

        Returns
        -------
        The encoded JWT token string
        """
        now = datetime.now(tz=timezone.utc)
        payload = {
            "sub": subject,
            "iss": self._issuer,
            "aud": purpose.value,
            "iat": now,
            "exp": now + ttl,
        }
        return jwt.encode(payload, self._secret_key, algorithm=self.ALGORITHM)

    def create_access_token(self, account_id: UUID) -> str:
        """Create a session token for the ``access_token`` cookie."""
        return self.issue(str(account_id), self._access_expire, TokenPurpose.SESSION)

    def create_verification_token(self, account_id: UUID) -> str:
        """Create a token embedded in the account-verification link."""
        return self.issue(
            str(account_id),
            self._verification_expire,
            TokenPurpose.VERIFICATION,
        )

    def decode(
        self,
        token: str,
        purpose: TokenPurpose = TokenPurpose.SESSION,
    ) -> TokenPayload:
        """Verify a token and return all of its claims.

        Parameters
        ----------
        token
            The JWT token string to verify
        purpose
            The purpose the token must have been issued for

        Returns
        -------
        TokenPayload containing the verified claims

        Raises
        ------
        InvalidTokenError
            If the token is malformed, expired, signed with another key or
            algorithm, issued for another purpose, or carries no string
            subject
        """
        try:
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self.ALGORITHM],
                issuer=self._issuer,
                audience=purpose.value,
                options={"require": list(self.REQUIRED_CLAIMS)},
            )
        except jwt.PyJWTError as e:
            logger.debug("Token rejected: %s", e)
            raise InvalidTokenError from e

        subject = payload.get("sub")
        if not isinstance(subject, str) or not subject:
            logger.debug("Token rejected: subject is missing or not a string")
            raise InvalidTokenError

        try:
            issued_at = datetime.fromtimestamp(payload["iat"], tz=timezone.utc)
            expires_at = datetime.fromtimestamp(payload["exp"], tz=timezone.utc)
        except (TypeError, ValueError, OverflowError) as e:
            logger.debug("Token rejected: malformed timestamps: %s", e)
            raise InvalidTokenError from e

        return TokenPayload(
            subject=subject,
            issuer=payload["iss"],
            purpose=purpose,
            issued_at=issued_at,
            expires_at=expires_at,
        )

    def verify(
        self,
        token: str,
        purpose: TokenPurpose = TokenPurpose.SESSION,
    ) -> str:
        """Verify a token issued for ``purpose`` and return its subject.

        Raises
        ------
        InvalidTokenError
            If the token is not trustworthy
        """
        return self.decode(token, purpose).subject
