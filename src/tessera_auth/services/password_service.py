"""Password hashing service using bcrypt.

Provides salted one-way hashing and verification with a fixed,
configuration-supplied work factor.
"""

import bcrypt

from tessera_auth.exceptions import IncorrectCredentialError, PasswordHashingError


class PasswordHashingService:
    """Service for secure password hashing and verification.

    Uses bcrypt with a work factor fixed at construction time. bcrypt only
    reads the first 72 bytes of its input, so callers validate length
    before hashing.

    Examples
    --------
    >>> service = PasswordHashingService(rounds=4)
    >>> password_hash = service.hash("my_secure_password")
    >>> service.verify(password_hash, "my_secure_password")
    >>> service.verify(password_hash, "wrong_password")
    Traceback (most recent call last):
    ...
    tessera_auth.exceptions.IncorrectCredentialError: Incorrect email or password
    """

    MAX_PASSWORD_BYTES = 72

    def __init__(self, rounds: int = 12):
        """Initialize the password hashing service.

        Parameters
        ----------
        rounds
            The bcrypt work factor (log2 of iterations). Default is 12.
        """
        self._rounds = rounds

    @property
    def rounds(self) -> int:
        return self._rounds

    def hash(self, password: str) -> str:
        """Hash a plaintext password.

        Parameters
        ----------
        password
            The plaintext password to hash

        Returns
        -------
        The bcrypt hash as a string. Hashing the same password twice
        yields different strings.

        Raises
        ------
        PasswordHashingError
            If bcrypt rejects the input or the configured work factor
        """
        try:
            salt = bcrypt.gensalt(rounds=self._rounds)
            hashed = bcrypt.hashpw(password.encode("utf-8"), salt)
        except ValueError as e:
            raise PasswordHashingError(f"Failed to hash password: {e}") from e
        return hashed.decode("utf-8")

    def verify(self, password_hash: str | None, password: str) -> None:
        """Verify a password against a hash.

        Parameters
        ----------
        password_hash
            The stored bcrypt hash. An account without a password never
            matches.
        password
            The plaintext password to check

        Raises
        ------
        IncorrectCredentialError
            If the password does not match
        ValueError
            If the stored hash is corrupt (raised by bcrypt, unchanged)
        """
        if not password_hash:
            raise IncorrectCredentialError

        if not bcrypt.checkpw(
            password.encode("utf-8"),
            password_hash.encode("utf-8"),
        ):
            raise IncorrectCredentialError

    def needs_rehash(self, password_hash: str) -> bool:
        """Check if a password hash was produced with another work factor.

        Parameters
        ----------
        password_hash
            The existing hash to check

        Returns
        -------
        True if the hash should be regenerated
        """
        try:
            # bcrypt format: $2b$XX$...
            parts = password_hash.split("$")
            if len(parts) >= 3:
                return int(parts[2]) != self._rounds
        except ValueError:
            pass
        return True
