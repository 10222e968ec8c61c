"""Data classes for the auth package."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class TokenPurpose(str, Enum):
    """What a token may be used for, carried in its ``aud`` claim."""

    SESSION = "session"
    VERIFICATION = "verification"


@dataclass(frozen=True)
class TokenPayload:
    """Decoded, verified claims of an identity token."""

    subject: str
    issuer: str
    purpose: TokenPurpose
    issued_at: datetime
    expires_at: datetime

    def is_expired(self, now: datetime) -> bool:
        return now >= self.expires_at
