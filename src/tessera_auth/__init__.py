"""Tessera Auth - Generic authentication infrastructure.

This package provides authentication primitives that are independent
of the account model:
- Password hashing (bcrypt)
- Identity token issuing and verification (PyJWT, HS256)
- The error taxonomy shared with the identity package

Architecture:
    tessera_auth/
    ├── services/           # Pure logic (password hashing, JWT)
    ├── schemas.py          # Data classes
    └── exceptions.py       # Error codes and auth exceptions

Usage:
    from tessera_auth import JWTService, PasswordHashingService
"""

from tessera_auth.exceptions import (
    AuthError,
    ErrorCode,
    IncorrectCredentialError,
    InvalidTokenError,
    PasswordHashingError,
)
from tessera_auth.schemas import TokenPayload, TokenPurpose
from tessera_auth.services import JWTService, PasswordHashingService

__all__ = [
    # Services
    "PasswordHashingService",
    "JWTService",
    # Schemas
    "TokenPayload",
    "TokenPurpose",
    # Exceptions
    "AuthError",
    "ErrorCode",
    "IncorrectCredentialError",
    "InvalidTokenError",
    "PasswordHashingError",
]
