from tessera_identity.application.dtos.auth_dto import (
    OAuthResult,
    PasswordResetData,
    SignInData,
    SignUpData,
)

__all__ = [
    "OAuthResult",
    "PasswordResetData",
    "SignInData",
    "SignUpData",
]
