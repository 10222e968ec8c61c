"""Pydantic schemas for API request/response models."""

from tessera.presentation.api.schemas.auth import (
    AccountResponse,
    ActivationResponse,
    MessageResponse,
    PasswordResetRequest,
    ResendVerificationRequest,
    SessionResponse,
    SignInRequest,
    SignUpRequest,
)

__all__ = [
    "AccountResponse",
    "ActivationResponse",
    "MessageResponse",
    "PasswordResetRequest",
    "ResendVerificationRequest",
    "SessionResponse",
    "SignInRequest",
    "SignUpRequest",
]
