"""Authentication schemas for request/response models."""

import re
from datetime import datetime
from typing import Annotated
from uuid import UUID

from pydantic import (
    AfterValidator,
    BaseModel,
    ConfigDict,
    EmailStr,
    Field,
    field_validator,
)

from tessera_auth import PasswordHashingService
from tessera_identity.application.dtos import (
    PasswordResetData,
    SignInData,
    SignUpData,
)
from tessera_identity.domain.account import Account

E164_PATTERN = re.compile(r"^\+[1-9]\d{1,14}$")

MIN_PASSWORD_LENGTH = 8
MAX_PASSWORD_BYTES = PasswordHashingService.MAX_PASSWORD_BYTES


def _check_password_bytes(value: str) -> str:
    if len(value.encode("utf-8")) > MAX_PASSWORD_BYTES:
        msg = f"Password cannot exceed {MAX_PASSWORD_BYTES} bytes"
        raise ValueError(msg)
    return value


# bcrypt reads at most 72 bytes of input
Password = Annotated[
    str,
    Field(min_length=MIN_PASSWORD_LENGTH),
    AfterValidator(_check_password_bytes),
]


class SignUpRequest(BaseModel):
    """Request schema for account registration."""

    first_name: str = Field(..., min_length=2, max_length=100)
    last_name: str = Field(..., min_length=2, max_length=100)
    email: EmailStr = Field(..., description="Account email address")
    password: Password = Field(..., description="Password (8-72 characters)")
    phone_number: str | None = Field(
        default=None,
        description="Phone number in E.164 format, e.g. +447700900123",
    )

    @field_validator("phone_number")
    @classmethod
    def _validate_phone_number(cls, v: str | None) -> str | None:
        if v is not None and not E164_PATTERN.match(v):
            msg = "Phone number must be in E.164 format"
            raise ValueError(msg)
        return v

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "first_name": "Alice",
                "last_name": "Liddell",
                "email": "alice@example.com",
                "password": "Password123",
                "phone_number": "+447700900123",
            },
        },
    )

    def to_data(self) -> SignUpData:
        return SignUpData(
            first_name=self.first_name,
            last_name=self.last_name,
            email=self.email,
            password=self.password,
            phone_number=self.phone_number or "",
        )


class SignInRequest(BaseModel):
    """Request schema for password sign-in."""

    email: EmailStr
    password: Password

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "email": "alice@example.com",
                "password": "Password123",
            },
        },
    )

    def to_data(self) -> SignInData:
        return SignInData(email=self.email, password=self.password)


class PasswordResetRequest(BaseModel):
    """Request schema for changing a password."""

    email: EmailStr
    current_password: Password
    new_password: Password

    def to_data(self) -> PasswordResetData:
        return PasswordResetData(
            email=self.email,
            current_password=self.current_password,
            new_password=self.new_password,
        )


class ResendVerificationRequest(BaseModel):
    """Request schema for re-sending the verification email."""

    email: EmailStr


class AccountResponse(BaseModel):
    """Public account fields. Never includes the password hash."""

    id: UUID
    first_name: str
    last_name: str
    email: str
    phone_number: str
    is_active: bool
    provider: str | None = None
    created_at: datetime

    @classmethod
    def from_account(cls, account: Account) -> "AccountResponse":
        return cls(
            id=account.id,
            first_name=account.first_name,
            last_name=account.last_name,
            email=account.email,
            phone_number=account.phone_number,
            is_active=account.is_active,
            provider=account.provider,
            created_at=account.created_at,
        )


class SessionResponse(BaseModel):
    """Response after a session cookie was issued."""

    id: UUID
    expires_in: int = Field(..., description="Session lifetime in seconds")


class ActivationResponse(BaseModel):
    id: UUID
    message: str = "Account activated"


class MessageResponse(BaseModel):
    message: str
