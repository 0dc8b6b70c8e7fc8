"""Authentication and user schemas."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator


class SignupRequest(BaseModel):
    """Schema for creating an account."""

    email: EmailStr
    password: str = Field(..., min_length=8, max_length=256)
    name: str | None = Field(None, max_length=100)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.lower()


class LoginRequest(BaseModel):
    """Schema for password sign-in."""

    email: EmailStr
    password: str

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.lower()


class TokenResponse(BaseModel):
    """Bearer token issued on sign-up or sign-in."""

    access_token: str
    token_type: str = "bearer"


class UserResponse(BaseModel):
    """The signed-in user's account."""

    id: int
    email: str
    name: str | None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class UserSummary(BaseModel):
    """Public view of another user."""

    id: int
    name: str | None
    username: str | None = None
    display_name: str | None = None
