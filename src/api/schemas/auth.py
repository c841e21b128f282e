"""Pydantic schemas for authentication endpoints."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, EmailStr, Field
from src.domain.models import AccountType

# --- Request Schemas ---


class RegisterRequest(BaseModel):
    """Request schema for account registration."""

    email: EmailStr = Field(..., description="Account email address")
    password: str = Field(
        ...,
        min_length=8,
        max_length=128,
        description="Password (min 8 characters)",
    )
    full_name: str | None = Field(None, max_length=128, description="Display name")
    id_number: str = Field(
        ...,
        min_length=1,
        max_length=64,
        description="Alumni or company ID number reviewed by an administrator",
    )
    account_type: AccountType = Field(
        default=AccountType.ALUMNI,
        description="Kind of account being registered",
    )


class LoginRequest(BaseModel):
    """Request schema for login."""

    email: EmailStr = Field(..., description="Account email address")
    password: str = Field(..., description="Account password")


# --- Response Schemas ---


class TokenResponse(BaseModel):
    access_token: str = Field(..., description="JWT access token")
    token_type: str = Field(default="bearer", description="Token type")
    expires_in: int = Field(..., description="Access token TTL in seconds")


class AccountResponse(BaseModel):
    id: str = Field(..., description="Account ID")
    email: str = Field(..., description="Account email")
    full_name: str | None = Field(None, description="Display name")
    role: str = Field(..., description="Effective role")
    verification_status: str = Field(..., description="Admin verification status")
    account_type: str | None = Field(None, description="Registered account type")
    created_at: datetime = Field(..., description="Account creation timestamp")


class RegisterResponse(BaseModel):
    message: str = Field(default="Registration successful")
    account: AccountResponse
    tokens: TokenResponse


class LoginResponse(BaseModel):
    message: str = Field(default="Login successful")
    account: AccountResponse
    tokens: TokenResponse


class MeResponse(BaseModel):
    account: AccountResponse
