"""
DevConnect Backend — User & Auth Schemas
==========================================

What:  Request bodies for registration and login, and the public user shape.
Why:   The password hash never leaves the service layer: UserResponse simply
       has no field for it.
"""

import uuid
from datetime import datetime
from typing import Optional

from email_validator import EmailNotValidError, validate_email
from pydantic import BaseModel, Field, field_validator

# bcrypt rejects input longer than 72 bytes
MAX_PASSWORD_BYTES = 72


def _check_password_bytes(value: str) -> str:
    if len(value.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise ValueError(f"Password cannot be longer than {MAX_PASSWORD_BYTES} bytes")
    return value


def _normalize_email(value: str) -> str:
    try:
        result = validate_email(value, check_deliverability=False)
    except EmailNotValidError:
        raise ValueError("Please include a valid email")
    return result.normalized.lower()


class UserCreate(BaseModel):
    """Body of POST /api/users."""
    name: str = Field(max_length=100, description="Display name")
    email: str = Field(max_length=254, description="Login email, unique across accounts")
    password: str = Field(description="Plain-text password, 6 or more characters")

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Name is required")
        return v

    @field_validator("email")
    @classmethod
    def validate_email_address(cls, v: str) -> str:
        return _normalize_email(v)

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str) -> str:
        if len(v) < 6:
            raise ValueError("Please enter a password with 6 or more characters")
        return _check_password_bytes(v)


class LoginRequest(BaseModel):
    """Body of POST /api/auth."""
    email: str
    password: str

    @field_validator("email")
    @classmethod
    def validate_email_address(cls, v: str) -> str:
        return _normalize_email(v)

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str) -> str:
        if not v:
            raise ValueError("Password is required")
        return _check_password_bytes(v)


class TokenResponse(BaseModel):
    token: str = Field(description="Signed bearer token; send as 'Authorization: Bearer <token>'")


class UserResponse(BaseModel):
    """Public identity record returned by GET /api/auth."""
    id: uuid.UUID
    name: str
    email: str
    avatar: Optional[str] = None
    date: datetime

    model_config = {"from_attributes": True}


class UserSummary(BaseModel):
    """Minimal user fields embedded in profile responses."""
    id: uuid.UUID
    name: str
    avatar: Optional[str] = None

    model_config = {"from_attributes": True}
