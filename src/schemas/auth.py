"""Pydantic schemas for signup/signin endpoints."""
from typing import Literal

from pydantic import BaseModel, EmailStr, Field, field_validator

from core.security import MAX_PASSWORD_BYTES


class AuthRequest(BaseModel):
    """Credentials submitted to /auth/signup and /auth/signin."""

    email: EmailStr
    password: str = Field(min_length=1)

    @field_validator("password")
    @classmethod
    def check_password_length(cls, v: str) -> str:
        """Reject passwords bcrypt would silently truncate."""
        if len(v.encode()) > MAX_PASSWORD_BYTES:
            raise ValueError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")
        return v


class TokenResponse(BaseModel):
    """Bearer token returned after a successful signup or signin."""

    access_token: str
    token_type: Literal["bearer"] = "bearer"
