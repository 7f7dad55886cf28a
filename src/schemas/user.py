"""Pydantic schemas for user profile endpoints."""
from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator


class UserResponse(BaseModel):
    """
    Public view of a user.

    Fields are whitelisted, so the stored password hash can never leak
    into a response.
    """

    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    first_name: str | None
    last_name: str | None
    created_at: datetime
    updated_at: datetime


class UserUpdate(BaseModel):
    """Schema for editing the current user. Only supplied fields are applied."""

    email: EmailStr | None = None
    first_name: str | None = Field(default=None, max_length=255)
    last_name: str | None = Field(default=None, max_length=255)

    @field_validator("email")
    @classmethod
    def email_not_null(cls, v: str | None) -> str | None:
        """Email may be changed but not removed."""
        if v is None:
            raise ValueError("email cannot be null")
        return v
