"""Pydantic schemas for bookmark endpoints."""
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, HttpUrl, field_validator


class BookmarkCreate(BaseModel):
    """Schema for creating a new bookmark."""

    title: str = Field(min_length=1, max_length=500)
    link: HttpUrl
    description: str | None = None


class BookmarkUpdate(BaseModel):
    """
    Schema for updating an existing bookmark.

    Only fields present in the request body are applied. ``title`` and
    ``link`` may be changed but not cleared; ``description`` may be set to null.
    """

    title: str | None = Field(default=None, min_length=1, max_length=500)
    link: HttpUrl | None = None
    description: str | None = None

    @field_validator("title", "link")
    @classmethod
    def required_fields_not_null(cls, v: object) -> object:
        """Reject an explicit null for columns that are NOT NULL."""
        if v is None:
            raise ValueError("cannot be null")
        return v


class BookmarkResponse(BaseModel):
    """Schema for bookmark responses."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    title: str
    description: str | None
    link: str
    created_at: datetime
    updated_at: datetime
