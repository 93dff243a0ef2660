"""Pydantic schemas for bookmark endpoints."""
from pydantic import BaseModel, ConfigDict, Field


class BookmarkCreate(BaseModel):
    """
    Normalized fields for a new bookmark.

    Built by `validate_create` from the raw request body; the rating has already been
    floored to an integer.
    """

    title: str
    url: str
    description: str | None = None
    rating: int = Field(ge=1, le=5)


class BookmarkUpdate(BaseModel):
    """
    Normalized fields for a partial update.

    Only the fields supplied in the request are set, so `model_dump(exclude_unset=True)`
    yields exactly the columns to write.
    """

    title: str | None = None
    url: str | None = None
    description: str | None = None
    rating: int | None = Field(default=None, ge=1, le=5)


class BookmarkResponse(BaseModel):
    """Schema for bookmark responses."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    url: str
    description: str | None = None
    rating: int
