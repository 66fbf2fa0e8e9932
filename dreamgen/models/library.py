"""
Prompt library schemas.

Request/response schemas for library entries and likes.

Dependencies: pydantic
System role: Prompt library API contracts
"""

import uuid
from datetime import datetime

from pydantic import BaseModel, Field


class CreateLibraryEntryRequest(BaseModel):
    """Request schema for saving a prompt to the library."""

    title: str = Field(..., min_length=1, max_length=255, description="Entry title")
    prompt: str = Field(..., min_length=1, description="Prompt text")
    category: str | None = Field(None, max_length=100, description="Optional category")
    is_public: bool = Field(True, description="Visible to other users")
    source_generation_id: uuid.UUID | None = None


class UpdateLibraryEntryRequest(BaseModel):
    """Request schema for editing an entry. Omitted fields are left unchanged."""

    title: str | None = Field(None, min_length=1, max_length=255)
    prompt: str | None = Field(None, min_length=1)
    category: str | None = Field(None, max_length=100)
    is_public: bool | None = None


class LibraryEntryResponse(BaseModel):
    """Response schema for library entries."""

    id: uuid.UUID
    user_id: str
    title: str
    prompt: str
    category: str | None
    is_public: bool
    source_generation_id: uuid.UUID | None
    like_count: int
    created_at: datetime
    updated_at: datetime


class LibraryEntryDetailResponse(LibraryEntryResponse):
    """Entry with the images of its source generation."""

    input_images: list[str] = Field(default_factory=list)
    output_images: list[str] = Field(default_factory=list)


class LikeToggleResponse(BaseModel):
    liked: bool
    like_count: int


class LikedIdsResponse(BaseModel):
    ids: list[str]
