"""
Generation history schemas.

Dependencies: pydantic
System role: History API contracts
"""

import uuid
from datetime import datetime

from pydantic import BaseModel, Field


class HistoryItemResponse(BaseModel):
    """One past generation with its image URLs grouped by role."""

    id: uuid.UUID
    prompt_text: str
    created_at: datetime
    input_images: list[str] = Field(default_factory=list)
    output_images: list[str] = Field(default_factory=list)
