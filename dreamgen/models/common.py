"""
Common response models.

Error and status schemas shared by every router.

Dependencies: pydantic
System role: Common API response structures
"""

from typing import Any

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Error body returned by the generate route."""

    error: str = Field(description="Error message")
    detail: Any | None = Field(default=None, description="Upstream error payload, verbatim")


class HealthResponse(BaseModel):
    status: str
    detail: str | None = None
