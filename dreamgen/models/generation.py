"""
Generation request/response schemas.

Wire shapes of POST /api/v1/generate. Field aliases keep the camelCase
keys the browser client sends.

Dependencies: pydantic
System role: Generation API contracts
"""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field


class ImageInput(BaseModel):
    """One encoded reference image."""

    model_config = ConfigDict(populate_by_name=True)

    mime_type: str = Field("image/png", alias="mimeType")
    data: str = Field("", description="Base64 payload, no data: prefix")


class GenerateRequest(BaseModel):
    """
    Request body for a generation.

    prompt is left untyped so a missing or non-string prompt is reported
    by the service as a 400 rather than a schema error.
    """

    model_config = ConfigDict(populate_by_name=True)

    prompt: Any = None
    images: list[ImageInput] = Field(default_factory=list)
    aspect_ratio: str | None = Field(None, alias="aspectRatio")

    def wire_images(self) -> list[dict[str, str]]:
        return [img.model_dump(by_alias=True) for img in self.images]


class PartOut(BaseModel):
    """One reply part: text or inline image."""

    model_config = ConfigDict(populate_by_name=True)

    type: Literal["text", "image"]
    text: str | None = None
    mime_type: str | None = Field(None, alias="mimeType")
    data: str | None = None


class GenerateResponse(BaseModel):
    parts: list[PartOut]
    debug: dict[str, Any] = Field(default_factory=dict)
