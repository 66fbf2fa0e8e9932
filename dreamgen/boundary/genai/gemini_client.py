"""
Gemini image generation client.

Sends reference images and the prompt to an image-capable Gemini model and
converts the first candidate's parts into the wire shape
{type: "text", text} | {type: "image", mimeType, data}.

Dependencies: asyncio, logging, google.genai
System role: Remote model boundary for image generation
"""

import asyncio
import logging
from typing import Any

from google import genai
from google.genai import errors as genai_errors
from google.genai import types

from dreamgen.core.exceptions import RemoteGenerationError
from dreamgen.core.generation.codec import DEFAULT_IMAGE_MIME, decode, encode

logger = logging.getLogger(__name__)


class GeminiImageClient:
    """Adapter around google-genai for multi-part image generation."""

    def __init__(
        self,
        api_key: str,
        model: str = "gemini-2.5-flash-image-preview",
        timeout_ms: int = 300_000,
        client: "genai.Client | None" = None,
    ) -> None:
        """
        Initialize Gemini image client.

        Args:
            api_key: Google GenAI API key
            model: Image-capable model id
            timeout_ms: HTTP timeout in milliseconds
            client: Pre-built genai.Client (tests)

        Raises:
            ValueError: If api_key is missing and no client is given
        """
        if client is None and not api_key:
            raise ValueError("api_key is required")
        self.model = model
        self._client = client or genai.Client(
            api_key=api_key,
            http_options=types.HttpOptions(timeout=timeout_ms),
        )

    def build_contents(self, prompt: str, images: list[dict[str, str]]) -> list[types.Part]:
        """
        Build request parts: inline images in order, then the prompt text.

        Images with empty data are skipped.
        """
        contents: list[types.Part] = []
        for idx, img in enumerate(images):
            if not img or not img.get("data"):
                logger.warning(f"{__name__}:build_contents - Skipping invalid image at index {idx}")
                continue
            contents.append(
                types.Part(
                    inline_data=types.Blob(
                        mime_type=img.get("mimeType") or DEFAULT_IMAGE_MIME,
                        data=decode(img["data"]),
                    )
                )
            )
        contents.append(types.Part(text=prompt))
        return contents

    def build_config(self, aspect_ratio: str | None) -> types.GenerateContentConfig:
        kwargs: dict[str, Any] = {"response_modalities": ["TEXT", "IMAGE"]}
        if aspect_ratio:
            kwargs["image_config"] = types.ImageConfig(aspect_ratio=aspect_ratio)
        return types.GenerateContentConfig(**kwargs)

    @staticmethod
    def to_wire_parts(response: Any) -> list[dict[str, str]]:
        """Convert the first candidate's parts into wire parts."""
        parts: list[dict[str, str]] = []
        candidates = getattr(response, "candidates", None) or []
        if not candidates:
            return parts
        content = getattr(candidates[0], "content", None)
        for part in getattr(content, "parts", None) or []:
            if getattr(part, "text", None):
                parts.append({"type": "text", "text": part.text})
            elif getattr(part, "inline_data", None) and part.inline_data.data:
                data = part.inline_data.data
                parts.append({
                    "type": "image",
                    "mimeType": part.inline_data.mime_type or DEFAULT_IMAGE_MIME,
                    "data": encode(data) if isinstance(data, (bytes, bytearray)) else str(data),
                })
        return parts

    async def generate(
        self,
        prompt: str,
        images: list[dict[str, str]],
        aspect_ratio: str | None = None,
    ) -> dict[str, Any]:
        """
        Call generate_content and return {parts, debug}.

        Raises:
            RemoteGenerationError: If the model call fails
        """
        contents = self.build_contents(prompt, images)
        config = self.build_config(aspect_ratio)

        logger.info(
            f"{__name__}:generate - Calling generate_content "
            f"model={self.model}, parts={len(contents)}"
        )
        try:
            response = await asyncio.to_thread(
                self._client.models.generate_content,
                model=self.model,
                contents=contents,
                config=config,
            )
        except genai_errors.APIError as e:
            logger.error(f"{__name__}:generate - generate_content failed: {e}", exc_info=True)
            raise RemoteGenerationError(
                "generateContent failed",
                detail={"message": e.message, "status": e.code, "details": e.details},
                status_code=500,
            ) from e
        except Exception as e:
            logger.error(f"{__name__}:generate - generate_content failed: {e}", exc_info=True)
            raise RemoteGenerationError(
                "generateContent failed",
                detail={"message": str(e), "status": None, "details": None},
                status_code=500,
            ) from e

        parts = self.to_wire_parts(response)
        logger.info(f"{__name__}:generate - END parts={len(parts)}")
        return {"parts": parts, "debug": {"candidates": bool(getattr(response, "candidates", None))}}

    async def send(self, request) -> dict[str, Any]:
        """In-process GenerationTransport: send an OutboundRequest directly."""
        payload = request.to_payload()
        return await self.generate(payload["prompt"], payload["images"], payload["aspectRatio"])
