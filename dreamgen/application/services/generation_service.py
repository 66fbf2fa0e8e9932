"""
Generation service.

Server side of the outbound generation call: validates the request,
forwards it to the image model and records the result for signed-in
callers. Recording never affects the response.

Dependencies: dreamgen.boundary.genai, dreamgen.application.services.history_recorder
System role: Generation use case orchestration
"""

import logging
import math
from typing import Any

from dreamgen.application.services.history_recorder import HistoryRecorder
from dreamgen.boundary.genai.gemini_client import GeminiImageClient
from dreamgen.core.exceptions import (
    GenerationValidationError,
    RemoteGenerationError,
)
from dreamgen.core.generation.attachments import MAX_ATTACHMENT_BYTES, MAX_ATTACHMENTS

logger = logging.getLogger(__name__)


def approx_decoded_size(data: str) -> int:
    """Decoded byte size estimate for a base64 payload."""
    return math.ceil(len(data) * 3 / 4)


class GenerationService:
    """Validates and executes generation requests."""

    def __init__(
        self,
        client: GeminiImageClient | None,
        recorder: HistoryRecorder | None = None,
        max_images: int = MAX_ATTACHMENTS,
        max_image_bytes: int = MAX_ATTACHMENT_BYTES,
    ) -> None:
        """
        Initialize generation service.

        Args:
            client: Gemini client, None when no API key is configured
            recorder: History recorder for signed-in callers
            max_images: Maximum images per request
            max_image_bytes: Maximum approximate decoded size per image
        """
        self._client = client
        self._recorder = recorder
        self.max_images = max_images
        self.max_image_bytes = max_image_bytes

    def validate(self, prompt: Any, images: list[dict]) -> list[dict]:
        """
        Check request limits and drop empty image entries.

        Returns:
            list[dict]: Images to forward, in order

        Raises:
            GenerationValidationError: On a missing prompt or limit violation
        """
        if len(images) > self.max_images:
            raise GenerationValidationError(
                f"Too many images. Maximum allowed is {self.max_images}",
                {"count": len(images), "limit": self.max_images},
            )
        if not prompt or not isinstance(prompt, str):
            raise GenerationValidationError("Missing or invalid prompt in request body")

        accepted: list[dict] = []
        for idx, img in enumerate(images):
            if not img or not img.get("data"):
                logger.warning(f"{__name__}:validate - Skipping invalid image at index {idx}")
                continue
            if approx_decoded_size(img["data"]) > self.max_image_bytes:
                raise GenerationValidationError(
                    f"Image at index {idx} exceeds {self.max_image_bytes} bytes (approx)",
                    {"index": idx, "limit": self.max_image_bytes},
                )
            accepted.append(img)
        return accepted

    async def generate(
        self,
        prompt: Any,
        images: list[dict] | None = None,
        aspect_ratio: str | None = None,
        user_id: str | None = None,
    ) -> dict[str, Any]:
        """
        Run one generation.

        Args:
            prompt: Final prompt text
            images: Wire images [{mimeType, data}]
            aspect_ratio: Requested aspect ratio
            user_id: Caller id; anonymous calls are not recorded

        Returns:
            dict: {parts: [...], debug: {candidates: bool}}

        Raises:
            RemoteGenerationError: Missing API key (500) or model failure
            GenerationValidationError: Invalid request (400)
        """
        if self._client is None:
            logger.error(f"{__name__}:generate - GENAI API key missing")
            raise RemoteGenerationError(
                "Server API key not configured. Set GENAI_API_KEY", status_code=500
            )

        accepted = self.validate(prompt, images or [])
        logger.info(
            f"{__name__}:generate - START images={len(accepted)}, "
            f"aspect_ratio={aspect_ratio}, signed_in={bool(user_id)}"
        )

        reply = await self._client.generate(prompt, accepted, aspect_ratio)

        if user_id and self._recorder is not None:
            await self._record(user_id, prompt, accepted, reply["parts"])

        logger.info(f"{__name__}:generate - END parts={len(reply['parts'])}")
        return reply

    async def _record(
        self,
        user_id: str,
        prompt: str,
        images: list[dict],
        parts: list[dict],
    ) -> None:
        try:
            generation_id = await self._recorder.record_wire(user_id, prompt, images, parts)
            logger.info(
                f"{__name__}:_record - Saved generation {generation_id} for user {user_id}"
            )
        except Exception as e:
            logger.error(
                f"{__name__}:_record - Failed to save generation: {type(e).__name__}: {e}",
                exc_info=True,
            )
