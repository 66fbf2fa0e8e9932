"""
Generation request/response pipeline.

Owns one submit → normalize → publish cycle at a time:
1. Encode every attachment (concurrently, order preserved, fail-fast)
2. Send one request through the transport (never retried)
3. Extract raw parts from whichever reply shape arrived
4. Normalize parts into one joined text and an ordered list of image resources
5. Publish the result and hand it off to the recorder (best effort)

Dependencies: asyncio, logging, dreamgen.core.generation
System role: Core state machine between the composer and the remote model
"""

import asyncio
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Awaitable, Callable, Protocol

from dreamgen.core.exceptions import (
    AlreadySubmittingError,
    AttachmentTooLargeError,
    EmptyPromptError,
    EncodingFailedError,
    RemoteGenerationError,
    TooManyAttachmentsError,
)
from dreamgen.core.generation.attachments import (
    MAX_ATTACHMENT_BYTES,
    MAX_ATTACHMENTS,
    Attachment,
)
from dreamgen.core.generation.codec import (
    DEFAULT_IMAGE_MIME,
    encode,
    is_resource,
    strip_whitespace,
    to_resource,
)
from dreamgen.core.generation.parts import (
    ImagePart,
    TextPart,
    classify_parts,
    extract_parts,
)
from dreamgen.core.generation.presets import AspectRatio

logger = logging.getLogger(__name__)


class PipelineState(str, Enum):
    """Submission lifecycle states."""

    IDLE = "idle"
    SUBMITTING = "submitting"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass(frozen=True)
class OutboundImage:
    """One encoded attachment."""

    mime_type: str
    data: str


@dataclass(frozen=True)
class OutboundRequest:
    """The single serialized unit sent across the model boundary."""

    prompt: str
    images: list[OutboundImage]
    aspect_ratio: str

    def to_payload(self) -> dict[str, Any]:
        """Wire shape: {prompt, images: [{mimeType, data}], aspectRatio}."""
        return {
            "prompt": self.prompt,
            "images": [{"mimeType": img.mime_type, "data": img.data} for img in self.images],
            "aspectRatio": self.aspect_ratio,
        }


@dataclass(frozen=True)
class GenerationResult:
    """Normalized reply: joined text and ordered image resources."""

    texts: str = ""
    images: list[str] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.texts and not self.images


@dataclass(frozen=True)
class GenerationHandoff:
    """What a successful generation hands to the history recorder."""

    prompt: str
    attachments: list[Attachment]
    result: GenerationResult


class GenerationTransport(Protocol):
    """Sends one outbound request and returns the raw reply object."""

    async def send(self, request: OutboundRequest) -> Any:
        ...


Recorder = Callable[[GenerationHandoff], Awaitable[None]]


def normalize_image(part: ImagePart) -> str:
    """Turn an image part into a self-contained data resource."""
    payload = strip_whitespace(part.data)
    if is_resource(payload):
        return payload
    if payload.startswith("base64,"):
        payload = payload[len("base64,"):]
    return to_resource(part.mime_type or DEFAULT_IMAGE_MIME, payload)


def normalize_reply(reply: Any) -> GenerationResult:
    """
    Classify and normalize a raw reply.

    Text parts are joined with a blank line; image parts become data
    resources. Order within each kind follows the reply.
    """
    texts: list[str] = []
    images: list[str] = []
    for part in classify_parts(extract_parts(reply)):
        if isinstance(part, TextPart):
            texts.append(part.text)
        elif isinstance(part, ImagePart):
            images.append(normalize_image(part))
    return GenerationResult(texts="\n\n".join(texts), images=images)


class GenerationPipeline:
    """
    Single-flight generation state machine.

    IDLE → SUBMITTING → (SUCCEEDED | FAILED) → IDLE. Only one submission may be
    in flight; abandon() detaches it so its late reply is never published.
    """

    def __init__(
        self,
        transport: GenerationTransport,
        recorder: Recorder | None = None,
        max_attachments: int = MAX_ATTACHMENTS,
        max_attachment_bytes: int = MAX_ATTACHMENT_BYTES,
    ) -> None:
        self._transport = transport
        self._recorder = recorder
        self.max_attachments = max_attachments
        self.max_attachment_bytes = max_attachment_bytes
        self.state = PipelineState.IDLE
        self.current_result: GenerationResult | None = None
        self.last_error: Exception | None = None
        self._epoch = 0

    @property
    def is_submitting(self) -> bool:
        return self.state is PipelineState.SUBMITTING

    def _validate(self, final_prompt: str, attachments: list[Attachment]) -> None:
        if not final_prompt or not final_prompt.strip():
            raise EmptyPromptError()
        if len(attachments) > self.max_attachments:
            raise TooManyAttachmentsError(
                current=0, adding=len(attachments), limit=self.max_attachments
            )
        for attachment in attachments:
            if attachment.size > self.max_attachment_bytes:
                raise AttachmentTooLargeError(
                    size=attachment.size,
                    limit=self.max_attachment_bytes,
                    filename=attachment.filename,
                )

    async def _encode_one(self, index: int, attachment: Attachment) -> OutboundImage:
        try:
            data = await attachment.read()
            encoded = encode(data)
        except Exception as e:
            raise EncodingFailedError(index, e) from e
        return OutboundImage(mime_type=attachment.media_type or DEFAULT_IMAGE_MIME, data=encoded)

    async def encode_attachments(self, attachments: list[Attachment]) -> list[OutboundImage]:
        """
        Encode attachments concurrently, preserving input order.

        Raises:
            EncodingFailedError: If any attachment fails; nothing partial is returned
        """
        return list(
            await asyncio.gather(
                *(self._encode_one(i, a) for i, a in enumerate(attachments))
            )
        )

    async def submit(
        self,
        final_prompt: str,
        attachments: list[Attachment],
        aspect_ratio: AspectRatio | str,
    ) -> GenerationResult:
        """
        Run one full generation round-trip.

        Args:
            final_prompt: Composed prompt (user text + snippet)
            attachments: Attachments in insertion order
            aspect_ratio: Requested aspect ratio

        Returns:
            GenerationResult: Joined text and ordered image resources (possibly empty)

        Raises:
            AlreadySubmittingError: If another submission is in flight
            GenerationValidationError: If prompt or attachments violate limits
            EncodingFailedError: If any attachment cannot be encoded
            RemoteGenerationError: If the transport or remote model fails
        """
        if self.is_submitting:
            raise AlreadySubmittingError()

        attachments = list(attachments)
        self._validate(final_prompt, attachments)

        self._epoch += 1
        epoch = self._epoch
        self.state = PipelineState.SUBMITTING
        self.last_error = None
        ratio = aspect_ratio.value if isinstance(aspect_ratio, AspectRatio) else str(aspect_ratio)

        logger.info(
            f"{__name__}:submit - START prompt_len={len(final_prompt)}, "
            f"attachments={len(attachments)}, aspect_ratio={ratio}"
        )

        try:
            images = await self.encode_attachments(attachments)
            request = OutboundRequest(prompt=final_prompt, images=images, aspect_ratio=ratio)
            try:
                reply = await self._transport.send(request)
            except RemoteGenerationError:
                raise
            except Exception as e:
                raise RemoteGenerationError(str(e) or type(e).__name__) from e
            result = normalize_reply(reply)
        except Exception as e:
            if epoch == self._epoch:
                self.state = PipelineState.FAILED
                self.last_error = e
            logger.error(f"{__name__}:submit - FAILED {type(e).__name__}: {e}")
            raise

        if epoch != self._epoch:
            logger.warning(
                f"{__name__}:submit - Discarding reply from abandoned submission epoch={epoch}"
            )
            return result

        self.current_result = result
        self.state = PipelineState.SUCCEEDED
        logger.info(
            f"{__name__}:submit - END text_len={len(result.texts)}, images={len(result.images)}"
        )

        await self._hand_off(GenerationHandoff(final_prompt, attachments, result))
        return result

    async def _hand_off(self, handoff: GenerationHandoff) -> None:
        if self._recorder is None:
            return
        try:
            await self._recorder(handoff)
        except Exception as e:
            logger.error(
                f"{__name__}:_hand_off - Recorder failed (ignored): {type(e).__name__}: {e}",
                exc_info=True,
            )

    def acknowledge(self) -> None:
        """Return to IDLE after a finished submission (next user change)."""
        if not self.is_submitting:
            self.state = PipelineState.IDLE

    def abandon(self) -> None:
        """Detach the in-flight submission; its reply will not be published."""
        if self.is_submitting:
            self._epoch += 1
            self.state = PipelineState.IDLE
            logger.info(f"{__name__}:abandon - In-flight submission abandoned")

    def clear(self) -> None:
        """Drop the current result."""
        self.current_result = None
        self.acknowledge()
