"""
Attachment manager for reference images pending submission.

Owns the ordered attachment list and each attachment's preview handle.
Limits are enforced eagerly when files are added: a batch is admitted
whole or not at all.

Dependencies: dataclasses, uuid, logging
System role: Attachment Manager
"""

import logging
import uuid
from dataclasses import dataclass, field

from dreamgen.core.exceptions import (
    AttachmentTooLargeError,
    InvalidMediaTypeError,
    TooManyAttachmentsError,
)
from dreamgen.core.generation.codec import DEFAULT_IMAGE_MIME

logger = logging.getLogger(__name__)

MAX_ATTACHMENTS = 5
MAX_ATTACHMENT_BYTES = 5 * 1024 * 1024


@dataclass(frozen=True)
class RawFile:
    """A user-selected file before admission."""

    filename: str
    content_type: str | None
    data: bytes

    @property
    def size(self) -> int:
        return len(self.data)


@dataclass(frozen=True)
class Attachment:
    """An admitted reference image with its preview handle."""

    filename: str
    media_type: str
    data: bytes
    preview_handle: str

    @property
    def size(self) -> int:
        return len(self.data)

    async def read(self) -> bytes:
        """Return the payload bytes."""
        return self.data


@dataclass
class PreviewHandleRegistry:
    """
    Allocates and revokes preview handles.

    Every handle is released through release(); releasing an unknown or
    already-released handle is a no-op so each handle is revoked exactly once.
    """

    _live: set[str] = field(default_factory=set)

    def allocate(self) -> str:
        handle = f"preview:{uuid.uuid4()}"
        self._live.add(handle)
        return handle

    def release(self, handle: str) -> bool:
        if handle not in self._live:
            return False
        self._live.discard(handle)
        return True

    def is_live(self, handle: str) -> bool:
        return handle in self._live

    @property
    def live_count(self) -> int:
        return len(self._live)


def is_image_type(content_type: str | None) -> bool:
    return bool(content_type) and content_type.lower().startswith("image/")


class AttachmentManager:
    """
    Ordered collection of pending attachments.

    Usable as a context manager; leaving the block releases every preview handle.
    """

    def __init__(
        self,
        max_attachments: int = MAX_ATTACHMENTS,
        max_bytes: int = MAX_ATTACHMENT_BYTES,
        handles: PreviewHandleRegistry | None = None,
    ) -> None:
        self.max_attachments = max_attachments
        self.max_bytes = max_bytes
        self.handles = handles or PreviewHandleRegistry()
        self._items: list[Attachment] = []

    @property
    def attachments(self) -> list[Attachment]:
        """Snapshot of the current attachments in insertion order."""
        return list(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self):
        return iter(list(self._items))

    def validate(self, candidates: list[RawFile]) -> None:
        """
        Check a batch against count, media type and size limits.

        Raises:
            TooManyAttachmentsError: If the batch would exceed the count ceiling
            InvalidMediaTypeError: If any candidate is not an image
            AttachmentTooLargeError: If any candidate exceeds the byte ceiling
        """
        if len(self._items) + len(candidates) > self.max_attachments:
            raise TooManyAttachmentsError(
                current=len(self._items),
                adding=len(candidates),
                limit=self.max_attachments,
            )
        for candidate in candidates:
            if not is_image_type(candidate.content_type):
                raise InvalidMediaTypeError(candidate.content_type, candidate.filename)
            if candidate.size > self.max_bytes:
                raise AttachmentTooLargeError(
                    size=candidate.size,
                    limit=self.max_bytes,
                    filename=candidate.filename,
                )

    def add_files(self, candidates: list[RawFile]) -> list[Attachment]:
        """
        Admit a batch of files, all or nothing.

        Args:
            candidates: Files in selection order

        Returns:
            list[Attachment]: Full attachment list after admission

        Raises:
            TooManyAttachmentsError, InvalidMediaTypeError, AttachmentTooLargeError
        """
        if not candidates:
            return self.attachments

        try:
            self.validate(candidates)
        except Exception as e:
            logger.warning(
                f"{__name__}:add_files - Rejected batch of {len(candidates)}: {e}"
            )
            raise

        for candidate in candidates:
            self._items.append(
                Attachment(
                    filename=candidate.filename,
                    media_type=candidate.content_type or DEFAULT_IMAGE_MIME,
                    data=candidate.data,
                    preview_handle=self.handles.allocate(),
                )
            )

        logger.debug(
            f"{__name__}:add_files - Added {len(candidates)} attachment(s), "
            f"total={len(self._items)}"
        )
        return self.attachments

    def remove_at(self, index: int) -> list[Attachment]:
        """
        Remove the attachment at index and revoke its preview handle.

        Raises:
            IndexError: If index is out of range
        """
        if index < 0 or index >= len(self._items):
            raise IndexError(f"Attachment index out of range: {index}")
        removed = self._items.pop(index)
        self.handles.release(removed.preview_handle)
        return self.attachments

    def clear(self) -> None:
        """Revoke every preview handle and empty the list."""
        for item in self._items:
            self.handles.release(item.preview_handle)
        self._items.clear()

    def close(self) -> None:
        """Tear down the manager."""
        self.clear()

    def __enter__(self) -> "AttachmentManager":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
