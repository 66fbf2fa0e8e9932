"""
Exception hierarchy for the Dream Image Generator.

Provides layered exception structure for domain-specific errors.
All exceptions include context for observability and debugging.

Dependencies: json (stdlib)
System role: Centralized exception handling across the application
"""

import json
from typing import Any


class DreamGenException(Exception):
    """Base exception for all Dream Image Generator errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context for debugging
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class GenerationValidationError(DreamGenException):
    """Raised when local input validation fails before any network call."""


class TooManyAttachmentsError(GenerationValidationError):
    """Raised when a batch would push the attachment count over the limit."""

    def __init__(self, current: int, adding: int, limit: int) -> None:
        super().__init__(
            f"Maximum of {limit} images allowed. You have {current}; trying to add {adding}.",
            {"current": current, "adding": adding, "limit": limit},
        )


class InvalidMediaTypeError(GenerationValidationError):
    """Raised when a candidate attachment is not an image."""

    def __init__(self, media_type: str | None, filename: str | None = None) -> None:
        details: dict[str, Any] = {"media_type": media_type}
        if filename:
            details["filename"] = filename
        super().__init__(
            "Please select only image files (PNG, JPG, GIF, etc.).",
            details,
        )


class AttachmentTooLargeError(GenerationValidationError):
    """Raised when a candidate attachment exceeds the per-item byte ceiling."""

    def __init__(self, size: int, limit: int, filename: str | None = None) -> None:
        details: dict[str, Any] = {"size": size, "limit": limit}
        if filename:
            details["filename"] = filename
        super().__init__(f"Each image must be <= {limit // (1024 * 1024)}MB.", details)


class EmptyPromptError(GenerationValidationError):
    """Raised when the user prompt is empty after trimming."""

    def __init__(self) -> None:
        super().__init__("Please enter some text before generating a response")


class UnknownPresetError(GenerationValidationError):
    """Raised when a preset key is not in the registry."""

    def __init__(self, key: str) -> None:
        super().__init__(f"Unknown preset: {key}", {"key": key})


class MalformedEncodingError(DreamGenException):
    """Raised when base64 text or a data resource cannot be decoded."""


class EncodingFailedError(DreamGenException):
    """Raised when an attachment cannot be read or encoded for submission."""

    def __init__(self, index: int, cause: Exception) -> None:
        super().__init__(
            f"Failed to encode attachment at index {index}: {cause}",
            {"index": index, "error_type": type(cause).__name__},
        )
        self.index = index


class RemoteGenerationError(DreamGenException):
    """
    Raised when the remote generation boundary fails.

    Carries the boundary's error text and optional detail payload verbatim.
    """

    def __init__(
        self,
        error: str,
        detail: Any = None,
        status_code: int | None = None,
    ) -> None:
        self.error = error
        self.detail = detail
        self.status_code = status_code
        message = error
        if detail is not None:
            message = f"{error} — {json.dumps(detail, default=str)}"
        super().__init__(message)


class AlreadySubmittingError(DreamGenException):
    """Raised when a submission is attempted while another is in flight."""

    def __init__(self) -> None:
        super().__init__("A generation is already in progress")


class PersistenceError(DreamGenException):
    """Raised when history or library persistence fails (non-fatal for generation)."""


class GenerationNotFoundError(DreamGenException):
    """Raised when a generation record cannot be found."""

    def __init__(self, generation_id: str) -> None:
        super().__init__(
            f"Generation not found: {generation_id}",
            {"generation_id": generation_id},
        )


class LibraryEntryNotFoundError(DreamGenException):
    """Raised when a prompt library entry cannot be found."""

    def __init__(self, entry_id: str) -> None:
        super().__init__(
            f"Library entry not found: {entry_id}",
            {"entry_id": entry_id},
        )


class PermissionDeniedError(DreamGenException):
    """Raised when a user acts on a record they do not own."""
