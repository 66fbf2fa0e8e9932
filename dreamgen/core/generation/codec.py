"""
Transport encoding helpers for image payloads.

Converts between raw image bytes and standard base64 text, and between
self-contained data resources (data:<mime>;base64,<payload>) and their
(media type, bytes) decomposition. Pure functions, no I/O.

Dependencies: base64, binascii, re
System role: Encoder/Decoder for the generation pipeline
"""

import base64
import binascii
import re

from dreamgen.core.exceptions import MalformedEncodingError

DEFAULT_IMAGE_MIME = "image/png"

_WHITESPACE_RE = re.compile(r"\s+")
_RESOURCE_RE = re.compile(r"^data:([\w/+.-]+);base64,(.*)$", re.IGNORECASE | re.DOTALL)
_RESOURCE_PREFIX_RE = re.compile(r"^data:([\w/+.-]+);base64,", re.IGNORECASE)


def strip_whitespace(text: str) -> str:
    """Remove every whitespace character (transport line-wrapping included)."""
    return _WHITESPACE_RE.sub("", text)


def encode(data: bytes) -> str:
    """
    Encode bytes as single-line standard base64.

    Args:
        data: Raw payload

    Returns:
        str: Base64 text with no whitespace or line breaks
    """
    return base64.b64encode(data).decode("ascii")


def decode(text: str) -> bytes:
    """
    Decode base64 text back into bytes.

    Whitespace is stripped first; anything else outside the alphabet fails.

    Args:
        text: Base64 text

    Returns:
        bytes: Decoded payload

    Raises:
        MalformedEncodingError: If text contains non-alphabet characters or bad padding
    """
    cleaned = strip_whitespace(text)
    try:
        return base64.b64decode(cleaned, validate=True)
    except (binascii.Error, ValueError) as e:
        raise MalformedEncodingError(
            f"Invalid base64 payload: {e}",
            {"length": len(cleaned)},
        ) from e


def is_resource(text: str) -> bool:
    """Return True if text already carries its own data: media-type prefix."""
    return bool(_RESOURCE_PREFIX_RE.match(text))


def to_resource(media_type: str, encoded_payload: str) -> str:
    """
    Build a self-contained renderable resource from a media type and payload.

    Args:
        media_type: Declared media type (e.g. image/png)
        encoded_payload: Base64 payload, possibly line-wrapped

    Returns:
        str: data:<media_type>;base64,<payload>
    """
    return f"data:{media_type};base64,{strip_whitespace(encoded_payload)}"


def resource_to_bytes(resource: str) -> tuple[str, bytes]:
    """
    Split a data resource into its media type and decoded bytes.

    Args:
        resource: data:<mime>;base64,<payload>

    Returns:
        tuple[str, bytes]: (media_type, payload bytes)

    Raises:
        MalformedEncodingError: If resource is not a well-formed base64 data resource
    """
    match = _RESOURCE_RE.match(resource.strip())
    if not match:
        raise MalformedEncodingError("Invalid data URL")
    media_type = match.group(1) or "application/octet-stream"
    return media_type, decode(match.group(2))


def infer_extension(resource: str) -> str:
    """
    Infer a file extension from a data resource's media type.

    Args:
        resource: data:<mime>;base64,... string

    Returns:
        str: png, jpeg, jpg, webp or gif (png when unknown)
    """
    match = _RESOURCE_PREFIX_RE.match(resource)
    mime = (match.group(1) if match else "").lower()
    if "png" in mime:
        return "png"
    if "jpeg" in mime:
        return "jpeg"
    if "jpg" in mime:
        return "jpg"
    if "webp" in mime:
        return "webp"
    if "gif" in mime:
        return "gif"
    return "png"
