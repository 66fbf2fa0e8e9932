"""
Reply part extraction and classification.

The generation reply is a loosely shaped object. Part extraction runs an
ordered list of shape matchers; each returns a list of raw parts or None to
pass to the next matcher. Raw parts are then classified into tagged
variants, skipping shapes this version does not understand.

Dependencies: dataclasses, typing
System role: Classify phase of the generation pipeline
"""

from dataclasses import dataclass
from typing import Any, Callable, Union

from dreamgen.core.generation.codec import DEFAULT_IMAGE_MIME


@dataclass(frozen=True)
class TextPart:
    """A text segment of the reply."""

    text: str


@dataclass(frozen=True)
class ImagePart:
    """An inline image of the reply (payload still transport-encoded)."""

    mime_type: str
    data: str


ResponsePart = Union[TextPart, ImagePart]

ShapeMatcher = Callable[[Any], list[Any] | None]


def _first_candidate(reply: Any) -> dict | None:
    candidates = reply.get("candidates") if isinstance(reply, dict) else None
    if isinstance(candidates, list) and candidates and isinstance(candidates[0], dict):
        return candidates[0]
    return None


def match_direct_parts(reply: Any) -> list[Any] | None:
    """{parts: [...]}"""
    if isinstance(reply, dict) and isinstance(reply.get("parts"), list):
        return reply["parts"]
    return None


def match_candidate_parts(reply: Any) -> list[Any] | None:
    """{candidates: [{content: {parts: [...]}}]}"""
    candidate = _first_candidate(reply)
    if candidate is None:
        return None
    content = candidate.get("content")
    if isinstance(content, dict) and isinstance(content.get("parts"), list):
        return content["parts"]
    return None


def match_candidate_content(reply: Any) -> list[Any] | None:
    """{candidates: [{content: {type|mimeType: ...}}]} as a single part."""
    candidate = _first_candidate(reply)
    if candidate is None:
        return None
    content = candidate.get("content")
    # TODO: validate this heuristic against the image model's documented reply variants
    if isinstance(content, dict) and (
        content.get("type") or content.get("mimeType") or content.get("mime_type")
    ):
        return [content]
    return None


SHAPE_MATCHERS: tuple[ShapeMatcher, ...] = (
    match_direct_parts,
    match_candidate_parts,
    match_candidate_content,
)


def extract_parts(reply: Any, matchers: tuple[ShapeMatcher, ...] = SHAPE_MATCHERS) -> list[Any]:
    """
    Run shape matchers in order and return the first match.

    Returns:
        list: Raw parts, or an empty list when no matcher applies
    """
    if not reply:
        return []
    for matcher in matchers:
        parts = matcher(reply)
        if parts is not None:
            return parts
    return []


def classify_part(raw: Any) -> ResponsePart | None:
    """
    Classify one raw part.

    Returns:
        TextPart for non-empty text, ImagePart for non-empty image payloads,
        None for anything else
    """
    if not isinstance(raw, dict):
        return None
    kind = raw.get("type")
    if kind == "text":
        text = raw.get("text")
        if isinstance(text, str) and text:
            return TextPart(text=text)
        return None
    if kind == "image":
        data = raw.get("data")
        if isinstance(data, str) and data.strip():
            mime = raw.get("mimeType") or raw.get("mime_type") or DEFAULT_IMAGE_MIME
            return ImagePart(mime_type=mime, data=data)
        return None
    return None


def classify_parts(raw_parts: list[Any]) -> list[ResponsePart]:
    """Classify raw parts in order, dropping unknown shapes."""
    classified = []
    for raw in raw_parts:
        part = classify_part(raw)
        if part is not None:
            classified.append(part)
    return classified
