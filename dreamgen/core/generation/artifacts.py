"""
Normalized generation artifacts.

Turns published image resources into download- and share-ready artifacts:
derived filename, accessibility text and decoded bytes on demand.

Dependencies: dataclasses, datetime, dreamgen.core.generation.codec
System role: GeneratedImage construction for the presentation layer
"""

from dataclasses import dataclass
from datetime import datetime

from dreamgen.core.generation.codec import infer_extension, resource_to_bytes
from dreamgen.core.generation.presets import Preset, format_resolution

ALT_TEXT_MAX = 160
FILENAME_PREFIX = "dig"


def now_ts(moment: datetime | None = None) -> str:
    """Timestamp for filenames: yyyyMMdd-HHmmss (local time)."""
    return (moment or datetime.now()).strftime("%Y%m%d-%H%M%S")


def truncate(text: str, max_len: int = ALT_TEXT_MAX) -> str:
    if len(text) > max_len:
        return text[: max_len - 1] + "…"
    return text


def make_alt_text(index: int, saved_prompt: str | None, preset: Preset | None) -> str:
    """Accessibility text for the image at zero-based index."""
    base = (saved_prompt or "").strip() or "AI-generated image"
    label = f" ({preset.label})" if preset else ""
    return f"Generated image {index + 1} — {truncate(base)}{label}"


def make_filename(resource: str | None, preset: Preset | None, stamp: str) -> str:
    """Download filename derived from preset id, export size and timestamp."""
    if not resource:
        return f"{FILENAME_PREFIX}-image-{stamp}.png"
    ext = infer_extension(resource)
    preset_id = preset.id if preset else "custom"
    size_tag = f"{preset.width}x{preset.height}" if preset else "auto"
    return f"{FILENAME_PREFIX}-{preset_id}-{size_tag}-{stamp}.{ext}"


@dataclass(frozen=True)
class GeneratedImage:
    """A directly renderable generated image."""

    resource: str
    filename: str
    alt_text: str

    @property
    def media_type(self) -> str:
        return resource_to_bytes(self.resource)[0]

    def to_bytes(self) -> bytes:
        """Decoded payload, ready to write to disk or a clipboard blob."""
        return resource_to_bytes(self.resource)[1]


def build_generated_images(
    resources: list[str],
    saved_prompt: str | None,
    preset: Preset | None,
    generated_at: datetime | None = None,
) -> list[GeneratedImage]:
    """
    Wrap ordered resources as GeneratedImage artifacts.

    Args:
        resources: data: resources in reply order
        saved_prompt: The prompt as the user typed it (no preset text)
        preset: Active preset, or None
        generated_at: Timestamp shared by every filename of this generation

    Returns:
        list[GeneratedImage]: Artifacts in the same order
    """
    stamp = now_ts(generated_at)
    return [
        GeneratedImage(
            resource=resource,
            filename=make_filename(resource, preset, stamp),
            alt_text=make_alt_text(index, saved_prompt, preset),
        )
        for index, resource in enumerate(resources)
    ]


def describe_preset(preset: Preset) -> dict:
    """Badge data for a preset: ratio label and resolution tooltip."""
    return {
        "id": preset.id,
        "label": preset.label,
        "ratio": preset.ratio.value,
        "resolution": format_resolution(preset),
    }
