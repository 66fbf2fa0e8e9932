"""
Preset registry for platform-aware image generation.

Static, read-only table of named prompt templates with an aspect ratio and
export size each, plus the free-text "other" variant whose snippet is
supplied by the caller at composition time.

Dependencies: dataclasses, enum
System role: Preset Registry
"""

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType

from dreamgen.core.exceptions import UnknownPresetError

CUSTOM_PRESET_KEY = "other"


class AspectRatio(str, Enum):
    """Supported aspect ratios."""

    SQUARE = "1:1"
    PORTRAIT = "4:5"
    WIDESCREEN = "16:9"


@dataclass(frozen=True)
class OverlayTextHint:
    """Placeholder and length cap for optional headline overlays."""

    placeholder: str
    max_chars: int


@dataclass(frozen=True)
class Preset:
    """Immutable preset configuration."""

    id: str
    label: str
    ratio: AspectRatio
    width: int
    height: int
    prompt_template: str
    desc: str | None = None
    platform: str | None = None
    watermark: bool = False
    overlay_text: OverlayTextHint | None = None

    @property
    def is_custom(self) -> bool:
        return self.id == CUSTOM_PRESET_KEY


PRESETS: MappingProxyType[str, Preset] = MappingProxyType({
    "instagram": Preset(
        id="instagram",
        label="Instagram-ready image",
        desc="1080×1350, vibrant, crisp",
        ratio=AspectRatio.PORTRAIT,
        width=1080,
        height=1350,
        prompt_template=(
            "Create an Instagram-ready vertical image (1080x1350). High contrast, "
            "vibrant colors, crisp details, minimal background, subtle grain. Export as PNG."
        ),
        platform="instagram",
        overlay_text=OverlayTextHint(placeholder="Add a catchy headline", max_chars=80),
    ),
    "ghibli": Preset(
        id="ghibli",
        label="Ghibli image",
        desc="Soft pastels, painterly, whimsical",
        ratio=AspectRatio.WIDESCREEN,
        width=1280,
        height=720,
        prompt_template=(
            "Render in a Studio Ghibli-inspired style: soft pastels, painterly textures, "
            "warm sunlight, whimsical mood, gentle outlines, detailed nature background."
        ),
    ),
    "professional": Preset(
        id="professional",
        label="Professional image",
        desc="Studio-quality, neutral bg",
        ratio=AspectRatio.SQUARE,
        width=1200,
        height=1200,
        prompt_template=(
            "Create a professional studio-quality product photo. Neutral background, "
            "soft diffused lighting, high dynamic range, sharp focus, realistic color, 4k detail."
        ),
    ),
    # Template stays empty; the custom snippet lives with the caller.
    CUSTOM_PRESET_KEY: Preset(
        id=CUSTOM_PRESET_KEY,
        label="Other (custom)",
        desc="Append your own snippet",
        ratio=AspectRatio.SQUARE,
        width=1024,
        height=1024,
        prompt_template="",
    ),
})


class PresetRegistry:
    """Read-only view over the preset table."""

    def __init__(self, presets: MappingProxyType[str, Preset] = PRESETS) -> None:
        self._presets = presets

    def get(self, key: str) -> Preset:
        """
        Look up a preset by key.

        Raises:
            UnknownPresetError: If key is not registered
        """
        try:
            return self._presets[key]
        except KeyError:
            raise UnknownPresetError(key) from None

    def all(self) -> list[Preset]:
        """Return presets in declaration order."""
        return list(self._presets.values())

    def __contains__(self, key: object) -> bool:
        return key in self._presets


def format_resolution(preset: Preset) -> str:
    """Format a preset's export size for badges and tooltips."""
    return f"{preset.width}×{preset.height}"


preset_registry = PresetRegistry()
