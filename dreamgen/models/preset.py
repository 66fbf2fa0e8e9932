"""
Preset schemas.

Dependencies: pydantic, dreamgen.core.generation.presets
System role: Preset listing API contract
"""

from pydantic import BaseModel

from dreamgen.core.generation.presets import Preset, format_resolution


class OverlayTextHintOut(BaseModel):
    placeholder: str
    max_chars: int


class PresetResponse(BaseModel):
    """Preset as shown in the sidebar list."""

    id: str
    label: str
    desc: str | None
    ratio: str
    width: int
    height: int
    resolution: str
    is_custom: bool
    platform: str | None = None
    watermark: bool = False
    overlay_text: OverlayTextHintOut | None = None

    @classmethod
    def from_preset(cls, preset: Preset) -> "PresetResponse":
        overlay = preset.overlay_text
        return cls(
            id=preset.id,
            label=preset.label,
            desc=preset.desc,
            ratio=preset.ratio.value,
            width=preset.width,
            height=preset.height,
            resolution=format_resolution(preset),
            is_custom=preset.is_custom,
            platform=preset.platform,
            watermark=preset.watermark,
            overlay_text=(
                OverlayTextHintOut(placeholder=overlay.placeholder, max_chars=overlay.max_chars)
                if overlay
                else None
            ),
        )
