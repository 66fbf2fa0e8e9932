"""
Generation core.

Exports:
  - codec: encode/decode, data resource helpers
  - AttachmentManager, RawFile, Attachment: pending reference images
  - PresetRegistry, Preset, AspectRatio: static preset table
  - compose: outbound prompt composition
  - GenerationPipeline, GenerationResult: submit/normalize/publish cycle
  - StudioSession: single owner of generation screen state
"""

from dreamgen.core.generation.attachments import (
    MAX_ATTACHMENT_BYTES,
    MAX_ATTACHMENTS,
    Attachment,
    AttachmentManager,
    RawFile,
)
from dreamgen.core.generation.composer import compose, ensure_prompt
from dreamgen.core.generation.pipeline import (
    GenerationHandoff,
    GenerationPipeline,
    GenerationResult,
    GenerationTransport,
    OutboundImage,
    OutboundRequest,
    PipelineState,
    normalize_reply,
)
from dreamgen.core.generation.presets import (
    CUSTOM_PRESET_KEY,
    PRESETS,
    AspectRatio,
    Preset,
    PresetRegistry,
    format_resolution,
    preset_registry,
)
from dreamgen.core.generation.studio import StudioSession

__all__ = [
    "MAX_ATTACHMENT_BYTES",
    "MAX_ATTACHMENTS",
    "Attachment",
    "AttachmentManager",
    "RawFile",
    "compose",
    "ensure_prompt",
    "GenerationHandoff",
    "GenerationPipeline",
    "GenerationResult",
    "GenerationTransport",
    "OutboundImage",
    "OutboundRequest",
    "PipelineState",
    "normalize_reply",
    "CUSTOM_PRESET_KEY",
    "PRESETS",
    "AspectRatio",
    "Preset",
    "PresetRegistry",
    "format_resolution",
    "preset_registry",
    "StudioSession",
]
