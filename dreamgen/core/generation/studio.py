"""
Studio session state.

Single owner for everything the generation screen shows: typed prompt,
preset selection, custom snippet, attachments, pipeline status, last result
and recent prompts. State changes go through dispatch() with one message
type per user action; generate() runs the pipeline.

Dependencies: dataclasses, logging, dreamgen.core.generation
System role: Presentation state owner (reducer) over the generation core
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Union

from dreamgen.core.exceptions import DreamGenException
from dreamgen.core.generation.artifacts import (
    GeneratedImage,
    build_generated_images,
    describe_preset,
)
from dreamgen.core.generation.attachments import AttachmentManager, RawFile
from dreamgen.core.generation.composer import compose, ensure_prompt
from dreamgen.core.generation.pipeline import GenerationPipeline, PipelineState
from dreamgen.core.generation.presets import (
    CUSTOM_PRESET_KEY,
    AspectRatio,
    Preset,
    PresetRegistry,
    preset_registry,
)
from dreamgen.core.generation.prompt_history import PromptHistory

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SetText:
    text: str


@dataclass(frozen=True)
class SelectPreset:
    key: str | None


@dataclass(frozen=True)
class ApplyCustomSnippet:
    text: str


@dataclass(frozen=True)
class AddFiles:
    files: list[RawFile]


@dataclass(frozen=True)
class RemoveAttachment:
    index: int


@dataclass(frozen=True)
class ClearAttachments:
    pass


@dataclass(frozen=True)
class ClearResults:
    pass


StudioAction = Union[
    SetText,
    SelectPreset,
    ApplyCustomSnippet,
    AddFiles,
    RemoveAttachment,
    ClearAttachments,
    ClearResults,
]


@dataclass(frozen=True)
class AttachmentView:
    index: int
    filename: str
    media_type: str
    size: int
    preview_handle: str


@dataclass(frozen=True)
class StudioView:
    """Immutable snapshot for rendering."""

    text: str
    preset: dict | None
    custom_snippet: str
    attachments: list[AttachmentView]
    status: PipelineState
    saved_prompt: str
    result_text: str
    images: list[GeneratedImage]
    error: str | None
    recent_prompts: list[str] = field(default_factory=list)


class StudioSession:
    """Explicitly owned UI state for one generation screen."""

    def __init__(
        self,
        pipeline: GenerationPipeline,
        attachments: AttachmentManager | None = None,
        registry: PresetRegistry = preset_registry,
        history: PromptHistory | None = None,
    ) -> None:
        self.pipeline = pipeline
        self.attachments = attachments or AttachmentManager()
        self.registry = registry
        self.history = history or PromptHistory()
        self.text = ""
        self.preset_key: str | None = None
        self.custom_snippet = ""
        self.saved_prompt = ""
        self.result_text = ""
        self.images: list[GeneratedImage] = []
        self.error: str | None = None

    @property
    def preset(self) -> Preset | None:
        return self.registry.get(self.preset_key) if self.preset_key else None

    @property
    def aspect_ratio(self) -> AspectRatio:
        preset = self.preset
        return preset.ratio if preset else AspectRatio.SQUARE

    def dispatch(self, action: StudioAction) -> StudioView:
        """
        Apply one user action.

        Raises:
            GenerationValidationError: When AddFiles is rejected (state unchanged)
            IndexError: When RemoveAttachment is out of range
        """
        if isinstance(action, SetText):
            self.text = action.text
        elif isinstance(action, SelectPreset):
            if action.key is not None:
                self.registry.get(action.key)
            self.preset_key = action.key
            if action.key != CUSTOM_PRESET_KEY:
                self.custom_snippet = ""
        elif isinstance(action, ApplyCustomSnippet):
            snippet = action.text.strip()
            if snippet:
                self.preset_key = CUSTOM_PRESET_KEY
                self.custom_snippet = snippet
        elif isinstance(action, AddFiles):
            self.attachments.add_files(action.files)
            self.error = None
        elif isinstance(action, RemoveAttachment):
            self.attachments.remove_at(action.index)
        elif isinstance(action, ClearAttachments):
            self.attachments.clear()
        elif isinstance(action, ClearResults):
            self.images = []
            self.result_text = ""
            self.pipeline.clear()
        else:
            raise TypeError(f"Unsupported action: {type(action).__name__}")

        self.pipeline.acknowledge()
        return self.snapshot()

    async def generate(self) -> StudioView:
        """
        Compose the prompt, run the pipeline and publish artifacts.

        The saved prompt keeps the user's text only; preset text goes out with
        the request and is never shown.

        Raises:
            DreamGenException: Any validation, encoding or remote failure
        """
        try:
            saved = ensure_prompt(self.text)
            final_prompt = compose(saved, self.preset_key, self.custom_snippet, self.registry)
            self.saved_prompt = saved
            self.error = None
            result = await self.pipeline.submit(
                final_prompt,
                self.attachments.attachments,
                self.aspect_ratio,
            )
        except DreamGenException as e:
            self.error = f"Failed to generate response: {e.message}"
            logger.warning(f"{__name__}:generate - {type(e).__name__}: {e}")
            raise

        if self.pipeline.current_result is result:
            self.result_text = result.texts
            self.images = build_generated_images(
                result.images, self.saved_prompt, self.preset, datetime.now()
            )
        self.history.add(saved)
        return self.snapshot()

    def snapshot(self) -> StudioView:
        preset = self.preset
        return StudioView(
            text=self.text,
            preset=describe_preset(preset) if preset else None,
            custom_snippet=self.custom_snippet,
            attachments=[
                AttachmentView(
                    index=i,
                    filename=a.filename,
                    media_type=a.media_type,
                    size=a.size,
                    preview_handle=a.preview_handle,
                )
                for i, a in enumerate(self.attachments.attachments)
            ],
            status=self.pipeline.state,
            saved_prompt=self.saved_prompt,
            result_text=self.result_text,
            images=list(self.images),
            error=self.error,
            recent_prompts=self.history.items,
        )

    def close(self) -> None:
        """Tear down: release every preview handle."""
        self.attachments.close()

    def __enter__(self) -> "StudioSession":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
