"""
Prompt composer.

Builds the outbound prompt from the user's text and the active preset
snippet. The user's saved prompt is never altered; the appended text only
exists in the returned value.

Dependencies: dreamgen.core.generation.presets
System role: Prompt Composer
"""

from dreamgen.core.exceptions import EmptyPromptError
from dreamgen.core.generation.presets import PresetRegistry, preset_registry


def ensure_prompt(user_text: str | None) -> str:
    """
    Return the trimmed user prompt or fail if nothing is left.

    Raises:
        EmptyPromptError: If the text is empty after trimming
    """
    trimmed = (user_text or "").strip()
    if not trimmed:
        raise EmptyPromptError()
    return trimmed


def resolve_snippet(
    active_preset_key: str | None,
    custom_snippet: str | None,
    registry: PresetRegistry = preset_registry,
) -> str:
    """Pick the text to append for the current preset selection ("" for none)."""
    if active_preset_key is None:
        return ""
    preset = registry.get(active_preset_key)
    if preset.is_custom:
        return (custom_snippet or "").strip()
    return preset.prompt_template


def compose(
    user_text: str,
    active_preset_key: str | None,
    custom_snippet: str | None = "",
    registry: PresetRegistry = preset_registry,
) -> str:
    """
    Compose the final outbound prompt.

    Args:
        user_text: Prompt as typed by the user
        active_preset_key: Selected preset key, or None
        custom_snippet: Snippet for the custom variant
        registry: Preset lookup

    Returns:
        str: Trimmed user text, followed by a blank line and the snippet when one applies

    Raises:
        EmptyPromptError: If user_text is empty after trimming
        UnknownPresetError: If active_preset_key is not registered
    """
    base = ensure_prompt(user_text)
    snippet = resolve_snippet(active_preset_key, custom_snippet, registry)
    if not snippet:
        return base
    return f"{base}\n\n{snippet}"
