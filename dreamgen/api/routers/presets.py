"""
Preset API endpoints.

Routes: GET /presets

Dependencies: dreamgen.core.generation.presets
System role: Preset listing HTTP API
"""

from fastapi import APIRouter

from dreamgen.core.generation.presets import preset_registry
from dreamgen.models.preset import PresetResponse

router = APIRouter(prefix="/presets", tags=["presets"])


@router.get("", response_model=list[PresetResponse])
async def list_presets() -> list[PresetResponse]:
    """All presets in display order."""
    return [PresetResponse.from_preset(p) for p in preset_registry.all()]
