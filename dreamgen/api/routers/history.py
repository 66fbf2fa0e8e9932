"""
Generation history API endpoints.

Routes:
- GET /history - Caller's generations, newest first (max 50)
- POST /history/{generation_id}/library - Save a generation's prompt to the library

Dependencies: dreamgen.application.services, dreamgen.models
System role: Generation history HTTP API
"""

from uuid import UUID

from fastapi import APIRouter, Depends

from dreamgen.api.deps.dependencies import get_history_service, require_user_id
from dreamgen.api.routers.library import handle_library_errors
from dreamgen.application.services.history_service import HistoryService
from dreamgen.models.history import HistoryItemResponse
from dreamgen.models.library import LibraryEntryResponse

router = APIRouter(prefix="/history", tags=["history"])


@router.get("", response_model=list[HistoryItemResponse])
@handle_library_errors
async def list_history(
    user_id: str = Depends(require_user_id),
    history_service: HistoryService = Depends(get_history_service),
) -> list[HistoryItemResponse]:
    """List the caller's generations with grouped input/output images."""
    items = await history_service.list_history(user_id)
    return [HistoryItemResponse(**item) for item in items]


@router.post(
    "/{generation_id}/library",
    response_model=LibraryEntryResponse,
    status_code=201,
)
@handle_library_errors
async def add_to_library(
    generation_id: UUID,
    user_id: str = Depends(require_user_id),
    history_service: HistoryService = Depends(get_history_service),
) -> LibraryEntryResponse:
    """
    Save a generation's prompt as a public library entry.

    Raises:
        HTTPException(403): Generation belongs to another user
        HTTPException(404): Generation not found
    """
    entry = await history_service.add_to_library(user_id, generation_id)
    return LibraryEntryResponse(**entry)
