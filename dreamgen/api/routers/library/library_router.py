"""
Prompt library API endpoints.

Routes:
- GET /library - List public entries, or the caller's own with mine=true; q filters
- POST /library - Save a prompt
- GET /library/likes - Ids of entries the caller has liked
- GET /library/{id} - Entry with its source generation's images
- PUT /library/{id} - Update entry (owner only)
- DELETE /library/{id} - Delete entry (owner only)
- POST /library/{id}/like - Toggle the caller's like

Dependencies: dreamgen.application.services, dreamgen.models
System role: Prompt library HTTP API
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, status

from dreamgen.api.deps.dependencies import (
    get_current_user_id,
    get_library_service,
    require_user_id,
)
from dreamgen.application.services.library_service import LibraryService
from dreamgen.models.library import (
    CreateLibraryEntryRequest,
    LibraryEntryDetailResponse,
    LibraryEntryResponse,
    LikedIdsResponse,
    LikeToggleResponse,
    UpdateLibraryEntryRequest,
)

from .library_error_handling import handle_library_errors

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/library", tags=["library"])


@router.get("", response_model=list[LibraryEntryResponse])
@handle_library_errors
async def list_entries(
    mine: bool = False,
    q: str | None = Query(None, max_length=200),
    limit: int | None = Query(None, ge=1, le=500),
    offset: int = Query(0, ge=0),
    user_id: str | None = Depends(get_current_user_id),
    library_service: LibraryService = Depends(get_library_service),
) -> list[LibraryEntryResponse]:
    """
    List library entries newest first.

    Raises:
        HTTPException(401): mine=true without a signed-in user
    """
    if mine and not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not authenticated",
        )
    entries = await library_service.list_entries(
        user_id=user_id if mine else None,
        query=q,
        limit=limit,
        offset=offset,
    )
    return [LibraryEntryResponse(**e) for e in entries]


@router.post("", response_model=LibraryEntryResponse, status_code=201)
@handle_library_errors
async def create_entry(
    request: CreateLibraryEntryRequest,
    user_id: str = Depends(require_user_id),
    library_service: LibraryService = Depends(get_library_service),
) -> LibraryEntryResponse:
    """Save a prompt to the caller's library."""
    logger.info("Creating library entry", extra={"user_id": user_id})
    entry = await library_service.create_entry(
        user_id=user_id,
        title=request.title,
        prompt=request.prompt,
        category=request.category,
        is_public=request.is_public,
        source_generation_id=request.source_generation_id,
    )
    return LibraryEntryResponse(**entry)


@router.get("/likes", response_model=LikedIdsResponse)
@handle_library_errors
async def liked_entries(
    user_id: str = Depends(require_user_id),
    library_service: LibraryService = Depends(get_library_service),
) -> LikedIdsResponse:
    """Ids of every entry the caller has liked."""
    return LikedIdsResponse(ids=await library_service.liked_ids(user_id))


@router.get("/{entry_id}", response_model=LibraryEntryDetailResponse)
@handle_library_errors
async def get_entry(
    entry_id: UUID,
    user_id: str | None = Depends(get_current_user_id),
    library_service: LibraryService = Depends(get_library_service),
) -> LibraryEntryDetailResponse:
    """
    Get one entry with its source generation's images.

    Private entries are only visible to their owner.

    Raises:
        HTTPException(404): Entry not found or not visible to the caller
    """
    return LibraryEntryDetailResponse(**await library_service.get_entry(entry_id, user_id))


@router.put("/{entry_id}", response_model=LibraryEntryResponse)
@handle_library_errors
async def update_entry(
    entry_id: UUID,
    request: UpdateLibraryEntryRequest,
    user_id: str = Depends(require_user_id),
    library_service: LibraryService = Depends(get_library_service),
) -> LibraryEntryResponse:
    """
    Update an entry.

    Raises:
        HTTPException(403): Caller is not the owner
        HTTPException(404): Entry not found
    """
    entry = await library_service.update_entry(
        entry_id,
        user_id,
        **request.model_dump(exclude_unset=True),
    )
    return LibraryEntryResponse(**entry)


@router.delete("/{entry_id}", status_code=204)
@handle_library_errors
async def delete_entry(
    entry_id: UUID,
    user_id: str = Depends(require_user_id),
    library_service: LibraryService = Depends(get_library_service),
) -> None:
    """
    Delete an entry.

    Raises:
        HTTPException(403): Caller is not the owner
        HTTPException(404): Entry not found
    """
    await library_service.delete_entry(entry_id, user_id)


@router.post("/{entry_id}/like", response_model=LikeToggleResponse)
@handle_library_errors
async def toggle_like(
    entry_id: UUID,
    user_id: str = Depends(require_user_id),
    library_service: LibraryService = Depends(get_library_service),
) -> LikeToggleResponse:
    """Like the entry, or remove the caller's like if present."""
    return LikeToggleResponse(**await library_service.toggle_like(entry_id, user_id))
