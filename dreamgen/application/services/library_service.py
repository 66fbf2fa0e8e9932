"""
Prompt library service orchestrator.

Coordinates listing, search, owner-only edits and likes for saved
prompts. Ownership is checked here; the routers only map errors.

Dependencies: sqlalchemy, dreamgen.boundary.db.CRUD
System role: Prompt library use case orchestration
"""

import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from dreamgen.application.services.history_service import entry_to_dict, group_images
from dreamgen.boundary.db.CRUD.generation_crud import generation_crud
from dreamgen.boundary.db.CRUD.library_crud import library_crud, library_like_crud
from dreamgen.boundary.db.models.library_model import PromptLibraryModel
from dreamgen.core.exceptions import LibraryEntryNotFoundError, PermissionDeniedError

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = ("title", "prompt", "category", "is_public")


class LibraryService:
    """Prompt library service orchestrator."""

    def __init__(self, db: AsyncSession) -> None:
        """
        Initialize library service with async database session.

        Args:
            db: Async SQLAlchemy session
        """
        self.db = db

    async def _get_or_raise(self, entry_id: UUID) -> PromptLibraryModel:
        entry = await library_crud.get_by_id(self.db, entry_id)
        if entry is None:
            raise LibraryEntryNotFoundError(str(entry_id))
        return entry

    async def _get_visible(self, entry_id: UUID, user_id: str | None) -> PromptLibraryModel:
        # Private entries exist only for their owner
        entry = await self._get_or_raise(entry_id)
        if not entry.is_public and entry.user_id != user_id:
            raise LibraryEntryNotFoundError(str(entry_id))
        return entry

    async def _get_owned(self, entry_id: UUID, user_id: str) -> PromptLibraryModel:
        entry = await self._get_or_raise(entry_id)
        if entry.user_id != user_id:
            raise PermissionDeniedError(
                "Only the owner can modify this library entry",
                {"entry_id": str(entry_id)},
            )
        return entry

    async def list_entries(
        self,
        user_id: str | None = None,
        query: str | None = None,
        limit: int | None = None,
        offset: int = 0,
    ) -> list[dict]:
        """
        List entries newest first.

        Args:
            user_id: Only this user's entries when given, public entries otherwise
            query: Case-insensitive search over title and prompt
        """
        entries = await library_crud.list_entries(
            self.db, user_id=user_id, query=query, limit=limit, offset=offset
        )
        return [entry_to_dict(e) for e in entries]

    async def create_entry(
        self,
        user_id: str,
        title: str,
        prompt: str,
        category: str | None = None,
        is_public: bool = True,
        source_generation_id: UUID | None = None,
    ) -> dict:
        """Create a library entry owned by user_id."""
        try:
            entry = await library_crud.create(
                self.db,
                user_id=user_id,
                title=title,
                prompt=prompt,
                category=category,
                is_public=is_public,
                source_generation_id=source_generation_id,
            )
        except Exception as e:
            logger.error(
                "Failed to create library entry",
                extra={"error": str(e), "user_id": user_id},
            )
            raise
        logger.info("Library entry created", extra={"entry_id": str(entry.id)})
        return entry_to_dict(entry)

    async def get_entry(self, entry_id: UUID, user_id: str | None = None) -> dict:
        """
        Get one entry with the images of its source generation.

        Input/output image lists are empty when the entry has no source.

        Raises:
            LibraryEntryNotFoundError: If entry not found, or private and user_id is not the owner
        """
        entry = await self._get_visible(entry_id, user_id)
        generation = None
        if entry.source_generation_id is not None:
            generation = await generation_crud.get_with_images(
                self.db, entry.source_generation_id
            )
        return {**entry_to_dict(entry), **group_images(generation)}

    async def update_entry(self, entry_id: UUID, user_id: str, **fields) -> dict:
        """
        Update title, prompt, category or is_public (owner only).

        None values are ignored.

        Raises:
            LibraryEntryNotFoundError: If entry not found
            PermissionDeniedError: If user_id is not the owner
        """
        await self._get_owned(entry_id, user_id)
        updates = {
            k: v for k, v in fields.items() if k in EDITABLE_FIELDS and v is not None
        }
        entry = await library_crud.update_by_id(self.db, entry_id, **updates)
        logger.info(
            "Library entry updated",
            extra={"entry_id": str(entry_id), "fields": sorted(updates)},
        )
        return entry_to_dict(entry)

    async def delete_entry(self, entry_id: UUID, user_id: str) -> None:
        """
        Delete an entry (owner only).

        Raises:
            LibraryEntryNotFoundError: If entry not found
            PermissionDeniedError: If user_id is not the owner
        """
        await self._get_owned(entry_id, user_id)
        await library_crud.delete_by_id(self.db, entry_id)
        logger.info("Library entry deleted", extra={"entry_id": str(entry_id)})

    async def toggle_like(self, entry_id: UUID, user_id: str) -> dict:
        """
        Like or unlike an entry for user_id.

        Returns:
            dict: {liked, like_count}

        Raises:
            LibraryEntryNotFoundError: If entry not found, or private and user_id is not the owner
        """
        await self._get_visible(entry_id, user_id)
        existing = await library_like_crud.get_for_user(self.db, entry_id, user_id)
        if existing is not None:
            await library_like_crud.delete_for_user(self.db, entry_id, user_id)
            like_count = await library_crud.adjust_like_count(self.db, entry_id, -1)
            liked = False
        else:
            await library_like_crud.create(
                self.db, user_id=user_id, prompt_library_id=entry_id
            )
            like_count = await library_crud.adjust_like_count(self.db, entry_id, 1)
            liked = True

        logger.debug(
            f"{__name__}:toggle_like - entry_id={entry_id}, liked={liked}, count={like_count}"
        )
        return {"liked": liked, "like_count": like_count}

    async def liked_ids(self, user_id: str) -> list[str]:
        """Ids of every entry the user has liked."""
        ids = await library_like_crud.liked_entry_ids(self.db, user_id)
        return sorted(str(i) for i in ids)
