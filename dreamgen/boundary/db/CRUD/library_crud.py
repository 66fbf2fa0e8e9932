"""
Prompt library CRUD operations.

Provides listing (own / public), search, like-row lookups and like
counter adjustment for the prompt library tables.

Dependencies: sqlalchemy, dreamgen.boundary.db.models
System role: Prompt library persistence operations
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy import delete, desc, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from dreamgen.boundary.db.CRUD.base_crud import BaseCRUD
from dreamgen.boundary.db.models.library_model import (
    PromptLibraryLikeModel,
    PromptLibraryModel,
)


class PromptLibraryCRUD(BaseCRUD[PromptLibraryModel]):
    """CRUD operations for PromptLibraryModel."""

    def __init__(self) -> None:
        """Initialize PromptLibraryCRUD with PromptLibraryModel."""
        super().__init__(PromptLibraryModel)

    async def list_entries(
        self,
        session: AsyncSession,
        user_id: str | None = None,
        query: str | None = None,
        limit: int | None = None,
        offset: int = 0,
    ) -> Sequence[PromptLibraryModel]:
        """
        List library entries newest first.

        Args:
            session: Async database session
            user_id: Only this user's entries when given, otherwise public entries
            query: Case-insensitive substring filter over title and prompt
            limit: Maximum entries
            offset: Entries to skip
        """
        stmt = select(PromptLibraryModel)
        if user_id:
            stmt = stmt.where(PromptLibraryModel.user_id == user_id)
        else:
            stmt = stmt.where(PromptLibraryModel.is_public.is_(True))

        q = (query or "").strip().lower()
        if q:
            pattern = f"%{q}%"
            stmt = stmt.where(
                or_(
                    func.lower(PromptLibraryModel.title).like(pattern),
                    func.lower(PromptLibraryModel.prompt).like(pattern),
                )
            )

        stmt = stmt.order_by(desc(PromptLibraryModel.created_at)).offset(offset)
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await session.execute(stmt)
        return result.scalars().all()

    async def adjust_like_count(
        self,
        session: AsyncSession,
        id: UUID,
        delta: int,
    ) -> int | None:
        """
        Add delta to like_count, never going below zero.

        Returns:
            New like count, or None when the entry does not exist
        """
        entry = await self.get_by_id(session, id)
        if entry is None:
            return None
        entry.like_count = max(0, (entry.like_count or 0) + delta)
        await session.flush()
        return entry.like_count


class PromptLibraryLikeCRUD(BaseCRUD[PromptLibraryLikeModel]):
    """CRUD operations for PromptLibraryLikeModel."""

    def __init__(self) -> None:
        """Initialize PromptLibraryLikeCRUD with PromptLibraryLikeModel."""
        super().__init__(PromptLibraryLikeModel)

    async def get_for_user(
        self,
        session: AsyncSession,
        prompt_library_id: UUID,
        user_id: str,
    ) -> PromptLibraryLikeModel | None:
        """Retrieve a user's like row for one entry."""
        stmt = select(PromptLibraryLikeModel).where(
            (PromptLibraryLikeModel.prompt_library_id == prompt_library_id)
            & (PromptLibraryLikeModel.user_id == user_id)
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def liked_entry_ids(self, session: AsyncSession, user_id: str) -> set[UUID]:
        """Ids of every entry the user has liked."""
        stmt = select(PromptLibraryLikeModel.prompt_library_id).where(
            PromptLibraryLikeModel.user_id == user_id
        )
        result = await session.execute(stmt)
        return set(result.scalars().all())

    async def delete_for_user(
        self,
        session: AsyncSession,
        prompt_library_id: UUID,
        user_id: str,
    ) -> bool:
        stmt = delete(PromptLibraryLikeModel).where(
            (PromptLibraryLikeModel.prompt_library_id == prompt_library_id)
            & (PromptLibraryLikeModel.user_id == user_id)
        )
        result = await session.execute(stmt)
        return result.rowcount > 0


library_crud = PromptLibraryCRUD()
library_like_crud = PromptLibraryLikeCRUD()
