"""
Generation CRUD operations.

Provides record creation, image attachment and history queries for
GenerationModel and GenerationImageModel.

Dependencies: sqlalchemy, dreamgen.boundary.db.models
System role: Generation history persistence operations
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy import desc, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from dreamgen.boundary.db.CRUD.base_crud import BaseCRUD
from dreamgen.boundary.db.models.generation_model import (
    GenerationImageModel,
    GenerationModel,
    ImageType,
)


class GenerationCRUD(BaseCRUD[GenerationModel]):
    """CRUD operations for GenerationModel with eager image loading."""

    def __init__(self) -> None:
        """Initialize GenerationCRUD with GenerationModel."""
        super().__init__(GenerationModel)

    async def create_record(
        self,
        session: AsyncSession,
        user_id: str,
        prompt_text: str,
    ) -> GenerationModel:
        """Create a generation record and return it with its id."""
        return await self.create(session, user_id=user_id, prompt_text=prompt_text)

    async def get_with_images(
        self,
        session: AsyncSession,
        id: UUID,
    ) -> GenerationModel | None:
        """Retrieve one generation with its images loaded."""
        stmt = (
            select(GenerationModel)
            .where(GenerationModel.id == id)
            .options(selectinload(GenerationModel.images))
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_for_user(
        self,
        session: AsyncSession,
        user_id: str,
        limit: int | None = 50,
        offset: int = 0,
    ) -> Sequence[GenerationModel]:
        """
        Retrieve a user's generations, newest first, images loaded.

        Args:
            session: Async database session
            user_id: Owner user id
            limit: Maximum records (None for all)
            offset: Records to skip
        """
        stmt = (
            select(GenerationModel)
            .where(GenerationModel.user_id == user_id)
            .options(selectinload(GenerationModel.images))
            .order_by(desc(GenerationModel.created_at))
            .offset(offset)
        )
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await session.execute(stmt)
        return result.scalars().all()


class GenerationImageCRUD(BaseCRUD[GenerationImageModel]):
    """CRUD operations for GenerationImageModel."""

    def __init__(self) -> None:
        """Initialize GenerationImageCRUD with GenerationImageModel."""
        super().__init__(GenerationImageModel)

    async def attach_many(
        self,
        session: AsyncSession,
        rows: list[dict],
    ) -> list[GenerationImageModel]:
        """
        Batch-insert image references.

        Args:
            rows: Dicts with generation_id, image_url, image_type
        """
        normalized = [
            {**row, "image_type": ImageType(row["image_type"])}
            for row in rows
        ]
        return await self.create_many(session, normalized)

    async def get_by_generation_id(
        self,
        session: AsyncSession,
        generation_id: UUID,
    ) -> Sequence[GenerationImageModel]:
        """Retrieve a generation's images in upload order."""
        stmt = (
            select(GenerationImageModel)
            .where(GenerationImageModel.generation_id == generation_id)
            .order_by(GenerationImageModel.created_at)
        )
        result = await session.execute(stmt)
        return result.scalars().all()


generation_crud = GenerationCRUD()
generation_image_crud = GenerationImageCRUD()
