"""
History service orchestrator.

Lists a user's past generations with their images and promotes a
generation into the prompt library.

Dependencies: sqlalchemy, dreamgen.boundary.db.CRUD
System role: Generation history use case orchestration
"""

import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from dreamgen.boundary.db.CRUD.generation_crud import generation_crud
from dreamgen.boundary.db.CRUD.library_crud import library_crud
from dreamgen.boundary.db.models.generation_model import GenerationModel, ImageType
from dreamgen.core.exceptions import GenerationNotFoundError, PermissionDeniedError

logger = logging.getLogger(__name__)

HISTORY_LIMIT = 50
LIBRARY_TITLE_MAX = 64


def make_library_title(prompt_text: str) -> str:
    """First 64 characters of the prompt, with '...' when cut."""
    if len(prompt_text) > LIBRARY_TITLE_MAX:
        return prompt_text[:LIBRARY_TITLE_MAX] + "..."
    return prompt_text


def group_images(generation: GenerationModel | None) -> dict[str, list[str]]:
    """Split a generation's image URLs into input/output lists."""
    grouped: dict[str, list[str]] = {"input_images": [], "output_images": []}
    if generation is None:
        return grouped
    for image in generation.images:
        key = "input_images" if image.image_type == ImageType.INPUT else "output_images"
        grouped[key].append(image.image_url)
    return grouped


class HistoryService:
    """Generation history service orchestrator."""

    def __init__(self, db: AsyncSession) -> None:
        """
        Initialize history service with async database session.

        Args:
            db: Async SQLAlchemy session
        """
        self.db = db

    async def list_history(self, user_id: str, limit: int = HISTORY_LIMIT) -> list[dict]:
        """
        List a user's generations, newest first.

        Returns:
            list[dict]: id, prompt_text, created_at, input_images, output_images
        """
        try:
            generations = await generation_crud.list_for_user(self.db, user_id, limit=limit)
        except Exception as e:
            logger.error(
                "Failed to list history",
                extra={"error": str(e), "user_id": user_id},
            )
            raise

        return [
            {
                "id": g.id,
                "prompt_text": g.prompt_text,
                "created_at": g.created_at,
                **group_images(g),
            }
            for g in generations
        ]

    async def add_to_library(self, user_id: str, generation_id: UUID) -> dict:
        """
        Save a generation's prompt as a public library entry.

        Raises:
            GenerationNotFoundError: If the generation does not exist
            PermissionDeniedError: If the generation belongs to another user
        """
        generation = await generation_crud.get_by_id(self.db, generation_id)
        if generation is None:
            raise GenerationNotFoundError(str(generation_id))
        if generation.user_id != user_id:
            raise PermissionDeniedError(
                "Cannot add another user's generation to the library",
                {"generation_id": str(generation_id)},
            )

        entry = await library_crud.create(
            self.db,
            user_id=user_id,
            title=make_library_title(generation.prompt_text),
            prompt=generation.prompt_text,
            is_public=True,
            source_generation_id=generation.id,
        )
        logger.info(
            "Generation added to library",
            extra={"generation_id": str(generation_id), "entry_id": str(entry.id)},
        )
        return entry_to_dict(entry)


def entry_to_dict(entry) -> dict:
    return {
        "id": entry.id,
        "user_id": entry.user_id,
        "title": entry.title,
        "prompt": entry.prompt,
        "category": entry.category,
        "is_public": entry.is_public,
        "source_generation_id": entry.source_generation_id,
        "like_count": entry.like_count,
        "created_at": entry.created_at,
        "updated_at": entry.updated_at,
    }
