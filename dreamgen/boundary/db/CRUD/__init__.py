"""
CRUD operations for database models.

Exports base CRUD class and model-specific CRUD implementations
with pre-instantiated singletons for direct use.

Usage:
    from dreamgen.boundary.db.CRUD import generation_crud, library_crud

    record = await generation_crud.create_record(db, user_id, prompt_text)
"""

from dreamgen.boundary.db.CRUD.base_crud import BaseCRUD
from dreamgen.boundary.db.CRUD.generation_crud import (
    GenerationCRUD,
    GenerationImageCRUD,
    generation_crud,
    generation_image_crud,
)
from dreamgen.boundary.db.CRUD.library_crud import (
    PromptLibraryCRUD,
    PromptLibraryLikeCRUD,
    library_crud,
    library_like_crud,
)

__all__ = [
    "BaseCRUD",
    "GenerationCRUD",
    "GenerationImageCRUD",
    "PromptLibraryCRUD",
    "PromptLibraryLikeCRUD",
    "generation_crud",
    "generation_image_crud",
    "library_crud",
    "library_like_crud",
]
