"""
Database boundary layer: ORM models, CRUD operations, and connection management.

Exports:
  - Base, UUIDMixin, TimestampMixin: Model building blocks
  - get_async_engine(), get_async_session_factory(), get_async_db(): Async connection management
  - Generation and prompt library models and CRUD singletons

Dependencies: sqlalchemy, dreamgen.configs
System role: Database adapter for generation history and the prompt library
"""

from dreamgen.boundary.db.base import Base, TimestampMixin, UUIDMixin
from dreamgen.boundary.db.connection import (
    create_tables,
    get_async_db,
    get_async_engine,
    get_async_session_factory,
)
from dreamgen.boundary.db.models import (
    GenerationImageModel,
    GenerationModel,
    ImageType,
    PromptLibraryLikeModel,
    PromptLibraryModel,
)
from dreamgen.boundary.db.CRUD import (
    BaseCRUD,
    generation_crud,
    generation_image_crud,
    library_crud,
    library_like_crud,
)

__all__ = [
    "Base",
    "TimestampMixin",
    "UUIDMixin",
    "create_tables",
    "get_async_db",
    "get_async_engine",
    "get_async_session_factory",
    "GenerationModel",
    "GenerationImageModel",
    "ImageType",
    "PromptLibraryModel",
    "PromptLibraryLikeModel",
    "BaseCRUD",
    "generation_crud",
    "generation_image_crud",
    "library_crud",
    "library_like_crud",
]
