"""
Database models package.

Exports:
  - GenerationModel, GenerationImageModel, ImageType: generation history
  - PromptLibraryModel, PromptLibraryLikeModel: prompt library

Dependencies: sqlalchemy, dreamgen.boundary.db.base
System role: Database model definitions for domain entities
"""

from dreamgen.boundary.db.models.generation_model import (
    GenerationImageModel,
    GenerationModel,
    ImageType,
)
from dreamgen.boundary.db.models.library_model import (
    PromptLibraryLikeModel,
    PromptLibraryModel,
)

__all__ = [
    "GenerationModel",
    "GenerationImageModel",
    "ImageType",
    "PromptLibraryModel",
    "PromptLibraryLikeModel",
]
