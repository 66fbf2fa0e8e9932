"""
Generation ORM models.

A generation record is one successful submission: the saved prompt text
plus references to its uploaded input and output images.

Dependencies: sqlalchemy, dreamgen.boundary.db.base
System role: Generation history persistence
"""

import enum
from uuid import UUID

from sqlalchemy import Enum, ForeignKey, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from dreamgen.boundary.db.base import Base, UUIDMixin, TimestampMixin


class ImageType(str, enum.Enum):
    """Role of an image within a generation."""

    INPUT = "input"
    OUTPUT = "output"


class GenerationModel(Base, UUIDMixin, TimestampMixin):
    """
    Generation ORM model.

    Attributes:
        id: UUID primary key (auto-generated)
        user_id: Owner identifier from the auth provider
        prompt_text: Prompt as submitted
        images: Input/output image rows (cascade delete)
        created_at: Generation timestamp (UTC)
        updated_at: Last modification timestamp (UTC)
    """

    __tablename__ = "generations"

    user_id: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        index=True,
        doc="Owner user id",
    )

    prompt_text: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        doc="Prompt text sent to the model",
    )

    images = relationship(
        "GenerationImageModel",
        back_populates="generation",
        cascade="all, delete-orphan",
        order_by="GenerationImageModel.created_at",
    )


class GenerationImageModel(Base, UUIDMixin, TimestampMixin):
    """
    Image reference attached to a generation.

    Attributes:
        generation_id: Parent generation (cascade delete)
        image_url: Public URL of the stored blob
        image_type: INPUT (reference image) or OUTPUT (generated image)
    """

    __tablename__ = "generation_images"

    generation_id: Mapped[UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("generations.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    image_url: Mapped[str] = mapped_column(
        String(2048),
        nullable=False,
    )

    image_type: Mapped[ImageType] = mapped_column(
        Enum(ImageType, native_enum=False),
        nullable=False,
    )

    generation = relationship("GenerationModel", back_populates="images")
