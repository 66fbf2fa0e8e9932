"""
Prompt library ORM models.

Curated prompts with title, category, visibility and a like counter, plus
one like row per (user, entry).

Dependencies: sqlalchemy, dreamgen.boundary.db.base
System role: Prompt library persistence
"""

from uuid import UUID

from sqlalchemy import Boolean, ForeignKey, Integer, String, Text, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from dreamgen.boundary.db.base import Base, UUIDMixin, TimestampMixin


class PromptLibraryModel(Base, UUIDMixin, TimestampMixin):
    """
    Prompt library entry.

    Attributes:
        user_id: Owner user id
        title: Short display name
        prompt: Full prompt text
        category: Optional free-form category
        is_public: Visible to other users when True
        source_generation_id: Generation the entry was saved from (SET NULL on delete)
        like_count: Denormalized number of like rows
    """

    __tablename__ = "prompt_library"

    user_id: Mapped[str] = mapped_column(String(255), nullable=False, index=True)

    title: Mapped[str] = mapped_column(String(255), nullable=False)

    prompt: Mapped[str] = mapped_column(Text, nullable=False)

    category: Mapped[str | None] = mapped_column(String(100), nullable=True, default=None)

    is_public: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    source_generation_id: Mapped[UUID | None] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("generations.id", ondelete="SET NULL"),
        nullable=True,
        default=None,
    )

    like_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)


class PromptLibraryLikeModel(Base, UUIDMixin, TimestampMixin):
    """One user's like of one library entry."""

    __tablename__ = "prompt_library_likes"
    __table_args__ = (
        UniqueConstraint("user_id", "prompt_library_id", name="uq_library_like_user_entry"),
    )

    user_id: Mapped[str] = mapped_column(String(255), nullable=False, index=True)

    prompt_library_id: Mapped[UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("prompt_library.id", ondelete="CASCADE"),
        nullable=False,
    )
