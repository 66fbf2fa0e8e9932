"""
Declarative base and shared columns for generation history and the prompt library.

Every table gets a UUID primary key and UTC created/updated timestamps.
Unnamed indexes and constraints are named by convention so PostgreSQL
and SQLite produce identical schemas.

Dependencies: sqlalchemy
System role: Foundation for all database models
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, MetaData, Uuid
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    """Registry for generations, generation_images, prompt_library and prompt_library_likes."""

    metadata = MetaData(naming_convention=NAMING_CONVENTION)


class UUIDMixin:
    """
    UUID v4 primary key.

    Ids are generated client-side so a generation id is known before its
    images are uploaded under {user_id}/{generation_id}/.
    """

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
        nullable=False,
    )


class TimestampMixin:
    """created_at (set once) and updated_at (refreshed by onupdate), both UTC."""

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utc_now,
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utc_now,
        onupdate=utc_now,
        nullable=False,
    )
