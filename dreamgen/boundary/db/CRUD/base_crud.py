"""
Base CRUD operations for SQLAlchemy models.

Provides generic Create, Read, Update, Delete operations that can be
inherited and extended by model-specific CRUD classes.

Dependencies: sqlalchemy, uuid
System role: Foundation for all database CRUD operations
"""

from typing import Any, Generic, TypeVar
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from dreamgen.boundary.db.base import Base

ModelT = TypeVar("ModelT", bound=Base)


class BaseCRUD(Generic[ModelT]):
    """
    Generic base class for CRUD operations.

    Type Parameters:
        ModelT: SQLAlchemy model class inheriting from Base

    Attributes:
        model: The SQLAlchemy model class to operate on
    """

    def __init__(self, model: type[ModelT]) -> None:
        """
        Initialize CRUD with target model.

        Args:
            model: SQLAlchemy model class for database operations
        """
        self.model = model

    async def create(self, session: AsyncSession, **kwargs: Any) -> ModelT:
        """
        Create a new record in the database.

        Args:
            session: Async database session
            **kwargs: Model field values

        Returns:
            Created model instance with generated ID and timestamps
        """
        instance = self.model(**kwargs)
        session.add(instance)
        await session.flush()
        await session.refresh(instance)
        return instance

    async def create_many(
        self,
        session: AsyncSession,
        rows: list[dict[str, Any]],
    ) -> list[ModelT]:
        """
        Insert several records in one flush.

        Args:
            session: Async database session
            rows: Field dicts, one per record

        Returns:
            Created model instances in input order
        """
        instances = [self.model(**row) for row in rows]
        session.add_all(instances)
        await session.flush()
        return instances

    async def get_by_id(self, session: AsyncSession, id: UUID) -> ModelT | None:
        """
        Retrieve a single record by primary key.

        Returns:
            Model instance if found, None otherwise
        """
        stmt = select(self.model).where(self.model.id == id)
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def update_by_id(
        self,
        session: AsyncSession,
        id: UUID,
        **kwargs: Any,
    ) -> ModelT | None:
        """
        Update a record by primary key.

        Loads the instance and assigns fields so ORM onupdate hooks
        (updated_at) fire.

        Returns:
            Updated model instance if found, None otherwise
        """
        instance = await self.get_by_id(session, id)
        if instance is None:
            return None
        for key, value in kwargs.items():
            setattr(instance, key, value)
        await session.flush()
        await session.refresh(instance)
        return instance

    async def delete_by_id(self, session: AsyncSession, id: UUID) -> bool:
        """
        Delete a record by primary key.

        Returns:
            True if record was deleted, False if not found
        """
        stmt = delete(self.model).where(self.model.id == id)
        result = await session.execute(stmt)
        return result.rowcount > 0
