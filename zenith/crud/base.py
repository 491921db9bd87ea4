"""Base CRUD class with common operations."""

from typing import Any, Dict, Generic, Optional, Type, TypeVar, Union
from pydantic import BaseModel
from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from zenith.core.exceptions import NotFoundError
from zenith.db.base import Base

ModelType = TypeVar("ModelType", bound=Base)
CreateSchemaType = TypeVar("CreateSchemaType", bound=BaseModel)
UpdateSchemaType = TypeVar("UpdateSchemaType", bound=BaseModel)


class CRUDBase(Generic[ModelType, CreateSchemaType, UpdateSchemaType]):
    """
    Base class for CRUD operations.
    Provides common database operations for any model.

    Writes only flush; the request-scoped session commits.
    """

    def __init__(self, model: Type[ModelType], resource_name: Optional[str] = None):
        """
        Initialize CRUD with a SQLAlchemy model.

        Args:
            model: SQLAlchemy model class
            resource_name: Name used in "not found" errors
        """
        self.model = model
        self.resource_name = resource_name or model.__name__.lower()

    async def get(
        self,
        db: AsyncSession,
        id: Any
    ) -> Optional[ModelType]:
        """Get a single record by ID."""
        result = await db.execute(
            select(self.model).where(self.model.id == id)
        )
        return result.scalar_one_or_none()

    async def get_or_404(
        self,
        db: AsyncSession,
        id: Any
    ) -> ModelType:
        """Get a single record by ID or raise NotFoundError."""
        obj = await self.get(db, id=id)
        if obj is None:
            raise NotFoundError(self.resource_name, id)
        return obj

    async def count(self, db: AsyncSession) -> int:
        """Count total records."""
        result = await db.execute(
            select(func.count()).select_from(self.model)
        )
        return result.scalar_one()

    async def create(
        self,
        db: AsyncSession,
        *,
        obj_in: Union[CreateSchemaType, Dict[str, Any]]
    ) -> ModelType:
        """Create a new record."""
        if isinstance(obj_in, dict):
            create_data = obj_in
        else:
            create_data = obj_in.model_dump(exclude_unset=True)

        return await self.save(db, self.model(**create_data))

    async def update(
        self,
        db: AsyncSession,
        *,
        db_obj: ModelType,
        obj_in: Union[UpdateSchemaType, Dict[str, Any]]
    ) -> ModelType:
        """Update an existing record. Unset schema fields are left alone."""
        if isinstance(obj_in, dict):
            update_data = obj_in
        else:
            update_data = obj_in.model_dump(exclude_unset=True)

        for field, value in update_data.items():
            if hasattr(db_obj, field):
                setattr(db_obj, field, value)

        return await self.save(db, db_obj)

    async def save(
        self,
        db: AsyncSession,
        db_obj: ModelType
    ) -> ModelType:
        """Flush pending changes on a record and reload server-side values."""
        db.add(db_obj)
        await db.flush()
        await db.refresh(db_obj)
        return db_obj

    async def remove(
        self,
        db: AsyncSession,
        *,
        db_obj: ModelType
    ) -> ModelType:
        """Delete a loaded record, running ORM cascades."""
        await db.delete(db_obj)
        await db.flush()
        return db_obj
