"""
Base repository interfaces and utilities.

This module provides the foundational repository patterns used across all
repository implementations in the centralized database layer. Built with
async SQLAlchemy sessions and SQLModel select statements.
"""

from __future__ import annotations

from typing import Any, Dict, Generic, List, Optional, Sequence, Tuple, Type, TypeVar

from sqlalchemy import func, or_
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import SQLModel, select

from ..base import utc_now

# Generic type for SQLModel entities
EntityType = TypeVar("EntityType", bound=SQLModel)


class BaseRepository(Generic[EntityType]):
    """Base async repository with common CRUD operations using SQLModel."""

    def __init__(self, session: AsyncSession, model: Type[EntityType]) -> None:
        """Initialize repository with async database session and SQLModel entity class.

        Args:
            session: Async SQLAlchemy session for database operations
            model: SQLModel entity class for this repository
        """
        self.session = session
        self.model = model

    async def create(self, entity: EntityType) -> EntityType:
        """Persist a new entity and return it with generated fields populated."""
        self.session.add(entity)
        await self.session.commit()
        await self.session.refresh(entity)
        return entity

    async def get_by_id(self, entity_id: int) -> Optional[EntityType]:
        """Get entity by its primary key, or None if not found."""
        return await self.session.get(self.model, entity_id)

    async def update(self, entity: EntityType, changes: Optional[Dict[str, Any]] = None) -> EntityType:
        """Apply ``changes`` to ``entity`` (if given), bump ``updated_at`` and persist.

        Args:
            entity: Loaded entity instance
            changes: Field values to set before saving

        Returns:
            Updated entity instance
        """
        for key, value in (changes or {}).items():
            setattr(entity, key, value)
        if hasattr(entity, "updated_at"):
            entity.updated_at = utc_now()
        self.session.add(entity)
        await self.session.commit()
        await self.session.refresh(entity)
        return entity

    async def delete(self, entity_id: int) -> bool:
        """Delete entity by its primary key.

        Returns:
            True if deleted, False if not found
        """
        entity = await self.get_by_id(entity_id)
        if entity is None:
            return False
        await self.session.delete(entity)
        await self.session.commit()
        return True

    async def list(
        self, limit: Optional[int] = None, offset: Optional[int] = None, filters: Optional[Dict[str, Any]] = None
    ) -> List[EntityType]:
        """List entities with optional equality filters and pagination."""
        stmt = select(self.model)
        if filters:
            stmt = QueryBuilder.apply_filters(stmt, self.model, filters)
        stmt = QueryBuilder.apply_pagination(stmt, limit, offset)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def paginate(self, stmt, page: int, per_page: int) -> Tuple[List[EntityType], int]:
        """Run ``stmt`` for one page and count the full result set.

        Args:
            stmt: Filtered and ordered select statement
            page: 1-based page number
            per_page: Page size

        Returns:
            Tuple of (items on the page, total matching rows)
        """
        count_stmt = select(func.count()).select_from(stmt.order_by(None).subquery())
        total = (await self.session.execute(count_stmt)).scalar_one()
        offset = (page - 1) * per_page
        result = await self.session.execute(stmt.offset(offset).limit(per_page))
        return list(result.scalars().all()), int(total)

    async def all(self, stmt) -> List[EntityType]:
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def exists(self, *conditions, exclude_id: Optional[int] = None) -> bool:
        """Return True when a row matching all ``conditions`` exists, ignoring ``exclude_id``."""
        stmt = select(self.model.id).where(*conditions)  # type: ignore[attr-defined]
        if exclude_id is not None:
            stmt = stmt.where(self.model.id != exclude_id)  # type: ignore[attr-defined]
        result = await self.session.execute(stmt.limit(1))
        return result.first() is not None

    async def column_values(self, column, *conditions) -> List[Any]:
        """Return every value of ``column`` for rows matching ``conditions``."""
        result = await self.session.execute(select(column).where(*conditions))
        return list(result.scalars().all())


class QueryBuilder:
    """Utility class for building SQLModel-based database queries."""

    @staticmethod
    def apply_filters(stmt, model: Type[EntityType], filters: Dict[str, Any]):
        """Apply equality filters, skipping None values and unknown fields."""
        for key, value in filters.items():
            if value is not None and value != "" and hasattr(model, key):
                stmt = stmt.where(getattr(model, key) == value)
        return stmt

    @staticmethod
    def apply_search(stmt, columns: Sequence[Any], term: Optional[str]):
        """Apply a case-insensitive ``LIKE %term%`` over any of ``columns``."""
        if not term:
            return stmt
        pattern = f"%{term.strip()}%"
        return stmt.where(or_(*[column.ilike(pattern) for column in columns]))

    @staticmethod
    def apply_pagination(stmt, limit: Optional[int], offset: Optional[int]):
        """Apply limit/offset to a select statement."""
        if limit is not None:
            stmt = stmt.limit(limit)
        if offset is not None:
            stmt = stmt.offset(offset)
        return stmt
