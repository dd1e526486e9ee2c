"""
Repositories for small tables ordered by a single table-wide integer column.

Banners, tags and partners are listed unpaginated in that order and reject
duplicate order values.
"""

from __future__ import annotations

from typing import ClassVar, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.banners import Banner
from ..entities.partners import Partner
from ..entities.tags import Tag
from .base import BaseRepository, EntityType


class OrderedRepository(BaseRepository[EntityType]):
    """Base repository for entities sorted by ``order_field``."""

    order_field: ClassVar[str]

    @property
    def order_column(self):
        return getattr(self.model, self.order_field)

    async def list_ordered(self, active_only: bool = False) -> List[EntityType]:
        stmt = select(self.model)
        if active_only and hasattr(self.model, "is_active"):
            stmt = stmt.where(self.model.is_active == True)  # noqa: E712
        return await self.all(stmt.order_by(self.order_column, self.model.id))  # type: ignore[attr-defined]

    async def used_orders(self) -> List[int]:
        return await self.column_values(self.order_column)

    async def order_taken(self, value: int, exclude_id: Optional[int] = None) -> bool:
        return await self.exists(self.order_column == value, exclude_id=exclude_id)


class BannerRepository(OrderedRepository[Banner]):
    order_field = "display_order"

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Banner)


class TagRepository(OrderedRepository[Tag]):
    order_field = "sort_order"

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Tag)


class PartnerRepository(OrderedRepository[Partner]):
    order_field = "order"

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Partner)
