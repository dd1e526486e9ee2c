"""Organization members repository."""

from __future__ import annotations

from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.organization_members import OrganizationMember
from .base import BaseRepository, QueryBuilder


class OrganizationMemberRepository(BaseRepository[OrganizationMember]):
    """Repository for organization member data access operations using SQLModel."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, OrganizationMember)

    def search(self, group: Optional[str] = None, q: Optional[str] = None):
        """Listing sorted by group then order, optionally narrowed to one group and a name/position search."""
        stmt = select(OrganizationMember)
        stmt = QueryBuilder.apply_filters(stmt, OrganizationMember, {"group": group})
        stmt = QueryBuilder.apply_search(stmt, [OrganizationMember.name, OrganizationMember.position_title], q)
        return stmt.order_by(OrganizationMember.group, OrganizationMember.order)

    async def orders_in_group(self, group: str, exclude_id: Optional[int] = None) -> List[int]:
        conditions = [OrganizationMember.group == group]
        if exclude_id is not None:
            conditions.append(OrganizationMember.id != exclude_id)
        return await self.column_values(OrganizationMember.order, *conditions)

    async def active_members(self) -> List[OrganizationMember]:
        stmt = (
            select(OrganizationMember)
            .where(OrganizationMember.is_active == True)  # noqa: E712
            .order_by(OrganizationMember.group, OrganizationMember.order)
        )
        return await self.all(stmt)

    async def slugs(self) -> set[str]:
        return set(await self.column_values(OrganizationMember.slug))
