"""
Programs repository.

Listing, slug lookup and collected-amount bookkeeping for fundraising programs.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Dict, Iterable, Optional

from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..base import utc_now
from ..entities.donations import Donation
from ..entities.programs import Program
from .base import BaseRepository, QueryBuilder

PUBLIC_STATUSES = ("active", "draft", "completed")


class ProgramRepository(BaseRepository[Program]):
    """Repository for program data access operations using SQLModel."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Program)

    async def get_by_slug(self, slug: str, statuses: Optional[Iterable[str]] = None) -> Optional[Program]:
        stmt = select(Program).where(Program.slug == slug)
        if statuses is not None:
            stmt = stmt.where(Program.status.in_(list(statuses)))  # type: ignore[attr-defined]
        result = await self.session.execute(stmt)
        return result.scalars().first()

    def search(self, q: Optional[str] = None, status: Optional[str] = None, category: Optional[str] = None):
        """Build the backoffice listing: title/category search plus exact status and category, newest first."""
        stmt = select(Program)
        stmt = QueryBuilder.apply_search(stmt, [Program.title, Program.category], q)
        stmt = QueryBuilder.apply_filters(stmt, Program, {"status": status, "category": category})
        return stmt.order_by(Program.created_at.desc(), Program.id.desc())  # type: ignore[union-attr]

    def public_search(self, status: Optional[str] = None, category: Optional[str] = None, highlight: bool = False):
        """Build the public listing: highlighted first, then by publish (or creation) date."""
        stmt = select(Program)
        if status:
            stmt = stmt.where(Program.status == status)
        else:
            stmt = stmt.where(Program.status.in_(PUBLIC_STATUSES))  # type: ignore[attr-defined]
        stmt = QueryBuilder.apply_filters(stmt, Program, {"category": category})
        if highlight:
            stmt = stmt.where(Program.is_highlight == True)  # noqa: E712
        return stmt.order_by(
            Program.is_highlight.desc(),  # type: ignore[attr-defined]
            func.coalesce(Program.published_at, Program.created_at).desc(),
            Program.id.desc(),  # type: ignore[union-attr]
        )

    async def slugs(self) -> set[str]:
        return set(await self.column_values(Program.slug))

    async def has_donations(self, program_id: int) -> bool:
        result = await self.session.execute(select(Donation.id).where(Donation.program_id == program_id).limit(1))
        return result.first() is not None

    async def adjust_collected(self, program_id: Optional[int], delta: Decimal) -> None:
        """Add ``delta`` (possibly negative) to a program's collected amount without committing."""
        if not program_id or not delta:
            return
        program = await self.get_by_id(program_id)
        if program is None:
            return
        program.collected_amount = Decimal(program.collected_amount or 0) + Decimal(delta)
        program.updated_at = utc_now()
        self.session.add(program)

    async def titles_by_id(self, ids: Iterable[Optional[int]]) -> Dict[int, str]:
        wanted = {i for i in ids if i is not None}
        if not wanted:
            return {}
        result = await self.session.execute(
            select(Program.id, Program.title).where(Program.id.in_(wanted))  # type: ignore[union-attr]
        )
        return {pid: title for pid, title in result.all()}

    async def count_by_status(self) -> Dict[str, int]:
        result = await self.session.execute(select(Program.status, func.count()).group_by(Program.status))
        return {status: int(count) for status, count in result.all()}
