"""
Donations repository.

Filtering shared by the admin donation list and the donation report, plus the
per-day donation code sequence.
"""

from __future__ import annotations

from datetime import date, datetime, time, timedelta
from decimal import Decimal
from typing import Dict, List, Optional, Tuple

from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.donations import Donation
from .base import BaseRepository, QueryBuilder


def _day_start(value: date) -> datetime:
    return datetime.combine(value, time.min)


class DonationRepository(BaseRepository[Donation]):
    """Repository for donation data access operations using SQLModel."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Donation)

    @staticmethod
    def apply_report_filters(
        stmt,
        status: Optional[str] = None,
        payment_source: Optional[str] = None,
        program_id: Optional[int] = None,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
        q: Optional[str] = None,
        search_email: bool = False,
    ):
        """Apply the donation filters to any statement selecting from ``donations``.

        ``date_from``/``date_to`` are inclusive calendar days on ``created_at``.
        ``q`` matches the donation code and donor name, and also the donor email
        when ``search_email`` is set.
        """
        stmt = QueryBuilder.apply_filters(
            stmt, Donation, {"status": status, "payment_source": payment_source, "program_id": program_id}
        )
        if date_from is not None:
            stmt = stmt.where(Donation.created_at >= _day_start(date_from))
        if date_to is not None:
            stmt = stmt.where(Donation.created_at < _day_start(date_to + timedelta(days=1)))
        columns = [Donation.donation_code, Donation.donor_name]
        if search_email:
            columns.append(Donation.donor_email)
        return QueryBuilder.apply_search(stmt, columns, q)

    def search(self, **filters):
        """Build a filtered donation listing, newest first."""
        stmt = self.apply_report_filters(select(Donation), **filters)
        return stmt.order_by(Donation.created_at.desc(), Donation.id.desc())  # type: ignore[union-attr]

    async def last_code_with_prefix(self, prefix: str) -> Optional[str]:
        result = await self.session.execute(
            select(Donation.donation_code)
            .where(Donation.donation_code.like(f"{prefix}%"))  # type: ignore[attr-defined]
            .order_by(Donation.donation_code.desc())  # type: ignore[attr-defined]
            .limit(1)
        )
        return result.scalars().first()

    async def totals_by_source(self, **filters) -> Dict[str, Tuple[int, Decimal]]:
        """Return ``{payment_source: (count, amount)}`` for donations matching ``filters``."""
        stmt = select(Donation.payment_source, func.count(Donation.id), func.coalesce(func.sum(Donation.amount), 0))
        stmt = self.apply_report_filters(stmt, **filters).group_by(Donation.payment_source)
        result = await self.session.execute(stmt)
        return {source: (int(count), Decimal(str(amount))) for source, count, amount in result.all()}

    async def count_by_status(self) -> Dict[str, int]:
        result = await self.session.execute(select(Donation.status, func.count()).group_by(Donation.status))
        return {status: int(count) for status, count in result.all()}

    async def latest(self, limit: int = 5) -> List[Donation]:
        return await self.all(select(Donation).order_by(Donation.created_at.desc(), Donation.id.desc()).limit(limit))  # type: ignore[union-attr]

    async def recent_paid_for_program(self, program_id: int, limit: int = 20) -> List[Donation]:
        stmt = (
            select(Donation)
            .where(Donation.program_id == program_id, Donation.status == "paid")
            .order_by(Donation.paid_at.desc())  # type: ignore[union-attr]
            .limit(limit)
        )
        return await self.all(stmt)
