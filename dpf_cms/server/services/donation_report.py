"""
Donation report aggregation.

One filtered view over ``donations`` feeds the paginated report, the
unpaginated ``all=true`` variant, the summary block and both exports.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import date
from decimal import Decimal
from typing import Dict, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from dpf_cms.core.database.entities.donations import Donation
from dpf_cms.core.database.repositories.donations import DonationRepository
from dpf_cms.core.database.repositories.programs import ProgramRepository
from dpf_cms.core.models.domain.enums import DonationStatus, PaymentSource
from dpf_cms.core.models.io.donations import DonationRead, DonationReportSummary

ALL_LABEL = "All"


def _clean(value: Optional[str], lower: bool = False) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    if lower:
        value = value.lower()
    return value or None


@dataclass(frozen=True)
class ReportFilters:
    """Normalized report filters; blank strings are treated as absent."""

    status: Optional[str] = None
    payment_source: Optional[str] = None
    date_from: Optional[date] = None
    date_to: Optional[date] = None
    q: Optional[str] = None

    @classmethod
    def from_query(
        cls,
        status: Optional[str] = None,
        payment_source: Optional[str] = None,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
        q: Optional[str] = None,
    ) -> "ReportFilters":
        return cls(
            status=_clean(status, lower=True),
            payment_source=_clean(payment_source, lower=True),
            date_from=date_from,
            date_to=date_to,
            q=_clean(q),
        )

    def as_repository_filters(self) -> Dict[str, object]:
        return {**asdict(self), "search_email": True}

    @property
    def source_label(self) -> str:
        try:
            return PaymentSource(self.payment_source).label
        except ValueError:
            return ALL_LABEL

    @property
    def status_label(self) -> str:
        try:
            return DonationStatus(self.status).label
        except ValueError:
            return ALL_LABEL

    @property
    def period_label(self) -> str:
        start = self.date_from.isoformat() if self.date_from else "-"
        end = self.date_to.isoformat() if self.date_to else "-"
        return f"{start} to {end}"


class DonationReportService:
    """Builds report pages, summaries and export rows for a set of filters."""

    def __init__(self, session: AsyncSession) -> None:
        self.donations = DonationRepository(session)
        self.programs = ProgramRepository(session)

    def query(self, filters: ReportFilters):
        return self.donations.search(**filters.as_repository_filters())

    async def summary(self, filters: ReportFilters) -> DonationReportSummary:
        """Count and sum the filtered donations, overall and per payment source."""
        totals = await self.donations.totals_by_source(**filters.as_repository_filters())
        manual_count, manual_amount = totals.get(PaymentSource.MANUAL.value, (0, Decimal("0")))
        midtrans_count, midtrans_amount = totals.get(PaymentSource.MIDTRANS.value, (0, Decimal("0")))
        total_count = sum(count for count, _ in totals.values())
        total_amount = sum((amount for _, amount in totals.values()), Decimal("0"))
        return DonationReportSummary(
            total_count=total_count,
            total_amount=float(total_amount),
            manual_count=manual_count,
            manual_amount=float(manual_amount),
            midtrans_count=midtrans_count,
            midtrans_amount=float(midtrans_amount),
        )

    async def page(self, filters: ReportFilters, page: int, per_page: int):
        items, total = await self.donations.paginate(self.query(filters), page, per_page)
        return await self.to_read(items), total

    async def all(self, filters: ReportFilters) -> List[DonationRead]:
        return await self.to_read(await self.donations.all(self.query(filters)))

    async def to_read(self, donations: List[Donation]) -> List[DonationRead]:
        """Convert entities to read models with the program title filled in."""
        titles = await self.programs.titles_by_id(d.program_id for d in donations)
        rows = []
        for donation in donations:
            row = DonationRead.model_validate(donation)
            row.program_title = titles.get(donation.program_id) if donation.program_id else None
            rows.append(row)
        return rows
