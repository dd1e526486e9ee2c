"""
Donation report endpoints.

The listing and the exports share one set of filters: status, payment
source, created date range and a code/donor/email search.
"""

from __future__ import annotations

from datetime import date
from typing import Optional, Union

from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response
from sqlalchemy.ext.asyncio import AsyncSession

from dpf_cms.core.database import get_session
from dpf_cms.core.database.base import utc_now
from dpf_cms.core.logging_config import get_logger
from dpf_cms.core.models.io.common import Page
from dpf_cms.core.models.io.donations import DonationRead, DonationReportAll, DonationReportSummary
from dpf_cms.server.core.pagination import PageParams, page_params
from dpf_cms.server.exception_handlers.errors import BadRequest
from dpf_cms.server.services.donation_report import DonationReportService, ReportFilters
from dpf_cms.server.services.report_export import build_export, resolve_format

logger = get_logger(__name__)

router = APIRouter()


class DonationReportPage(Page[DonationRead]):
    summary: DonationReportSummary


def report_filters(
    status: Optional[str] = None,
    payment_source: Optional[str] = None,
    date_from: Optional[date] = Query(default=None, description="Inclusive first created date"),
    date_to: Optional[date] = Query(default=None, description="Inclusive last created date"),
    q: Optional[str] = Query(default=None, description="Matches donation code, donor name or donor email"),
) -> ReportFilters:
    return ReportFilters.from_query(status, payment_source, date_from, date_to, q)


@router.get(
    "",
    response_model=Union[DonationReportPage, DonationReportAll],
    summary="Donation Report",
    description="Filtered donations with a summary of counts and amounts per payment source. "
    "``all=true`` returns every matching row without pagination.",
    response_description="Report rows and summary.",
)
async def donation_report(
    filters: ReportFilters = Depends(report_filters),
    all_rows: bool = Query(default=False, alias="all", description="Return every row unpaginated"),
    paging: PageParams = Depends(page_params(20)),
    session: AsyncSession = Depends(get_session),
) -> Union[DonationReportPage, DonationReportAll]:
    service = DonationReportService(session)
    summary = await service.summary(filters)
    if all_rows:
        rows = await service.all(filters)
        return DonationReportAll(data=rows, total=len(rows), summary=summary)

    rows, total = await service.page(filters, paging.page, paging.per_page)
    page = Page[DonationRead].build(rows, total, paging.page, paging.per_page)
    return DonationReportPage(**page.model_dump(), summary=summary)


@router.get(
    "/export",
    summary="Export Donation Report",
    description="Download the filtered report as PDF (default) or Excel (``xlsx`` or ``excel``).",
    response_description="The report file.",
    responses={
        200: {
            "content": {
                "application/pdf": {},
                "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet": {},
            }
        },
        400: {"description": "Unsupported export format"},
    },
)
async def export_donation_report(
    filters: ReportFilters = Depends(report_filters),
    fmt: Optional[str] = Query(default="pdf", alias="format", description="pdf, xlsx or excel"),
    session: AsyncSession = Depends(get_session),
) -> Response:
    export_format = resolve_format(fmt)
    if export_format is None:
        raise BadRequest("Unsupported export format.")

    service = DonationReportService(session)
    rows = await service.all(filters)
    summary = await service.summary(filters)
    export = build_export(export_format, rows, summary, filters, utc_now())
    logger.info(f"Exported {len(rows)} donations as {export.filename}")
    return Response(
        content=export.content,
        media_type=export.media_type,
        headers={"Content-Disposition": f'attachment; filename="{export.filename}"'},
    )
