"""
Donation administration endpoints.

Manual donations are recorded as paid immediately; status changes and
deletions keep the program's collected amount consistent.
"""

from __future__ import annotations

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from dpf_cms.core.database import get_session
from dpf_cms.core.database.entities.donations import Donation
from dpf_cms.core.database.repositories.donations import DonationRepository
from dpf_cms.core.models.io.common import MessageResponse, Page
from dpf_cms.core.models.io.donations import DonationRead, DonationStatusUpdate, ManualDonationCreate
from dpf_cms.server.core.pagination import PageParams, page_params
from dpf_cms.server.exception_handlers.errors import NotFound
from dpf_cms.server.services.donation_report import DonationReportService
from dpf_cms.server.services.donations import DonationService

router = APIRouter()


async def _get_donation(donation_id: int, session: AsyncSession) -> Donation:
    donation = await DonationRepository(session).get_by_id(donation_id)
    if donation is None:
        raise NotFound("Donation", donation_id)
    return donation


@router.get(
    "",
    response_model=Page[DonationRead],
    summary="List Donations",
    description="Paginated donation listing, newest first, filterable by status, program, payment source, created date range and code/donor search.",
    response_description="A page of donations.",
)
async def list_donations(
    status_filter: Optional[str] = Query(default=None, alias="status"),
    program_id: Optional[int] = None,
    payment_source: Optional[str] = None,
    date_from: Optional[date] = Query(default=None, description="Inclusive first created date"),
    date_to: Optional[date] = Query(default=None, description="Inclusive last created date"),
    q: Optional[str] = Query(default=None, description="Matches donation code or donor name"),
    paging: PageParams = Depends(page_params(20)),
    session: AsyncSession = Depends(get_session),
) -> Page[DonationRead]:
    repo = DonationRepository(session)
    stmt = repo.search(
        status=status_filter or None,
        program_id=program_id,
        payment_source=payment_source or None,
        date_from=date_from,
        date_to=date_to,
        q=q,
    )
    items, total = await repo.paginate(stmt, paging.page, paging.per_page)
    rows = await DonationReportService(session).to_read(items)
    return Page[DonationRead].build(rows, total, paging.page, paging.per_page)


@router.post(
    "/manual",
    response_model=DonationRead,
    status_code=status.HTTP_201_CREATED,
    summary="Record Manual Donation",
    description="Record an offline donation. It is stored as paid now and credited to its program.",
    response_description="The recorded donation with its generated code.",
    responses={422: {"description": "Validation failed or unknown program"}},
)
async def create_manual_donation(
    payload: ManualDonationCreate, session: AsyncSession = Depends(get_session)
) -> DonationRead:
    """
    Record a manual donation.

    - **donor_name**, **amount** (at least 1), **is_anonymous**, **payment_method**: required.
    - **program_id**: optional, must reference an existing program.

    The donation code has the form ``DPF-YYYYMMDD-NNNN`` with a per-day sequence.
    """
    donation = await DonationService(session).create_manual(payload)
    return (await DonationReportService(session).to_read([donation]))[0]


@router.get(
    "/{donation_id}",
    response_model=DonationRead,
    summary="Get Donation",
    description="Retrieve one donation.",
    response_description="The donation.",
    responses={404: {"description": "Donation not found"}},
)
async def get_donation(donation_id: int, session: AsyncSession = Depends(get_session)) -> DonationRead:
    donation = await _get_donation(donation_id, session)
    return (await DonationReportService(session).to_read([donation]))[0]


@router.patch(
    "/{donation_id}/status",
    response_model=DonationRead,
    summary="Change Donation Status",
    description="Set the donation status. Entering or leaving paid adjusts the program's collected amount.",
    response_description="The updated donation.",
    responses={404: {"description": "Donation not found"}},
)
async def change_donation_status(
    donation_id: int, payload: DonationStatusUpdate, session: AsyncSession = Depends(get_session)
) -> DonationRead:
    donation = await _get_donation(donation_id, session)
    donation = await DonationService(session).change_status(donation, payload)
    return (await DonationReportService(session).to_read([donation]))[0]


@router.delete(
    "/{donation_id}",
    response_model=MessageResponse,
    summary="Delete Donation",
    description="Delete a donation. A paid donation's amount is removed from its program.",
    response_description="Confirmation message.",
    responses={404: {"description": "Donation not found"}},
)
async def delete_donation(donation_id: int, session: AsyncSession = Depends(get_session)) -> MessageResponse:
    donation = await _get_donation(donation_id, session)
    await DonationService(session).delete(donation)
    return MessageResponse(message="Donation deleted.")
