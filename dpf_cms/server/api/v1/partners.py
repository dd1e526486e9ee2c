"""
Partner logo endpoints.

Partners are listed unpaginated in ``order``, which is unique across partners.
"""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from dpf_cms.core.database import get_session
from dpf_cms.core.database.entities.partners import Partner
from dpf_cms.core.database.repositories.ordered import PartnerRepository
from dpf_cms.core.models.io.common import MessageResponse, NextOrder
from dpf_cms.core.models.io.display import PartnerCreate, PartnerRead, PartnerUpdate
from dpf_cms.server.core.payloads import changes_from
from dpf_cms.server.exception_handlers.errors import NotFound
from dpf_cms.server.services.display_order import resolve_order, suggest_order

router = APIRouter()


async def _get_partner(partner_id: int, session: AsyncSession) -> Partner:
    partner = await PartnerRepository(session).get_by_id(partner_id)
    if partner is None:
        raise NotFound("Partner", partner_id)
    return partner


@router.get(
    "",
    response_model=List[PartnerRead],
    summary="List Partners",
    description="All partners in display order.",
    response_description="Partners sorted by order.",
)
async def list_partners(session: AsyncSession = Depends(get_session)) -> List[PartnerRead]:
    return [PartnerRead.model_validate(p) for p in await PartnerRepository(session).list_ordered()]


@router.get(
    "/next-order",
    response_model=NextOrder,
    summary="Suggest Partner Order",
    description="Return the lowest order not used by any partner.",
    response_description="The suggested order.",
)
async def next_partner_order(session: AsyncSession = Depends(get_session)) -> NextOrder:
    return NextOrder(next_order=await suggest_order(PartnerRepository(session)))


@router.post(
    "",
    response_model=PartnerRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create Partner",
    description="Add a partner. A missing order takes the lowest free slot.",
    response_description="The created partner.",
    responses={422: {"description": "order already taken"}},
)
async def create_partner(payload: PartnerCreate, session: AsyncSession = Depends(get_session)) -> PartnerRead:
    repo = PartnerRepository(session)
    data = payload.model_dump()
    data["order"] = await resolve_order(repo, payload.order)
    return PartnerRead.model_validate(await repo.create(Partner(**data)))


@router.put(
    "/{partner_id}",
    response_model=PartnerRead,
    summary="Update Partner",
    description="Partially update a partner.",
    response_description="The updated partner.",
    responses={404: {"description": "Partner not found"}, 422: {"description": "order already taken"}},
)
async def update_partner(
    partner_id: int, payload: PartnerUpdate, session: AsyncSession = Depends(get_session)
) -> PartnerRead:
    repo = PartnerRepository(session)
    partner = await _get_partner(partner_id, session)
    changes = changes_from(payload, ("name", "order", "is_active"))
    if "order" in changes:
        changes["order"] = await resolve_order(repo, changes["order"], exclude_id=partner.id)
    return PartnerRead.model_validate(await repo.update(partner, changes))


@router.delete(
    "/{partner_id}",
    response_model=MessageResponse,
    summary="Delete Partner",
    description="Remove a partner.",
    response_description="Confirmation message.",
    responses={404: {"description": "Partner not found"}},
)
async def delete_partner(partner_id: int, session: AsyncSession = Depends(get_session)) -> MessageResponse:
    await _get_partner(partner_id, session)
    await PartnerRepository(session).delete(partner_id)
    return MessageResponse(message="Partner deleted.")
