"""
Homepage banner endpoints.

Banners are listed unpaginated in ``display_order``; each order value may
be used by one banner only.
"""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from dpf_cms.core.database import get_session
from dpf_cms.core.database.entities.banners import Banner
from dpf_cms.core.database.repositories.ordered import BannerRepository
from dpf_cms.core.models.io.common import MessageResponse, NextOrder
from dpf_cms.core.models.io.display import BannerCreate, BannerRead, BannerUpdate
from dpf_cms.server.core.payloads import changes_from
from dpf_cms.server.exception_handlers.errors import NotFound
from dpf_cms.server.services.display_order import resolve_order, suggest_order

router = APIRouter()


async def _get_banner(banner_id: int, session: AsyncSession) -> Banner:
    banner = await BannerRepository(session).get_by_id(banner_id)
    if banner is None:
        raise NotFound("Banner", banner_id)
    return banner


@router.get(
    "",
    response_model=List[BannerRead],
    summary="List Banners",
    description="All banners in display order.",
    response_description="Banners sorted by display_order.",
)
async def list_banners(session: AsyncSession = Depends(get_session)) -> List[BannerRead]:
    return [BannerRead.model_validate(b) for b in await BannerRepository(session).list_ordered()]


@router.get(
    "/next-order",
    response_model=NextOrder,
    summary="Suggest Banner Order",
    description="Return the lowest display order not used by any banner.",
    response_description="The suggested display order.",
)
async def next_banner_order(session: AsyncSession = Depends(get_session)) -> NextOrder:
    return NextOrder(next_order=await suggest_order(BannerRepository(session)))


@router.post(
    "",
    response_model=BannerRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create Banner",
    description="Add a banner. A missing display_order takes the lowest free slot.",
    response_description="The created banner.",
    responses={422: {"description": "display_order already taken"}},
)
async def create_banner(payload: BannerCreate, session: AsyncSession = Depends(get_session)) -> BannerRead:
    repo = BannerRepository(session)
    order = await resolve_order(repo, payload.display_order)
    banner = await repo.create(Banner(image_path=payload.image_path, display_order=order))
    return BannerRead.model_validate(banner)


@router.put(
    "/{banner_id}",
    response_model=BannerRead,
    summary="Update Banner",
    description="Replace the image or move the banner to a free display order.",
    response_description="The updated banner.",
    responses={404: {"description": "Banner not found"}, 422: {"description": "display_order already taken"}},
)
async def update_banner(
    banner_id: int, payload: BannerUpdate, session: AsyncSession = Depends(get_session)
) -> BannerRead:
    repo = BannerRepository(session)
    banner = await _get_banner(banner_id, session)
    changes = changes_from(payload, ("image_path", "display_order"))
    if "display_order" in changes:
        changes["display_order"] = await resolve_order(repo, changes["display_order"], exclude_id=banner.id)
    return BannerRead.model_validate(await repo.update(banner, changes))


@router.delete(
    "/{banner_id}",
    response_model=MessageResponse,
    summary="Delete Banner",
    description="Remove a banner.",
    response_description="Confirmation message.",
    responses={404: {"description": "Banner not found"}},
)
async def delete_banner(banner_id: int, session: AsyncSession = Depends(get_session)) -> MessageResponse:
    await _get_banner(banner_id, session)
    await BannerRepository(session).delete(banner_id)
    return MessageResponse(message="Banner deleted.")
