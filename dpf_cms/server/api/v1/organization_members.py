"""
Organization member management endpoints.

Members are ordered within their group; a missing order appends the member
at the end of the group.
"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from dpf_cms.core.database import get_session
from dpf_cms.core.database.entities.organization_members import OrganizationMember
from dpf_cms.core.database.repositories.organization_members import OrganizationMemberRepository
from dpf_cms.core.logging_config import get_logger
from dpf_cms.core.models.io.common import MessageResponse, NextOrder, Page
from dpf_cms.core.models.io.organization import (
    OrganizationMemberCreate,
    OrganizationMemberRead,
    OrganizationMemberUpdate,
)
from dpf_cms.server.core.pagination import PageParams, page_params
from dpf_cms.server.core.payloads import changes_from
from dpf_cms.server.exception_handlers.errors import NotFound
from dpf_cms.server.services.display_order import resolve_member_order, suggest_member_order
from dpf_cms.server.services.slugs import resolve_slug

logger = get_logger(__name__)

router = APIRouter()

REQUIRED_FIELDS = ("name", "position_title", "group", "show_contact", "order", "is_active")


async def _get_member(member_id: int, session: AsyncSession) -> OrganizationMember:
    member = await OrganizationMemberRepository(session).get_by_id(member_id)
    if member is None:
        raise NotFound("Organization member", member_id)
    return member


@router.get(
    "",
    response_model=Page[OrganizationMemberRead],
    summary="List Organization Members",
    description="Paginated member listing sorted by group then order, with group filter and name/position search.",
    response_description="A page of organization members.",
)
async def list_members(
    group: Optional[str] = None,
    q: Optional[str] = None,
    paging: PageParams = Depends(page_params(20)),
    session: AsyncSession = Depends(get_session),
) -> Page[OrganizationMemberRead]:
    repo = OrganizationMemberRepository(session)
    items, total = await repo.paginate(repo.search(group, q), paging.page, paging.per_page)
    return Page[OrganizationMemberRead].build(
        [OrganizationMemberRead.model_validate(m) for m in items], total, paging.page, paging.per_page
    )


@router.get(
    "/next-order",
    response_model=NextOrder,
    summary="Suggest Member Order",
    description="Return the order a new member of ``group`` would receive.",
    response_description="The suggested order.",
)
async def next_member_order(
    group: str = Query(min_length=1, description="Member group"),
    session: AsyncSession = Depends(get_session),
) -> NextOrder:
    return NextOrder(next_order=await suggest_member_order(OrganizationMemberRepository(session), group))


@router.post(
    "",
    response_model=OrganizationMemberRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create Organization Member",
    description="Add a member. A missing order places the member at the end of its group.",
    response_description="The created member.",
    responses={422: {"description": "Validation failed or order already taken in the group"}},
)
async def create_member(
    payload: OrganizationMemberCreate, session: AsyncSession = Depends(get_session)
) -> OrganizationMemberRead:
    repo = OrganizationMemberRepository(session)
    data = payload.model_dump()
    data["slug"] = resolve_slug(payload.slug, payload.name, await repo.slugs())
    data["order"] = await resolve_member_order(repo, payload.group, payload.order)
    member = await repo.create(OrganizationMember(**data))
    logger.info(f"Organization member {member.id} created in group {member.group!r} at {member.order}")
    return OrganizationMemberRead.model_validate(member)


@router.get(
    "/{member_id}",
    response_model=OrganizationMemberRead,
    summary="Get Organization Member",
    description="Retrieve a member for editing.",
    response_description="The member.",
    responses={404: {"description": "Member not found"}},
)
async def get_member(member_id: int, session: AsyncSession = Depends(get_session)) -> OrganizationMemberRead:
    return OrganizationMemberRead.model_validate(await _get_member(member_id, session))


@router.put(
    "/{member_id}",
    response_model=OrganizationMemberRead,
    summary="Update Organization Member",
    description="Partially update a member. Moving to another group re-checks the order there.",
    response_description="The updated member.",
    responses={404: {"description": "Member not found"}, 422: {"description": "Validation failed"}},
)
async def update_member(
    member_id: int, payload: OrganizationMemberUpdate, session: AsyncSession = Depends(get_session)
) -> OrganizationMemberRead:
    repo = OrganizationMemberRepository(session)
    member = await _get_member(member_id, session)
    changes = changes_from(payload, REQUIRED_FIELDS)
    if "slug" in changes:
        changes["slug"] = resolve_slug(
            changes["slug"], changes.get("name") or member.name, await repo.slugs(), current=member.slug
        )
    if "order" in changes or "group" in changes:
        group = changes.get("group", member.group)
        order = changes.get("order")
        if order is None and group == member.group:
            order = member.order
        changes["order"] = await resolve_member_order(repo, group, order, exclude_id=member.id)
    member = await repo.update(member, changes)
    return OrganizationMemberRead.model_validate(member)


@router.delete(
    "/{member_id}",
    response_model=MessageResponse,
    summary="Delete Organization Member",
    description="Remove a member.",
    response_description="Confirmation message.",
    responses={404: {"description": "Member not found"}},
)
async def delete_member(member_id: int, session: AsyncSession = Depends(get_session)) -> MessageResponse:
    await _get_member(member_id, session)
    await OrganizationMemberRepository(session).delete(member_id)
    return MessageResponse(message="Organization member deleted.")
