"""
Quick-link tag endpoints.

Tags are listed unpaginated in ``sort_order``, which is unique across tags.
"""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from dpf_cms.core.database import get_session
from dpf_cms.core.database.entities.tags import Tag
from dpf_cms.core.database.repositories.ordered import TagRepository
from dpf_cms.core.models.io.common import MessageResponse, NextOrder
from dpf_cms.core.models.io.display import TagCreate, TagRead, TagUpdate
from dpf_cms.server.core.payloads import changes_from
from dpf_cms.server.exception_handlers.errors import NotFound
from dpf_cms.server.services.display_order import resolve_order, suggest_order

router = APIRouter()


async def _get_tag(tag_id: int, session: AsyncSession) -> Tag:
    tag = await TagRepository(session).get_by_id(tag_id)
    if tag is None:
        raise NotFound("Tag", tag_id)
    return tag


@router.get(
    "",
    response_model=List[TagRead],
    summary="List Tags",
    description="All tags in sort order.",
    response_description="Tags sorted by sort_order.",
)
async def list_tags(session: AsyncSession = Depends(get_session)) -> List[TagRead]:
    return [TagRead.model_validate(t) for t in await TagRepository(session).list_ordered()]


@router.get(
    "/next-order",
    response_model=NextOrder,
    summary="Suggest Tag Order",
    description="Return the lowest sort order not used by any tag.",
    response_description="The suggested sort order.",
)
async def next_tag_order(session: AsyncSession = Depends(get_session)) -> NextOrder:
    return NextOrder(next_order=await suggest_order(TagRepository(session)))


@router.post(
    "",
    response_model=TagRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create Tag",
    description="Add a tag. A missing sort_order takes the lowest free slot.",
    response_description="The created tag.",
    responses={422: {"description": "sort_order already taken"}},
)
async def create_tag(payload: TagCreate, session: AsyncSession = Depends(get_session)) -> TagRead:
    repo = TagRepository(session)
    data = payload.model_dump()
    data["sort_order"] = await resolve_order(repo, payload.sort_order)
    return TagRead.model_validate(await repo.create(Tag(**data)))


@router.get(
    "/{tag_id}",
    response_model=TagRead,
    summary="Get Tag",
    description="Retrieve a tag for editing.",
    response_description="The tag.",
    responses={404: {"description": "Tag not found"}},
)
async def get_tag(tag_id: int, session: AsyncSession = Depends(get_session)) -> TagRead:
    return TagRead.model_validate(await _get_tag(tag_id, session))


@router.put(
    "/{tag_id}",
    response_model=TagRead,
    summary="Update Tag",
    description="Partially update a tag.",
    response_description="The updated tag.",
    responses={404: {"description": "Tag not found"}, 422: {"description": "sort_order already taken"}},
)
async def update_tag(tag_id: int, payload: TagUpdate, session: AsyncSession = Depends(get_session)) -> TagRead:
    repo = TagRepository(session)
    tag = await _get_tag(tag_id, session)
    changes = changes_from(payload, ("name", "is_active", "sort_order", "open_in_new_tab"))
    if "sort_order" in changes:
        changes["sort_order"] = await resolve_order(repo, changes["sort_order"], exclude_id=tag.id)
    return TagRead.model_validate(await repo.update(tag, changes))


@router.delete(
    "/{tag_id}",
    response_model=MessageResponse,
    summary="Delete Tag",
    description="Remove a tag.",
    response_description="Confirmation message.",
    responses={404: {"description": "Tag not found"}},
)
async def delete_tag(tag_id: int, session: AsyncSession = Depends(get_session)) -> MessageResponse:
    await _get_tag(tag_id, session)
    await TagRepository(session).delete(tag_id)
    return MessageResponse(message="Tag deleted.")
