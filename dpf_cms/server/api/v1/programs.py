"""
Program management endpoints.

``router`` is mounted for editors and admins; ``admin_router`` adds the
status and highlight shortcuts for admins only.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from dpf_cms.core.database import get_session
from dpf_cms.core.database.entities.programs import Program
from dpf_cms.core.database.repositories.articles import ArticleRepository
from dpf_cms.core.database.repositories.programs import ProgramRepository
from dpf_cms.core.logging_config import get_logger
from dpf_cms.core.models.io.common import MessageResponse, Page
from dpf_cms.core.models.io.programs import ProgramCreate, ProgramRead, ProgramStatusUpdate, ProgramUpdate
from dpf_cms.server.core.pagination import PageParams, page_params
from dpf_cms.server.core.payloads import changes_from
from dpf_cms.server.exception_handlers.errors import BusinessRuleViolation, NotFound
from dpf_cms.server.services.slugs import resolve_slug

logger = get_logger(__name__)

router = APIRouter()
admin_router = APIRouter()

REQUIRED_FIELDS = (
    "title",
    "category",
    "short_description",
    "description",
    "target_amount",
    "collected_amount",
    "is_highlight",
    "status",
)


async def _get_program(program_id: int, session: AsyncSession) -> Program:
    program = await ProgramRepository(session).get_by_id(program_id)
    if program is None:
        raise NotFound("Program", program_id)
    return program


@router.get(
    "",
    response_model=Page[ProgramRead],
    summary="List Programs",
    description="Paginated program listing with title/category search and status and category filters, newest first.",
    response_description="A page of programs.",
)
async def list_programs(
    q: Optional[str] = Query(default=None, description="Matches title or category"),
    status_filter: Optional[str] = Query(default=None, alias="status"),
    category: Optional[str] = None,
    paging: PageParams = Depends(page_params(15)),
    session: AsyncSession = Depends(get_session),
) -> Page[ProgramRead]:
    repo = ProgramRepository(session)
    items, total = await repo.paginate(repo.search(q, status_filter, category), paging.page, paging.per_page)
    return Page[ProgramRead].build(
        [ProgramRead.model_validate(p) for p in items], total, paging.page, paging.per_page
    )


@router.post(
    "",
    response_model=ProgramRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create Program",
    description="Create a fundraising program. The slug is derived from the title when omitted.",
    response_description="The created program.",
    responses={422: {"description": "Validation failed or slug already taken"}},
)
async def create_program(payload: ProgramCreate, session: AsyncSession = Depends(get_session)) -> ProgramRead:
    """
    Create a program.

    - **title**, **category**, **short_description**, **description**: required.
    - **target_amount**: at least 0.
    - **status**: one of draft, active, completed, archived.
    - **slug**: optional; must be unique when given.
    """
    repo = ProgramRepository(session)
    data = payload.model_dump()
    data["slug"] = resolve_slug(payload.slug, payload.title, await repo.slugs())
    data["status"] = payload.status.value
    data["collected_amount"] = payload.collected_amount if payload.collected_amount is not None else Decimal("0")
    program = await repo.create(Program(**data))
    logger.info(f"Program {program.id} created ({program.slug})")
    return ProgramRead.model_validate(program)


@router.get(
    "/{program_id}",
    response_model=ProgramRead,
    summary="Get Program",
    description="Retrieve a program for editing.",
    response_description="The program.",
    responses={404: {"description": "Program not found"}},
)
async def get_program(program_id: int, session: AsyncSession = Depends(get_session)) -> ProgramRead:
    return ProgramRead.model_validate(await _get_program(program_id, session))


@router.put(
    "/{program_id}",
    response_model=ProgramRead,
    summary="Update Program",
    description="Partially update a program. Only submitted fields change.",
    response_description="The updated program.",
    responses={404: {"description": "Program not found"}, 422: {"description": "Validation failed"}},
)
async def update_program(
    program_id: int, payload: ProgramUpdate, session: AsyncSession = Depends(get_session)
) -> ProgramRead:
    repo = ProgramRepository(session)
    program = await _get_program(program_id, session)
    changes = changes_from(payload, REQUIRED_FIELDS)
    if "slug" in changes:
        changes["slug"] = resolve_slug(
            changes["slug"], changes.get("title") or program.title, await repo.slugs(), current=program.slug
        )
    program = await repo.update(program, changes)
    return ProgramRead.model_validate(program)


@router.delete(
    "/{program_id}",
    response_model=MessageResponse,
    summary="Delete Program",
    description="Delete a program that has no donations.",
    response_description="Confirmation message.",
    responses={404: {"description": "Program not found"}, 422: {"description": "Program has donations"}},
)
async def delete_program(program_id: int, session: AsyncSession = Depends(get_session)) -> MessageResponse:
    repo = ProgramRepository(session)
    program = await _get_program(program_id, session)
    if await repo.has_donations(program.id):
        raise BusinessRuleViolation("The program has donations and cannot be deleted.")
    await ArticleRepository(session).detach_program(program.id)
    await repo.delete(program.id)
    logger.info(f"Program {program_id} deleted")
    return MessageResponse(message="Program deleted.")


@admin_router.patch(
    "/{program_id}/status",
    response_model=ProgramRead,
    summary="Set Program Status",
    description="Set the status of a program to draft, active, completed or archived.",
    response_description="The updated program.",
    responses={404: {"description": "Program not found"}},
)
async def set_program_status(
    program_id: int, payload: ProgramStatusUpdate, session: AsyncSession = Depends(get_session)
) -> ProgramRead:
    program = await _get_program(program_id, session)
    program = await ProgramRepository(session).update(program, {"status": payload.status.value})
    return ProgramRead.model_validate(program)


@admin_router.patch(
    "/{program_id}/highlight",
    response_model=ProgramRead,
    summary="Toggle Program Highlight",
    description="Flip the highlight flag that promotes a program on the public site.",
    response_description="The updated program.",
    responses={404: {"description": "Program not found"}},
)
async def toggle_program_highlight(program_id: int, session: AsyncSession = Depends(get_session)) -> ProgramRead:
    program = await _get_program(program_id, session)
    program = await ProgramRepository(session).update(program, {"is_highlight": not program.is_highlight})
    return ProgramRead.model_validate(program)
