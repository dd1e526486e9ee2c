"""
The editor's own task view: tasks that are unassigned or assigned to them.
"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query

from dpf_cms.core.database.entities.users import User
from dpf_cms.core.models.io.common import Page
from dpf_cms.core.models.io.editor_tasks import EditorTaskRead, EditorTaskStatusUpdate
from dpf_cms.server.core.auth import get_current_user
from dpf_cms.server.core.pagination import PageParams, page_params
from dpf_cms.server.services.editor_tasks import EditorTaskService

from .editor_tasks import get_task_service

router = APIRouter()


@router.get(
    "",
    response_model=Page[EditorTaskRead],
    summary="List My Tasks",
    description="Tasks that are unassigned or assigned to the caller, newest first.",
    response_description="A page of tasks.",
)
async def list_my_tasks(
    status_filter: Optional[str] = Query(default=None, alias="status"),
    paging: PageParams = Depends(page_params(10)),
    user: User = Depends(get_current_user),
    service: EditorTaskService = Depends(get_task_service),
) -> Page[EditorTaskRead]:
    stmt = service.tasks.visible_to(user.id, status_filter or None)
    items, total = await service.tasks.paginate(stmt, paging.page, paging.per_page)
    return Page[EditorTaskRead].build(await service.to_read(items), total, paging.page, paging.per_page)


@router.get(
    "/{task_id}",
    response_model=EditorTaskRead,
    summary="Get My Task",
    description="Retrieve a task visible to the caller.",
    response_description="The task.",
    responses={403: {"description": "Task assigned to another user"}, 404: {"description": "Task not found"}},
)
async def get_my_task(
    task_id: int,
    user: User = Depends(get_current_user),
    service: EditorTaskService = Depends(get_task_service),
) -> EditorTaskRead:
    task = await service.get_or_404(task_id)
    service.ensure_visible(task, user)
    return await service.read_one(task)


@router.patch(
    "/{task_id}",
    response_model=EditorTaskRead,
    summary="Update My Task Status",
    description="Move a visible task forward to in_progress or done.",
    response_description="The updated task.",
    responses={
        403: {"description": "Task assigned to another user"},
        404: {"description": "Task not found"},
        422: {"description": "Status not selectable or transition not allowed"},
    },
)
async def update_my_task_status(
    task_id: int,
    payload: EditorTaskStatusUpdate,
    user: User = Depends(get_current_user),
    service: EditorTaskService = Depends(get_task_service),
) -> EditorTaskRead:
    task = await service.editor_set_status(await service.get_or_404(task_id), payload.status, user)
    return await service.read_one(task)
