"""
Editor task management endpoints for admins and superadmins.
"""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, File, Query, UploadFile, status
from sqlalchemy.ext.asyncio import AsyncSession

from dpf_cms.core.database import get_session
from dpf_cms.core.database.entities.users import User
from dpf_cms.core.logging_config import get_logger
from dpf_cms.core.models.io.common import MessageResponse, Page
from dpf_cms.core.models.io.editor_tasks import (
    AttachmentRead,
    EditorTaskCancel,
    EditorTaskCreate,
    EditorTaskRead,
    EditorTaskUpdate,
    UserBrief,
)
from dpf_cms.server.core.auth import get_current_user
from dpf_cms.server.core.pagination import PageParams, page_params
from dpf_cms.server.services.editor_tasks import EditorTaskService
from dpf_cms.server.services.storage import LocalStorage, get_storage

logger = get_logger(__name__)

router = APIRouter()


def get_task_service(
    session: AsyncSession = Depends(get_session), storage: LocalStorage = Depends(get_storage)
) -> EditorTaskService:
    return EditorTaskService(session, storage)


@router.get(
    "",
    response_model=Page[EditorTaskRead],
    summary="List Editor Tasks",
    description="Paginated task listing, newest first, with title/description search and status, priority and assignee filters.",
    response_description="A page of tasks with assignee, creator and attachments.",
)
async def list_tasks(
    q: Optional[str] = None,
    status_filter: Optional[str] = Query(default=None, alias="status"),
    priority: Optional[str] = None,
    assigned_to: Optional[int] = None,
    paging: PageParams = Depends(page_params(15)),
    service: EditorTaskService = Depends(get_task_service),
) -> Page[EditorTaskRead]:
    stmt = service.tasks.search(q, status_filter or None, priority or None, assigned_to)
    items, total = await service.tasks.paginate(stmt, paging.page, paging.per_page)
    return Page[EditorTaskRead].build(await service.to_read(items), total, paging.page, paging.per_page)


@router.get(
    "/editors",
    response_model=List[UserBrief],
    summary="List Assignable Editors",
    description="Active users with the editor role, sorted by name.",
    response_description="Editors that tasks can be assigned to.",
)
async def list_editors(service: EditorTaskService = Depends(get_task_service)) -> List[UserBrief]:
    return [UserBrief.model_validate(user) for user in await service.editors()]


@router.post(
    "",
    response_model=EditorTaskRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create Editor Task",
    description="Create a task and publish fresh open-task counts.",
    response_description="The created task.",
    responses={422: {"description": "Validation failed or unknown assignee"}},
)
async def create_task(
    payload: EditorTaskCreate,
    user: User = Depends(get_current_user),
    service: EditorTaskService = Depends(get_task_service),
) -> EditorTaskRead:
    """
    Create an editor task.

    - **title**: required, at most 180 characters.
    - **priority**: low, normal (default) or high.
    - **status**: open by default; ``cancel_reason`` is required when it is cancelled.
    - **assigned_to**: optional user id; unassigned tasks are visible to every editor.
    """
    task = await service.create(payload, user)
    return await service.read_one(task)


@router.get(
    "/{task_id}",
    response_model=EditorTaskRead,
    summary="Get Editor Task",
    description="Retrieve a task with its assignee, creator and attachments.",
    response_description="The task.",
    responses={404: {"description": "Task not found"}},
)
async def get_task(task_id: int, service: EditorTaskService = Depends(get_task_service)) -> EditorTaskRead:
    return await service.read_one(await service.get_or_404(task_id))


@router.put(
    "/{task_id}",
    response_model=EditorTaskRead,
    summary="Update Editor Task",
    description="Partially update a task. Status changes must follow open, in_progress, done; cancelled is final.",
    response_description="The updated task.",
    responses={404: {"description": "Task not found"}, 422: {"description": "Invalid status transition"}},
)
async def update_task(
    task_id: int, payload: EditorTaskUpdate, service: EditorTaskService = Depends(get_task_service)
) -> EditorTaskRead:
    task = await service.update(await service.get_or_404(task_id), payload)
    return await service.read_one(task)


@router.post(
    "/{task_id}/cancel",
    response_model=EditorTaskRead,
    summary="Cancel Editor Task",
    description="Cancel an open or in-progress task with a reason.",
    response_description="The cancelled task.",
    responses={404: {"description": "Task not found"}, 422: {"description": "Task cannot be cancelled"}},
)
async def cancel_task(
    task_id: int, payload: EditorTaskCancel, service: EditorTaskService = Depends(get_task_service)
) -> EditorTaskRead:
    task = await service.cancel(await service.get_or_404(task_id), payload.cancel_reason)
    return await service.read_one(task)


@router.delete(
    "/{task_id}",
    response_model=MessageResponse,
    summary="Delete Editor Task",
    description="Delete a task that is not in progress or done, together with its attachment files.",
    response_description="Confirmation message.",
    responses={404: {"description": "Task not found"}, 422: {"description": "Task is in progress or done"}},
)
async def delete_task(task_id: int, service: EditorTaskService = Depends(get_task_service)) -> MessageResponse:
    await service.delete(await service.get_or_404(task_id))
    logger.info(f"Editor task {task_id} deleted")
    return MessageResponse(message="Task deleted.")


@router.post(
    "/{task_id}/attachments",
    response_model=List[AttachmentRead],
    status_code=status.HTTP_201_CREATED,
    summary="Upload Task Attachments",
    description="Attach up to 5 files (pdf, doc, docx, xls, xlsx, png, jpg, jpeg, zip; 10 MB each) to a task.",
    response_description="The stored attachments.",
    responses={404: {"description": "Task not found"}, 422: {"description": "Invalid files"}},
)
async def upload_attachments(
    task_id: int,
    files: List[UploadFile] = File(..., description="Files to attach"),
    user: User = Depends(get_current_user),
    service: EditorTaskService = Depends(get_task_service),
) -> List[AttachmentRead]:
    task = await service.get_or_404(task_id)
    attachments = await service.add_attachments(task, files, user)
    return [service.attachment_read(a) for a in attachments]


@router.delete(
    "/{task_id}/attachments/{attachment_id}",
    response_model=MessageResponse,
    summary="Delete Task Attachment",
    description="Remove one attachment and its file.",
    response_description="Confirmation message.",
    responses={404: {"description": "Task or attachment not found"}},
)
async def delete_attachment(
    task_id: int, attachment_id: int, service: EditorTaskService = Depends(get_task_service)
) -> MessageResponse:
    await service.delete_attachment(await service.get_or_404(task_id), attachment_id)
    return MessageResponse(message="Attachment deleted.")
