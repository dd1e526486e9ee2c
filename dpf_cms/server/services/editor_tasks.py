"""
Editor task management.

Admins create, edit, cancel and delete tasks and manage their attachments;
editors move the tasks visible to them through the forward status order.
Every mutation republishes the open-task counts.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Sequence

from fastapi import UploadFile
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from dpf_cms.core.database.entities.editor_tasks import EditorTask, EditorTaskAttachment
from dpf_cms.core.database.entities.users import User
from dpf_cms.core.database.repositories.editor_tasks import EditorTaskRepository
from dpf_cms.core.database.repositories.users import UserRepository
from dpf_cms.core.logging_config import get_logger
from dpf_cms.core.models.domain.enums import EDITOR_SELECTABLE_STATUSES, TaskStatus
from dpf_cms.core.models.io.editor_tasks import (
    AttachmentRead,
    EditorTaskCreate,
    EditorTaskRead,
    EditorTaskUpdate,
    UserBrief,
)
from dpf_cms.server.core.config import settings
from dpf_cms.server.exception_handlers.errors import BusinessRuleViolation, Forbidden, NotFound, ValidationFailed

from .storage import ATTACHMENT_EXTENSIONS, LocalStorage
from .task_notifier import TaskCountBroker, dispatch_count_for_all, task_count_broker
from .task_status import ensure_transition

logger = get_logger(__name__)

MAX_ATTACHMENTS_PER_REQUEST = 5
UNDELETABLE_STATUSES = (TaskStatus.IN_PROGRESS.value, TaskStatus.DONE.value)


def _attachment_folder(task_id: int) -> str:
    return f"editor-tasks/{task_id}"


class EditorTaskService:
    def __init__(
        self, session: AsyncSession, storage: LocalStorage, broker: TaskCountBroker = task_count_broker
    ) -> None:
        self.session = session
        self.storage = storage
        self.broker = broker
        self.tasks = EditorTaskRepository(session)
        self.users = UserRepository(session)

    # ------------------------------------------------------------------
    # Read models
    # ------------------------------------------------------------------

    async def _users_by_id(self, ids: Iterable[Optional[int]]) -> Dict[int, User]:
        wanted = {i for i in ids if i is not None}
        if not wanted:
            return {}
        users = await self.users.all(select(User).where(User.id.in_(wanted)))  # type: ignore[union-attr]
        return {user.id: user for user in users}

    def attachment_read(self, attachment: EditorTaskAttachment) -> AttachmentRead:
        read = AttachmentRead.model_validate(attachment)
        read.url = self.storage.url(attachment.file_path)
        return read

    async def to_read(self, tasks: Sequence[EditorTask]) -> List[EditorTaskRead]:
        """Convert tasks to read models with assignee, creator and attachments loaded in bulk."""
        users = await self._users_by_id([t.assigned_to for t in tasks] + [t.created_by for t in tasks])
        attachments = await self.tasks.attachments_for(t.id for t in tasks)
        rows = []
        for task in tasks:
            row = EditorTaskRead.model_validate(task)
            if task.assigned_to in users:
                row.assignee = UserBrief.model_validate(users[task.assigned_to])
            if task.created_by in users:
                row.creator = UserBrief.model_validate(users[task.created_by])
            row.attachments = [self.attachment_read(a) for a in attachments.get(task.id, [])]
            rows.append(row)
        return rows

    async def read_one(self, task: EditorTask) -> EditorTaskRead:
        return (await self.to_read([task]))[0]

    async def get_or_404(self, task_id: int) -> EditorTask:
        task = await self.tasks.get_by_id(task_id)
        if task is None:
            raise NotFound("Editor task", task_id)
        return task

    async def editors(self) -> List[User]:
        return await self.users.list_active_with_roles(["editor"])

    # ------------------------------------------------------------------
    # Admin mutations
    # ------------------------------------------------------------------

    async def _ensure_assignee(self, user_id: Optional[int]) -> None:
        if user_id is not None and await self.users.get_by_id(user_id) is None:
            raise ValidationFailed.single("assigned_to", "The selected assigned to is invalid.")

    @staticmethod
    def _resolve_cancel_reason(status: str, reason: Optional[str]) -> Optional[str]:
        if status != TaskStatus.CANCELLED.value:
            return None
        if not reason or not reason.strip():
            raise ValidationFailed.single("cancel_reason", "The cancel reason field is required when cancelling.")
        return reason.strip()

    async def publish_counts(self) -> None:
        await dispatch_count_for_all(self.session, self.broker)

    async def create(self, payload: EditorTaskCreate, creator: User) -> EditorTask:
        await self._ensure_assignee(payload.assigned_to)
        data = payload.model_dump()
        data["priority"] = payload.priority.value
        data["status"] = payload.status.value
        data["cancel_reason"] = self._resolve_cancel_reason(data["status"], payload.cancel_reason)
        task = await self.tasks.create(EditorTask(**data, created_by=creator.id))
        logger.info(f"Editor task {task.id} created by user {creator.id}")
        await self.publish_counts()
        return task

    async def update(self, task: EditorTask, payload: EditorTaskUpdate) -> EditorTask:
        changes = payload.model_dump(exclude_unset=True)
        if "assigned_to" in changes:
            await self._ensure_assignee(changes["assigned_to"])
        for key in ("priority", "status"):
            if changes.get(key) is not None:
                changes[key] = changes[key].value
            elif key in changes:
                del changes[key]

        target = changes.get("status", task.status)
        ensure_transition(task.status, target)
        if "status" in changes or "cancel_reason" in changes:
            changes["cancel_reason"] = self._resolve_cancel_reason(
                target, changes.get("cancel_reason", task.cancel_reason)
            )

        task = await self.tasks.update(task, changes)
        await self.publish_counts()
        return task

    async def cancel(self, task: EditorTask, reason: str) -> EditorTask:
        ensure_transition(task.status, TaskStatus.CANCELLED)
        task = await self.tasks.update(
            task, {"status": TaskStatus.CANCELLED.value, "cancel_reason": self._resolve_cancel_reason("cancelled", reason)}
        )
        logger.info(f"Editor task {task.id} cancelled")
        await self.publish_counts()
        return task

    async def delete(self, task: EditorTask) -> None:
        if task.status in UNDELETABLE_STATUSES:
            raise BusinessRuleViolation("Tasks in progress or done cannot be deleted.")
        attachments = (await self.tasks.attachments_for([task.id])).get(task.id, [])
        for attachment in attachments:
            self.storage.delete(attachment.file_path)
            await self.session.delete(attachment)
        await self.session.delete(task)
        await self.session.commit()
        await self.publish_counts()

    async def add_attachments(
        self, task: EditorTask, files: Sequence[UploadFile], uploader: User
    ) -> List[EditorTaskAttachment]:
        """Validate and store up to five files for ``task``."""
        files = [f for f in files if f is not None and f.filename]
        if not files:
            raise ValidationFailed.single("files", "At least one file is required.")
        if len(files) > MAX_ATTACHMENTS_PER_REQUEST:
            raise ValidationFailed.single(
                "files", f"The files may not have more than {MAX_ATTACHMENTS_PER_REQUEST} items."
            )

        stored = []
        try:
            for index, upload in enumerate(files):
                stored.append(
                    await self.storage.save(
                        upload,
                        _attachment_folder(task.id),
                        ATTACHMENT_EXTENSIONS,
                        settings.max_upload_kb,
                        field=f"files.{index}",
                    )
                )
        except ValidationFailed:
            for item in stored:
                self.storage.delete(item.path)
            raise

        attachments = [
            EditorTaskAttachment(
                editor_task_id=task.id,
                file_path=item.path,
                original_name=item.original_name,
                mime_type=item.mime_type,
                file_size=item.size,
                uploaded_by=uploader.id,
            )
            for item in stored
        ]
        self.session.add_all(attachments)
        await self.session.commit()
        for attachment in attachments:
            await self.session.refresh(attachment)
        return attachments

    async def delete_attachment(self, task: EditorTask, attachment_id: int) -> None:
        attachment = await self.tasks.get_attachment(attachment_id)
        if attachment is None or attachment.editor_task_id != task.id:
            raise NotFound("Attachment", attachment_id)
        self.storage.delete(attachment.file_path)
        await self.session.delete(attachment)
        await self.session.commit()

    # ------------------------------------------------------------------
    # Editor view
    # ------------------------------------------------------------------

    @staticmethod
    def ensure_visible(task: EditorTask, user: User) -> None:
        if task.assigned_to is not None and task.assigned_to != user.id:
            raise Forbidden("This task is assigned to another user.")

    async def editor_set_status(self, task: EditorTask, status: TaskStatus, user: User) -> EditorTask:
        self.ensure_visible(task, user)
        if status not in EDITOR_SELECTABLE_STATUSES:
            raise ValidationFailed.single("status", "The selected status is invalid.")
        ensure_transition(task.status, status)
        task = await self.tasks.update(task, {"status": status.value, "cancel_reason": None})
        await self.publish_counts()
        return task
