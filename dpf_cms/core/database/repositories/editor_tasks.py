"""
Editor tasks repository.

Task listings for admins and editors, attachment lookups and the open-task
counts that feed the notification stream.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional

from sqlalchemy import func, or_
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.editor_tasks import EditorTask, EditorTaskAttachment
from .base import BaseRepository, QueryBuilder


class EditorTaskRepository(BaseRepository[EditorTask]):
    """Repository for editor task data access operations using SQLModel."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, EditorTask)

    def search(
        self,
        q: Optional[str] = None,
        status: Optional[str] = None,
        priority: Optional[str] = None,
        assigned_to: Optional[int] = None,
    ):
        """Admin listing, newest first."""
        stmt = select(EditorTask)
        stmt = QueryBuilder.apply_search(stmt, [EditorTask.title, EditorTask.description], q)
        stmt = QueryBuilder.apply_filters(
            stmt, EditorTask, {"status": status, "priority": priority, "assigned_to": assigned_to}
        )
        return stmt.order_by(EditorTask.created_at.desc(), EditorTask.id.desc())  # type: ignore[union-attr]

    def visible_to(self, user_id: int, status: Optional[str] = None):
        """Editor listing: tasks that are unassigned or assigned to ``user_id``, newest first."""
        stmt = select(EditorTask).where(
            or_(EditorTask.assigned_to.is_(None), EditorTask.assigned_to == user_id)  # type: ignore[union-attr]
        )
        stmt = QueryBuilder.apply_filters(stmt, EditorTask, {"status": status})
        return stmt.order_by(EditorTask.created_at.desc(), EditorTask.id.desc())  # type: ignore[union-attr]

    async def count_open_unassigned(self) -> int:
        stmt = select(func.count(EditorTask.id)).where(
            EditorTask.status == "open", EditorTask.assigned_to.is_(None)  # type: ignore[union-attr]
        )
        return int((await self.session.execute(stmt)).scalar_one())

    async def count_open_assigned(self, user_ids: Optional[Iterable[int]] = None) -> Dict[int, int]:
        """Return ``{user_id: open task count}`` for tasks assigned to the given users (all users if None)."""
        stmt = select(EditorTask.assigned_to, func.count(EditorTask.id)).where(
            EditorTask.status == "open", EditorTask.assigned_to.is_not(None)  # type: ignore[union-attr]
        )
        if user_ids is not None:
            stmt = stmt.where(EditorTask.assigned_to.in_(list(user_ids)))  # type: ignore[union-attr]
        result = await self.session.execute(stmt.group_by(EditorTask.assigned_to))
        return {int(user_id): int(count) for user_id, count in result.all()}

    async def open_count_for(self, user_id: int) -> int:
        assigned = await self.count_open_assigned([user_id])
        return await self.count_open_unassigned() + assigned.get(user_id, 0)

    async def attachments_for(self, task_ids: Iterable[int]) -> Dict[int, List[EditorTaskAttachment]]:
        ids = list(task_ids)
        grouped: Dict[int, List[EditorTaskAttachment]] = {task_id: [] for task_id in ids}
        if not ids:
            return grouped
        stmt = (
            select(EditorTaskAttachment)
            .where(EditorTaskAttachment.editor_task_id.in_(ids))  # type: ignore[attr-defined]
            .order_by(EditorTaskAttachment.id)
        )
        for attachment in await self.all(stmt):
            grouped[attachment.editor_task_id].append(attachment)
        return grouped

    async def get_attachment(self, attachment_id: int) -> Optional[EditorTaskAttachment]:
        return await self.session.get(EditorTaskAttachment, attachment_id)
