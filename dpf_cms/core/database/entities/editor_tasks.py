"""
Editor task entity models.

Tasks are assigned by admins to editors and move forward through
open, in_progress and done; cancelled is terminal.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlmodel import DateTime, Field, Text

from ..base import Base, utc_now


class EditorTaskBase(Base):
    """Base fields for an editor task."""

    title: str = Field(max_length=180)
    description: Optional[str] = Field(default=None, sa_type=Text)
    priority: str = Field(default="normal", max_length=10, index=True)
    status: str = Field(default="open", max_length=20, index=True)
    cancel_reason: Optional[str] = Field(default=None, max_length=500)
    due_at: Optional[datetime] = Field(default=None, sa_type=DateTime)
    assigned_to: Optional[int] = Field(default=None, foreign_key="users.id", index=True, ondelete="SET NULL")
    created_by: Optional[int] = Field(default=None, foreign_key="users.id", ondelete="SET NULL")


class EditorTask(EditorTaskBase, table=True):
    """Table: editor_tasks"""

    __tablename__ = "editor_tasks"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)

    created_at: datetime = Field(sa_type=DateTime, default_factory=utc_now)
    updated_at: datetime = Field(sa_type=DateTime, default_factory=utc_now, sa_column_kwargs={"onupdate": utc_now})

    def __repr__(self) -> str:
        return f"EditorTask(id={self.id}, status={self.status}, assigned_to={self.assigned_to})"


class EditorTaskAttachment(Base, table=True):
    """File attached to an editor task.

    Table: editor_task_attachments
    """

    __tablename__ = "editor_task_attachments"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)
    editor_task_id: int = Field(foreign_key="editor_tasks.id", index=True, ondelete="CASCADE")
    file_path: str = Field(max_length=255)
    original_name: str = Field(max_length=255)
    mime_type: Optional[str] = Field(default=None, max_length=100)
    file_size: int = Field(default=0)
    uploaded_by: Optional[int] = Field(default=None, foreign_key="users.id", ondelete="SET NULL")

    created_at: datetime = Field(sa_type=DateTime, default_factory=utc_now)
    updated_at: datetime = Field(sa_type=DateTime, default_factory=utc_now, sa_column_kwargs={"onupdate": utc_now})

    def __repr__(self) -> str:
        return f"EditorTaskAttachment(id={self.id}, task={self.editor_task_id}, name={self.original_name})"
