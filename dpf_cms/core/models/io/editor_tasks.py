"""
Editor task I/O models for API requests and responses.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from dpf_cms.core.models.domain.enums import TaskPriority, TaskStatus

from .common import UtcDateTime


class UserBrief(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str


class AttachmentRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    editor_task_id: int
    file_path: str
    original_name: str
    mime_type: Optional[str] = None
    file_size: int
    uploaded_by: Optional[int] = None
    url: Optional[str] = Field(default=None, description="Public URL of the stored file")
    created_at: datetime


class EditorTaskRead(BaseModel):
    """Schema for reading a task with its assignee, creator and attachments."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    description: Optional[str] = None
    priority: str
    status: str
    cancel_reason: Optional[str] = None
    due_at: Optional[datetime] = None
    assigned_to: Optional[int] = None
    created_by: Optional[int] = None
    assignee: Optional[UserBrief] = None
    creator: Optional[UserBrief] = None
    attachments: List[AttachmentRead] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime


class EditorTaskCreate(BaseModel):
    title: str = Field(min_length=1, max_length=180)
    description: Optional[str] = None
    priority: TaskPriority = TaskPriority.NORMAL
    status: TaskStatus = TaskStatus.OPEN
    cancel_reason: Optional[str] = Field(default=None, max_length=500)
    due_at: Optional[UtcDateTime] = None
    assigned_to: Optional[int] = None


class EditorTaskUpdate(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=180)
    description: Optional[str] = None
    priority: Optional[TaskPriority] = None
    status: Optional[TaskStatus] = None
    cancel_reason: Optional[str] = Field(default=None, max_length=500)
    due_at: Optional[UtcDateTime] = None
    assigned_to: Optional[int] = None


class EditorTaskCancel(BaseModel):
    cancel_reason: str = Field(min_length=1, max_length=500)


class EditorTaskStatusUpdate(BaseModel):
    """Status change submitted from the editor's own task view."""

    status: TaskStatus


class TaskCount(BaseModel):
    count: int
