"""
Dashboard payloads for the editor, admin and superadmin areas.
"""

from __future__ import annotations

from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel

from .common import Money
from .donations import DonationRead
from .programs import ProgramRead


class ArticleStats(BaseModel):
    draft: int = 0
    review: int = 0
    published: int = 0
    total: int = 0


class ProgramActivityStats(BaseModel):
    active: int = 0
    inactive: int = 0
    total: int = 0


class EditorStats(BaseModel):
    articles: ArticleStats
    programs: ProgramActivityStats
    programs_highlight: int
    partners_active: int
    organization_members: int


class DraftItem(BaseModel):
    type: str
    id: int
    title: str
    updated_at: datetime


class TodoItem(BaseModel):
    """Unfinished content an editor should pick up, with the reason it is listed."""

    type: str
    id: int
    title: str
    status: str
    category: Optional[str] = None
    updated_at: datetime
    reason: str


class EditorDashboard(BaseModel):
    stats: EditorStats
    last_draft: Optional[DraftItem] = None
    todo: List[TodoItem]
    open_tasks: int


class SourceTotals(BaseModel):
    count: int = 0
    amount: Money = 0.0


class AdminStats(BaseModel):
    programs: int
    active_programs: int
    donations_paid: Money
    donations_paid_count: int
    monthly_donations: Money
    donations_pending: int


class AdminDashboard(BaseModel):
    stats: AdminStats
    donations_by_source: Dict[str, SourceTotals]
    recent_donations: List[DonationRead]
    highlight_programs: List[ProgramRead]


class UserStats(BaseModel):
    total: int
    active: int
    inactive: int
    by_role: Dict[str, int]


class SuperadminDashboard(AdminDashboard):
    users: UserStats
