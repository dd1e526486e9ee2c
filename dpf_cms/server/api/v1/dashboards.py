"""
Dashboard endpoints, one per role area.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from dpf_cms.core.database import get_session
from dpf_cms.core.database.entities.users import User
from dpf_cms.core.models.io.dashboards import AdminDashboard, EditorDashboard, SuperadminDashboard
from dpf_cms.server.core.auth import get_current_user
from dpf_cms.server.services.dashboards import DashboardService

editor_router = APIRouter()
admin_router = APIRouter()
superadmin_router = APIRouter()


@editor_router.get(
    "",
    response_model=EditorDashboard,
    summary="Editor Dashboard",
    description="Content statistics, the most recent draft, a todo list and the caller's open task count.",
    response_description="Editor dashboard payload.",
)
async def editor_dashboard(
    user: User = Depends(get_current_user), session: AsyncSession = Depends(get_session)
) -> EditorDashboard:
    return await DashboardService(session).editor(user.id)


@admin_router.get(
    "",
    response_model=AdminDashboard,
    summary="Admin Dashboard",
    description="Program counts, paid and pending donation totals, totals per payment source and the latest donations.",
    response_description="Admin dashboard payload.",
)
async def admin_dashboard(session: AsyncSession = Depends(get_session)) -> AdminDashboard:
    return await DashboardService(session).admin()


@superadmin_router.get(
    "",
    response_model=SuperadminDashboard,
    summary="Superadmin Dashboard",
    description="The admin dashboard plus user counts per role and by activity.",
    response_description="Superadmin dashboard payload.",
)
async def superadmin_dashboard(session: AsyncSession = Depends(get_session)) -> SuperadminDashboard:
    return await DashboardService(session).superadmin()
