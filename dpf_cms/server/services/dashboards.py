"""
Dashboard aggregation.

Every number here is a plain count or sum over the content tables; the
superadmin dashboard extends the admin one with user statistics.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from dpf_cms.core.database.base import utc_now
from dpf_cms.core.database.entities.articles import Article
from dpf_cms.core.database.entities.donations import Donation
from dpf_cms.core.database.entities.organization_members import OrganizationMember
from dpf_cms.core.database.entities.partners import Partner
from dpf_cms.core.database.entities.programs import Program
from dpf_cms.core.database.repositories.articles import ArticleRepository
from dpf_cms.core.database.repositories.donations import DonationRepository
from dpf_cms.core.database.repositories.editor_tasks import EditorTaskRepository
from dpf_cms.core.database.repositories.programs import ProgramRepository
from dpf_cms.core.database.repositories.users import UserRepository
from dpf_cms.core.models.domain.enums import PaymentSource, UserRole
from dpf_cms.core.models.io.dashboards import (
    AdminDashboard,
    AdminStats,
    ArticleStats,
    DraftItem,
    EditorDashboard,
    EditorStats,
    ProgramActivityStats,
    SourceTotals,
    SuperadminDashboard,
    TodoItem,
    UserStats,
)
from dpf_cms.core.models.io.programs import ProgramRead

from .donation_report import DonationReportService

TODO_LIMIT = 10
TODO_ARTICLES = 6
TODO_PROGRAMS = 4
RECENT_DONATIONS = 5
HIGHLIGHT_PROGRAMS = 5


def _month_start(now: datetime) -> datetime:
    return now.replace(day=1, hour=0, minute=0, second=0, microsecond=0)


def _article_todo(article: Article) -> TodoItem:
    status = "review" if article.status == "review" else "draft"
    reason = "Waiting for review." if status == "review" else "Finish the draft before publishing."
    if not article.thumbnail_path:
        reason += " Add a thumbnail."
    return TodoItem(
        type="article",
        id=article.id,
        title=article.title,
        status=status,
        category=article.category,
        updated_at=article.updated_at,
        reason=reason,
    )


def _program_todo(program: Program) -> TodoItem:
    reason = "Complete the program details and activate it when ready."
    if not program.thumbnail_path:
        reason += " Add a thumbnail."
    return TodoItem(
        type="program",
        id=program.id,
        title=program.title,
        status=program.status,
        category=program.category,
        updated_at=program.updated_at,
        reason=reason,
    )


class DashboardService:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def _scalar(self, stmt) -> int:
        return int((await self.session.execute(stmt)).scalar_one() or 0)

    async def _count(self, model, *conditions) -> int:
        return await self._scalar(select(func.count(model.id)).where(*conditions))

    async def _sum_paid(self, *conditions) -> Decimal:
        stmt = select(func.coalesce(func.sum(Donation.amount), 0)).where(Donation.status == "paid", *conditions)
        return Decimal(str((await self.session.execute(stmt)).scalar_one()))

    # ------------------------------------------------------------------
    # Editor
    # ------------------------------------------------------------------

    async def _last_draft(self) -> Optional[DraftItem]:
        candidates: List[DraftItem] = []
        for model, kind in ((Article, "article"), (Program, "program")):
            stmt = select(model).where(model.status == "draft").order_by(model.updated_at.desc()).limit(1)
            row = (await self.session.execute(stmt)).scalars().first()
            if row is not None:
                candidates.append(DraftItem(type=kind, id=row.id, title=row.title, updated_at=row.updated_at))
        if not candidates:
            return None
        return max(candidates, key=lambda item: item.updated_at)

    async def _todo(self) -> List[TodoItem]:
        articles = ArticleRepository(self.session)
        programs = ProgramRepository(self.session)
        draft_articles = await articles.all(
            select(Article)
            .where(Article.status.in_(["draft", "review"]))  # type: ignore[attr-defined]
            .order_by(Article.updated_at.desc())
            .limit(TODO_ARTICLES)
        )
        draft_programs = await programs.all(
            select(Program).where(Program.status == "draft").order_by(Program.updated_at.desc()).limit(TODO_PROGRAMS)
        )
        items = [_article_todo(a) for a in draft_articles] + [_program_todo(p) for p in draft_programs]
        items.sort(key=lambda item: item.updated_at, reverse=True)
        return items[:TODO_LIMIT]

    async def editor(self, user_id: int) -> EditorDashboard:
        by_status = await ArticleRepository(self.session).count_by_status()
        published = await self._scalar(
            select(func.count()).select_from(ArticleRepository.published().subquery())
        )
        article_stats = ArticleStats(
            draft=by_status.get("draft", 0),
            review=by_status.get("review", 0),
            published=published,
        )
        article_stats.total = article_stats.draft + article_stats.review + article_stats.published

        program_counts = await ProgramRepository(self.session).count_by_status()
        active = program_counts.get("active", 0)
        total = sum(program_counts.values())

        return EditorDashboard(
            stats=EditorStats(
                articles=article_stats,
                programs=ProgramActivityStats(active=active, inactive=total - active, total=total),
                programs_highlight=await self._count(Program, Program.is_highlight == True),  # noqa: E712
                partners_active=await self._count(Partner, Partner.is_active == True),  # noqa: E712
                organization_members=await self._count(OrganizationMember),
            ),
            last_draft=await self._last_draft(),
            todo=await self._todo(),
            open_tasks=await EditorTaskRepository(self.session).open_count_for(user_id),
        )

    # ------------------------------------------------------------------
    # Admin / superadmin
    # ------------------------------------------------------------------

    async def _admin_parts(self) -> dict:
        now = utc_now()
        program_counts = await ProgramRepository(self.session).count_by_status()
        donations = DonationRepository(self.session)
        donation_counts = await donations.count_by_status()
        totals = await donations.totals_by_source(status="paid")

        highlights = await ProgramRepository(self.session).all(
            select(Program)
            .where(Program.is_highlight == True)  # noqa: E712
            .order_by(Program.updated_at.desc())
            .limit(HIGHLIGHT_PROGRAMS)
        )
        report = DonationReportService(self.session)
        return {
            "stats": AdminStats(
                programs=sum(program_counts.values()),
                active_programs=program_counts.get("active", 0),
                donations_paid=float(sum((amount for _, amount in totals.values()), Decimal("0"))),
                donations_paid_count=donation_counts.get("paid", 0),
                monthly_donations=float(await self._sum_paid(Donation.paid_at >= _month_start(now))),
                donations_pending=donation_counts.get("pending", 0),
            ),
            "donations_by_source": {
                source.value: SourceTotals(
                    count=totals.get(source.value, (0, Decimal("0")))[0],
                    amount=float(totals.get(source.value, (0, Decimal("0")))[1]),
                )
                for source in PaymentSource
            },
            "recent_donations": await report.to_read(await donations.latest(RECENT_DONATIONS)),
            "highlight_programs": [ProgramRead.model_validate(p) for p in highlights],
        }

    async def admin(self) -> AdminDashboard:
        return AdminDashboard(**await self._admin_parts())

    async def superadmin(self) -> SuperadminDashboard:
        users = UserRepository(self.session)
        by_role = await users.count_by_role()
        active = await users.count_by_active()
        return SuperadminDashboard(
            **await self._admin_parts(),
            users=UserStats(
                total=active["active"] + active["inactive"],
                active=active["active"],
                inactive=active["inactive"],
                by_role={role.value: by_role.get(role.value, 0) for role in UserRole},
            ),
        )
