"""Articles repository."""

from __future__ import annotations

from typing import Dict, List, Optional

from sqlalchemy import func, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.articles import Article
from .base import BaseRepository, QueryBuilder


class ArticleRepository(BaseRepository[Article]):
    """Repository for article data access operations using SQLModel."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Article)

    def search(self, q: Optional[str] = None, status: Optional[str] = None, category: Optional[str] = None):
        """Backoffice listing: title/excerpt search, status and category filters, recently edited first."""
        stmt = select(Article)
        stmt = QueryBuilder.apply_search(stmt, [Article.title, Article.excerpt], q)
        stmt = QueryBuilder.apply_filters(stmt, Article, {"status": status, "category": category})
        return stmt.order_by(Article.updated_at.desc(), Article.id.desc())  # type: ignore[union-attr]

    @staticmethod
    def published():
        """Articles visible to the public: published and carrying a publish date."""
        return select(Article).where(
            Article.status == "published",
            Article.published_at.is_not(None),  # type: ignore[union-attr]
        )

    def public_search(self, q: Optional[str] = None, category: Optional[str] = None):
        stmt = QueryBuilder.apply_filters(self.published(), Article, {"category": category})
        stmt = QueryBuilder.apply_search(stmt, [Article.title], q)
        return stmt.order_by(Article.published_at.desc(), Article.id.desc())  # type: ignore[union-attr]

    @staticmethod
    def newest():
        """Articles of any status, most recently created first."""
        return select(Article).order_by(Article.created_at.desc(), Article.id.desc())  # type: ignore[attr-defined]

    async def get_published_by_slug(self, slug: str) -> Optional[Article]:
        result = await self.session.execute(self.published().where(Article.slug == slug))
        return result.scalars().first()

    async def related(self, article: Article, limit: int = 3) -> List[Article]:
        stmt = self.published().where(Article.category == article.category, Article.id != article.id).limit(limit)
        return await self.all(stmt)

    async def updates_for_program(self, program_id: int, limit: int = 10) -> List[Article]:
        stmt = (
            self.published()
            .where(Article.program_id == program_id)
            .order_by(Article.published_at.desc())  # type: ignore[union-attr]
            .limit(limit)
        )
        return await self.all(stmt)

    async def slugs(self) -> set[str]:
        return set(await self.column_values(Article.slug))

    async def count_by_status(self) -> Dict[str, int]:
        result = await self.session.execute(select(Article.status, func.count()).group_by(Article.status))
        return {status: int(count) for status, count in result.all()}

    async def detach_program(self, program_id: int) -> None:
        """Unlink articles from a program that is about to be deleted, without committing."""
        await self.session.execute(
            update(Article).where(Article.program_id == program_id).values(program_id=None)
        )
