"""Article entity models."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlmodel import DateTime, Field, Text

from ..base import Base, utc_now


class ArticleBase(Base):
    """Base fields for a news article."""

    title: str = Field(max_length=255)
    title_en: Optional[str] = Field(default=None, max_length=255)
    slug: str = Field(max_length=255, unique=True, index=True)
    program_id: Optional[int] = Field(default=None, foreign_key="programs.id", index=True)
    category: str = Field(max_length=100, index=True)
    category_en: Optional[str] = Field(default=None, max_length=100)
    thumbnail_path: Optional[str] = Field(default=None, max_length=255)
    excerpt: str = Field(sa_type=Text)
    excerpt_en: Optional[str] = Field(default=None, sa_type=Text)
    body: str = Field(sa_type=Text)
    body_en: Optional[str] = Field(default=None, sa_type=Text)
    author_name: Optional[str] = Field(default=None, max_length=255)
    published_at: Optional[datetime] = Field(default=None, sa_type=DateTime)
    status: str = Field(default="draft", max_length=20, index=True)


class Article(ArticleBase, table=True):
    """Table: articles"""

    __tablename__ = "articles"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)

    created_at: datetime = Field(sa_type=DateTime, default_factory=utc_now)
    updated_at: datetime = Field(sa_type=DateTime, default_factory=utc_now, sa_column_kwargs={"onupdate": utc_now})

    def __repr__(self) -> str:
        return f"Article(id={self.id}, slug={self.slug}, status={self.status})"
