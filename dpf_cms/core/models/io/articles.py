"""
Article I/O models for API requests and responses.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from dpf_cms.core.models.domain.enums import ArticleStatus

from .common import UtcDateTime


class ArticleRead(BaseModel):
    """Schema for reading an article."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    title_en: Optional[str] = None
    slug: str
    program_id: Optional[int] = None
    category: str
    category_en: Optional[str] = None
    thumbnail_path: Optional[str] = None
    excerpt: str
    excerpt_en: Optional[str] = None
    body: str
    body_en: Optional[str] = None
    author_name: Optional[str] = None
    published_at: Optional[datetime] = None
    status: str
    created_at: datetime
    updated_at: datetime


class ArticleCreate(BaseModel):
    """Schema for creating an article. The slug is derived from the title when omitted."""

    title: str = Field(min_length=1, max_length=255)
    title_en: Optional[str] = Field(default=None, max_length=255)
    slug: Optional[str] = Field(default=None, max_length=255)
    program_id: Optional[int] = None
    category: str = Field(min_length=1, max_length=100)
    category_en: Optional[str] = Field(default=None, max_length=100)
    thumbnail_path: Optional[str] = Field(default=None, max_length=255)
    excerpt: str = Field(min_length=1)
    excerpt_en: Optional[str] = None
    body: str = Field(min_length=1)
    body_en: Optional[str] = None
    author_name: Optional[str] = Field(default=None, max_length=255)
    published_at: Optional[UtcDateTime] = None
    status: ArticleStatus


class ArticleUpdate(BaseModel):
    """Schema for partially updating an article."""

    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    title_en: Optional[str] = Field(default=None, max_length=255)
    slug: Optional[str] = Field(default=None, max_length=255)
    program_id: Optional[int] = None
    category: Optional[str] = Field(default=None, min_length=1, max_length=100)
    category_en: Optional[str] = Field(default=None, max_length=100)
    thumbnail_path: Optional[str] = Field(default=None, max_length=255)
    excerpt: Optional[str] = Field(default=None, min_length=1)
    excerpt_en: Optional[str] = None
    body: Optional[str] = Field(default=None, min_length=1)
    body_en: Optional[str] = None
    author_name: Optional[str] = Field(default=None, max_length=255)
    published_at: Optional[UtcDateTime] = None
    status: Optional[ArticleStatus] = None


class ArticlePublish(BaseModel):
    """Publish workflow step. Publishing without a date stamps the current time."""

    status: Optional[ArticleStatus] = None
    published_at: Optional[UtcDateTime] = None


class PublicArticleDetail(BaseModel):
    article: ArticleRead
    related: List[ArticleRead]
