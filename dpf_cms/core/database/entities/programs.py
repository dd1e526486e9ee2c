"""
Program entity models.

A program is a fundraising campaign; donations marked as paid accumulate
into ``collected_amount``.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Optional

from sqlmodel import DateTime, Field, Text

from ..base import Base, utc_now


class ProgramBase(Base):
    """Base fields for a fundraising program."""

    title: str = Field(max_length=255)
    title_en: Optional[str] = Field(default=None, max_length=255)
    slug: str = Field(max_length=255, unique=True, index=True)
    category: str = Field(max_length=100, index=True)
    category_en: Optional[str] = Field(default=None, max_length=100)
    short_description: str = Field(sa_type=Text)
    short_description_en: Optional[str] = Field(default=None, sa_type=Text)
    description: str = Field(sa_type=Text)
    description_en: Optional[str] = Field(default=None, sa_type=Text)
    benefits: Optional[str] = Field(default=None, sa_type=Text)
    benefits_en: Optional[str] = Field(default=None, sa_type=Text)
    target_amount: Decimal = Field(default=Decimal("0"), max_digits=14, decimal_places=2)
    collected_amount: Decimal = Field(default=Decimal("0"), max_digits=14, decimal_places=2)
    thumbnail_path: Optional[str] = Field(default=None, max_length=255)
    banner_path: Optional[str] = Field(default=None, max_length=255)
    is_highlight: bool = Field(default=False)
    status: str = Field(default="draft", max_length=20, index=True)
    deadline_days: Optional[int] = Field(default=None)
    published_at: Optional[datetime] = Field(default=None, sa_type=DateTime)


class Program(ProgramBase, table=True):
    """Fundraising program.

    Table: programs
    """

    __tablename__ = "programs"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)

    created_at: datetime = Field(sa_type=DateTime, default_factory=utc_now)
    updated_at: datetime = Field(sa_type=DateTime, default_factory=utc_now, sa_column_kwargs={"onupdate": utc_now})

    def __repr__(self) -> str:
        return f"Program(id={self.id}, slug={self.slug}, status={self.status})"
