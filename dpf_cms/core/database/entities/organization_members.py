"""
Organization member entity models.

Members are grouped (board, management, ...) and ordered within their group;
``(group, order)`` is unique.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import UniqueConstraint
from sqlmodel import DateTime, Field, Text

from ..base import Base, utc_now


class OrganizationMemberBase(Base):
    """Base fields for an organization member."""

    name: str = Field(max_length=255)
    name_en: Optional[str] = Field(default=None, max_length=255)
    slug: str = Field(max_length=255, unique=True, index=True)
    position_title: str = Field(max_length=255)
    position_title_en: Optional[str] = Field(default=None, max_length=255)
    group: str = Field(max_length=100, index=True)
    group_en: Optional[str] = Field(default=None, max_length=100)
    photo_path: Optional[str] = Field(default=None, max_length=255)
    short_bio: Optional[str] = Field(default=None, sa_type=Text)
    short_bio_en: Optional[str] = Field(default=None, sa_type=Text)
    long_bio: Optional[str] = Field(default=None, sa_type=Text)
    long_bio_en: Optional[str] = Field(default=None, sa_type=Text)
    email: Optional[str] = Field(default=None, max_length=255)
    phone: Optional[str] = Field(default=None, max_length=50)
    show_contact: bool = Field(default=False)
    order: int = Field(default=0)
    is_active: bool = Field(default=True)


class OrganizationMember(OrganizationMemberBase, table=True):
    """Table: organization_members"""

    __tablename__ = "organization_members"
    __table_args__ = (
        UniqueConstraint("group", "order", name="uq_organization_members_group_order"),
        {"extend_existing": True},
    )

    id: Optional[int] = Field(default=None, primary_key=True)

    created_at: datetime = Field(sa_type=DateTime, default_factory=utc_now)
    updated_at: datetime = Field(sa_type=DateTime, default_factory=utc_now, sa_column_kwargs={"onupdate": utc_now})

    def __repr__(self) -> str:
        return f"OrganizationMember(id={self.id}, group={self.group}, order={self.order})"
