"""Partner entity models."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlmodel import DateTime, Field, Text

from ..base import Base, utc_now


class PartnerBase(Base):
    """Base fields for a partner logo entry."""

    name: str = Field(max_length=255)
    name_en: Optional[str] = Field(default=None, max_length=255)
    logo_path: Optional[str] = Field(default=None, max_length=255)
    url: Optional[str] = Field(default=None, max_length=255)
    description: Optional[str] = Field(default=None, sa_type=Text)
    description_en: Optional[str] = Field(default=None, sa_type=Text)
    order: int = Field(default=0, unique=True)
    is_active: bool = Field(default=True)


class Partner(PartnerBase, table=True):
    """Table: partners"""

    __tablename__ = "partners"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)

    created_at: datetime = Field(sa_type=DateTime, default_factory=utc_now)
    updated_at: datetime = Field(sa_type=DateTime, default_factory=utc_now, sa_column_kwargs={"onupdate": utc_now})

    def __repr__(self) -> str:
        return f"Partner(id={self.id}, name={self.name}, order={self.order})"
