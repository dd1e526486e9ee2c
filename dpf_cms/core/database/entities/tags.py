"""Tag (quick link) entity models."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlmodel import DateTime, Field

from ..base import Base, utc_now


class Tag(Base, table=True):
    """Navigation tag linking to an internal or external URL.

    Table: tags
    """

    __tablename__ = "tags"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(max_length=100)
    url: Optional[str] = Field(default=None, max_length=255)
    is_active: bool = Field(default=True)
    sort_order: int = Field(default=0, unique=True)
    open_in_new_tab: bool = Field(default=False)

    created_at: datetime = Field(sa_type=DateTime, default_factory=utc_now)
    updated_at: datetime = Field(sa_type=DateTime, default_factory=utc_now, sa_column_kwargs={"onupdate": utc_now})

    def __repr__(self) -> str:
        return f"Tag(id={self.id}, name={self.name}, sort_order={self.sort_order})"
