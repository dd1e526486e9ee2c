"""Banner entity models."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlmodel import DateTime, Field

from ..base import Base, utc_now


class Banner(Base, table=True):
    """Homepage banner image.

    Table: banners
    """

    __tablename__ = "banners"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)
    image_path: str = Field(max_length=255)
    display_order: int = Field(default=0, unique=True)

    created_at: datetime = Field(sa_type=DateTime, default_factory=utc_now)
    updated_at: datetime = Field(sa_type=DateTime, default_factory=utc_now, sa_column_kwargs={"onupdate": utc_now})

    def __repr__(self) -> str:
        return f"Banner(id={self.id}, display_order={self.display_order})"
