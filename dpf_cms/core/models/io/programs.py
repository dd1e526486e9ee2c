"""
Program I/O models for API requests and responses.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from dpf_cms.core.models.domain.enums import ProgramStatus

from .common import Money, UtcDateTime


class ProgramRead(BaseModel):
    """Schema for reading a program."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    title_en: Optional[str] = None
    slug: str
    category: str
    category_en: Optional[str] = None
    short_description: str
    short_description_en: Optional[str] = None
    description: str
    description_en: Optional[str] = None
    benefits: Optional[str] = None
    benefits_en: Optional[str] = None
    target_amount: Money
    collected_amount: Money
    thumbnail_path: Optional[str] = None
    banner_path: Optional[str] = None
    is_highlight: bool
    status: str
    deadline_days: Optional[int] = None
    published_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime


class ProgramCreate(BaseModel):
    """Schema for creating a program. The slug is derived from the title when omitted."""

    title: str = Field(min_length=1, max_length=255)
    title_en: Optional[str] = Field(default=None, max_length=255)
    slug: Optional[str] = Field(default=None, max_length=255)
    category: str = Field(min_length=1, max_length=100)
    category_en: Optional[str] = Field(default=None, max_length=100)
    short_description: str = Field(min_length=1)
    short_description_en: Optional[str] = None
    description: str = Field(min_length=1)
    description_en: Optional[str] = None
    benefits: Optional[str] = None
    benefits_en: Optional[str] = None
    target_amount: Decimal = Field(ge=0, max_digits=14, decimal_places=2)
    collected_amount: Optional[Decimal] = Field(default=None, ge=0, max_digits=14, decimal_places=2)
    thumbnail_path: Optional[str] = Field(default=None, max_length=255)
    banner_path: Optional[str] = Field(default=None, max_length=255)
    is_highlight: bool = False
    status: ProgramStatus
    deadline_days: Optional[int] = Field(default=None, ge=0)
    published_at: Optional[UtcDateTime] = None


class ProgramUpdate(BaseModel):
    """Schema for partially updating a program."""

    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    title_en: Optional[str] = Field(default=None, max_length=255)
    slug: Optional[str] = Field(default=None, max_length=255)
    category: Optional[str] = Field(default=None, min_length=1, max_length=100)
    category_en: Optional[str] = Field(default=None, max_length=100)
    short_description: Optional[str] = Field(default=None, min_length=1)
    short_description_en: Optional[str] = None
    description: Optional[str] = Field(default=None, min_length=1)
    description_en: Optional[str] = None
    benefits: Optional[str] = None
    benefits_en: Optional[str] = None
    target_amount: Optional[Decimal] = Field(default=None, ge=0, max_digits=14, decimal_places=2)
    collected_amount: Optional[Decimal] = Field(default=None, ge=0, max_digits=14, decimal_places=2)
    thumbnail_path: Optional[str] = Field(default=None, max_length=255)
    banner_path: Optional[str] = Field(default=None, max_length=255)
    is_highlight: Optional[bool] = None
    status: Optional[ProgramStatus] = None
    deadline_days: Optional[int] = Field(default=None, ge=0)
    published_at: Optional[UtcDateTime] = None


class ProgramStatusUpdate(BaseModel):
    status: ProgramStatus


class PublicDonation(BaseModel):
    """A paid donation as shown on a public program page."""

    id: int
    donor_name: Optional[str] = None
    amount: Money
    is_anonymous: bool
    paid_at: Optional[datetime] = None


class ProgramUpdateSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    slug: str
    title: str
    excerpt: str
    published_at: Optional[datetime] = None


class PublicProgramDetail(BaseModel):
    program: ProgramRead
    progress_percent: float
    recent_donations: List[PublicDonation]
    latest_updates: List[ProgramUpdateSummary]
