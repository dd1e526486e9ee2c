"""
Organization member I/O models.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class OrganizationMemberRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    name_en: Optional[str] = None
    slug: str
    position_title: str
    position_title_en: Optional[str] = None
    group: str
    group_en: Optional[str] = None
    photo_path: Optional[str] = None
    short_bio: Optional[str] = None
    short_bio_en: Optional[str] = None
    long_bio: Optional[str] = None
    long_bio_en: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    show_contact: bool
    order: int
    is_active: bool
    created_at: datetime
    updated_at: datetime


class OrganizationMemberCreate(BaseModel):
    """Schema for adding a member. ``order`` defaults to the end of the member's group."""

    name: str = Field(min_length=1, max_length=255)
    name_en: Optional[str] = Field(default=None, max_length=255)
    slug: Optional[str] = Field(default=None, max_length=255)
    position_title: str = Field(min_length=1, max_length=255)
    position_title_en: Optional[str] = Field(default=None, max_length=255)
    group: str = Field(min_length=1, max_length=100)
    group_en: Optional[str] = Field(default=None, max_length=100)
    photo_path: Optional[str] = Field(default=None, max_length=255)
    short_bio: Optional[str] = None
    short_bio_en: Optional[str] = None
    long_bio: Optional[str] = None
    long_bio_en: Optional[str] = None
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(default=None, max_length=30)
    show_contact: bool = False
    order: Optional[int] = Field(default=None, ge=0)
    is_active: bool = True


class OrganizationMemberUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    name_en: Optional[str] = Field(default=None, max_length=255)
    slug: Optional[str] = Field(default=None, max_length=255)
    position_title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    position_title_en: Optional[str] = Field(default=None, max_length=255)
    group: Optional[str] = Field(default=None, min_length=1, max_length=100)
    group_en: Optional[str] = Field(default=None, max_length=100)
    photo_path: Optional[str] = Field(default=None, max_length=255)
    short_bio: Optional[str] = None
    short_bio_en: Optional[str] = None
    long_bio: Optional[str] = None
    long_bio_en: Optional[str] = None
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(default=None, max_length=30)
    show_contact: Optional[bool] = None
    order: Optional[int] = Field(default=None, ge=0)
    is_active: Optional[bool] = None
