"""
I/O models for the small display-ordered resources: banners, tags and partners.

Each create schema leaves its order field optional; a missing value is
assigned the lowest free slot.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class BannerRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    image_path: str
    display_order: int
    created_at: datetime
    updated_at: datetime


class BannerCreate(BaseModel):
    image_path: str = Field(min_length=1, max_length=255)
    display_order: Optional[int] = Field(default=None, ge=0)


class BannerUpdate(BaseModel):
    image_path: Optional[str] = Field(default=None, min_length=1, max_length=255)
    display_order: Optional[int] = Field(default=None, ge=0)


class TagRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    url: Optional[str] = None
    is_active: bool
    sort_order: int
    open_in_new_tab: bool
    created_at: datetime
    updated_at: datetime


class TagCreate(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    url: Optional[str] = Field(default=None, max_length=2048)
    is_active: bool = True
    sort_order: Optional[int] = Field(default=None, ge=0)
    open_in_new_tab: bool = False


class TagUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    url: Optional[str] = Field(default=None, max_length=2048)
    is_active: Optional[bool] = None
    sort_order: Optional[int] = Field(default=None, ge=0)
    open_in_new_tab: Optional[bool] = None


class PartnerRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    name_en: Optional[str] = None
    logo_path: Optional[str] = None
    url: Optional[str] = None
    description: Optional[str] = None
    description_en: Optional[str] = None
    order: int
    is_active: bool
    created_at: datetime
    updated_at: datetime


class PartnerCreate(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    name_en: Optional[str] = Field(default=None, max_length=255)
    logo_path: Optional[str] = Field(default=None, max_length=255)
    url: Optional[str] = Field(default=None, max_length=255)
    description: Optional[str] = None
    description_en: Optional[str] = None
    order: Optional[int] = Field(default=None, ge=0)
    is_active: bool = True


class PartnerUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    name_en: Optional[str] = Field(default=None, max_length=255)
    logo_path: Optional[str] = Field(default=None, max_length=255)
    url: Optional[str] = Field(default=None, max_length=255)
    description: Optional[str] = None
    description_en: Optional[str] = None
    order: Optional[int] = Field(default=None, ge=0)
    is_active: Optional[bool] = None
