"""
User and authentication I/O models.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from dpf_cms.core.models.domain.enums import UserRole


class UserRead(BaseModel):
    """Schema for reading a user. The password hash is never exposed."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    phone: Optional[str] = None
    role: str = Field(description="editor, admin or superadmin")
    role_label: Optional[str] = None
    is_active: bool
    created_at: datetime
    updated_at: datetime


class UserCreate(BaseModel):
    """Schema for creating a user (superadmin only)."""

    name: str = Field(min_length=1, max_length=255)
    email: EmailStr = Field(max_length=255)
    phone: Optional[str] = Field(default=None, max_length=30)
    password: str = Field(min_length=8, description="Plain password, stored as a bcrypt hash")
    role: UserRole = Field(default=UserRole.EDITOR)
    role_label: Optional[str] = Field(default=None, max_length=100)
    is_active: bool = True


class UserUpdate(BaseModel):
    """Schema for partially updating a user. An empty password keeps the current one."""

    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    email: Optional[EmailStr] = Field(default=None, max_length=255)
    phone: Optional[str] = Field(default=None, max_length=30)
    password: Optional[str] = Field(default=None, description="New password, at least 8 characters")
    role: Optional[UserRole] = None
    role_label: Optional[str] = Field(default=None, max_length=100)
    is_active: Optional[bool] = None


class RoleSummary(BaseModel):
    name: str
    label: str
    users_count: int


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=1)


class TokenResponse(BaseModel):
    token: str
    token_type: str = "Bearer"
    user: UserRead


class CurrentUser(BaseModel):
    user: UserRead


class PasswordChange(BaseModel):
    current_password: str = Field(min_length=1)
    new_password: str = Field(min_length=8)
    new_password_confirmation: str
