"""
User and access token entity models.

Users carry exactly one role (editor, admin or superadmin). API access uses
opaque bearer tokens; only their sha256 digest is stored.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlmodel import DateTime, Field

from ..base import Base, utc_now


class UserBase(Base):
    """Base fields for a backoffice user."""

    name: str = Field(max_length=255, description="Display name")
    email: str = Field(max_length=255, unique=True, index=True, description="Login email, unique")
    phone: Optional[str] = Field(default=None, max_length=50)
    role: str = Field(default="editor", max_length=32, index=True, description="editor, admin or superadmin")
    role_label: Optional[str] = Field(default=None, max_length=100, description="Free-form title shown in the UI")
    is_active: bool = Field(default=True, description="Inactive users cannot authenticate")


class User(UserBase, table=True):
    """Backoffice account.

    Table: users
    """

    __tablename__ = "users"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)
    password_hash: str = Field(max_length=255)

    created_at: datetime = Field(sa_type=DateTime, default_factory=utc_now)
    updated_at: datetime = Field(sa_type=DateTime, default_factory=utc_now, sa_column_kwargs={"onupdate": utc_now})

    def __repr__(self) -> str:
        return f"User(id={self.id}, email={self.email}, role={self.role})"


class AccessToken(Base, table=True):
    """Personal access token issued at login.

    Table: personal_access_tokens
    """

    __tablename__ = "personal_access_tokens"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="users.id", index=True, ondelete="CASCADE")
    name: str = Field(default="api", max_length=255)
    token_hash: str = Field(max_length=64, unique=True, index=True)
    last_used_at: Optional[datetime] = Field(default=None, sa_type=DateTime)

    created_at: datetime = Field(sa_type=DateTime, default_factory=utc_now)
    updated_at: datetime = Field(sa_type=DateTime, default_factory=utc_now, sa_column_kwargs={"onupdate": utc_now})

    def __repr__(self) -> str:
        return f"AccessToken(id={self.id}, user_id={self.user_id})"
