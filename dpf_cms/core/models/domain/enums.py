"""
Domain enumerations.

Values are stored as plain strings in the database; these enums are the
single source of the accepted values and their display labels.
"""

from __future__ import annotations

from enum import Enum


class UserRole(str, Enum):
    EDITOR = "editor"
    ADMIN = "admin"
    SUPERADMIN = "superadmin"

    @property
    def label(self) -> str:
        return {"editor": "Editor", "admin": "Admin", "superadmin": "Super Admin"}[self.value]


# Role groups guarding each route prefix
EDITOR_AREA_ROLES = (UserRole.EDITOR, UserRole.ADMIN, UserRole.SUPERADMIN)
ADMIN_AREA_ROLES = (UserRole.ADMIN, UserRole.SUPERADMIN)
SUPERADMIN_AREA_ROLES = (UserRole.SUPERADMIN,)


class ProgramStatus(str, Enum):
    DRAFT = "draft"
    ACTIVE = "active"
    COMPLETED = "completed"
    ARCHIVED = "archived"


class ArticleStatus(str, Enum):
    DRAFT = "draft"
    REVIEW = "review"
    PUBLISHED = "published"


class PaymentSource(str, Enum):
    MANUAL = "manual"
    MIDTRANS = "midtrans"

    @property
    def label(self) -> str:
        return {"manual": "Manual", "midtrans": "Midtrans"}[self.value]


class DonationStatus(str, Enum):
    PENDING = "pending"
    PAID = "paid"
    FAILED = "failed"
    EXPIRED = "expired"
    CANCELLED = "cancelled"

    @property
    def label(self) -> str:
        return {
            "pending": "Pending",
            "paid": "Paid",
            "failed": "Failed",
            "expired": "Expired",
            "cancelled": "Cancelled",
        }[self.value]


class TaskPriority(str, Enum):
    LOW = "low"
    NORMAL = "normal"
    HIGH = "high"


class TaskStatus(str, Enum):
    OPEN = "open"
    IN_PROGRESS = "in_progress"
    DONE = "done"
    CANCELLED = "cancelled"


# Statuses an editor may pick from their own task view
EDITOR_SELECTABLE_STATUSES = (TaskStatus.OPEN, TaskStatus.IN_PROGRESS, TaskStatus.DONE)
