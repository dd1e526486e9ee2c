from .enums import (
    ArticleStatus,
    DonationStatus,
    PaymentSource,
    ProgramStatus,
    TaskPriority,
    TaskStatus,
    UserRole,
)

__all__ = [
    "ArticleStatus",
    "DonationStatus",
    "PaymentSource",
    "ProgramStatus",
    "TaskPriority",
    "TaskStatus",
    "UserRole",
]
