"""
Base database models and utilities.

This module provides the foundational database components used across
all entities in the centralized database layer using SQLModel.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Optional

from pydantic import ConfigDict
from sqlmodel import SQLModel


class Base(SQLModel):
    """Base class for all SQLModel entities."""

    model_config = ConfigDict(arbitrary_types_allowed=True)


def to_naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Convert an aware datetime to naive UTC; naive values are taken as UTC already.

    Timestamp columns are declared ``DateTime(timezone=False)`` and always hold
    naive UTC values.

    >>> to_naive_utc(datetime(2025, 1, 1, 14, 0, tzinfo=timezone(timedelta(hours=7))))
    datetime.datetime(2025, 1, 1, 7, 0)
    """
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def utc_now() -> datetime:
    """Current UTC time without tzinfo, the form stored in every timestamp column."""
    return to_naive_utc(datetime.now(timezone.utc))
