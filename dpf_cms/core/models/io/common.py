"""
Shared I/O building blocks: money values, the pagination envelope and
simple message responses.
"""

from __future__ import annotations

import math
from datetime import datetime
from decimal import Decimal
from typing import Annotated, Any, Generic, List, Optional, TypeVar

from pydantic import AfterValidator, BaseModel, BeforeValidator, ConfigDict, Field

from dpf_cms.core.database.base import to_naive_utc


def _to_float(value: Any) -> Any:
    if isinstance(value, Decimal):
        return float(value)
    return value


# Amounts are stored as NUMERIC(14, 2) and exposed as JSON numbers.
Money = Annotated[float, BeforeValidator(_to_float)]

# Incoming timestamps are stored as naive UTC.
UtcDateTime = Annotated[datetime, AfterValidator(to_naive_utc)]

T = TypeVar("T")


class Page(BaseModel, Generic[T]):
    """Length-aware pagination envelope."""

    model_config = ConfigDict(populate_by_name=True)

    data: List[T]
    current_page: int = Field(description="1-based page number")
    per_page: int = Field(description="Page size actually used")
    last_page: int = Field(description="Number of the last page, at least 1")
    total: int = Field(description="Total matching records")
    from_: Optional[int] = Field(default=None, alias="from", description="1-based index of the first item on the page")
    to: Optional[int] = Field(default=None, description="1-based index of the last item on the page")

    @classmethod
    def build(cls, items: List[Any], total: int, page: int, per_page: int) -> "Page[Any]":
        first = (page - 1) * per_page + 1 if items else None
        last = first + len(items) - 1 if first is not None else None
        return cls(
            data=items,
            current_page=page,
            per_page=per_page,
            last_page=max(1, math.ceil(total / per_page)),
            total=total,
            from_=first,
            to=last,
        )


class MessageResponse(BaseModel):
    message: str


class NextOrder(BaseModel):
    """Suggested order value for a new row."""

    next_order: int
