"""
Pagination query parameters.

``page_params(default)`` builds a dependency reading ``page`` and ``per_page``
with a per-resource default; ``per_page`` is clamped to ``max_per_page``.
"""

from __future__ import annotations

from dataclasses import dataclass

from fastapi import Query

from .config import settings


@dataclass(frozen=True)
class PageParams:
    page: int
    per_page: int


def page_params(default_per_page: int):
    async def dependency(
        page: int = Query(default=1, ge=1, description="1-based page number"),
        per_page: int = Query(default=default_per_page, ge=1, description="Items per page"),
    ) -> PageParams:
        return PageParams(page=page, per_page=min(per_page, settings.max_per_page))

    return dependency
