"""Slug resolution for programs, articles and organization members."""

from __future__ import annotations

from typing import Optional

from dpf_cms.core.text import slugify, unique_slug
from dpf_cms.server.exception_handlers.errors import ValidationFailed


def resolve_slug(explicit: Optional[str], source: str, taken: set[str], current: Optional[str] = None) -> str:
    """Pick the slug to store.

    An explicit slug is normalized and must not belong to another row. Without
    one, the slug is derived from ``source`` and suffixed until it is free.
    ``current`` is the row's own slug on update and never counts as taken.

    >>> resolve_slug(None, "Bantu Sesama", {"bantu-sesama"})
    'bantu-sesama-2'
    """
    others = taken - {current} if current else taken
    if explicit is not None and explicit.strip():
        slug = slugify(explicit)
        if not slug:
            raise ValidationFailed.single("slug", "The slug format is invalid.")
        if slug in others:
            raise ValidationFailed.single("slug", "The slug has already been taken.")
        return slug
    return unique_slug(slugify(source), others)
