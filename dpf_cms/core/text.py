"""Text helpers shared by entities that carry a URL slug."""

from __future__ import annotations

import re
import unicodedata


def slugify(value: str) -> str:
    """
    Convert ``value`` to an ASCII, lowercase, hyphen separated slug.

    Accents are folded to their base letter, characters other than letters,
    digits, spaces and hyphens are dropped, and runs of spaces, hyphens or
    underscores collapse into one hyphen.
    """
    value = unicodedata.normalize("NFKD", str(value)).encode("ascii", "ignore").decode("ascii")
    value = re.sub(r"[^\w\s-]", "", value.lower())
    return re.sub(r"[-\s_]+", "-", value).strip("-_")


def unique_slug(base: str, taken: set[str]) -> str:
    """Append ``-2``, ``-3``... to ``base`` until it is not in ``taken``."""
    slug = base or "item"
    candidate = slug
    suffix = 2
    while candidate in taken:
        candidate = f"{slug}-{suffix}"
        suffix += 1
    return candidate
