"""
Helpers turning partial-update payloads into entity changes.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Iterable

from pydantic import BaseModel


def changes_from(payload: BaseModel, required: Iterable[str] = ()) -> Dict[str, Any]:
    """Return the fields the client actually sent, with enums reduced to their values.

    An explicit ``null`` for a field in ``required`` is dropped because the
    column cannot be cleared.
    """
    required = set(required)
    changes: Dict[str, Any] = {}
    for key, value in payload.model_dump(exclude_unset=True).items():
        if value is None and key in required:
            continue
        changes[key] = value.value if isinstance(value, Enum) else value
    return changes
