"""
Editor task status lifecycle.

Forward order is ``open -> in_progress -> done`` (skipping ahead is allowed).
``cancelled`` is reachable only from ``open`` or ``in_progress`` and nothing
leaves it. Resubmitting the current status is always accepted.
"""

from __future__ import annotations

from typing import Optional, Union

from dpf_cms.core.models.domain.enums import TaskStatus
from dpf_cms.server.exception_handlers.errors import ValidationFailed

STATUS_ORDER = {
    TaskStatus.OPEN: 0,
    TaskStatus.IN_PROGRESS: 1,
    TaskStatus.DONE: 2,
}

CANCELLABLE = (TaskStatus.OPEN, TaskStatus.IN_PROGRESS)

StatusLike = Union[TaskStatus, str]


def is_forward_status(current: StatusLike, target: StatusLike) -> bool:
    """Return True when ``target`` is the same as or later than ``current`` in the forward order."""
    current_rank = STATUS_ORDER.get(TaskStatus(current))
    target_rank = STATUS_ORDER.get(TaskStatus(target))
    if current_rank is None or target_rank is None:
        return False
    return target_rank >= current_rank


def transition_error(current: StatusLike, target: StatusLike) -> Optional[str]:
    """Return why ``current -> target`` is refused, or None when it is allowed."""
    current, target = TaskStatus(current), TaskStatus(target)
    if current == target:
        return None
    if current == TaskStatus.CANCELLED:
        return "A cancelled task cannot change status."
    if target == TaskStatus.CANCELLED:
        if current in CANCELLABLE:
            return None
        return "Only open or in-progress tasks can be cancelled."
    if not is_forward_status(current, target):
        return f"Task status cannot move back from {current.value} to {target.value}."
    return None


def ensure_transition(current: StatusLike, target: StatusLike) -> None:
    """Raise ``ValidationFailed`` on the ``status`` field when the move is not allowed."""
    message = transition_error(current, target)
    if message is not None:
        raise ValidationFailed.single("status", message)
