"""Unit tests for the editor task status lifecycle."""

import pytest

from dpf_cms.core.models.domain.enums import TaskStatus
from dpf_cms.server.exception_handlers.errors import ValidationFailed
from dpf_cms.server.services.task_status import ensure_transition, is_forward_status, transition_error


@pytest.mark.parametrize(
    "current, target",
    [
        ("open", "open"),
        ("open", "in_progress"),
        ("open", "done"),
        ("in_progress", "done"),
        ("open", "cancelled"),
        ("in_progress", "cancelled"),
        ("cancelled", "cancelled"),
        ("done", "done"),
    ],
)
def test_allowed_transitions(current, target):
    assert transition_error(current, target) is None
    ensure_transition(current, target)


@pytest.mark.parametrize(
    "current, target, message",
    [
        ("done", "open", "cannot move back"),
        ("in_progress", "open", "cannot move back"),
        ("done", "cancelled", "Only open or in-progress"),
        ("cancelled", "open", "cancelled task"),
        ("cancelled", "done", "cancelled task"),
    ],
)
def test_refused_transitions(current, target, message):
    assert message in transition_error(current, target)


def test_ensure_transition_reports_status_field():
    with pytest.raises(ValidationFailed) as exc_info:
        ensure_transition(TaskStatus.DONE, TaskStatus.IN_PROGRESS)

    assert list(exc_info.value.errors) == ["status"]
    assert exc_info.value.status_code == 422


def test_cancelled_is_outside_the_forward_order():
    assert is_forward_status("open", "done") is True
    assert is_forward_status("done", "open") is False
    assert is_forward_status("open", "cancelled") is False
