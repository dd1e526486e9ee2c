"""Unit tests for token authentication and role checks."""

from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

from dpf_cms.core.database.repositories.users import AccessTokenRepository
from dpf_cms.core.models.domain.enums import ADMIN_AREA_ROLES, EDITOR_AREA_ROLES
from dpf_cms.server.core.auth import _authenticate, ensure_role, issue_token
from dpf_cms.server.core.security import hash_token
from dpf_cms.server.exception_handlers.errors import Forbidden, Unauthenticated

pytestmark = pytest.mark.asyncio


@pytest.fixture
def request_stub():
    return SimpleNamespace(state=SimpleNamespace())


async def test_issue_token_stores_only_digest(session, editor):
    token = await issue_token(session, editor)

    record = await AccessTokenRepository(session).get_by_hash(hash_token(token))

    assert record is not None
    assert record.user_id == editor.id
    assert record.token_hash != token


async def test_authenticate_resolves_user_and_touches_token(session, editor, request_stub):
    token = await issue_token(session, editor)

    user = await _authenticate(session, token, request_stub)

    assert user.id == editor.id
    record = await AccessTokenRepository(session).get_by_hash(hash_token(token))
    assert record.last_used_at is not None
    assert request_stub.state.access_token_id == record.id


@pytest.mark.parametrize("token", [None, "", "unknown-token"])
async def test_authenticate_rejects_missing_or_unknown(session, request_stub, token):
    with pytest.raises(Unauthenticated):
        await _authenticate(session, token, request_stub)


async def test_inactive_user_is_forbidden(session, make_user, request_stub):
    user = await make_user("editor", is_active=False)
    token = await issue_token(session, user)

    with pytest.raises(Forbidden):
        await _authenticate(session, token, request_stub)


async def test_ensure_role():
    editor = MagicMock(id=1, role="editor")

    assert ensure_role(editor, EDITOR_AREA_ROLES) is editor
    with pytest.raises(Forbidden):
        ensure_role(editor, ADMIN_AREA_ROLES)
