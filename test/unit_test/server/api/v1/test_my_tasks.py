"""
Unit tests for the editor's own task view.
"""

import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.asyncio

MY_TASKS = "/api/v1/editor/tasks"
ADMIN_TASKS = "/api/v1/admin/editor-tasks"


@pytest.fixture
def create_task(client: AsyncClient, admin_headers):
    async def _create(**fields):
        payload = {"title": "Update the gallery", **fields}
        return (await client.post(ADMIN_TASKS, json=payload, headers=admin_headers)).json()

    return _create


async def test_lists_unassigned_and_own_tasks(client: AsyncClient, editor, make_user, editor_headers, create_task):
    other = await make_user("editor")
    await create_task(title="Shared")
    await create_task(title="Mine", assigned_to=editor.id)
    await create_task(title="Theirs", assigned_to=other.id)

    response = await client.get(MY_TASKS, headers=editor_headers)

    data = response.json()
    assert data["per_page"] == 10
    assert sorted(t["title"] for t in data["data"]) == ["Mine", "Shared"]


async def test_status_filter(client: AsyncClient, editor_headers, create_task):
    await create_task(title="Open one")
    await create_task(title="Finished", status="done")

    response = await client.get(MY_TASKS, params={"status": "done"}, headers=editor_headers)

    assert [t["title"] for t in response.json()["data"]] == ["Finished"]


async def test_task_of_another_user_is_forbidden(client: AsyncClient, make_user, editor_headers, create_task):
    other = await make_user("editor")
    task = await create_task(assigned_to=other.id)

    shown = await client.get(f"{MY_TASKS}/{task['id']}", headers=editor_headers)
    changed = await client.patch(f"{MY_TASKS}/{task['id']}", json={"status": "done"}, headers=editor_headers)

    assert shown.status_code == 403
    assert changed.status_code == 403


async def test_move_task_forward(client: AsyncClient, editor, editor_headers, create_task):
    task = await create_task(assigned_to=editor.id)

    response = await client.patch(f"{MY_TASKS}/{task['id']}", json={"status": "in_progress"}, headers=editor_headers)

    assert response.status_code == 200
    assert response.json()["status"] == "in_progress"


async def test_cannot_move_backwards(client: AsyncClient, editor_headers, create_task):
    task = await create_task(status="done")

    response = await client.patch(f"{MY_TASKS}/{task['id']}", json={"status": "open"}, headers=editor_headers)

    assert response.status_code == 422
    assert "status" in response.json()["errors"]


async def test_editor_cannot_cancel(client: AsyncClient, editor_headers, create_task):
    task = await create_task()

    response = await client.patch(f"{MY_TASKS}/{task['id']}", json={"status": "cancelled"}, headers=editor_headers)

    assert response.status_code == 422


async def test_missing_task(client: AsyncClient, editor_headers):
    response = await client.get(f"{MY_TASKS}/404", headers=editor_headers)
    assert response.status_code == 404
