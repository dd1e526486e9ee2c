"""
Unit tests for role-gated route prefixes.
"""

import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.asyncio


@pytest.mark.parametrize("path", ["/api/v1/editor/programs", "/api/v1/admin/donations", "/api/v1/superadmin/users"])
async def test_areas_require_authentication(client: AsyncClient, path: str):
    response = await client.get(path)
    assert response.status_code == 401
    assert response.headers.get("www-authenticate") == "Bearer"


async def test_editor_can_use_editor_area(client: AsyncClient, editor_headers):
    response = await client.get("/api/v1/editor/programs", headers=editor_headers)
    assert response.status_code == 200


@pytest.mark.parametrize(
    "path", ["/api/v1/admin/donations", "/api/v1/admin/reports/donations", "/api/v1/superadmin/users"]
)
async def test_editor_is_forbidden_elsewhere(client: AsyncClient, editor_headers, path: str):
    response = await client.get(path, headers=editor_headers)
    assert response.status_code == 403


async def test_admin_reaches_editor_and_admin_areas(client: AsyncClient, admin_headers):
    assert (await client.get("/api/v1/editor/tags", headers=admin_headers)).status_code == 200
    assert (await client.get("/api/v1/admin/donations", headers=admin_headers)).status_code == 200
    assert (await client.get("/api/v1/superadmin/users", headers=admin_headers)).status_code == 403


async def test_superadmin_reaches_every_area(client: AsyncClient, superadmin_headers):
    for path in ("/api/v1/editor/tags", "/api/v1/admin/donations", "/api/v1/superadmin/users"):
        response = await client.get(path, headers=superadmin_headers)
        assert response.status_code == 200, path


async def test_superadmin_reports_and_editor_tasks(client: AsyncClient, superadmin_headers):
    assert (await client.get("/api/v1/superadmin/reports/donations", headers=superadmin_headers)).status_code == 200
    assert (await client.get("/api/v1/superadmin/editor-tasks", headers=superadmin_headers)).status_code == 200
