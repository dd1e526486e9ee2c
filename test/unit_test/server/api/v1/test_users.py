"""
Unit tests for superadmin user management.
"""

import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.asyncio

USERS = "/api/v1/superadmin/users"


@pytest.fixture
def user_payload():
    return {"name": "Rina", "email": "Rina@Example.org", "password": "secret-pass", "role": "admin"}


class TestCreateUser:
    async def test_create(self, client: AsyncClient, superadmin_headers, user_payload):
        response = await client.post(USERS, json=user_payload, headers=superadmin_headers)

        assert response.status_code == 201
        data = response.json()
        assert data["email"] == "rina@example.org"
        assert data["role"] == "admin"
        assert data["is_active"] is True
        assert "password" not in data and "password_hash" not in data

    async def test_new_user_can_log_in(self, client: AsyncClient, superadmin_headers, user_payload):
        await client.post(USERS, json=user_payload, headers=superadmin_headers)

        response = await client.post(
            "/api/v1/auth/login", json={"email": "rina@example.org", "password": "secret-pass"}
        )

        assert response.status_code == 200

    async def test_email_must_be_unique(self, client: AsyncClient, superadmin_headers, user_payload):
        await client.post(USERS, json=user_payload, headers=superadmin_headers)

        response = await client.post(
            USERS, json={**user_payload, "email": "RINA@example.org"}, headers=superadmin_headers
        )

        assert response.status_code == 422
        assert "email" in response.json()["errors"]

    async def test_short_password(self, client: AsyncClient, superadmin_headers, user_payload):
        response = await client.post(USERS, json={**user_payload, "password": "short"}, headers=superadmin_headers)

        assert response.status_code == 422
        assert "password" in response.json()["errors"]

    async def test_unknown_role(self, client: AsyncClient, superadmin_headers, user_payload):
        response = await client.post(USERS, json={**user_payload, "role": "owner"}, headers=superadmin_headers)
        assert response.status_code == 422


class TestListUsers:
    async def test_filter_and_search(self, client: AsyncClient, make_user, superadmin_headers):
        await make_user("editor", name="Dewi")
        await make_user("admin", name="Agus")

        editors = (await client.get(USERS, params={"role": "editor"}, headers=superadmin_headers)).json()
        found = (await client.get(USERS, params={"q": "agu"}, headers=superadmin_headers)).json()

        assert [u["name"] for u in editors["data"]] == ["Dewi"]
        assert [u["name"] for u in found["data"]] == ["Agus"]

    async def test_roles_summary(self, client: AsyncClient, make_user, superadmin_headers):
        await make_user("editor")
        await make_user("editor")

        response = await client.get(f"{USERS}/roles", headers=superadmin_headers)

        assert response.json() == [
            {"name": "editor", "label": "Editor", "users_count": 2},
            {"name": "admin", "label": "Admin", "users_count": 0},
            {"name": "superadmin", "label": "Super Admin", "users_count": 1},
        ]

    async def test_admin_cannot_manage_users(self, client: AsyncClient, admin_headers):
        response = await client.get(USERS, headers=admin_headers)
        assert response.status_code == 403


class TestUpdateUser:
    async def test_empty_password_keeps_current(self, client: AsyncClient, make_user, superadmin_headers):
        user = await make_user("editor", email="keep@example.org")

        response = await client.put(
            f"{USERS}/{user.id}", json={"name": "Renamed", "password": ""}, headers=superadmin_headers
        )
        login = await client.post("/api/v1/auth/login", json={"email": "keep@example.org", "password": "password123"})

        assert response.json()["name"] == "Renamed"
        assert login.status_code == 200

    async def test_change_password(self, client: AsyncClient, make_user, superadmin_headers):
        user = await make_user("editor", email="change@example.org")

        await client.put(f"{USERS}/{user.id}", json={"password": "brand-new-pass"}, headers=superadmin_headers)
        login = await client.post(
            "/api/v1/auth/login", json={"email": "change@example.org", "password": "brand-new-pass"}
        )

        assert login.status_code == 200

    async def test_short_new_password(self, client: AsyncClient, make_user, superadmin_headers):
        user = await make_user("editor")

        response = await client.put(f"{USERS}/{user.id}", json={"password": "short"}, headers=superadmin_headers)

        assert response.status_code == 422
        assert "password" in response.json()["errors"]

    async def test_email_taken_by_other_user(self, client: AsyncClient, make_user, superadmin_headers):
        await make_user("editor", email="taken@example.org")
        user = await make_user("editor")

        response = await client.put(
            f"{USERS}/{user.id}", json={"email": "taken@example.org"}, headers=superadmin_headers
        )
        same = await client.put(f"{USERS}/{user.id}", json={"email": user.email}, headers=superadmin_headers)

        assert response.status_code == 422
        assert same.status_code == 200

    async def test_deactivation_revokes_tokens(self, client: AsyncClient, editor, editor_headers, superadmin_headers):
        response = await client.put(f"{USERS}/{editor.id}", json={"is_active": False}, headers=superadmin_headers)

        assert response.json()["is_active"] is False
        assert (await client.get("/api/v1/auth/me", headers=editor_headers)).status_code == 401


class TestDeleteUser:
    async def test_delete(self, client: AsyncClient, editor, superadmin_headers):
        response = await client.delete(f"{USERS}/{editor.id}", headers=superadmin_headers)

        assert response.status_code == 200
        assert (await client.get(f"{USERS}/{editor.id}", headers=superadmin_headers)).status_code == 404

    async def test_cannot_delete_self(self, client: AsyncClient, superadmin, superadmin_headers):
        response = await client.delete(f"{USERS}/{superadmin.id}", headers=superadmin_headers)

        assert response.status_code == 422
        assert response.json()["message"] == "You cannot delete your own account."
