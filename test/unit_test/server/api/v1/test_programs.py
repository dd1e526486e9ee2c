"""
Unit tests for program management endpoints.

Covers creation with slug generation, listing filters and pagination, partial
updates, deletion rules and the admin-only status and highlight shortcuts.
"""

from decimal import Decimal

import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.asyncio

EDITOR_PROGRAMS = "/api/v1/editor/programs"
ADMIN_PROGRAMS = "/api/v1/admin/programs"


class TestCreateProgram:
    async def test_create_program_success(self, client: AsyncClient, editor_headers, program_payload):
        response = await client.post(EDITOR_PROGRAMS, json=program_payload, headers=editor_headers)

        assert response.status_code == 201
        data = response.json()
        assert data["title"] == "Clean Water for Villages"
        assert data["slug"] == "clean-water-for-villages"
        assert data["target_amount"] == 1000000
        assert data["collected_amount"] == 0
        assert data["is_highlight"] is False
        assert data["status"] == "active"

    async def test_create_then_fetch_returns_submitted_fields(self, client: AsyncClient, editor_headers, program_payload):
        created = (await client.post(EDITOR_PROGRAMS, json=program_payload, headers=editor_headers)).json()

        response = await client.get(f"{EDITOR_PROGRAMS}/{created['id']}", headers=editor_headers)

        assert response.status_code == 200
        data = response.json()
        for key in ("title", "category", "short_description", "description", "status"):
            assert data[key] == program_payload[key]

    async def test_duplicate_title_gets_suffixed_slug(self, client: AsyncClient, editor_headers, program_payload):
        await client.post(EDITOR_PROGRAMS, json=program_payload, headers=editor_headers)
        response = await client.post(EDITOR_PROGRAMS, json=program_payload, headers=editor_headers)

        assert response.status_code == 201
        assert response.json()["slug"] == "clean-water-for-villages-2"

    async def test_explicit_duplicate_slug_rejected(self, client: AsyncClient, editor_headers, program_payload):
        await client.post(EDITOR_PROGRAMS, json=program_payload, headers=editor_headers)
        response = await client.post(
            EDITOR_PROGRAMS, json={**program_payload, "slug": "clean-water-for-villages"}, headers=editor_headers
        )

        assert response.status_code == 422
        assert "slug" in response.json()["errors"]

    async def test_missing_required_fields(self, client: AsyncClient, editor_headers):
        response = await client.post(EDITOR_PROGRAMS, json={"title": "Only a title"}, headers=editor_headers)

        assert response.status_code == 422
        errors = response.json()["errors"]
        for field in ("category", "short_description", "description", "target_amount", "status"):
            assert field in errors

    async def test_negative_target_rejected(self, client: AsyncClient, editor_headers, program_payload):
        response = await client.post(
            EDITOR_PROGRAMS, json={**program_payload, "target_amount": -5}, headers=editor_headers
        )
        assert response.status_code == 422
        assert "target_amount" in response.json()["errors"]

    async def test_unknown_status_rejected(self, client: AsyncClient, editor_headers, program_payload):
        response = await client.post(EDITOR_PROGRAMS, json={**program_payload, "status": "paused"}, headers=editor_headers)
        assert response.status_code == 422


class TestListPrograms:
    async def _seed(self, client, headers, program_payload):
        for title, category, status in (
            ("Water One", "Health", "active"),
            ("Water Two", "Health", "draft"),
            ("School Books", "Education", "active"),
        ):
            await client.post(
                EDITOR_PROGRAMS,
                json={**program_payload, "title": title, "category": category, "status": status},
                headers=headers,
            )

    async def test_filters_narrow_results(self, client: AsyncClient, editor_headers, program_payload):
        await self._seed(client, editor_headers, program_payload)

        everything = (await client.get(EDITOR_PROGRAMS, headers=editor_headers)).json()
        health = (await client.get(EDITOR_PROGRAMS, params={"category": "Health"}, headers=editor_headers)).json()
        health_active = (
            await client.get(EDITOR_PROGRAMS, params={"category": "Health", "status": "active"}, headers=editor_headers)
        ).json()

        assert everything["total"] == 3
        assert health["total"] == 2
        assert health_active["total"] == 1
        assert health_active["data"][0]["title"] == "Water One"

    async def test_search_matches_title(self, client: AsyncClient, editor_headers, program_payload):
        await self._seed(client, editor_headers, program_payload)

        response = await client.get(EDITOR_PROGRAMS, params={"q": "water"}, headers=editor_headers)

        assert {p["title"] for p in response.json()["data"]} == {"Water One", "Water Two"}

    async def test_newest_first(self, client: AsyncClient, editor_headers, program_payload):
        await self._seed(client, editor_headers, program_payload)

        data = (await client.get(EDITOR_PROGRAMS, headers=editor_headers)).json()["data"]

        assert data[0]["title"] == "School Books"

    async def test_pagination_envelope(self, client: AsyncClient, editor_headers, program_payload):
        await self._seed(client, editor_headers, program_payload)

        first = (await client.get(EDITOR_PROGRAMS, params={"per_page": 2}, headers=editor_headers)).json()
        second = (await client.get(EDITOR_PROGRAMS, params={"per_page": 2, "page": 2}, headers=editor_headers)).json()

        assert first["total"] == second["total"] == 3
        assert first["last_page"] == 2
        assert first["from"] == 1 and first["to"] == 2
        assert second["from"] == 3 and second["to"] == 3
        ids = [p["id"] for p in first["data"]] + [p["id"] for p in second["data"]]
        assert len(set(ids)) == 3

    async def test_empty_listing(self, client: AsyncClient, editor_headers):
        data = (await client.get(EDITOR_PROGRAMS, headers=editor_headers)).json()
        assert data["data"] == []
        assert data["last_page"] == 1
        assert data["from"] is None


class TestUpdateProgram:
    async def test_partial_update_keeps_other_fields(self, client: AsyncClient, editor_headers, program_payload):
        created = (await client.post(EDITOR_PROGRAMS, json=program_payload, headers=editor_headers)).json()

        response = await client.put(
            f"{EDITOR_PROGRAMS}/{created['id']}", json={"category": "Water"}, headers=editor_headers
        )

        assert response.status_code == 200
        data = response.json()
        assert data["category"] == "Water"
        assert data["title"] == program_payload["title"]
        assert data["slug"] == created["slug"]

    async def test_null_required_field_is_ignored(self, client: AsyncClient, editor_headers, program_payload):
        created = (await client.post(EDITOR_PROGRAMS, json=program_payload, headers=editor_headers)).json()

        response = await client.put(f"{EDITOR_PROGRAMS}/{created['id']}", json={"title": None}, headers=editor_headers)

        assert response.status_code == 200
        assert response.json()["title"] == program_payload["title"]

    async def test_update_slug_to_taken_value(self, client: AsyncClient, editor_headers, program_payload):
        await client.post(EDITOR_PROGRAMS, json={**program_payload, "title": "Alpha"}, headers=editor_headers)
        beta = (await client.post(EDITOR_PROGRAMS, json={**program_payload, "title": "Beta"}, headers=editor_headers)).json()

        response = await client.put(f"{EDITOR_PROGRAMS}/{beta['id']}", json={"slug": "alpha"}, headers=editor_headers)

        assert response.status_code == 422
        assert "slug" in response.json()["errors"]

    async def test_update_missing_program(self, client: AsyncClient, editor_headers):
        response = await client.put(f"{EDITOR_PROGRAMS}/999", json={"title": "x"}, headers=editor_headers)
        assert response.status_code == 404


class TestDeleteProgram:
    async def test_delete_program(self, client: AsyncClient, editor_headers, program_payload):
        created = (await client.post(EDITOR_PROGRAMS, json=program_payload, headers=editor_headers)).json()

        response = await client.delete(f"{EDITOR_PROGRAMS}/{created['id']}", headers=editor_headers)

        assert response.status_code == 200
        assert (await client.get(f"{EDITOR_PROGRAMS}/{created['id']}", headers=editor_headers)).status_code == 404

    async def test_delete_program_with_donations_refused(self, client: AsyncClient, admin_headers, program_payload):
        program = (await client.post(ADMIN_PROGRAMS, json=program_payload, headers=admin_headers)).json()
        await client.post(
            "/api/v1/admin/donations/manual",
            json={
                "program_id": program["id"],
                "donor_name": "Budi",
                "amount": 50000,
                "is_anonymous": False,
                "payment_method": "transfer",
            },
            headers=admin_headers,
        )

        response = await client.delete(f"{ADMIN_PROGRAMS}/{program['id']}", headers=admin_headers)

        assert response.status_code == 422
        assert "message" in response.json()

    async def test_delete_program_detaches_articles(
        self, client: AsyncClient, editor_headers, program_payload, article_payload
    ):
        program = (await client.post(EDITOR_PROGRAMS, json=program_payload, headers=editor_headers)).json()
        article = (
            await client.post(
                "/api/v1/editor/articles", json={**article_payload, "program_id": program["id"]}, headers=editor_headers
            )
        ).json()

        await client.delete(f"{EDITOR_PROGRAMS}/{program['id']}", headers=editor_headers)

        response = await client.get(f"/api/v1/editor/articles/{article['id']}", headers=editor_headers)
        assert response.json()["program_id"] is None


class TestAdminShortcuts:
    async def test_set_status(self, client: AsyncClient, admin_headers, program_payload):
        created = (await client.post(ADMIN_PROGRAMS, json=program_payload, headers=admin_headers)).json()

        response = await client.patch(
            f"{ADMIN_PROGRAMS}/{created['id']}/status", json={"status": "archived"}, headers=admin_headers
        )

        assert response.status_code == 200
        assert response.json()["status"] == "archived"

    async def test_toggle_highlight(self, client: AsyncClient, admin_headers, program_payload):
        created = (await client.post(ADMIN_PROGRAMS, json=program_payload, headers=admin_headers)).json()

        first = await client.patch(f"{ADMIN_PROGRAMS}/{created['id']}/highlight", headers=admin_headers)
        second = await client.patch(f"{ADMIN_PROGRAMS}/{created['id']}/highlight", headers=admin_headers)

        assert first.json()["is_highlight"] is True
        assert second.json()["is_highlight"] is False

    async def test_editor_has_no_status_shortcut(self, client: AsyncClient, editor_headers, program_payload):
        created = (await client.post(EDITOR_PROGRAMS, json=program_payload, headers=editor_headers)).json()

        response = await client.patch(
            f"{EDITOR_PROGRAMS}/{created['id']}/status", json={"status": "archived"}, headers=editor_headers
        )

        assert response.status_code in (404, 405)
