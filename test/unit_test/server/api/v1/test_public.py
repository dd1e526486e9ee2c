"""
Unit tests for the unauthenticated public site endpoints.
"""

import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.asyncio


@pytest.fixture
def donate(client: AsyncClient, admin_headers):
    async def _donate(program_id, amount, **fields):
        payload = {
            "program_id": program_id,
            "donor_name": "Budi",
            "amount": amount,
            "is_anonymous": False,
            "payment_method": "transfer",
            **fields,
        }
        return (await client.post("/api/v1/admin/donations/manual", json=payload, headers=admin_headers)).json()

    return _donate


async def test_ping(client: AsyncClient):
    response = await client.get("/api/v1/ping")
    assert response.json() == {"message": "pong"}


class TestPublicArticles:
    async def test_only_published_articles(self, client: AsyncClient, admin_headers, article_payload):
        await client.post("/api/v1/admin/articles", json=article_payload, headers=admin_headers)
        await client.post(
            "/api/v1/admin/articles",
            json={**article_payload, "title": "Live story", "status": "published"},
            headers=admin_headers,
        )

        response = await client.get("/api/v1/articles")

        assert response.status_code == 200
        assert [a["title"] for a in response.json()["data"]] == ["Live story"]
        assert response.json()["per_page"] == 12

    async def test_article_detail_with_related(self, client: AsyncClient, admin_headers, article_payload):
        for title in ("Live story", "Another story"):
            await client.post(
                "/api/v1/admin/articles",
                json={**article_payload, "title": title, "status": "published"},
                headers=admin_headers,
            )

        response = await client.get("/api/v1/articles/live-story")

        assert response.status_code == 200
        data = response.json()
        assert data["article"]["slug"] == "live-story"
        assert [a["title"] for a in data["related"]] == ["Another story"]

    async def test_draft_article_is_hidden(self, client: AsyncClient, admin_headers, article_payload):
        draft = (await client.post("/api/v1/admin/articles", json=article_payload, headers=admin_headers)).json()

        response = await client.get(f"/api/v1/articles/{draft['slug']}")

        assert response.status_code == 404


class TestPublicPrograms:
    async def test_program_detail(self, client: AsyncClient, admin_headers, program_payload, article_payload, donate):
        program = (await client.post("/api/v1/admin/programs", json=program_payload, headers=admin_headers)).json()
        await donate(program["id"], 250000)
        await donate(program["id"], 50000, is_anonymous=True, donor_name="Secret")
        await client.post(
            "/api/v1/admin/articles",
            json={**article_payload, "program_id": program["id"], "status": "published"},
            headers=admin_headers,
        )

        response = await client.get(f"/api/v1/programs/{program['slug']}")

        assert response.status_code == 200
        data = response.json()
        assert data["program"]["collected_amount"] == 300000
        assert data["progress_percent"] == 30.0
        assert {d["donor_name"] for d in data["recent_donations"]} == {"Budi", "Hamba Allah"}
        assert len(data["latest_updates"]) == 1

    async def test_archived_program_is_hidden(self, client: AsyncClient, admin_headers, program_payload):
        program = (
            await client.post("/api/v1/admin/programs", json={**program_payload, "status": "archived"}, headers=admin_headers)
        ).json()

        listing = await client.get("/api/v1/programs")
        detail = await client.get(f"/api/v1/programs/{program['slug']}")

        assert listing.json()["total"] == 0
        assert detail.status_code == 404

    async def test_highlighted_first(self, client: AsyncClient, admin_headers, program_payload):
        await client.post("/api/v1/admin/programs", json={**program_payload, "title": "Plain"}, headers=admin_headers)
        await client.post(
            "/api/v1/admin/programs",
            json={**program_payload, "title": "Starred", "is_highlight": True},
            headers=admin_headers,
        )

        everything = (await client.get("/api/v1/programs")).json()
        highlighted = (await client.get("/api/v1/programs", params={"highlight": "true"})).json()

        assert [p["title"] for p in everything["data"]] == ["Starred", "Plain"]
        assert [p["title"] for p in highlighted["data"]] == ["Starred"]


async def test_donation_summary_counts_paid_general_donations(client: AsyncClient, admin_headers, program_payload, donate):
    program = (await client.post("/api/v1/admin/programs", json=program_payload, headers=admin_headers)).json()
    await donate(program["id"], 100000)
    await donate(None, 1000)
    await donate(None, 2500)
    pending = await donate(None, 40000)
    await client.patch(
        f"/api/v1/admin/donations/{pending['id']}/status", json={"status": "pending"}, headers=admin_headers
    )

    response = await client.get("/api/v1/donations/summary")

    assert response.json() == {"general": {"count": 2, "amount": 3500.0}}


async def test_donation_summary_empty(client: AsyncClient):
    response = await client.get("/api/v1/donations/summary")

    assert response.json() == {"general": {"count": 0, "amount": 0.0}}


class TestHome:
    async def test_home_payload(self, client: AsyncClient, admin_headers, program_payload, donate):
        program = (await client.post("/api/v1/admin/programs", json=program_payload, headers=admin_headers)).json()
        await donate(program["id"], 100000)

        response = await client.get("/api/v1/home")

        data = response.json()
        assert [p["title"] for p in data["highlights"]] == [program_payload["title"]]
        assert data["latest_articles"] == []
        assert data["stats"] == {"total_programs": 1, "total_donations": 1, "amount_collected": 100000.0}

    async def test_latest_articles_fall_back_to_any_status(self, client: AsyncClient, admin_headers, article_payload):
        for title in ("First draft", "Second draft"):
            await client.post("/api/v1/admin/articles", json={**article_payload, "title": title}, headers=admin_headers)

        data = (await client.get("/api/v1/home")).json()

        assert {a["title"] for a in data["latest_articles"]} == {"First draft", "Second draft"}

    async def test_published_articles_take_precedence(self, client: AsyncClient, admin_headers, article_payload):
        await client.post("/api/v1/admin/articles", json=article_payload, headers=admin_headers)
        await client.post(
            "/api/v1/admin/articles",
            json={**article_payload, "title": "Live story", "status": "published"},
            headers=admin_headers,
        )

        data = (await client.get("/api/v1/home")).json()

        assert [a["title"] for a in data["latest_articles"]] == ["Live story"]


class TestDonationConfirmation:
    @pytest.fixture
    def form(self):
        return {
            "donor_name": "Siti",
            "donor_phone": "08123456789",
            "donor_email": "siti@example.org",
            "amount": "150000",
            "bank_destination": "BSI 7001234567",
            "purpose": "Donasi umum",
            "notes": "Transfer pagi",
        }

    async def test_confirmation_is_pending_until_approved(
        self, client: AsyncClient, admin_headers, program_payload, form
    ):
        program = (await client.post("/api/v1/admin/programs", json=program_payload, headers=admin_headers)).json()

        response = await client.post("/api/v1/donations/confirm", data={**form, "program_id": str(program["id"])})

        assert response.status_code == 201
        body = response.json()
        assert body["message"] == "Konfirmasi donasi diterima. Tim akan memverifikasi."
        donation = body["donation"]
        assert donation["status"] == "pending"
        assert donation["payment_source"] == "manual"
        assert donation["payment_method"] == "transfer"
        assert donation["payment_channel"] == "BSI 7001234567"
        assert donation["notes"] == "Tujuan: Donasi umum | Transfer pagi"
        assert donation["is_anonymous"] is False
        assert donation["manual_proof_path"] is None
        assert donation["donation_code"].startswith("DPF-")
        detail = (await client.get(f"/api/v1/admin/programs/{program['id']}", headers=admin_headers)).json()
        assert detail["collected_amount"] == 0

        approved = await client.patch(
            f"/api/v1/admin/donations/{donation['id']}/status", json={"status": "paid"}, headers=admin_headers
        )

        assert approved.status_code == 200
        assert approved.json()["status"] == "paid"
        assert approved.json()["paid_at"] is not None
        detail = (await client.get(f"/api/v1/admin/programs/{program['id']}", headers=admin_headers)).json()
        assert detail["collected_amount"] == 150000

    async def test_general_confirmation_with_proof(self, client: AsyncClient, storage, form):
        response = await client.post(
            "/api/v1/donations/confirm",
            data={**form, "notes": ""},
            files={"proof": ("receipt.pdf", b"%PDF-1.4 receipt", "application/pdf")},
        )

        assert response.status_code == 201
        donation = response.json()["donation"]
        assert donation["program_id"] is None
        assert donation["notes"] == "Tujuan: Donasi umum"
        assert donation["manual_proof_path"].startswith("donation-proofs/")
        assert storage.absolute(donation["manual_proof_path"]).read_bytes() == b"%PDF-1.4 receipt"

    async def test_codes_follow_the_daily_sequence(self, client: AsyncClient, form):
        first = (await client.post("/api/v1/donations/confirm", data=form)).json()["donation"]
        second = (await client.post("/api/v1/donations/confirm", data=form)).json()["donation"]

        assert int(second["donation_code"][-4:]) == int(first["donation_code"][-4:]) + 1

    async def test_amount_below_minimum(self, client: AsyncClient, form):
        response = await client.post("/api/v1/donations/confirm", data={**form, "amount": "999"})

        assert response.status_code == 422
        assert "amount" in response.json()["errors"]

    async def test_required_fields(self, client: AsyncClient):
        response = await client.post("/api/v1/donations/confirm", data={"donor_email": ""})

        assert response.status_code == 422
        assert set(response.json()["errors"]) == {"donor_name", "donor_phone", "amount", "bank_destination", "purpose"}

    async def test_unknown_program(self, client: AsyncClient, form):
        response = await client.post("/api/v1/donations/confirm", data={**form, "program_id": "999"})

        assert response.status_code == 422
        assert response.json()["errors"] == {"program_id": ["The selected program id is invalid."]}

    async def test_proof_type_is_checked(self, client: AsyncClient, form):
        response = await client.post(
            "/api/v1/donations/confirm",
            data=form,
            files={"proof": ("receipt.webp", b"img", "image/webp")},
        )

        assert response.status_code == 422
        assert "proof" in response.json()["errors"]


async def test_display_lists(client: AsyncClient, admin_headers):
    await client.post("/api/v1/admin/tags", json={"name": "Zakat", "url": "/zakat", "is_active": False}, headers=admin_headers)
    await client.post("/api/v1/admin/tags", json={"name": "Infaq", "url": "/infaq"}, headers=admin_headers)

    tags = (await client.get("/api/v1/tags")).json()
    banners = (await client.get("/api/v1/banners")).json()
    organization = (await client.get("/api/v1/organization")).json()

    assert [t["name"] for t in tags] == ["Infaq"]
    assert banners == []
    assert organization == []
