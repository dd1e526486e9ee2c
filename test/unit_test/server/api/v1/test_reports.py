"""
Unit tests for the donation report and its exports.
"""

from decimal import Decimal
from io import BytesIO

import pytest
import pytest_asyncio
from httpx import AsyncClient
from openpyxl import load_workbook

pytestmark = pytest.mark.asyncio

REPORT = "/api/v1/admin/reports/donations"


@pytest_asyncio.fixture
async def donations(client: AsyncClient, admin_headers, session):
    """One manual and one gateway donation."""
    from dpf_cms.core.database.entities.donations import Donation

    manual = await client.post(
        "/api/v1/admin/donations/manual",
        json={
            "donor_name": "Budi",
            "donor_email": "budi@example.org",
            "amount": 100000,
            "is_anonymous": False,
            "payment_method": "cash",
        },
        headers=admin_headers,
    )
    gateway = Donation(
        donation_code="DPF-20250101-0001",
        donor_name="Siti",
        donor_email="siti@example.org",
        amount=Decimal("250000"),
        payment_source="midtrans",
        payment_method="qris",
        status="pending",
    )
    session.add(gateway)
    await session.commit()
    return manual.json(), gateway


class TestReport:
    async def test_paginated_report_with_summary(self, client: AsyncClient, admin_headers, donations):
        response = await client.get(REPORT, headers=admin_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 2
        assert data["current_page"] == 1
        assert data["from"] == 1
        assert data["summary"] == {
            "total_count": 2,
            "total_amount": 350000.0,
            "manual_count": 1,
            "manual_amount": 100000.0,
            "midtrans_count": 1,
            "midtrans_amount": 250000.0,
        }

    async def test_all_rows_unpaginated(self, client: AsyncClient, admin_headers, donations):
        response = await client.get(REPORT, params={"all": "true", "per_page": 1}, headers=admin_headers)

        data = response.json()
        assert len(data["data"]) == 2
        assert data["total"] == 2
        assert "current_page" not in data

    async def test_filters_apply_to_summary(self, client: AsyncClient, admin_headers, donations):
        response = await client.get(REPORT, params={"payment_source": "MIDTRANS"}, headers=admin_headers)

        data = response.json()
        assert data["total"] == 1
        assert data["summary"]["total_count"] == 1
        assert data["summary"]["manual_count"] == 0

    async def test_search_matches_email(self, client: AsyncClient, admin_headers, donations):
        response = await client.get(REPORT, params={"q": "siti@example"}, headers=admin_headers)

        assert [row["donor_name"] for row in response.json()["data"]] == ["Siti"]

    async def test_blank_filters_are_ignored(self, client: AsyncClient, admin_headers, donations):
        response = await client.get(REPORT, params={"status": " ", "q": ""}, headers=admin_headers)

        assert response.json()["total"] == 2

    async def test_superadmin_can_read_report(self, client: AsyncClient, superadmin_headers, donations):
        response = await client.get("/api/v1/superadmin/reports/donations", headers=superadmin_headers)
        assert response.status_code == 200

    async def test_editor_cannot_read_report(self, client: AsyncClient, editor_headers):
        response = await client.get(REPORT, headers=editor_headers)
        assert response.status_code == 403


class TestExport:
    async def test_xlsx_export(self, client: AsyncClient, admin_headers, donations):
        response = await client.get(f"{REPORT}/export", params={"format": "excel"}, headers=admin_headers)

        assert response.status_code == 200
        assert response.headers["content-type"].startswith(
            "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
        )
        disposition = response.headers["content-disposition"]
        assert 'filename="donation-report-' in disposition
        assert disposition.endswith('.xlsx"')

        sheet = load_workbook(BytesIO(response.content)).active
        rows = list(sheet.iter_rows(values_only=True))
        assert rows[0][0] == "Donation Code"
        assert len(rows) == 3

    async def test_pdf_is_default(self, client: AsyncClient, admin_headers, donations):
        response = await client.get(f"{REPORT}/export", headers=admin_headers)

        assert response.status_code == 200
        assert response.headers["content-type"] == "application/pdf"
        assert response.content.startswith(b"%PDF")
        assert response.headers["content-disposition"].endswith('.pdf"')

    async def test_pdf_export_without_rows(self, client: AsyncClient, admin_headers):
        response = await client.get(f"{REPORT}/export", params={"format": "pdf"}, headers=admin_headers)

        assert response.status_code == 200
        assert response.content.startswith(b"%PDF")

    async def test_unsupported_format(self, client: AsyncClient, admin_headers):
        response = await client.get(f"{REPORT}/export", params={"format": "csv"}, headers=admin_headers)

        assert response.status_code == 400
        assert response.json()["message"] == "Unsupported export format."
