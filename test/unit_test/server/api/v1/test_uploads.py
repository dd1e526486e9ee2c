"""
Unit tests for the image upload endpoint.
"""

import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.asyncio

UPLOAD = "/api/v1/editor/uploads/image"

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64


async def test_upload_image_into_folder(client: AsyncClient, editor_headers, storage):
    response = await client.post(
        UPLOAD,
        files={"file": ("cover.png", PNG_BYTES, "image/png")},
        data={"folder": "programs"},
        headers=editor_headers,
    )

    assert response.status_code == 201
    data = response.json()
    assert data["path"].startswith("programs/")
    assert data["path"].endswith(".png")
    assert data["url"] == f"/storage/{data['path']}"
    assert storage.absolute(data["path"]).read_bytes() == PNG_BYTES


async def test_upload_defaults_to_uploads_folder(client: AsyncClient, editor_headers):
    response = await client.post(
        UPLOAD, files={"file": ("cover.jpg", b"jpeg-bytes", "image/jpeg")}, headers=editor_headers
    )

    assert response.status_code == 201
    assert response.json()["path"].startswith("uploads/")


async def test_upload_sanitizes_folder(client: AsyncClient, editor_headers):
    response = await client.post(
        UPLOAD,
        files={"file": ("cover.webp", b"webp-bytes", "image/webp")},
        data={"folder": "../../etc"},
        headers=editor_headers,
    )

    assert response.status_code == 201
    assert ".." not in response.json()["path"]


async def test_upload_rejects_other_types(client: AsyncClient, editor_headers):
    response = await client.post(
        UPLOAD, files={"file": ("notes.pdf", b"%PDF-1.4", "application/pdf")}, headers=editor_headers
    )

    assert response.status_code == 422
    assert "file" in response.json()["errors"]


async def test_upload_rejects_long_folder(client: AsyncClient, editor_headers):
    response = await client.post(
        UPLOAD,
        files={"file": ("cover.png", PNG_BYTES, "image/png")},
        data={"folder": "x" * 65},
        headers=editor_headers,
    )

    assert response.status_code == 422
    assert "folder" in response.json()["errors"]


async def test_upload_requires_file(client: AsyncClient, editor_headers):
    response = await client.post(UPLOAD, data={"folder": "programs"}, headers=editor_headers)
    assert response.status_code == 422


async def test_upload_is_editor_area_only(client: AsyncClient):
    response = await client.post(UPLOAD, files={"file": ("cover.png", PNG_BYTES, "image/png")})
    assert response.status_code == 401
