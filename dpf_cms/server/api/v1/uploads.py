"""
Image upload endpoint used by the content editors.
"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile, status

from dpf_cms.core.logging_config import get_logger
from dpf_cms.core.models.io.uploads import UploadResult
from dpf_cms.server.core.config import settings
from dpf_cms.server.services.storage import IMAGE_EXTENSIONS, LocalStorage, get_storage, sanitize_folder

logger = get_logger(__name__)

router = APIRouter()


@router.post(
    "/image",
    response_model=UploadResult,
    status_code=status.HTTP_201_CREATED,
    summary="Upload Image",
    description="Store a jpg, jpeg, png or webp image (10 MB max) and return its storage path and public URL.",
    response_description="Stored path and URL.",
    responses={422: {"description": "Unsupported type, too large or invalid folder"}},
)
async def upload_image(
    file: UploadFile = File(..., description="Image file"),
    folder: Optional[str] = Form(default=None, description="Target folder, sanitized to letters, digits, - _ /"),
    storage: LocalStorage = Depends(get_storage),
) -> UploadResult:
    stored = await storage.save(file, sanitize_folder(folder), IMAGE_EXTENSIONS, settings.max_upload_kb)
    logger.info(f"Image uploaded to {stored.path}")
    return UploadResult(path=stored.path, url=stored.url)
