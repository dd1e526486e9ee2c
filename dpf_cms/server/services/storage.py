"""
Local file storage for uploaded images and task attachments.

Files are written below ``settings.storage_root`` and served by the
application under ``settings.storage_public_url``. Stored names are random;
the original file name is only kept as metadata by callers.
"""

from __future__ import annotations

import re
import secrets
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import Iterable, Optional

from fastapi import UploadFile

from dpf_cms.core.logging_config import get_logger
from dpf_cms.server.core.config import settings
from dpf_cms.server.exception_handlers.errors import ValidationFailed

logger = get_logger(__name__)

IMAGE_EXTENSIONS = ("jpg", "jpeg", "png", "webp")
ATTACHMENT_EXTENSIONS = ("pdf", "doc", "docx", "xls", "xlsx", "png", "jpg", "jpeg", "zip")

DEFAULT_FOLDER = "uploads"
MAX_FOLDER_LENGTH = 64
_FOLDER_DISALLOWED = re.compile(r"[^a-zA-Z0-9\-_/]")


def sanitize_folder(folder: Optional[str]) -> str:
    """Reduce ``folder`` to letters, digits, ``-``, ``_`` and ``/``; blank becomes ``uploads``.

    >>> sanitize_folder(" programs/../x ")
    'programs//x'
    >>> sanitize_folder("")
    'uploads'
    """
    value = (folder or "").strip()
    if len(value) > MAX_FOLDER_LENGTH:
        raise ValidationFailed.single("folder", f"The folder may not be greater than {MAX_FOLDER_LENGTH} characters.")
    value = _FOLDER_DISALLOWED.sub("", value).strip("/")
    return value or DEFAULT_FOLDER


def extension_of(filename: Optional[str]) -> str:
    return PurePosixPath(filename or "").suffix.lstrip(".").lower()


@dataclass(frozen=True)
class StoredFile:
    path: str
    url: str
    original_name: str
    mime_type: Optional[str]
    size: int


class LocalStorage:
    """Filesystem-backed public disk."""

    def __init__(self, root_dir: str, public_url: str) -> None:
        self.root = Path(root_dir)
        self.public_url = public_url.rstrip("/")

    def url(self, path: str) -> str:
        return f"{self.public_url}/{path.lstrip('/')}"

    def absolute(self, path: str) -> Path:
        resolved = (self.root / path).resolve()
        if self.root.resolve() not in resolved.parents:
            raise ValueError(f"Path escapes storage root: {path}")
        return resolved

    async def save(
        self,
        upload: UploadFile,
        folder: str,
        allowed_extensions: Iterable[str],
        max_kb: int,
        field: str = "file",
    ) -> StoredFile:
        """Validate and store one upload.

        Args:
            upload: Incoming multipart file
            folder: Sanitized target folder relative to the storage root
            allowed_extensions: Accepted lowercase extensions
            max_kb: Size limit in kilobytes
            field: Field name reported in validation errors

        Returns:
            StoredFile describing the saved file
        """
        allowed = tuple(allowed_extensions)
        extension = extension_of(upload.filename)
        if extension not in allowed:
            raise ValidationFailed.single(field, f"The {field} must be a file of type: {', '.join(allowed)}.")

        content = await upload.read()
        if len(content) > max_kb * 1024:
            raise ValidationFailed.single(field, f"The {field} may not be greater than {max_kb} kilobytes.")

        relative = f"{folder}/{secrets.token_hex(20)}.{extension}"
        target = self.absolute(relative)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(content)
        logger.debug(f"Stored upload {upload.filename!r} as {relative} ({len(content)} bytes)")
        return StoredFile(
            path=relative,
            url=self.url(relative),
            original_name=upload.filename or relative.rsplit("/", 1)[-1],
            mime_type=upload.content_type,
            size=len(content),
        )

    def delete(self, path: Optional[str]) -> bool:
        """Remove a stored file; missing files and paths outside the root are ignored."""
        if not path:
            return False
        try:
            target = self.absolute(path)
        except ValueError:
            logger.warning(f"Refusing to delete path outside storage root: {path}")
            return False
        if not target.is_file():
            return False
        target.unlink()
        return True


def get_storage() -> LocalStorage:
    """Dependency returning the storage configured in settings."""
    config = settings.storage
    return LocalStorage(config.root_dir, config.public_url)
