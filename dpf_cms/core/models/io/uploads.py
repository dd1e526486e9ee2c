"""Upload I/O models."""

from __future__ import annotations

from pydantic import BaseModel


class UploadResult(BaseModel):
    path: str
    url: str
