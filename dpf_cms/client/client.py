"""DPF CMS API client

Overview
--------
Thin async HTTP client for the CMS backoffice API. A client is bound to a
base URL and, after ``login`` (or with a token passed in), sends
``Authorization: Bearer <token>`` on every request.

Resources are addressed by their path below ``/api/v1``, for example
``"admin/programs"`` or ``"editor/tags"``; ``list``, ``get``, ``create``,
``update`` and ``delete`` map to the usual REST verbs on that path.

Errors
------
Non-2xx responses raise ``CmsApiError`` with the status code, the JSON body
and the flattened validation messages.

Usage
-----
>>> async with CmsApiClient("http://localhost:8000") as client:  # doctest: +SKIP
...     await client.login("admin@example.org", "secret123")
...     page = await client.list("admin/programs", status="active")
...     result = await client.bulk_delete("admin/tags", [3, 4, 5])
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, Optional

import httpx

from dpf_cms.core.logging_config import get_logger

from .bulk import BulkRunResult, run_with_concurrency
from .errors import CmsApiError

logger = get_logger(__name__)

API_PREFIX = "/api/v1"


class CmsApiClient:
    """Async client for the CMS REST API.

    Args:
        base_url: Server origin, e.g. ``http://localhost:8000``.
        token: Optional bearer token from an earlier login.
        timeout: Default HTTP timeout for the internal client.
        client: Optional preconfigured ``httpx.AsyncClient`` (tests pass one with a mock transport).
    """

    def __init__(
        self,
        base_url: str,
        *,
        token: Optional[str] = None,
        timeout: float = 15.0,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.token = token
        self._client = client or httpx.AsyncClient(timeout=timeout, follow_redirects=True)

    async def __aenter__(self) -> "CmsApiClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    def _url(self, path: str) -> str:
        return f"{self.base_url}{API_PREFIX}/{path.strip('/')}"

    def _headers(self) -> Dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    async def request(self, method: str, path: str, **kwargs: Any) -> Any:
        """Send a request and return the decoded JSON body.

        Raises:
            CmsApiError: When the transport fails or the response status is non-2xx.
        """
        try:
            response = await self._client.request(method, self._url(path), headers=self._headers(), **kwargs)
        except httpx.HTTPError as e:
            raise CmsApiError(f"{method} {path} failed: {e}") from e

        if response.is_error:
            try:
                details: Any = response.json()
            except ValueError:
                details = response.text
            message = details.get("message") if isinstance(details, dict) else None
            logger.debug(f"{method} {path} -> {response.status_code}")
            raise CmsApiError(
                message or f"{method} {path} failed: {response.status_code}",
                status_code=response.status_code,
                details=details,
            )
        if not response.content:
            return None
        return response.json()

    async def login(self, email: str, password: str) -> Dict[str, Any]:
        """Authenticate and keep the returned token for subsequent calls."""
        payload = await self.request("POST", "auth/login", json={"email": email, "password": password})
        self.token = payload["token"]
        return payload["user"]

    async def list(self, resource: str, **params: Any) -> Any:
        clean = {k: v for k, v in params.items() if v is not None and v != ""}
        return await self.request("GET", resource, params=clean)

    async def get(self, resource: str, item_id: int) -> Dict[str, Any]:
        return await self.request("GET", f"{resource}/{item_id}")

    async def create(self, resource: str, data: Dict[str, Any]) -> Dict[str, Any]:
        return await self.request("POST", resource, json=data)

    async def update(self, resource: str, item_id: int, data: Dict[str, Any]) -> Dict[str, Any]:
        return await self.request("PUT", f"{resource}/{item_id}", json=data)

    async def delete(self, resource: str, item_id: int) -> Any:
        return await self.request("DELETE", f"{resource}/{item_id}")

    async def bulk_delete(self, resource: str, ids: Iterable[int], concurrency: int = 4) -> BulkRunResult:
        """Delete many items with at most ``concurrency`` requests in flight."""

        async def worker(item_id: int) -> None:
            await self.delete(resource, item_id)

        result = await run_with_concurrency(list(ids), concurrency, worker)
        if result.failed:
            logger.info(f"Bulk delete on {resource}: {len(result.succeeded)} ok, {len(result.failed)} failed")
        return result
