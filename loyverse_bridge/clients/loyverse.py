"""
Async client for the Loyverse receipts API.

Only the two receipt reads the bridge needs are implemented. Non-2xx
responses raise :class:`LoyverseAPIError`; there are no retries.
"""
from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import httpx
from fastapi import Depends, Request

from loyverse_bridge.config import Settings, get_settings
from loyverse_bridge.pipeline.formatter import iso_utc
from loyverse_bridge.schemas import LoyverseReceipt

logger = logging.getLogger(__name__)

EXPAND = "lines,payments"


class LoyverseAPIError(Exception):
    """Loyverse answered with a non-success status."""

    def __init__(self, status_code: int, message: str = ""):
        self.status_code = status_code
        self.message = message
        super().__init__(f"Loyverse API error {status_code}: {message}")

    @property
    def not_found(self) -> bool:
        return self.status_code == 404


class LoyverseClient:
    """Thin wrapper over a shared ``httpx.AsyncClient`` with bearer auth."""

    def __init__(
        self,
        http: httpx.AsyncClient,
        token: str,
        *,
        base_url: str = "https://api.loyverse.com/v1.0",
        page_limit: int = 250,
    ) -> None:
        self.http = http
        self.base = base_url.rstrip("/")
        self.page_limit = int(page_limit)
        self.headers = {
            "Authorization": f"Bearer {token}",
            "Accept": "application/json",
        }

    def _url(self, path: str) -> str:
        return f"{self.base}{path}"

    async def _get(self, path: str, params: Dict[str, Any]) -> Any:
        r = await self.http.get(self._url(path), params=params, headers=self.headers)
        if r.is_error:
            logger.warning("Loyverse GET %s -> %d", path, r.status_code)
            raise LoyverseAPIError(r.status_code, r.text[:500])
        return r.json()

    async def get_receipt(self, receipt_number: str) -> LoyverseReceipt:
        """``GET /receipts/{receipt_number}`` with lines and payments expanded."""
        path = f"/receipts/{quote(str(receipt_number), safe='')}"
        data = await self._get(path, {"expand": EXPAND})
        return LoyverseReceipt.model_validate(data)

    async def list_receipts(
        self,
        created_at_min: Optional[datetime] = None,
        created_at_max: Optional[datetime] = None,
    ) -> List[LoyverseReceipt]:
        """First page of receipts created within the given bounds."""
        params: Dict[str, Any] = {"expand": EXPAND, "limit": self.page_limit}
        if created_at_min is not None:
            params["created_at_min"] = iso_utc(created_at_min)
        if created_at_max is not None:
            params["created_at_max"] = iso_utc(created_at_max)

        data = await self._get("/receipts", params)
        receipts = (data or {}).get("receipts") or []
        if (data or {}).get("cursor"):
            logger.info("More than %d receipts in range; returning first page only", self.page_limit)
        return [LoyverseReceipt.model_validate(r) for r in receipts]


def get_loyverse_client(
    request: Request,
    settings: Settings = Depends(get_settings),
) -> LoyverseClient:
    """Client dependency bound to the app-wide ``httpx.AsyncClient``."""
    return LoyverseClient(
        request.app.state.http_client,
        settings.LOYVERSE_ACCESS_TOKEN,
        base_url=settings.LOYVERSE_API_URL,
        page_limit=settings.LOYVERSE_PAGE_LIMIT,
    )
