"""Yahoo Finance client used for NSE/BSE quotes and price history."""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import quote

import httpx

from app.config import get_settings

logger = logging.getLogger(__name__)

_HEADERS = {"User-Agent": "Mozilla/5.0 (compatible; nivesh-advisor/0.1)"}
SUMMARY_MODULES = "price,summaryDetail,defaultKeyStatistics"


class YahooFinanceError(RuntimeError):
    """Raised when Yahoo Finance cannot be reached or rejects the request."""

    def __init__(self, message: str, *, not_found: bool = False) -> None:
        super().__init__(message)
        self.not_found = not_found


class YahooFinanceClient:
    """Thin async wrapper around the chart and quoteSummary endpoints."""

    def __init__(
        self,
        *,
        chart_base_url: str | None = None,
        summary_base_url: str | None = None,
        timeout_seconds: float | None = None,
        client: Any | None = None,
    ) -> None:
        settings = get_settings()
        self.chart_base_url = (chart_base_url or settings.yahoo_chart_base_url).rstrip("/")
        self.summary_base_url = (summary_base_url or settings.yahoo_summary_base_url).rstrip("/")
        self.timeout = timeout_seconds or settings.provider_timeout_seconds
        self._client = client or httpx.AsyncClient(headers=_HEADERS)

    async def _get(self, url: str, params: dict[str, Any]) -> dict[str, Any]:
        try:
            response = await self._client.get(url, params=params, timeout=self.timeout)
        except httpx.HTTPError as exc:  # pragma: no cover - network failure handling
            raise YahooFinanceError(f"Failed to reach Yahoo Finance: {exc}") from exc
        if response.status_code == 404:
            raise YahooFinanceError("Symbol not found", not_found=True)
        if response.status_code >= 400:
            raise YahooFinanceError(f"Yahoo Finance error {response.status_code}")
        try:
            return response.json()
        except ValueError as exc:
            raise YahooFinanceError("Yahoo Finance returned invalid JSON payload") from exc

    async def chart(self, symbol: str, *, range_: str = "1y", interval: str = "1d") -> dict[str, Any]:
        """Return the raw chart payload with daily bars for ``symbol``."""

        url = f"{self.chart_base_url}/{quote(symbol, safe='')}"
        return await self._get(url, {"interval": interval, "range": range_})

    async def quote_summary(self, symbol: str) -> dict[str, Any] | None:
        """Return fundamentals, or ``None`` when the summary endpoint is unavailable.

        Fundamentals are optional for scoring, so a failure here is logged and
        the caller falls back to zeroed PE/EPS/market cap.
        """

        url = f"{self.summary_base_url}/{quote(symbol, safe='')}"
        try:
            return await self._get(url, {"modules": SUMMARY_MODULES})
        except YahooFinanceError as exc:
            logger.warning("Quote summary unavailable for %s: %s", symbol, exc)
            return None

    async def aclose(self) -> None:
        await self._client.aclose()


async def get_yahoo_client():
    """FastAPI dependency yielding a client that is closed after the request."""

    client = YahooFinanceClient()
    try:
        yield client
    finally:
        await client.aclose()


__all__ = ["YahooFinanceClient", "YahooFinanceError", "get_yahoo_client"]
