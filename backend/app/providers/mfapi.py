"""Client for the public mfapi.in mutual fund NAV API."""

from __future__ import annotations

from typing import Any

import httpx

from app.config import get_settings


class MFAPIError(RuntimeError):
    """Raised when mfapi.in returns an error or an unusable payload."""

    def __init__(self, message: str, *, not_found: bool = False) -> None:
        super().__init__(message)
        self.not_found = not_found


class MFAPIClient:
    def __init__(
        self,
        *,
        base_url: str | None = None,
        timeout_seconds: float | None = None,
        client: Any | None = None,
    ) -> None:
        settings = get_settings()
        self.base_url = (base_url or settings.mfapi_base_url).rstrip("/")
        self.timeout = timeout_seconds or settings.provider_timeout_seconds
        self._client = client or httpx.AsyncClient()

    async def scheme(self, scheme_code: str) -> dict[str, Any]:
        """Return metadata and the full NAV history (newest-first) for a scheme."""

        url = f"{self.base_url}/{scheme_code}"
        try:
            response = await self._client.get(url, params={}, timeout=self.timeout)
        except httpx.HTTPError as exc:  # pragma: no cover - network failure handling
            raise MFAPIError(f"Failed to reach mfapi.in: {exc}") from exc
        if response.status_code >= 400:
            raise MFAPIError(
                f"mfapi.in error {response.status_code}",
                not_found=response.status_code == 404,
            )
        try:
            payload = response.json()
        except ValueError as exc:
            raise MFAPIError("mfapi.in returned invalid JSON payload") from exc
        if not isinstance(payload, dict) or not payload.get("data"):
            raise MFAPIError(f"No NAV data for scheme {scheme_code}", not_found=True)
        return payload

    async def aclose(self) -> None:
        await self._client.aclose()


async def get_mfapi_client():
    client = MFAPIClient()
    try:
        yield client
    finally:
        await client.aclose()


__all__ = ["MFAPIClient", "MFAPIError", "get_mfapi_client"]
