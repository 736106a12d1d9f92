from __future__ import annotations

from typing import Any

from sloreport.clients.base import BaseHTTPClient
from sloreport.config import DatadogSettings


class DatadogClient(BaseHTTPClient):
    """Datadog service level objectives API client."""

    def __init__(
        self,
        api_key: str,
        app_key: str,
        *,
        base_url: str = "https://api.datadoghq.com",
        timeout: float = 30.0,
    ) -> None:
        super().__init__(base_url, timeout=timeout)
        self._api_key = api_key
        self._app_key = app_key

    @classmethod
    def from_settings(cls, settings: DatadogSettings) -> DatadogClient:
        api_key, app_key = settings.require_credentials()
        return cls(
            api_key,
            app_key,
            base_url=settings.base_url,
            timeout=settings.http_timeout,
        )

    def _headers(self) -> dict[str, str]:
        headers = super()._headers()
        headers["DD-API-KEY"] = self._api_key
        headers["DD-APPLICATION-KEY"] = self._app_key
        return headers

    async def list_slos(
        self,
        *,
        limit: int,
        offset: int = 0,
        tags_query: str = "",
    ) -> dict[str, Any]:
        params: dict[str, Any] = {"limit": limit, "offset": offset}
        if tags_query:
            params["tags_query"] = tags_query
        return await self.get("/api/v1/slo", params=params)

    async def get_slo_history(
        self,
        slo_id: str,
        *,
        from_ts: int,
        to_ts: int,
        target: float | None = None,
    ) -> dict[str, Any]:
        params: dict[str, Any] = {"from_ts": from_ts, "to_ts": to_ts}
        if target is not None:
            params["target"] = target
        return await self.get(f"/api/v1/slo/{slo_id}/history", params=params)
