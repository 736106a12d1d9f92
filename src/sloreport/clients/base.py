from __future__ import annotations

from typing import Any

import httpx
import structlog

from sloreport.core.errors import TransportError

logger = structlog.get_logger()

DEFAULT_USER_AGENT = "sloreport/0.1.0"


def _error_text(response: httpx.Response) -> str:
    """Best-effort error text from a failed response body."""
    try:
        body = response.json()
    except ValueError:
        return response.text
    if isinstance(body, dict):
        errors = body.get("errors")
        if isinstance(errors, list):
            messages = [str(e) for e in errors if e]
            if messages:
                return "; ".join(messages)
    return response.text


class BaseHTTPClient:
    """Base HTTP client. Requests are attempted once; failures raise TransportError."""

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 30.0,
        user_agent: str = DEFAULT_USER_AGENT,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._user_agent = user_agent

    def _headers(self) -> dict[str, str]:
        """Override to provide custom headers."""
        return {"Accept": "application/json", "User-Agent": self._user_agent}

    async def _request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Execute a single HTTP request and decode the JSON body."""
        url = f"{self._base_url}{path}"

        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                response = await client.request(
                    method,
                    url,
                    params=params,
                    headers=self._headers(),
                )
                response.raise_for_status()
                return response.json() if response.content else {}

        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            logger.warning("http_status_error", status=status, method=method, url=url)
            raise TransportError(
                f"HTTP {status}: {_error_text(exc.response)}",
                details={"status": status},
            ) from exc
        except httpx.HTTPError as exc:
            logger.warning("http_network_error", method=method, url=url, error=str(exc))
            raise TransportError(str(exc) or type(exc).__name__) from exc
        except ValueError as exc:
            logger.warning("http_invalid_json", method=method, url=url, error=str(exc))
            raise TransportError(f"invalid JSON response: {exc}") from exc

    async def get(
        self,
        path: str,
        *,
        params: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Execute GET request."""
        return await self._request("GET", path, params=params)
