"""Shared payload builders and fakes for the test suite."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from sloreport.core.errors import TransportError

FIXED_NOW = datetime(2024, 3, 1, 12, 0, 0, tzinfo=timezone.utc)


def slo_payload(slo_id: str, name: str | None = None, timeframes=("7d",), target=99.9):
    return {
        "id": slo_id,
        "name": name or f"SLO {slo_id}",
        "type": "metric",
        "tags": ["team:ninja"],
        "thresholds": [{"timeframe": tf, "target": target} for tf in timeframes],
    }


def history_payload(sli_value: float = 99.95, remaining: float = 40.0) -> dict[str, Any]:
    return {
        "data": {
            "overall": {
                "sli_value": sli_value,
                "error_budget_remaining": {"custom": remaining},
                "errors": None,
            }
        },
        "errors": None,
    }


class FakeDatadogClient:
    """In-memory stand-in for DatadogClient."""

    def __init__(
        self,
        slos: list[dict[str, Any]] | None = None,
        *,
        total: int | None = None,
        histories: dict[str, Any] | None = None,
        list_failure_at: int | None = None,
        pages: list[dict[str, Any]] | None = None,
    ) -> None:
        self.slos = slos or []
        self.total = len(self.slos) if total is None else total
        self.histories = histories or {}
        self.list_failure_at = list_failure_at
        self.pages = pages
        self.list_calls: list[dict[str, Any]] = []
        self.history_calls: list[dict[str, Any]] = []

    async def list_slos(self, *, limit: int, offset: int = 0, tags_query: str = "") -> dict[str, Any]:
        self.list_calls.append({"limit": limit, "offset": offset, "tags_query": tags_query})
        if self.list_failure_at is not None and len(self.list_calls) > self.list_failure_at:
            raise TransportError("HTTP 500: boom")
        if self.pages is not None:
            return self.pages[len(self.list_calls) - 1]
        return {
            "data": self.slos[offset : offset + limit],
            "metadata": {"page": {"total_count": self.total}},
        }

    async def get_slo_history(
        self, slo_id: str, *, from_ts: int, to_ts: int, target: float | None = None
    ) -> dict[str, Any]:
        self.history_calls.append(
            {"slo_id": slo_id, "from_ts": from_ts, "to_ts": to_ts, "target": target}
        )
        result = self.histories.get(slo_id, history_payload())
        if isinstance(result, Exception):
            raise result
        return result


class RecordingSleep:
    def __init__(self) -> None:
        self.calls: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)
