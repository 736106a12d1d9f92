"""
SLO history fetching.

Queries the history endpoint for one SLO threshold over an explicit window
and validates the response before extracting the overall compliance and
remaining error budget.
"""

from __future__ import annotations

from typing import Any, Protocol

import structlog

from sloreport.core.errors import (
    EmptyResponse,
    MissingErrorBudget,
    MissingOverallSection,
    RemoteError,
)
from sloreport.slos.models import SLO, HistoryRecord, Threshold, TimeWindow

logger = structlog.get_logger()

# Datadog keys error_budget_remaining by timeframe; an explicit from/to
# always lands in the "custom" bucket.
CUSTOM_BUDGET_BUCKET = "custom"


class SLOHistoryClient(Protocol):
    async def get_slo_history(
        self,
        slo_id: str,
        *,
        from_ts: int,
        to_ts: int,
        target: float | None = None,
    ) -> dict[str, Any]: ...


def _first_message(errors: Any, key: str) -> str | None:
    if isinstance(errors, str):
        return errors or None
    if not isinstance(errors, list):
        return None
    for entry in errors:
        if isinstance(entry, dict):
            message = entry.get(key)
        else:
            message = entry
        if message:
            return str(message)
    return None


class HistoryFetcher:
    """Fetches and validates SLO history for a single threshold."""

    def __init__(self, client: SLOHistoryClient) -> None:
        self.client = client

    async def fetch(self, slo: SLO, threshold: Threshold, window: TimeWindow) -> HistoryRecord:
        """
        Fetch history for ``threshold`` of ``slo`` over ``window``.

        Raises:
            TransportError: If the request fails
            RemoteError: If the response or its overall section reports an error
            EmptyResponse: If the response has no data
            MissingOverallSection: If the data has no overall summary
            MissingErrorBudget: If the custom error budget bucket is absent
        """
        response = await self.client.get_slo_history(
            slo.id,
            from_ts=window.from_ts,
            to_ts=window.to_ts,
            target=threshold.target,
        )
        details = {"slo_id": slo.id, "timeframe": threshold.timeframe}
        if not isinstance(response, dict):
            raise EmptyResponse("no history data received", details=details)

        message = _first_message(response.get("errors"), "error")
        if message:
            raise RemoteError(message, details=details)

        data = response.get("data")
        if not data or not isinstance(data, dict):
            raise EmptyResponse("no history data received", details=details)

        overall = data.get("overall")
        if not overall or not isinstance(overall, dict):
            raise MissingOverallSection("no overall history received", details=details)

        message = _first_message(overall.get("errors"), "error_message")
        if message:
            raise RemoteError(message, details=details)

        budgets = overall.get("error_budget_remaining")
        remaining = budgets.get(CUSTOM_BUDGET_BUCKET) if isinstance(budgets, dict) else None
        if remaining is None:
            logger.warning("error_budget_remaining_missing", **details)
            raise MissingErrorBudget("unable to get error budget remaining", details=details)

        sli_value = overall.get("sli_value")
        try:
            return HistoryRecord(
                sli_value=float(sli_value) if sli_value is not None else 0.0,
                error_budget_remaining=float(remaining),
            )
        except (TypeError, ValueError) as exc:
            raise RemoteError(f"malformed history values: {exc}", details=details) from exc
