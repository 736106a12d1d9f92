"""
SLO data models.

Shapes follow the Datadog service level objectives API:
https://docs.datadoghq.com/api/latest/service-level-objectives/
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Any

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


class Timeframe(str, Enum):
    """Timeframes the report can resolve to a concrete window."""

    SEVEN_DAYS = "7d"
    THIRTY_DAYS = "30d"
    NINETY_DAYS = "90d"


@dataclass(frozen=True)
class Threshold:
    """One timeframe/target pair of an SLO."""

    timeframe: str
    target: float
    warning: float | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Threshold:
        target = data.get("target")
        warning = data.get("warning")
        return cls(
            timeframe=str(data.get("timeframe") or ""),
            target=float(target) if target is not None else 0.0,
            warning=float(warning) if warning is not None else None,
        )


@dataclass(frozen=True)
class SLO:
    """Service level objective as listed by Datadog."""

    id: str
    name: str
    thresholds: tuple[Threshold, ...] = ()
    type: str = ""
    description: str = ""
    tags: tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SLO:
        return cls(
            id=str(data.get("id", "")),
            name=str(data.get("name", "")),
            thresholds=tuple(Threshold.from_dict(t) for t in data.get("thresholds") or []),
            type=str(data.get("type", "")),
            description=data.get("description") or "",
            tags=tuple(data.get("tags") or ()),
        )


@dataclass(frozen=True)
class TimeWindow:
    """Concrete [start, end) window in UTC."""

    start: datetime
    end: datetime

    @classmethod
    def zero(cls) -> TimeWindow:
        """Placeholder window used when a timeframe cannot be resolved."""
        return cls(EPOCH, EPOCH)

    @property
    def from_ts(self) -> int:
        return int(self.start.timestamp())

    @property
    def to_ts(self) -> int:
        return int(self.end.timestamp())

    @property
    def duration(self) -> timedelta:
        return self.end - self.start


@dataclass(frozen=True)
class HistoryRecord:
    """Observed compliance for one threshold over one window."""

    sli_value: float
    error_budget_remaining: float

    @property
    def error_budget_consumed(self) -> float:
        return 100.0 - self.error_budget_remaining
