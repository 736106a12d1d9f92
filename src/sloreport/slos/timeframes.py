"""Resolve symbolic SLO timeframes to concrete time windows."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from sloreport.core.errors import UnsupportedTimeframe
from sloreport.slos.models import Timeframe, TimeWindow

TIMEFRAME_DURATIONS: dict[Timeframe, timedelta] = {
    Timeframe.SEVEN_DAYS: timedelta(days=7),
    Timeframe.THIRTY_DAYS: timedelta(days=30),
    Timeframe.NINETY_DAYS: timedelta(days=90),
}


def timeframe_duration(timeframe: str) -> timedelta:
    try:
        return TIMEFRAME_DURATIONS[Timeframe(timeframe)]
    except ValueError:
        raise UnsupportedTimeframe(
            f"unsupported SLO timeframe: {timeframe}",
            details={"timeframe": timeframe},
        ) from None


def resolve_time_window(timeframe: str, now: datetime) -> TimeWindow:
    """
    Return the window ending at ``now`` and spanning the timeframe.

    Naive datetimes are taken to be UTC.

    Raises:
        UnsupportedTimeframe: If the timeframe is not 7d, 30d or 90d
    """
    duration = timeframe_duration(timeframe)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    else:
        now = now.astimezone(timezone.utc)
    return TimeWindow(start=now - duration, end=now)
