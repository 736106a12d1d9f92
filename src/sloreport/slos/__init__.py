"""
SLO listing, timeframe resolution and history retrieval.
"""

from sloreport.slos.history import CUSTOM_BUDGET_BUCKET, HistoryFetcher
from sloreport.slos.lister import iter_slo_pages, list_all_slos
from sloreport.slos.models import SLO, HistoryRecord, Threshold, Timeframe, TimeWindow
from sloreport.slos.timeframes import TIMEFRAME_DURATIONS, resolve_time_window

__all__ = [
    "CUSTOM_BUDGET_BUCKET",
    "HistoryFetcher",
    "HistoryRecord",
    "SLO",
    "TIMEFRAME_DURATIONS",
    "Threshold",
    "TimeWindow",
    "Timeframe",
    "iter_slo_pages",
    "list_all_slos",
    "resolve_time_window",
]
