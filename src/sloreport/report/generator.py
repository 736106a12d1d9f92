"""
SLO report generation.

Lists SLOs, then walks every threshold of every SLO: resolve the window,
fetch history and write one row. Per-threshold failures become error rows;
only a failing report file aborts the run.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, Protocol

import structlog

from sloreport.config import ReportOptions
from sloreport.core.errors import ListError, RecoverableError
from sloreport.logging import bind_context
from sloreport.report.writer import ReportWriter
from sloreport.slos.history import HistoryFetcher, SLOHistoryClient
from sloreport.slos.lister import SleepFunc, SLOListingClient, list_all_slos
from sloreport.slos.models import SLO, Threshold, TimeWindow
from sloreport.slos.timeframes import resolve_time_window

logger = structlog.get_logger()


class SLOClient(SLOListingClient, SLOHistoryClient, Protocol):
    """Client able to list SLOs and fetch their history."""


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class ReportSummary:
    """Outcome of a report run."""

    path: str
    slo_count: int = 0
    rows_written: int = 0
    failed_rows: int = 0
    list_error: ListError | None = None

    @property
    def ok(self) -> bool:
        return self.list_error is None


class ReportGenerator:
    """Drives listing, history retrieval and row writing for one report."""

    def __init__(
        self,
        client: SLOClient,
        options: ReportOptions,
        *,
        clock: Callable[[], datetime] = utcnow,
        sleep: SleepFunc = asyncio.sleep,
    ) -> None:
        self.client = client
        self.options = options
        self.fetcher = HistoryFetcher(client)
        self._clock = clock
        self._sleep = sleep

    async def run(self) -> ReportSummary:
        """
        Generate the report at ``options.path``.

        Raises:
            SinkWriteFailure: If the report file cannot be created or written
        """
        logger.info("report_started", path=self.options.path)
        with ReportWriter.open(self.options.path) as writer:
            summary = ReportSummary(path=self.options.path)
            try:
                slos = await list_all_slos(
                    self.client,
                    limit=self.options.limit,
                    tags_query=self.options.tags_query,
                    page_delay=self.options.page_delay,
                    sleep=self._sleep,
                )
            except ListError as exc:
                logger.error("slo_list_failed", error=exc.message, **exc.details)
                summary.list_error = exc
                return summary

            summary.slo_count = len(slos)
            logger.info("fetching_slo_history", slo_count=len(slos))
            await self.write_rows(writer, slos, summary)

        logger.info(
            "report_finished",
            slo_count=summary.slo_count,
            rows_written=summary.rows_written,
            failed_rows=summary.failed_rows,
        )
        return summary

    async def write_rows(
        self,
        writer: ReportWriter,
        slos: list[SLO],
        summary: ReportSummary,
    ) -> None:
        """Write one row per threshold of every SLO in ``slos``."""
        now = self._clock()
        total = len(slos)
        for counter, slo in enumerate(slos, start=1):
            for threshold in slo.thresholds:
                log = bind_context(slo_id=slo.id, timeframe=threshold.timeframe)
                log.info("getting_slo_history", position=f"{counter} of {total}")
                if not await self._process(writer, slo, threshold, now, log):
                    summary.failed_rows += 1
                summary.rows_written += 1
                await self._sleep(self.options.delay)

    async def _process(
        self,
        writer: ReportWriter,
        slo: SLO,
        threshold: Threshold,
        now: datetime,
        log: structlog.stdlib.BoundLogger,
    ) -> bool:
        window = TimeWindow.zero()
        try:
            window = resolve_time_window(threshold.timeframe, now)
            history = await self.fetcher.fetch(slo, threshold, window)
        except RecoverableError as exc:
            log.warning("slo_history_failed", error_type=type(exc).__name__, error=exc.message)
            writer.write_error(slo, threshold, window, exc)
            return False

        writer.write_history(slo, threshold, window, history)
        return True
