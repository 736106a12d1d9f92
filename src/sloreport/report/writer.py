"""
CSV report writer.

One row per SLO threshold, either with history values or with an error
message in the last column. Rows are flushed as soon as they are written.
"""

from __future__ import annotations

import csv
from datetime import datetime, timezone
from typing import IO

from sloreport.core.errors import SinkWriteFailure
from sloreport.slos.models import SLO, HistoryRecord, Threshold, TimeWindow

REPORT_COLUMNS = [
    "name",
    "slo_id",
    "timeframe",
    "from (utc)",
    "to (utc)",
    "from_ts",
    "to_ts",
    "target",
    "overall_status",
    "error_budget_consumed",
    "error (only if applicable)",
]


def format_number(value: float) -> str:
    return f"{value:f}"


def format_utc(moment: datetime) -> str:
    return moment.astimezone(timezone.utc).strftime("%Y-%m-%d %H:%M:%S +0000 UTC")


class ReportWriter:
    """Writes report rows to a text stream."""

    def __init__(self, stream: IO[str], *, path: str = "<stream>") -> None:
        self._stream = stream
        self._path = path
        self._writer = csv.writer(stream)
        self.rows_written = 0

    @classmethod
    def open(cls, path: str) -> ReportWriter:
        """Create ``path`` and write the header row."""
        try:
            stream = open(path, "w", encoding="utf-8", newline="")
        except OSError as exc:
            raise SinkWriteFailure(
                f"unable to create file: {path}, err: {exc}", details={"path": path}
            ) from exc
        writer = cls(stream, path=path)
        writer.write_header()
        return writer

    def close(self) -> None:
        try:
            self._stream.close()
        except OSError as exc:
            raise self._failure(exc) from exc

    def __enter__(self) -> ReportWriter:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def write_header(self) -> None:
        self._write(REPORT_COLUMNS)

    def write_history(
        self,
        slo: SLO,
        threshold: Threshold,
        window: TimeWindow,
        history: HistoryRecord,
    ) -> None:
        self._write(
            self._identity(slo, threshold, window)
            + [
                format_number(history.sli_value),
                format_number(history.error_budget_consumed),
                "",
            ]
        )
        self.rows_written += 1

    def write_error(
        self,
        slo: SLO,
        threshold: Threshold,
        window: TimeWindow,
        error: BaseException,
    ) -> None:
        message = getattr(error, "message", None) or str(error)
        self._write(self._identity(slo, threshold, window) + ["", "", message])
        self.rows_written += 1

    @staticmethod
    def _identity(slo: SLO, threshold: Threshold, window: TimeWindow) -> list[str]:
        return [
            slo.name,
            slo.id,
            threshold.timeframe,
            format_utc(window.start),
            format_utc(window.end),
            str(window.from_ts),
            str(window.to_ts),
            format_number(threshold.target),
        ]

    def _write(self, row: list[str]) -> None:
        try:
            self._writer.writerow(row)
            self._stream.flush()
        except (OSError, csv.Error) as exc:
            raise self._failure(exc) from exc

    def _failure(self, exc: Exception) -> SinkWriteFailure:
        return SinkWriteFailure(
            f"unable to write to file: {self._path}, err: {exc}",
            details={"path": self._path},
        )
