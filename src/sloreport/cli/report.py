"""
CLI entry point for SLO report generation.

Usage:
    slo-report --path /tmp/slo_report.csv --tagQuery team:ninja
"""

from __future__ import annotations

import argparse
import asyncio
import re
from typing import Sequence

import structlog

from sloreport.cli import ux
from sloreport.clients.datadog import DatadogClient
from sloreport.config import (
    DEFAULT_PAGE_LIMIT,
    DEFAULT_REPORT_PATH,
    ReportOptions,
    get_settings,
)
from sloreport.core.errors import ExitCode, format_error_message, main_with_error_handling
from sloreport.logging import LOG_FORMATS, configure_logging
from sloreport.report.generator import ReportGenerator

logger = structlog.get_logger()

CREDENTIALS_NOTICE = (
    "Please make sure following environment variables are set DD_API_KEY and DD_APP_KEY"
)

_DURATION_UNITS = {
    "ns": 1e-9,
    "us": 1e-6,
    "µs": 1e-6,
    "ms": 1e-3,
    "s": 1.0,
    "m": 60.0,
    "h": 3600.0,
}
_DURATION_PART = re.compile(r"(\d+(?:\.\d*)?|\.\d+)(ns|us|µs|ms|s|m|h)")


def parse_duration(value: str) -> float:
    """
    Parse a duration such as ``100ms``, ``1s`` or ``1m30s`` into seconds.

    A bare number is taken as seconds.
    """
    text = value.strip()
    try:
        seconds = float(text)
    except ValueError:
        pos = 0
        seconds = 0.0
        for match in _DURATION_PART.finditer(text):
            if match.start() != pos:
                break
            seconds += float(match.group(1)) * _DURATION_UNITS[match.group(2)]
            pos = match.end()
        if pos == 0 or pos != len(text):
            raise argparse.ArgumentTypeError(f"invalid duration: {value!r}") from None
    if seconds < 0:
        raise argparse.ArgumentTypeError(f"duration must not be negative: {value!r}")
    return seconds


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer: {value!r}") from None
    if number <= 0:
        raise argparse.ArgumentTypeError(f"must be positive: {value!r}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="slo-report",
        description="Export Datadog SLO history to a CSV report.",
        epilog=CREDENTIALS_NOTICE,
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument(
        "report_path",
        nargs="?",
        help="Path for csv file (overrides --path)",
    )
    parser.add_argument("--path", default=DEFAULT_REPORT_PATH, help="Path for csv file")
    parser.add_argument(
        "--tagQuery",
        "--tag-query",
        dest="tag_query",
        default="",
        help="Tag query to filter results based on a single SLO tag e.g team:ninja",
    )
    parser.add_argument(
        "--limit",
        type=_positive_int,
        default=DEFAULT_PAGE_LIMIT,
        help="Limit SLOs fetched in each list call",
    )
    parser.add_argument(
        "--sleep",
        type=parse_duration,
        default="100ms",
        help="Sleep time between SLO history calls (e.g. 100ms, 1s)",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level",
    )
    parser.add_argument(
        "--log-format",
        default="json",
        choices=LOG_FORMATS,
        help="Log output format",
    )
    return parser


@main_with_error_handling()
def report_command(options: ReportOptions) -> int:
    """Generate the report described by ``options``."""
    client = DatadogClient.from_settings(get_settings())
    summary = asyncio.run(ReportGenerator(client, options).run())

    if summary.list_error is not None:
        ux.error(format_error_message(summary.list_error))
        ux.warning(f"Report at {summary.path} contains only the header row")
        return ExitCode.FATAL

    ux.success(f"History retrieved for {summary.slo_count} SLOs")
    ux.print_key_value(
        {
            "Report": summary.path,
            "Rows": str(summary.rows_written),
            "Failed rows": str(summary.failed_rows),
        }
    )
    return ExitCode.SUCCESS


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level, log_format=args.log_format)

    options = ReportOptions(
        path=args.report_path or args.path,
        tags_query=args.tag_query,
        limit=args.limit,
        delay=args.sleep,
    )
    logger.info("report_configured", notice=CREDENTIALS_NOTICE, path=options.path)
    return int(report_command(options))
