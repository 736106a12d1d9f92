"""
Error taxonomy for SLO report generation.

Errors fall into two classes:

- Recoverable: raised while resolving a window or fetching history for a
  single SLO threshold. The report generator turns them into an error row
  and moves on to the next threshold.
- Fatal: the run cannot produce a meaningful report (no SLOs could be
  listed, credentials are missing, or the report file cannot be written).

Exit Codes:
- 0: Success
- 1: Fatal error
- 127: Unknown/internal error
- 130: Interrupted
"""

from __future__ import annotations

import functools
from enum import IntEnum
from typing import Any, Callable, TypeVar

import structlog

logger = structlog.get_logger()


class ExitCode(IntEnum):
    """Exit codes for the CLI."""

    SUCCESS = 0
    FATAL = 1
    UNKNOWN_ERROR = 127
    INTERRUPTED = 130


class SLOReportError(Exception):
    """Base exception for SLO report errors."""

    exit_code: ExitCode = ExitCode.UNKNOWN_ERROR
    recoverable: bool = False

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class RecoverableError(SLOReportError):
    """Per-threshold failure, recorded as an error row."""

    exit_code = ExitCode.FATAL
    recoverable = True


class FatalError(SLOReportError):
    """Failure that aborts the run."""

    exit_code = ExitCode.FATAL


class UnsupportedTimeframe(RecoverableError):
    """Raised for a timeframe symbol outside 7d/30d/90d."""


class TransportError(RecoverableError):
    """Raised when the HTTP request itself fails."""


class RemoteError(RecoverableError):
    """Raised when the API reports an error inside an otherwise valid response."""


class EmptyResponse(RecoverableError):
    """Raised when a history response carries no data."""


class MissingOverallSection(RecoverableError):
    """Raised when a history response has no overall summary."""


class MissingErrorBudget(RecoverableError):
    """Raised when the overall summary has no custom error budget bucket."""


class ListError(FatalError):
    """Raised when any page of the SLO listing fails."""


class SinkWriteFailure(FatalError):
    """Raised when the report file cannot be opened, written or flushed."""


class ConfigurationError(FatalError):
    """Raised for missing or invalid configuration."""


F = TypeVar("F", bound=Callable[..., int])


def main_with_error_handling() -> Callable[[F], F]:
    """
    Decorator for CLI main functions that maps exceptions to exit codes.

    Usage:
        @main_with_error_handling()
        def report_command() -> int:
            return 0

    Exit codes:
        - SLOReportError subclasses: Uses the error's exit_code
        - KeyboardInterrupt: Returns 130
        - Other exceptions: Returns 127
    """

    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> int:
            try:
                return func(*args, **kwargs)
            except SLOReportError as e:
                logger.error(
                    "command_error",
                    error_type=type(e).__name__,
                    message=e.message,
                    exit_code=int(e.exit_code),
                    **e.details,
                )
                return e.exit_code
            except KeyboardInterrupt:
                logger.info("command_interrupted")
                return ExitCode.INTERRUPTED
            except Exception as e:
                logger.error(
                    "unexpected_error",
                    error_type=type(e).__name__,
                    message=str(e),
                    exit_code=int(ExitCode.UNKNOWN_ERROR),
                    exc_info=True,
                )
                return ExitCode.UNKNOWN_ERROR

        return wrapper  # type: ignore[return-value]

    return decorator


def format_error_message(error: SLOReportError) -> str:
    """Format an error message for display to users."""
    msg = error.message
    if error.details:
        detail_str = ", ".join(f"{k}={v}" for k, v in error.details.items())
        msg = f"{msg} ({detail_str})"
    return msg
