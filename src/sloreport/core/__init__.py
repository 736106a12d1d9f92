"""Core modules for sloreport - error taxonomy and exit codes."""

from sloreport.core.errors import (
    ConfigurationError,
    EmptyResponse,
    ExitCode,
    FatalError,
    ListError,
    MissingErrorBudget,
    MissingOverallSection,
    RecoverableError,
    RemoteError,
    SinkWriteFailure,
    SLOReportError,
    TransportError,
    UnsupportedTimeframe,
    format_error_message,
    main_with_error_handling,
)

__all__ = [
    "ExitCode",
    "SLOReportError",
    "RecoverableError",
    "FatalError",
    # Recoverable
    "UnsupportedTimeframe",
    "TransportError",
    "RemoteError",
    "EmptyResponse",
    "MissingOverallSection",
    "MissingErrorBudget",
    # Fatal
    "ListError",
    "SinkWriteFailure",
    "ConfigurationError",
    "main_with_error_handling",
    "format_error_message",
]
