"""Export Datadog SLO history to CSV."""

__version__ = "0.1.0"
