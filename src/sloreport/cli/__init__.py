"""
CLI commands for sloreport.
"""

from sloreport.cli.report import build_parser, main, report_command

__all__ = ["build_parser", "main", "report_command"]
