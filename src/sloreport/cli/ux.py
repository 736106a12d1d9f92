"""
Console output helpers built on rich.

Respects NO_COLOR and FORCE_COLOR. Log lines go to stderr through
structlog; these helpers are only for the human-facing summary.
"""

from __future__ import annotations

import os

from rich.console import Console
from rich.theme import Theme

# Nord color palette (https://www.nordtheme.com/)
SLOREPORT_THEME = Theme(
    {
        "info": "#88C0D0",
        "success": "#A3BE8C",
        "warning": "#EBCB8B",
        "error": "#BF616A bold",
        "muted": "#D8DEE9",
    }
)

console = Console(
    theme=SLOREPORT_THEME,
    force_terminal=os.environ.get("FORCE_COLOR") is not None,
    no_color=os.environ.get("NO_COLOR") is not None,
)


def success(message: str) -> None:
    """Print a success message."""
    console.print(f"[success]✓ {message}[/success]")


def error(message: str) -> None:
    """Print an error message."""
    console.print(f"[error]✗ {message}[/error]")


def warning(message: str) -> None:
    """Print a warning message."""
    console.print(f"[warning]⚠ {message}[/warning]")


def print_key_value(items: dict[str, str], title: str | None = None) -> None:
    """Print key-value pairs."""
    if title:
        console.print(f"\n[bold]{title}[/bold]")

    for key, value in items.items():
        console.print(f"  [cyan]{key}:[/cyan] {value}")
