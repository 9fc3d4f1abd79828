#!/usr/bin/env python3
"""
UI components for the tinmesh CLI.

This module provides the shared rich console and helpers that give the
commands a consistent look.
"""

import logging
from typing import Any, Dict

from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table
from rich.theme import Theme

logger = logging.getLogger(__name__)

tinmesh_theme = Theme({
    "info": "cyan",
    "warning": "yellow",
    "error": "bold red",
    "success": "bold green",
    "path": "blue",
    "key": "cyan",
    "value": "green",
})

console = Console(theme=tinmesh_theme)


def setup_logging(verbose: bool = False) -> None:
    """Route log records through rich; DEBUG when verbose, WARNING otherwise."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
        force=True,
    )


def print_success(message: str) -> None:
    console.print(f"[success]✓[/success] {message}")


def print_warning(message: str) -> None:
    console.print(f"[warning]Warning:[/warning] {message}")


def print_error(message: str) -> None:
    console.print(f"[error]Error:[/error] {message}")


def print_table(data: Dict[str, Any], title: str) -> None:
    """
    Print a key/value mapping as a rich table.

    Args:
        data: Values to show
        title: Table title
    """
    table = Table(title=title, show_header=True)
    table.add_column("Property", style="key", no_wrap=True)
    table.add_column("Value", style="value")

    for key, value in data.items():
        if isinstance(value, float):
            formatted = f"{value:.6g}"
        else:
            formatted = str(value)
        table.add_row(str(key), formatted)

    console.print(table)
