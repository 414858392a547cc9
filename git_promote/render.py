"""Rich UI helpers for terminal output."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.markup import escape

from .models import StatusEntry

console = Console(highlight=False)
err_console = Console(stderr=True, highlight=False)

_STATUS_STYLES = {
    "M": "yellow",
    "A": "green",
    "D": "red",
    "R": "cyan",
    "C": "cyan",
    "?": "dim",
    "!": "bright_red",
}


def configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")


def step(message: str) -> None:
    """Print a workflow step marker."""
    console.print(f"\n[bold cyan]==>[/bold cyan] [bright_cyan]{escape(message)}[/bright_cyan]")


def heading(message: str) -> None:
    console.print(f"[bold]{escape(message)}[/bold]")


def info(message: str) -> None:
    console.print(escape(message))


def warning(message: str) -> None:
    console.print(f"[yellow]{escape(message)}[/yellow]")


def success(message: str) -> None:
    console.print(f"[green]{escape(message)}[/green]")


def _status_char(value: str) -> str:
    style = _STATUS_STYLES.get(value, "dim")
    return f"[{style}]{escape(value)}[/{style}]"


def format_status_line(entry: StatusEntry) -> str:
    """Render one porcelain status line with colored state characters."""
    return f"{_status_char(entry.index)}{_status_char(entry.working_dir)} [bold]{escape(entry.path)}[/bold]"


def show_status(entries: tuple[StatusEntry, ...]) -> None:
    heading("Uncommitted changes:")
    for entry in entries:
        console.print(f"  {format_status_line(entry)}")
    console.print()


def format_cli_error(name: str, message: str) -> str:
    return f"[red]{escape(name)}[/red]: [bright_red]{escape(message)}[/bright_red]"


def error(name: str, message: str) -> None:
    """Print a command failure to stderr."""
    err_console.print(format_cli_error(name, message))
