"""
Output formatting utilities for the CLI.

Provides consistent output formatting across all CLI commands.
"""

import logging

from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from skillstack.search.models import QueryResult

# Global console instance
console = Console()


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[green]✓[/green] {message}")


def print_error(message: str) -> None:
    """Print an error message."""
    console.print(f"[red]✗[/red] {message}")


def print_warning(message: str) -> None:
    """Print a warning message."""
    console.print(f"[yellow]![/yellow] {message}")


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[blue]i[/blue] {message}")


def configure_logging(level: str | int = logging.WARNING) -> None:
    """Route library logging through rich on stderr."""
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def format_installs(installs: int) -> str:
    """Format an install count compactly (1.2K, 3.4M)."""
    if installs >= 1_000_000:
        return f"{installs / 1_000_000:.1f}M"
    if installs >= 1_000:
        return f"{installs / 1_000:.1f}K"
    return str(installs)


def results_table(results: list[QueryResult], title: str | None = None) -> Table:
    """Build a table of ranked search results."""
    table = Table(title=title)
    table.add_column("#", style="dim", justify="right")
    table.add_column("Name", style="cyan")
    table.add_column("Source", style="dim")
    table.add_column("Installs", justify="right")
    table.add_column("Technologies", style="dim")
    table.add_column("Description")

    for position, result in enumerate(results, start=1):
        description = result.description or ""
        table.add_row(
            str(position),
            result.name,
            f"{result.source}/{result.record_id}",
            format_installs(result.installs),
            ", ".join(result.technologies[:3]),
            description[:50] + "..." if len(description) > 50 else description,
        )

    return table
