"""
skillstack search - Search the published skill snapshot.

Usage:
    skillstack search "react hooks"
    skillstack search vue --snapshot https://example.com/api/skill-summaries
    skillstack search nextjs --json
"""

import asyncio
import json
from typing import Annotated

import typer

from skillstack.cli.output import console, print_error, results_table
from skillstack.config import ConfigurationError, load_config
from skillstack.config.schema import Config
from skillstack.search import SearchController, SearchEngine, SearchView
from skillstack.snapshot import SnapshotClient


async def run_search(query: str, source: str, config: Config) -> SearchView:
    """Load the snapshot through a controller and run one query.

    The query is typed before focus, the way a user would start typing
    into an unfocused field, and is evaluated once the index is ready.
    """
    client = SnapshotClient(source, timeout=config.snapshot.timeout)
    engine = SearchEngine(tolerance=config.search.fuzzy_tolerance)

    async with SearchController(
        client.fetch,
        debounce_ms=config.search.debounce_ms,
        engine=engine,
    ) as controller:
        controller.set_query(query)
        controller.focus()
        await controller.wait_until_ready()
        controller.flush()
        return controller.view


def search_command(
    query: Annotated[
        str,
        typer.Argument(
            help="Search query.",
        ),
    ],
    snapshot: Annotated[
        str | None,
        typer.Option(
            "--snapshot",
            "-s",
            help="Snapshot URL or path (default: from config).",
        ),
    ] = None,
    json_output: Annotated[
        bool,
        typer.Option(
            "--json",
            help="Output results as JSON.",
        ),
    ] = False,
) -> None:
    """Search skills by name."""
    try:
        config = load_config()
    except ConfigurationError as e:
        print_error(str(e))
        raise typer.Exit(1)

    source = snapshot or config.get_snapshot_source()
    view = asyncio.run(run_search(query, source, config))

    if view.error:
        print_error(f"{view.error} ({source})")
        raise typer.Exit(1)

    if json_output:
        console.print_json(json.dumps([result.stored_fields() for result in view.results]))
        return

    if not query.strip():
        console.print("[yellow]Enter a search query.[/yellow]")
        return

    if not view.results:
        console.print(f"[yellow]No skills found for '{query}'[/yellow]")
        return

    console.print(results_table(view.results, title=f"Search Results for '{query}'"))
    count = len(view.results)
    console.print(f"\n[dim]{count} result{'s' if count != 1 else ''}[/dim]")
