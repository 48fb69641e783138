"""
skillstack snapshot - Snapshot publishing commands.

Usage:
    skillstack snapshot build --store skills.yaml --output public/skill-summaries.json
    skillstack snapshot refresh
    skillstack snapshot info
"""

import asyncio
from pathlib import Path
from typing import Annotated

import typer
from rich.panel import Panel

from skillstack.cli.output import console, print_error, print_info, print_success
from skillstack.config import ConfigurationError, load_config
from skillstack.search import SearchError, SearchIndex
from skillstack.snapshot import (
    CACHE_CONTROL,
    SnapshotClient,
    build_snapshot,
    load_summaries,
    refresh_snapshot,
    write_snapshot,
)
from skillstack.storage.paths import expand_path

app = typer.Typer(
    name="snapshot",
    help="Snapshot publishing.",
)


@app.command()
def build(
    store: Annotated[
        Path | None,
        typer.Option(
            "--store",
            help="Skill store export (YAML or JSON). Default: from config.",
        ),
    ] = None,
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Snapshot file to write. Default: from config.",
        ),
    ] = None,
    precompute: Annotated[
        bool,
        typer.Option(
            "--precompute",
            help="Publish a serialized index instead of the record list.",
        ),
    ] = False,
) -> None:
    """Build and publish a snapshot from the skill store."""
    try:
        config = load_config()
        store_path = expand_path(store) if store else config.get_store_path()
        output_path = expand_path(output) if output else config.get_snapshot_path()

        snapshot = build_snapshot(load_summaries(store_path))
        write_snapshot(snapshot, output_path, precompute=precompute or config.snapshot.precompute_index)
    except (ConfigurationError, SearchError) as e:
        print_error(str(e))
        raise typer.Exit(1)

    print_success(f"Published {len(snapshot)} skill(s) to {output_path}")
    print_info(f"Serve with Cache-Control: {CACHE_CONTROL}")


@app.command()
def refresh(
    force: Annotated[
        bool,
        typer.Option(
            "--force",
            "-f",
            help="Rebuild even if the snapshot is fresh.",
        ),
    ] = False,
) -> None:
    """Rebuild the snapshot if it is older than its max age."""
    try:
        config = load_config()
        output_path = config.get_snapshot_path()
        rebuilt = refresh_snapshot(
            config.get_store_path(),
            output_path,
            max_age=config.snapshot.max_age_seconds,
            force=force,
            precompute=config.snapshot.precompute_index,
        )
    except (ConfigurationError, SearchError) as e:
        print_error(str(e))
        raise typer.Exit(1)

    if rebuilt:
        print_success(f"Snapshot rebuilt: {output_path}")
    else:
        print_info(f"Snapshot is fresh: {output_path}")


@app.command()
def info(
    snapshot: Annotated[
        str | None,
        typer.Option(
            "--snapshot",
            "-s",
            help="Snapshot URL or path (default: from config).",
        ),
    ] = None,
) -> None:
    """Load a snapshot and show index statistics."""
    try:
        config = load_config()
        source = snapshot or config.get_snapshot_source()
        client = SnapshotClient(source, timeout=config.snapshot.timeout)
        index = SearchIndex.load(asyncio.run(client.fetch()))
    except (ConfigurationError, SearchError) as e:
        print_error(str(e))
        raise typer.Exit(1)

    lines = [
        f"[bold]Source:[/bold] {source}",
        f"[bold]Records:[/bold] {len(index)}",
        f"[bold]Tokens:[/bold] {len(index.vocabulary)}",
        f"[bold]Cache-Control:[/bold] {CACHE_CONTROL}",
    ]
    console.print(Panel("\n".join(lines), title="Snapshot"))
