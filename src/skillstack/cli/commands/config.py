"""
skillstack config - Configuration inspection commands.

Usage:
    skillstack config show
    skillstack config show search
    skillstack config show --json
    skillstack config path
"""

import json
from typing import Annotated

import typer
import yaml
from rich.syntax import Syntax
from rich.table import Table

from skillstack.cli.output import console, print_error
from skillstack.config import (
    ConfigurationError,
    get_config_sources,
    get_nested_value,
    load_config,
)
from skillstack.storage.paths import get_skillstack_home

app = typer.Typer(
    name="config",
    help="Configuration management.",
)


@app.command()
def show(
    section: Annotated[
        str | None,
        typer.Argument(
            help="Config section to show (e.g., 'search', 'snapshot.url').",
        ),
    ] = None,
    json_output: Annotated[
        bool,
        typer.Option(
            "--json",
            help="Output as JSON.",
        ),
    ] = False,
) -> None:
    """Show the effective configuration."""
    try:
        config = load_config()
    except ConfigurationError as e:
        print_error(str(e))
        raise typer.Exit(1)

    data = config.model_dump(mode="json")
    if section:
        data = get_nested_value(data, section)
        if data is None:
            print_error(f"Unknown config section: {section}")
            raise typer.Exit(1)

    if json_output:
        console.print_json(json.dumps(data))
        return

    rendered = yaml.dump(data, default_flow_style=False, sort_keys=False, allow_unicode=True)
    console.print(Syntax(rendered, "yaml", theme="monokai", background_color="default"))


@app.command()
def path() -> None:
    """Show where configuration is loaded from."""
    sources = get_config_sources()

    table = Table(title="Configuration Sources")
    table.add_column("Source", style="cyan")
    table.add_column("Path")

    table.add_row("home", str(get_skillstack_home()))
    for name, source_path in sources.items():
        table.add_row(name, str(source_path) if source_path else "[dim](not found)[/dim]")

    console.print(table)
