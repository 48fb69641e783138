"""
Main Typer application for skillstack CLI.

This module defines the root CLI application and registers all command groups.
"""

import logging
from typing import Annotated

import typer

from skillstack import __version__
from skillstack.cli.commands import config, search, snapshot
from skillstack.cli.output import configure_logging, print_info
from skillstack.config import ConfigurationError, load_config

app = typer.Typer(
    name="skillstack",
    help="Search and publish the skill catalog.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    pretty_exceptions_enable=True,
    pretty_exceptions_show_locals=False,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        print_info(f"skillstack version [green]{__version__}[/green]")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Show debug logging.",
        ),
    ] = False,
) -> None:
    """
    [bold blue]skillstack[/bold blue] - Skill catalog search

    Publish a snapshot of skills and search it with fuzzy and prefix matching.
    """
    if verbose:
        configure_logging(logging.DEBUG)
        return

    try:
        configure_logging(load_config().logging.level)
    except ConfigurationError:
        # Reported by the command itself
        configure_logging(logging.WARNING)


app.command("search")(search.search_command)
app.add_typer(snapshot.app, name="snapshot")
app.add_typer(config.app, name="config")


if __name__ == "__main__":
    app()
