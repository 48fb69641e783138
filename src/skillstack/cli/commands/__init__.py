"""CLI command modules."""

from skillstack.cli.commands import config, search, snapshot

__all__ = ["config", "search", "snapshot"]
