"""CLI package for PlexSearch command orchestration."""

from __future__ import annotations

__all__ = ["CommandRunner", "main"]

from PlexSearch.cli.runner import CommandRunner
from PlexSearch.cli.ui import cli


def main() -> None:
    """Run PlexSearch CLI.

    Entry point referenced by console script in pyproject.toml.
    """
    cli()
