"""Click CLI interface definitions.

Defines the command-line interface structure and routes commands to the
command runner.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import click
from dotenv import load_dotenv

from PlexSearch.cli.commands import AdvancedSearchCommand, CompileCommand, SectionsCommand, SmartSearchCommand
from PlexSearch.cli.runner import CommandRunner
from PlexSearch.config import load_config_with_defaults
from PlexSearch.config.app import DEFAULT_CONFIG_PATH
from PlexSearch.core.filters import MEDIA_TYPES, RESOLUTIONS, SORT_FIELDS, SORT_ORDERS


@click.group(help="PlexSearch: search a Plex library with plain-language or structured filters.")
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path, dir_okay=False),
    default=DEFAULT_CONFIG_PATH,
    show_default=True,
    help="Path to YAML config file (merged over config/default.yml).",
)
@click.pass_context
def cli(ctx: click.Context, config_path: Path) -> None:
    """CLI entry group.

    Loads environment variables from .env file before processing config.
    """
    load_dotenv()
    ctx.obj = CommandRunner(load_config_with_defaults(config_path))


@cli.command("smart")
@click.argument("query")
@click.option("--limit", type=int, default=None, help="Maximum number of results.")
@click.pass_context
def smart_cmd(ctx: click.Context, query: str, limit: int | None) -> None:
    """Search with a natural-language QUERY, e.g. "unwatched sci-fi movies from the 90s"."""
    runner: CommandRunner = ctx.obj
    runner.run(
        ctx.command.name,
        lambda service, writer: SmartSearchCommand(service=service, output_writer=writer, query=query, limit=limit),
    )


@cli.command("advanced")
@click.option("--type", "media_type", type=click.Choice(MEDIA_TYPES), required=True, help="Media type.")
@click.option("--section-id", default=None, help="Library section ID to search in.")
@click.option("--title", default=None, help="Title contains.")
@click.option("--year", type=int, default=None, help="Exact year.")
@click.option("--min-year", type=int, default=None, help="Minimum year.")
@click.option("--max-year", type=int, default=None, help="Maximum year.")
@click.option("--decade", type=int, default=None, help="Decade, e.g. 1990 for the 90s.")
@click.option("--genre", default=None, help="Genre name.")
@click.option("--content-rating", default=None, help="Content rating, e.g. PG-13.")
@click.option("--min-rating", type=float, default=None, help="Minimum rating (0-10).")
@click.option("--max-rating", type=float, default=None, help="Maximum rating (0-10).")
@click.option("--director", default=None, help="Director name.")
@click.option("--actor", default=None, help="Actor name.")
@click.option("--studio", default=None, help="Studio name.")
@click.option("--unwatched", is_flag=True, default=None, help="Only unwatched items.")
@click.option("--watched", is_flag=True, default=None, help="Only watched items.")
@click.option("--in-progress", is_flag=True, default=None, help="Only in-progress items.")
@click.option("--min-duration", type=int, default=None, help="Minimum duration in minutes.")
@click.option("--max-duration", type=int, default=None, help="Maximum duration in minutes.")
@click.option("--added-within", type=int, default=None, help="Added within N days.")
@click.option("--resolution", type=click.Choice(RESOLUTIONS), default=None, help="Video resolution.")
@click.option("--sort", type=click.Choice(SORT_FIELDS), default=None, help="Sort field.")
@click.option("--sort-order", type=click.Choice(SORT_ORDERS), default=None, help="Sort order (default: desc).")
@click.option("--limit", type=int, default=None, help="Maximum results (default: 25).")
@click.pass_context
def advanced_cmd(ctx: click.Context, media_type: str, **options: Any) -> None:
    """Search with precise filters."""
    raw_filter = {"type": media_type}
    # Unset flags arrive as None or False depending on the click version.
    raw_filter.update(
        {_camel(name): value for name, value in options.items() if value is not None and value is not False}
    )
    runner: CommandRunner = ctx.obj
    runner.run(
        ctx.command.name,
        lambda service, writer: AdvancedSearchCommand(service=service, output_writer=writer, raw_filter=raw_filter),
    )


@cli.command("compile")
@click.argument("query")
@click.option("--section-id", default=None, help="Target section; when omitted sections are listed from the server.")
@click.option("--limit", type=int, default=None, help="Page size.")
@click.pass_context
def compile_cmd(ctx: click.Context, query: str, section_id: str | None, limit: int | None) -> None:
    """Print the compiled Plex query for QUERY without searching."""
    runner: CommandRunner = ctx.obj
    runner.run(
        ctx.command.name,
        lambda service, writer: CompileCommand(
            service=service,
            query=query,
            section_id=section_id,
            limit=limit,
            echo=click.echo,
        ),
    )


@cli.command("sections")
@click.pass_context
def sections_cmd(ctx: click.Context) -> None:
    """List library sections."""
    runner: CommandRunner = ctx.obj
    runner.run(ctx.command.name, lambda service, writer: SectionsCommand(service=service))


def _camel(option_name: str) -> str:
    head, *rest = option_name.split("_")
    return head + "".join(part.capitalize() for part in rest)
