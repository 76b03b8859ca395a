"""Command-line interface for tvdbxml."""

from __future__ import annotations

import json
import logging
import sys
import xml.etree.ElementTree as ET
from collections.abc import Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING

import click
from dotenv import load_dotenv
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from tvdbxml import __version__
from tvdbxml.config import get_config

if TYPE_CHECKING:
    from tvdbxml.models import Mirror, Series, SeriesDetails
    from tvdbxml.web import WebInterface

# Load environment variables from .env file
load_dotenv()

console = Console()


@click.group()
@click.version_option(version=__version__, prog_name="tvdbxml")
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose output")
@click.pass_context
def main(ctx: click.Context, verbose: bool) -> None:
    """tvdbxml - Browse TheTVDB XML catalog from the command line."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=console, show_path=False)],
        )


@contextmanager
def _web_interface(file_directory: str | None = None) -> Iterator[WebInterface]:
    """Create a client and report library errors on the console."""
    from tvdbxml.api import APIError
    from tvdbxml.errors import get_friendly_message
    from tvdbxml.web import WebInterface

    try:
        with WebInterface(file_directory=file_directory) as web:
            yield web
    except KeyboardInterrupt:
        console.print("\n[yellow]Cancelled.[/yellow]")
        sys.exit(130)
    except (APIError, FileNotFoundError, ValueError, ET.ParseError) as e:
        console.print(f"[red]Error:[/red] {get_friendly_message(e)}")
        sys.exit(1)


def _require_mirror(web: WebInterface) -> Mirror:
    mirror = web.get_default_mirror()
    if mirror is None:
        console.print("[red]Error:[/red] No mirror provides xml, banner and zip files.")
        sys.exit(1)
    return mirror


@main.command()
def mirrors() -> None:
    """List the mirrors of the service."""
    with _web_interface() as web:
        result = web.get_mirrors()

        table = Table(title="Mirrors")
        table.add_column("Id", justify="right")
        table.add_column("Address")
        table.add_column("XML")
        table.add_column("Banners")
        table.add_column("Zip")
        for mirror in sorted(result):
            table.add_row(
                str(mirror.id),
                mirror.address or "",
                "yes" if mirror.contains_xml_file else "no",
                "yes" if mirror.contains_banner_file else "no",
                "yes" if mirror.contains_zip_file else "no",
            )
        console.print(table)


@main.command()
def languages() -> None:
    """List the languages supported by the service."""
    with _web_interface() as web:
        result = web.get_languages(_require_mirror(web))
        if result is None:
            console.print("[red]Could not load the language list.[/red]")
            sys.exit(1)

        table = Table(title="Languages")
        table.add_column("Abbreviation")
        table.add_column("Name")
        table.add_column("Id", justify="right")
        for language in result:
            table.add_row(language.abbreviation or "", language.name or "", str(language.id))
        console.print(table)


@main.command()
@click.argument("name")
@click.option("--language", "-l", default=None, help="Language abbreviation (default: from config)")
@click.option(
    "--format",
    "-f",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format",
)
def search(name: str, language: str | None, format: str) -> None:
    """Search series by name."""
    language = language or get_config().tvdb.language
    with _web_interface() as web:
        result = web.get_series_by_name(name, _require_mirror(web), language)
        _output_series_list(result, format)


@main.command()
@click.option("--imdb", "imdb_id", default=None, help="IMDB id, e.g. tt1219024")
@click.option("--zap2it", "zap2it_id", default=None, help="zap2it id, e.g. EP01085588")
@click.option("--language", "-l", default=None, help="Language abbreviation (default: from config)")
@click.option(
    "--format",
    "-f",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format",
)
def remote(imdb_id: str | None, zap2it_id: str | None, language: str | None, format: str) -> None:
    """Look up series by IMDB or zap2it id."""
    if bool(imdb_id) == bool(zap2it_id):
        raise click.UsageError("Give exactly one of --imdb and --zap2it.")

    language = language or get_config().tvdb.language
    with _web_interface() as web:
        result = web.get_series_by_remote_id(imdb_id, zap2it_id, _require_mirror(web), language)
        _output_series_list(result, format)


@main.command()
@click.argument("series_id", type=int)
@click.option("--language", "-l", default=None, help="Language abbreviation (default: from config)")
@click.option(
    "--dir",
    "-d",
    "file_directory",
    type=click.Path(file_okay=False),
    default=None,
    help="Where to store and extract the bundle (default: from config)",
)
@click.option(
    "--format",
    "-f",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format",
)
@click.pass_context
def series(
    ctx: click.Context,
    series_id: int,
    language: str | None,
    file_directory: str | None,
    format: str,
) -> None:
    """Download a series with episodes, actors and banners."""
    language = language or get_config().tvdb.language
    verbose = ctx.obj.get("verbose", False)
    with _web_interface(file_directory) as web:
        with console.status("Downloading series..."):
            details = web.get_full_series_by_id(series_id, _require_mirror(web), language)

        if details is None:
            console.print(f"[red]Could not download series {series_id}.[/red]")
            sys.exit(1)

        with details:
            if format == "json":
                _output_details_json(details)
            else:
                _output_details_text(details, verbose)


def _output_series_list(result: list[Series] | None, format: str) -> None:
    """Output search results."""
    if result is None:
        console.print("[red]The search failed.[/red]")
        sys.exit(1)

    if format == "json":
        data = [
            {
                "id": s.id,
                "name": s.name,
                "language": s.language,
                "first_aired": s.first_aired.date().isoformat() if s.has_air_date else None,
                "imdb_id": s.imdb_id,
                "zap2it_id": s.zap2it_id,
                "network": s.network,
            }
            for s in result
        ]
        print(json.dumps(data, indent=2))
        return

    if not result:
        console.print("[dim]No series found.[/dim]")
        return

    table = Table()
    table.add_column("Id", justify="right")
    table.add_column("Name")
    table.add_column("First aired")
    table.add_column("Network")
    for s in result:
        first_aired = s.first_aired.date().isoformat() if s.has_air_date else ""
        table.add_row(str(s.id), s.name or "", first_aired, s.network or "")
    console.print(table)


def _output_details_text(details: SeriesDetails, verbose: bool) -> None:
    """Output a series bundle as formatted text."""
    series = details.series
    if series is None:
        return

    console.print()
    console.print(f"[bold blue]{series.name}[/bold blue] [dim]({series.id})[/dim]")
    if series.has_air_date:
        console.print(f"[dim]First aired:[/dim] {series.first_aired.date().isoformat()}")
    if series.network:
        console.print(f"[dim]Network:[/dim] {series.network}")
    if series.genre:
        console.print(f"[dim]Genre:[/dim] {series.genre}")
    if series.status:
        console.print(f"[dim]Status:[/dim] {series.status}")
    console.print(f"[dim]Actors:[/dim] {len(series.actor_collection)}")
    console.print(f"[dim]Banners:[/dim] {len(details.banners or [])}")
    console.print(f"[dim]Episodes:[/dim] {len(series.episodes)}")
    console.print()

    for season, episodes in sorted(series.episodes_by_season().items()):
        label = "Specials" if season == 0 else f"Season {season}"
        console.print(f"[bold]{label}[/bold] ({len(episodes)} episodes)")
        if not verbose:
            continue
        for ep in sorted(episodes, key=lambda e: e.number):
            title_part = f" - {ep.name}" if ep.name else ""
            console.print(f"  {ep.episode_code or '?'}{title_part}")


def _output_details_json(details: SeriesDetails) -> None:
    """Output a series bundle as JSON."""
    series = details.series
    if series is None:
        print(json.dumps(None))
        return

    data = {
        "series": series.model_dump(mode="json", exclude={"episodes", "actor_collection"}),
        "episodes": [ep.model_dump(mode="json") for ep in series.episodes],
        "actors": [actor.model_dump(mode="json") for actor in sorted(series.actor_collection)],
        "banners": [banner.model_dump(mode="json") for banner in details.banners or []],
    }
    print(json.dumps(data, indent=2))


@main.group()
def config() -> None:
    """Manage tvdbxml configuration."""
    pass


@config.command(name="show")
def config_show() -> None:
    """Show current configuration."""
    from tvdbxml.config import find_config_file, get_default_file_directory

    cfg = get_config()
    config_file = find_config_file()

    console.print("[bold]Current Configuration[/bold]")
    console.print()

    if config_file:
        console.print(f"[dim]Config file:[/dim] {config_file}")
    else:
        console.print("[dim]Config file:[/dim] (none - using defaults)")
    console.print()

    console.print("[bold]TVDB:[/bold]")
    api_key = "(set)" if cfg.tvdb.api_key else "(not set)"
    console.print(f"  API key: {api_key}")
    console.print(f"  Language: {cfg.tvdb.language}")
    console.print(f"  Root URL: {cfg.tvdb.root_url}")
    console.print()

    console.print("[bold]Options:[/bold]")
    file_directory = cfg.options.file_directory or get_default_file_directory()
    console.print(f"  File directory: {file_directory}")
    console.print(f"  Timeout: {cfg.options.timeout}s")


@config.command(name="path")
def config_path() -> None:
    """Show configuration file paths."""
    from pathlib import Path

    from tvdbxml.config import find_config_file, get_config_paths

    console.print("[bold]Configuration paths (in priority order):[/bold]")
    config_file = find_config_file()

    for path in get_config_paths():
        if path.exists():
            if path == config_file:
                console.print(f"  [green]{path}[/green] (active)")
            else:
                console.print(f"  {path} (exists)")
        else:
            console.print(f"  [dim]{path}[/dim]")

    console.print()
    console.print("[bold]Other paths:[/bold]")
    console.print(f"  .env file: {Path.cwd() / '.env'}")


@config.command(name="init")
@click.option("--force", is_flag=True, help="Overwrite existing config file")
@click.option("--api-key", default="", help="TVDB API key to store")
def config_init(force: bool, api_key: str) -> None:
    """Create a default configuration file in the current directory."""
    from pathlib import Path

    from tvdbxml.config import save_default_config

    config_path = Path.cwd() / "tvdbxml.ini"

    if config_path.exists() and not force:
        console.print(f"[yellow]Config file already exists:[/yellow] {config_path}")
        console.print("Use --force to overwrite.")
        sys.exit(1)

    save_default_config(config_path, api_key=api_key)
    console.print(f"[green]Created config file:[/green] {config_path}")
    console.print("Edit this file to customize your settings.")


if __name__ == "__main__":
    main()
