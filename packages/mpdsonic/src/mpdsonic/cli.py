#!/usr/bin/env python3
"""Command-line interface for mpdsonic.

This CLI is for inspecting the virtual filesystem built from an MPD
database. To serve Subsonic clients, run the API: python -m mpdsonic_api.
"""

import json
import logging
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from mpdsonic.database import MPDDatabase, MusicDatabase
from mpdsonic.exceptions import MpdsonicError
from mpdsonic.memory import MemoryDatabase
from mpdsonic.models.entry import IndexedEntry, MetadataEntry
from mpdsonic.services.library import MusicLibrary

logger = logging.getLogger("mpdsonic")


def setup_logging(verbose: bool = False) -> None:
    """Configure logging with Rich handler.

    Args:
        verbose: If True, set log level to DEBUG. Otherwise WARNING.
    """
    level = logging.DEBUG if verbose else logging.WARNING

    root_logger = logging.getLogger()
    root_logger.handlers.clear()

    handler = RichHandler(rich_tracebacks=True, show_path=False)
    handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))

    root_logger.setLevel(level)
    root_logger.addHandler(handler)


def open_database(obj: dict) -> MusicDatabase:
    """Create the database selected by the group options."""
    from_file: Path | None = obj.get("from_file")
    if from_file is not None:
        lines = from_file.read_text(encoding="utf-8").splitlines()
        return MemoryDatabase.from_paths(line for line in lines if line.strip())

    database = MPDDatabase(
        host=obj["host"], port=obj["port"], password=obj.get("password")
    )
    database.connect()
    return database


def print_index(console: Console, entries: list[IndexedEntry]) -> None:
    """Print index entries as a table."""
    table = Table(title=f"{len(entries)} entries", title_justify="left")
    table.add_column("ID", justify="right", style="bold cyan")
    table.add_column("Kind", width=4)
    table.add_column("Path", overflow="fold")

    for entry in entries:
        kind = "[yellow]dir[/yellow]" if entry.is_dir else "file"
        table.add_row(str(entry.id), kind, entry.path)

    console.print(table)


def print_children(
    console: Console, start: IndexedEntry, children: list[MetadataEntry]
) -> None:
    """Print a tagged directory listing as a table."""
    table = Table(title=f"[bold]{start.path}[/bold]", title_justify="left")
    table.add_column("ID", justify="right", style="bold cyan")
    table.add_column("Title", overflow="fold")
    table.add_column("Artist", overflow="fold")
    table.add_column("Album", overflow="fold")
    table.add_column("Suffix", width=6)

    for child in children:
        title = f"[yellow]{child.title}/[/yellow]" if child.is_dir else child.title
        table.add_row(
            str(child.id), title, child.artist, child.album, child.entry.suffix
        )

    console.print(table)


def _entry_dict(entry: IndexedEntry) -> dict:
    return {"id": entry.id, "path": entry.path, "is_dir": entry.is_dir}


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
@click.option("--host", default="localhost", show_default=True, help="MPD host.")
@click.option("--port", default=6600, show_default=True, help="MPD port.")
@click.option("--password", default=None, help="MPD password.")
@click.option(
    "--from-file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Read newline-separated paths from FILE instead of MPD.",
)
@click.pass_context
def main(
    ctx: click.Context,
    verbose: bool,
    host: str,
    port: int,
    password: str | None,
    from_file: Path | None,
) -> None:
    """Inspect the Subsonic view of an MPD database."""
    ctx.ensure_object(dict)
    ctx.obj.update(
        verbose=verbose,
        host=host,
        port=port,
        password=password,
        from_file=from_file,
    )
    setup_logging(verbose=verbose)


@main.command(name="index")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON.")
@click.option("--top", is_flag=True, help="Only show top-level entries.")
@click.pass_context
def index_cmd(ctx: click.Context, as_json: bool, top: bool) -> None:
    """Print the virtual index with the id of every directory and file.

    \b
    Examples:
      mpdsonic index
      mpdsonic --from-file paths.txt index --top
    """
    console = Console()

    try:
        library = MusicLibrary(open_database(ctx.obj))
        entries = library.top_level() if top else library.index()
    except MpdsonicError as e:
        logger.error(str(e))
        raise click.ClickException(str(e)) from e

    if as_json:
        json.dump([_entry_dict(e) for e in entries], sys.stdout, indent=2)
        sys.stdout.write("\n")
    else:
        print_index(console, entries)


@main.command(name="ls")
@click.argument("entry_id", type=click.IntRange(min=0), metavar="ID")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def ls_cmd(ctx: click.Context, entry_id: int, as_json: bool) -> None:
    """List the tagged children of directory ID.

    \b
    Examples:
      mpdsonic ls 0
    """
    console = Console()

    try:
        library = MusicLibrary(open_database(ctx.obj))
        start, children = library.directory(entry_id)
    except MpdsonicError as e:
        logger.error(str(e))
        raise click.ClickException(str(e)) from e

    if start is None:
        raise click.ClickException(f"No directory with id {entry_id}")

    if as_json:
        data = [
            {
                **_entry_dict(child.entry),
                "artist": child.artist,
                "album": child.album,
                "title": child.title,
            }
            for child in children
        ]
        json.dump(data, sys.stdout, indent=2, ensure_ascii=False)
        sys.stdout.write("\n")
    else:
        print_children(console, start, children)


@main.command(name="ping")
@click.pass_context
def ping_cmd(ctx: click.Context) -> None:
    """Check that the database answers."""
    try:
        open_database(ctx.obj).ping()
    except MpdsonicError as e:
        raise click.ClickException(str(e)) from e
    click.echo("ok")


if __name__ == "__main__":
    main()
