"""Main CLI interface for gitlet."""

import logging
from datetime import datetime
from pathlib import Path
from typing import Dict, Optional, Tuple

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from gitlet.core.config import get_settings
from gitlet.core.history import find_by_message, global_log, iter_history
from gitlet.core.log import render_log
from gitlet.core.store import CommitStore
from gitlet.exceptions import GitletError, InvalidTrackedFileError
from gitlet.models.commit import CommitBuilder

console = Console()
logger = logging.getLogger(__name__)


def _configure_logging(level: int) -> None:
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )
    logging.getLogger("gitlet").setLevel(level)


def parse_tracked_files(specs: Tuple[str, ...]) -> Dict[str, str]:
    """Turn ``PATH=BLOB`` option values into a tracked-file mapping."""
    tracked_files = {}
    for spec in specs:
        path, sep, blob_id = spec.rpartition("=")
        if not sep or not path or not blob_id:
            raise InvalidTrackedFileError(spec)
        tracked_files[path] = blob_id
    return tracked_files


def _parse_date(ctx, param, value: Optional[str]) -> Optional[datetime]:
    if value is None:
        return None
    try:
        return datetime.fromisoformat(value)
    except ValueError as e:
        raise click.BadParameter(f"{value!r} is not an ISO 8601 date") from e


def _get_store(ctx: click.Context) -> CommitStore:
    return ctx.obj["store"]


@click.group()
@click.version_option(package_name="gitlet")
@click.option(
    "--store",
    "store_dir",
    type=click.Path(file_okay=False, path_type=Path),
    help="Directory holding commit objects (default: $GITLET_DIR or .gitlet/commits)",
)
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging")
@click.pass_context
def main(ctx: click.Context, store_dir: Optional[Path], verbose: bool):
    """gitlet - content-addressed commits."""
    settings = get_settings()
    _configure_logging(logging.DEBUG if verbose else settings.log_level)

    root = store_dir if store_dir is not None else settings.store_dir
    logger.debug("Using commit store at %s", root)
    ctx.ensure_object(dict)
    ctx.obj["store"] = CommitStore(root)


@main.command()
@click.argument("message")
@click.option("--parent", help="Digest of the preceding commit")
@click.option("--merge-parent", help="Digest of the second parent of a merge")
@click.option(
    "--file",
    "files",
    multiple=True,
    metavar="PATH=BLOB",
    help="Tracked file and its blob id (repeatable)",
)
@click.option(
    "--date",
    callback=_parse_date,
    help="Commit time as ISO 8601 (default: now)",
)
@click.pass_context
def commit(
    ctx: click.Context,
    message: str,
    parent: Optional[str],
    merge_parent: Optional[str],
    files: Tuple[str, ...],
    date: Optional[datetime],
):
    """Create a commit and store it."""
    store = _get_store(ctx)
    try:
        builder = (
            CommitBuilder(message)
            .parent(parent)
            .secondary_parent(merge_parent)
            .tracked_files(parse_tracked_files(files))
        )
        if date is not None:
            builder.timestamp(date)
        new_commit = builder.build()
        store.save(new_commit)
    except GitletError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise click.Abort() from e

    click.echo(new_commit.digest)


@main.command()
@click.argument("commit_id")
@click.option("--limit", type=int, help="Number of commits to show")
@click.pass_context
def log(ctx: click.Context, commit_id: str, limit: Optional[int]):
    """Show history from a commit, following first parents."""
    store = _get_store(ctx)
    try:
        for entry in iter_history(store, commit_id, limit=limit):
            click.echo(render_log(entry), nl=False)
    except GitletError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise click.Abort() from e


@main.command(name="global-log")
@click.pass_context
def global_log_command(ctx: click.Context):
    """Show every stored commit."""
    store = _get_store(ctx)
    try:
        for entry in global_log(store):
            click.echo(entry, nl=False)
    except GitletError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise click.Abort() from e


@main.command()
@click.argument("message")
@click.pass_context
def find(ctx: click.Context, message: str):
    """Print the ids of all commits with the given message."""
    store = _get_store(ctx)
    try:
        matches = find_by_message(store, message)
    except GitletError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise click.Abort() from e

    if not matches:
        console.print("[yellow]Found no commit with that message.[/yellow]")
        ctx.exit(1)

    for digest in matches:
        click.echo(digest)


@main.command()
@click.argument("commit_id")
@click.pass_context
def show(ctx: click.Context, commit_id: str):
    """Show a commit's log entry and its tracked files."""
    store = _get_store(ctx)
    try:
        found = store.load(commit_id)
    except GitletError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise click.Abort() from e

    click.echo(found.log(), nl=False)

    if not found.tracked_files:
        console.print("[yellow]No tracked files[/yellow]")
        return

    table = Table(title="Tracked Files")
    table.add_column("Path", style="cyan")
    table.add_column("Blob", style="green", no_wrap=True)
    for path, blob_id in found.tracked_files.items():
        table.add_row(path, blob_id)

    console.print(table)


if __name__ == "__main__":
    main()
