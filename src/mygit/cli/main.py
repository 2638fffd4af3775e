"""Main CLI entry point for mygit."""

import logging
from pathlib import Path
from typing import NoReturn

import typer
from rich.console import Console
from rich.markup import escape

from mygit.constants import (
    DEFAULT_BRANCH,
    EXIT_DATA_ERROR,
    EXIT_SYSTEM_ERROR,
    EXIT_USER_ERROR,
    HEADS_PREFIX,
    TREE,
)
from mygit.core import (
    NotADirError,
    NotAFileError,
    NotATreeError,
    ObjectBuilder,
    ObjectReader,
    TreeEntry,
)
from mygit.logging_utils import configure_logging
from mygit.repository import InvalidHeadError, Repository, RepositoryNotFoundError
from mygit.storage import CorruptObjectError, InvalidFrameError, ObjectNotFoundError

console = Console()
app = typer.Typer(
    name="mygit",
    help="A minimal content-addressable object store with git's object format",
    add_completion=False,
)

USER_ERRORS = (
    ObjectNotFoundError,
    NotATreeError,
    NotAFileError,
    NotADirError,
    InvalidHeadError,
    ValueError,
)
DATA_ERRORS = (CorruptObjectError, InvalidFrameError)


def _fail(message: str, code: int = EXIT_USER_ERROR) -> NoReturn:
    console.print(f"[bold red]Error:[/bold red] {escape(message)}", style="red")
    raise typer.Exit(code)


def _handle_error(error: Exception) -> NoReturn:
    """Translate a library exception into an error message and exit code."""
    if isinstance(error, DATA_ERRORS):
        _fail(str(error), EXIT_DATA_ERROR)
    if isinstance(error, USER_ERRORS):
        _fail(str(error), EXIT_USER_ERROR)
    _fail(str(error), EXIT_SYSTEM_ERROR)


def _format_entry(entry: TreeEntry) -> str:
    return f"{entry.mode} {entry.object_type} {entry.hex_digest}\t{entry.name}"


def _open_repository() -> Repository:
    workspace_root = Path.cwd()
    try:
        return Repository.open(workspace_root)
    except RepositoryNotFoundError:
        console.print(
            "[bold red]Error:[/bold red] Not a mygit repository",
            style="red",
        )
        console.print(
            f"  No .git/ directory found in {escape(str(workspace_root))}",
            style="dim",
        )
        console.print(
            "\nRun [bold]mygit init[/bold] to initialize a repository",
            style="yellow",
        )
        raise typer.Exit(EXIT_USER_ERROR)


@app.callback()
def main(
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Log object store activity to stderr",
    ),
) -> None:
    """Store files and directory snapshots as SHA-1 addressed objects."""
    configure_logging(logging.DEBUG if verbose else None)


@app.command()
def version() -> None:
    """Show mygit version."""
    from mygit import __version__
    typer.echo(f"mygit version {__version__}")


@app.command()
def init(
    branch: str = typer.Option(
        DEFAULT_BRANCH,
        "--branch",
        "-b",
        help="Branch name HEAD points at",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        "-q",
        help="Suppress output except errors",
    ),
) -> None:
    """Create the .git directory layout in the current directory."""
    try:
        Repository.init(Path.cwd(), branch=branch)
    except (OSError, ValueError) as e:
        _handle_error(e)

    if not quiet:
        typer.echo("Initialized git directory")


@app.command("cat-file")
def cat_file(
    obj: str = typer.Argument(..., metavar="OBJECT", help="Object digest (40 hex characters)"),
    pretty: bool = typer.Option(False, "-p", help="Print the object's content"),
    show_type: bool = typer.Option(False, "-t", help="Print the object's type"),
    show_size: bool = typer.Option(False, "-s", help="Print the object's size"),
) -> None:
    """Print a stored object's content, type or size."""
    if sum((pretty, show_type, show_size)) != 1:
        _fail("Exactly one of -p, -t or -s is required")

    repo = _open_repository()
    reader = ObjectReader(repo.store)

    try:
        if show_type:
            typer.echo(reader.object_type(obj))
        elif show_size:
            typer.echo(str(reader.object_size(obj)))
        else:
            obj_type, payload = reader.read_object(obj)
            if obj_type == TREE:
                for entry in reader.list_tree(obj):
                    typer.echo(_format_entry(entry))
            else:
                typer.echo(payload, nl=False)
    except (*USER_ERRORS, *DATA_ERRORS, OSError) as e:
        _handle_error(e)


@app.command("hash-object")
def hash_object(
    path: Path = typer.Argument(..., help="File to hash"),
    write: bool = typer.Option(False, "-w", help="Write the object into the store"),
) -> None:
    """Compute a file's blob digest, optionally storing it."""
    repo = _open_repository()
    builder = ObjectBuilder(repo.store)

    try:
        oid = builder.build_leaf(path, write=write)
    except (*USER_ERRORS, OSError) as e:
        _handle_error(e)

    typer.echo(oid)


@app.command("ls-tree")
def ls_tree(
    tree: str = typer.Argument(..., help="Tree digest (40 hex characters)"),
    name_only: bool = typer.Option(False, "--name-only", help="List only entry names"),
) -> None:
    """List the entries of a tree object."""
    repo = _open_repository()
    reader = ObjectReader(repo.store)

    try:
        entries = reader.list_tree(tree)
    except (*USER_ERRORS, *DATA_ERRORS, OSError) as e:
        _handle_error(e)

    for entry in entries:
        if name_only:
            typer.echo(entry.name)
        else:
            typer.echo(_format_entry(entry))


@app.command("write-tree")
def write_tree() -> None:
    """Snapshot the current directory and print the root tree digest."""
    repo = _open_repository()
    builder = ObjectBuilder(repo.store)

    try:
        oid = builder.build_tree(repo.workspace_root)
    except (*USER_ERRORS, OSError) as e:
        _handle_error(e)

    typer.echo(oid)


@app.command("symbolic-ref")
def symbolic_ref(
    short: bool = typer.Option(False, "--short", help="Print only the branch name"),
) -> None:
    """Print the ref HEAD points at."""
    repo = _open_repository()

    try:
        ref = repo.head_ref()
    except InvalidHeadError as e:
        _handle_error(e)

    if short:
        if ref.startswith(HEADS_PREFIX):
            ref = ref[len(HEADS_PREFIX):]
    typer.echo(ref)


if __name__ == "__main__":
    app()
