"""CLI commands using Typer."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Annotated

if TYPE_CHECKING:
    from typed_paths.context import PathContext
    from typed_paths.directory import Entry

import typer
from rich.console import Console
from rich.logging import RichHandler

from typed_paths import __version__
from typed_paths.console import Display
from typed_paths.context import default_context
from typed_paths.directory import DirectoryHandle
from typed_paths.path import GenericPath
from typed_paths.serialization import DeserializationError
from typed_paths.structured import StructuredFile

app = typer.Typer(
    name="typed-paths",
    help="Inspect files, directories and structured-data files",
    no_args_is_help=True,
)

console = Console()
display = Display(console)


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        console.print(f"typed-paths v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit",
        ),
    ] = False,
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Log filesystem operations")
    ] = False,
) -> None:
    """Inspect files, directories and structured-data files."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=console, show_path=False)],
        )


def _directory(path: str, ctx: PathContext) -> DirectoryHandle:
    """Resolve a directory argument, exiting if it is not a directory."""
    directory = DirectoryHandle(path, context=ctx)
    if not asyncio.run(directory.exists()):
        display.show_error(f"Not a directory: {path}")
        raise typer.Exit(1)
    return directory


async def _collect(
    directory: DirectoryHandle, deep: bool, files: bool, dirs: bool
) -> list[Entry]:
    """Gather the entries requested by the ls flags."""
    if deep:
        if files:
            return list(await directory.list_files_deep())
        if dirs:
            return list(await directory.list_directories_deep())
        return await directory.list_deep()
    if files:
        return list(await directory.list_files())
    if dirs:
        return list(await directory.list_directories())
    return await directory.list()


@app.command("ls")
def list_command(
    path: Annotated[str, typer.Argument(help="Directory to list")] = ".",
    deep: Annotated[bool, typer.Option("--deep", "-r", help="Recurse into subdirectories")] = False,
    files: Annotated[bool, typer.Option("--files", help="Only list files")] = False,
    dirs: Annotated[bool, typer.Option("--dirs", help="Only list directories")] = False,
    _context=None,
) -> None:
    """List directory entries, sorted by path."""
    ctx = _context or default_context()
    if files and dirs:
        display.show_error("--files and --dirs are mutually exclusive")
        raise typer.Exit(1)

    directory = _directory(path, ctx)
    try:
        entries = asyncio.run(_collect(directory, deep, files, dirs))
    except OSError as e:
        display.show_error(f"Cannot list {path}: {e}")
        raise typer.Exit(1) from e
    display.show_entries(entries, directory)


@app.command("tree")
def tree_command(
    path: Annotated[str, typer.Argument(help="Directory to walk")] = ".",
    _context=None,
) -> None:
    """Walk a directory depth-first and print it as a tree."""
    ctx = _context or default_context()
    directory = _directory(path, ctx)
    walked: list[Entry] = []
    try:
        asyncio.run(directory.walk(walked.append))
    except OSError as e:
        display.show_error(f"Cannot walk {path}: {e}")
        raise typer.Exit(1) from e
    display.show_tree(directory, walked)


@app.command("info")
def info_command(
    path: Annotated[str, typer.Argument(help="Path to inspect")],
    no_follow: Annotated[
        bool, typer.Option("--no-follow", help="Do not follow symbolic links")
    ] = False,
    _context=None,
) -> None:
    """Show metadata for a path."""
    ctx = _context or default_context()
    target = GenericPath(path, context=ctx)
    try:
        snapshot = asyncio.run(target.lstat() if no_follow else target.stat())
    except FileNotFoundError as e:
        display.show_error(f"No such path: {path}")
        raise typer.Exit(1) from e
    except OSError as e:
        display.show_error(f"Cannot stat {path}: {e}")
        raise typer.Exit(1) from e
    display.show_metadata(target.path, snapshot)


@app.command("show")
def show_command(
    path: Annotated[str, typer.Argument(help="JSON or YAML file")],
    _context=None,
) -> None:
    """Decode a structured-data file and print it as JSON."""
    ctx = _context or default_context()
    document = StructuredFile(path, context=ctx)
    try:
        value = asyncio.run(document.read())
    except FileNotFoundError as e:
        display.show_error(f"No such file: {path}")
        raise typer.Exit(1) from e
    except DeserializationError as e:
        display.show_error(str(e))
        raise typer.Exit(1) from e
    display.show_payload(value)
