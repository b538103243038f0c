"""Rich output helpers for the command line."""

from __future__ import annotations

import json
from datetime import datetime
from typing import TYPE_CHECKING, Any

from rich.console import Console
from rich.table import Table
from rich.tree import Tree

from typed_paths.types import PathKind

if TYPE_CHECKING:
    from typed_paths.directory import DirectoryHandle, Entry
    from typed_paths.types import StatSnapshot

_DIRECTORY_KINDS = (PathKind.DIRECTORY, PathKind.TEMPORARY)


def _timestamp(value: float) -> str:
    return datetime.fromtimestamp(value).strftime("%Y-%m-%d %H:%M:%S")


class Display:
    """Renders handles, trees and metadata to a console."""

    def __init__(self, console: Console | None = None) -> None:
        """Initialize display.

        Args:
            console: Console to print to. Defaults to stdout.
        """
        self.console = console or Console()

    def show_entries(self, entries: list[Entry], base: DirectoryHandle) -> None:
        """Show entries as a table, sorted by path.

        Args:
            entries: File and directory handles.
            base: Directory the entries are shown relative to.
        """
        if not entries:
            self.console.print("[yellow]No entries[/yellow]")
            return

        table = Table(show_header=True, header_style="bold")
        table.add_column("Type", style="cyan", width=4)
        table.add_column("Path")

        for entry in sorted(entries, key=lambda e: e.path):
            label = "dir" if entry.kind in _DIRECTORY_KINDS else "file"
            table.add_row(label, entry.relative_to(base).path)

        self.console.print(table)

    def show_tree(self, root: DirectoryHandle, entries: list[Entry]) -> None:
        """Show entries as a tree.

        Args:
            root: Root directory of the walk.
            entries: Entries in walk order (parents before children).
        """
        tree = Tree(f"[bold]{root.path}[/bold]")
        nodes = {root.path: tree}
        for entry in entries:
            parent = nodes.get(entry.parent().path, tree)
            if entry.kind in _DIRECTORY_KINDS:
                nodes[entry.path] = parent.add(f"[blue]{entry.basename()}/[/blue]")
            else:
                parent.add(entry.basename())
        self.console.print(tree)

    def show_metadata(self, path: str, snapshot: StatSnapshot) -> None:
        """Show a metadata snapshot.

        Args:
            path: Path the snapshot belongs to.
            snapshot: Metadata to show.
        """
        table = Table(title=path, show_header=False)
        table.add_column("Field", style="cyan")
        table.add_column("Value")
        kind = "directory" if snapshot.is_directory else "file" if snapshot.is_file else "other"
        table.add_row("type", kind)
        table.add_row("size", str(snapshot.size))
        table.add_row("mode", oct(snapshot.mode))
        table.add_row("modified", _timestamp(snapshot.mtime))
        table.add_row("accessed", _timestamp(snapshot.atime))
        table.add_row("changed", _timestamp(snapshot.ctime))
        self.console.print(table)

    def show_payload(self, value: Any) -> None:
        """Show a decoded structured-data payload as JSON.

        Args:
            value: Decoded value.
        """
        self.console.print_json(json.dumps(value, default=str))

    def show_error(self, message: str) -> None:
        """Show error message.

        Args:
            message: Error message.
        """
        self.console.print(f"[red]✗[/red] {message}")
