"""Rich formatting helpers for the Brancher CLI.

Provides functions that format SDK data structures for terminal display.
Rich auto-detects TTY and degrades gracefully when piped (no ANSI codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.console import Console
from rich.markup import escape
from rich.table import Table

if TYPE_CHECKING:
    from brancher.models.branch import Branch


def get_console() -> Console:
    """Create a Rich Console that auto-detects TTY for graceful pipe degradation."""
    return Console(stderr=False)


def format_branches(branches: list[Branch], console: Console) -> None:
    """Display local branches as a table, marking the checked-out one."""
    if not branches:
        console.print("[dim]No local branches.[/dim]")
        return

    table = Table(show_header=True, header_style="bold", box=None, pad_edge=False)
    table.add_column("", width=1)
    table.add_column("Branch")
    table.add_column("Commit", style="yellow", width=8)
    table.add_column("Upstream", style="cyan")

    for branch in branches:
        marker = "[green]*[/green]" if branch.is_head else ""
        name = f"[green]{escape(branch.name)}[/green]" if branch.is_head else escape(branch.name)
        commit = branch.commit_hash[:8] if branch.commit_hash else "-"
        upstream = escape(branch.upstream.name) if branch.upstream else ""
        table.add_row(marker, name, commit, upstream)

    console.print(table)


def format_error(message: str, console: Console) -> None:
    """Display an error message."""
    console.print(f"[red]Error:[/red] {escape(message)}", highlight=False)
