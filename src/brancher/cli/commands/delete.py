"""brancher delete -- delete a local branch."""

from __future__ import annotations

import click
from rich.markup import escape


@click.command()
@click.argument("name")
@click.pass_context
def delete(ctx: click.Context, name: str) -> None:
    """Delete the local branch NAME. A missing branch is not an error."""
    from brancher.cli import _repo_session
    from brancher.models.branch import Branch

    with _repo_session(ctx) as (repo, console):
        if repo.delete_branch(Branch.new(name)):
            console.print(f"Deleted branch [red]{escape(name)}[/red]")
        else:
            console.print(f"[dim]No branch named {escape(name)}; nothing to delete.[/dim]")
