"""brancher checkout -- switch the working tree to a local branch."""

from __future__ import annotations

import click
from rich.markup import escape


@click.command()
@click.argument("name")
@click.pass_context
def checkout(ctx: click.Context, name: str) -> None:
    """Checkout the local branch NAME.

    The working tree is overwritten with the branch contents; uncommitted
    changes to tracked files are lost.
    """
    from brancher.cli import _repo_session

    with _repo_session(ctx) as (repo, console):
        resolved = repo.checkout_branch_from_name(name)
        console.print(
            f"Switched to branch [green]{escape(name)}[/green] "
            f"([yellow]{resolved[:8]}[/yellow])"
        )
