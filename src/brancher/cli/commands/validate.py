"""brancher validate -- check a proposed branch name."""

from __future__ import annotations

import click
from rich.markup import escape


@click.command()
@click.argument("name")
@click.pass_context
def validate(ctx: click.Context, name: str) -> None:
    """Check that NAME is a valid, unused branch name.

    Exits with status 1 when it is not.
    """
    from brancher.cli import _repo_session

    with _repo_session(ctx) as (repo, console):
        if repo.validate_branch_name(name):
            console.print(f"[green]valid[/green] {escape(name)}")
        else:
            console.print(f"[red]invalid[/red] {escape(name)}")
            raise SystemExit(1)
