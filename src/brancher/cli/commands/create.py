"""brancher create -- create a branch at the current commit."""

from __future__ import annotations

import click
from rich.markup import escape

from brancher.cli.formatting import format_error


@click.command()
@click.argument("name")
@click.option("--checkout", "-c", "switch", is_flag=True, help="Checkout the new branch.")
@click.pass_context
def create(ctx: click.Context, name: str, switch: bool) -> None:
    """Create branch NAME pointing at the commit HEAD points to."""
    from brancher.cli import _repo_session
    from brancher.models.branch import Branch

    with _repo_session(ctx) as (repo, console):
        if not repo.validate_branch_name(name):
            format_error(f"'{name}' is not a valid new branch name", console)
            raise SystemExit(1)

        commit_hash = repo.create_branch(Branch.new(name))
        console.print(
            f"Created branch [green]{escape(name)}[/green] "
            f"at [yellow]{commit_hash[:8]}[/yellow]"
        )
        if switch:
            repo.checkout_branch_from_name(name)
            console.print(f"Switched to branch [green]{escape(name)}[/green]")
