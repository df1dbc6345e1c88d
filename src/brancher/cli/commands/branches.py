"""brancher list -- show local branches."""

from __future__ import annotations

import click

from brancher.cli.formatting import format_branches


@click.command("list")
@click.pass_context
def list_branches(ctx: click.Context) -> None:
    """List local branches, marking the one HEAD is attached to."""
    from brancher.cli import _repo_session

    with _repo_session(ctx) as (repo, console):
        format_branches(repo.local_branches(), console)
