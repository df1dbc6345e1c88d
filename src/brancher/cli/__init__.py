"""Brancher CLI -- terminal interface for local branch bookkeeping.

This module is NEVER imported from brancher/__init__.py.
It is only loaded via the ``brancher`` entry point defined in pyproject.toml.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import TYPE_CHECKING

import click

from brancher.cli.formatting import format_error, get_console

if TYPE_CHECKING:
    from collections.abc import Iterator

    from rich.console import Console

    from brancher.repo import GitRepo


@click.group()
@click.option(
    "--log-level",
    default="WARNING",
    envvar="BRANCHER_LOG_LEVEL",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    help="Level of log messages written to stderr.",
)
@click.option(
    "--restore-on-failure/--no-restore-on-failure",
    default=False,
    envvar="BRANCHER_RESTORE_ON_FAILURE",
    help="Restore the previous working tree if HEAD cannot be moved during checkout.",
)
@click.pass_context
def cli(ctx: click.Context, log_level: str, restore_on_failure: bool) -> None:
    """Brancher: list, checkout, create, and delete local git branches."""
    from brancher.logger import setup_logging
    from brancher.models.config import BrancherConfig

    config = BrancherConfig(
        restore_tree_on_head_failure=restore_on_failure,
        log_level=log_level,
    )
    setup_logging(config.log_level)
    ctx.ensure_object(dict)
    ctx.obj["config"] = config


def _get_repo(ctx: click.Context) -> GitRepo:
    """Open the repository enclosing the current directory."""
    from brancher.repo import GitRepo

    return GitRepo.from_cwd(config=ctx.obj["config"])


@contextmanager
def _repo_session(ctx: click.Context) -> Iterator[tuple[GitRepo, Console]]:
    """Context manager that opens a GitRepo, yields (repo, console), and handles cleanup.

    Ensures the repository is closed on exit and formats exceptions as CLI errors.
    """
    from brancher.exceptions import BrancherError

    console = get_console()
    try:
        repo = _get_repo(ctx)
        try:
            yield repo, console
        finally:
            repo.close()
    except SystemExit:
        raise
    except BrancherError as e:
        format_error(str(e), console)
        raise SystemExit(1) from None


# Register subcommands after cli group is defined
from brancher.cli.commands.branches import list_branches  # noqa: E402
from brancher.cli.commands.checkout import checkout  # noqa: E402
from brancher.cli.commands.create import create  # noqa: E402
from brancher.cli.commands.delete import delete  # noqa: E402
from brancher.cli.commands.validate import validate  # noqa: E402

cli.add_command(list_branches)
cli.add_command(checkout)
cli.add_command(create)
cli.add_command(delete)
cli.add_command(validate)
