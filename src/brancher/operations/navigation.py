"""Navigation operations for Brancher -- branch checkout.

Checkout runs in two phases: the branch tree is written into the index and
working directory, then HEAD is attached to the branch. The phases are not
atomic; a HEAD failure leaves the new tree in place unless the caller asks
for the previous tree to be restored.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from git import Head, SymbolicReference
from git.exc import BadName, BadObject, GitCommandError

from brancher.exceptions import BranchNotFoundError, CheckoutError, HeadUpdateError
from brancher.operations.branch import branch_ref_path, is_valid_branch_name
from brancher.operations.listing import current_branch_path

if TYPE_CHECKING:
    from git import Repo

logger = logging.getLogger(__name__)


def find_local_branch(repo: Repo, name: str) -> Head:
    """Resolve a local branch by exact name.

    Raises:
        BranchNotFoundError: If no local branch has that name.
    """
    if not is_valid_branch_name(name):
        raise BranchNotFoundError(name)
    ref_path = branch_ref_path(name)
    try:
        SymbolicReference.dereference_recursive(repo, ref_path)
    except ValueError:
        raise BranchNotFoundError(name) from None
    return Head(repo, ref_path)


def _head_position(repo: Repo) -> tuple[str | None, str | None]:
    """(description, tree hash) of the current HEAD for reflog and restore."""
    try:
        commit = repo.head.commit
    except (ValueError, BadName, BadObject):
        return None, None
    path = current_branch_path(repo)
    label = path[len("refs/heads/"):] if path else commit.hexsha
    return label, commit.tree.hexsha


def materialize_tree(repo: Repo, tree_hash: str) -> None:
    """Overwrite index and working directory with *tree_hash*.

    Paths tracked in the current index but absent from the tree are removed.
    Local modifications are discarded.
    """
    repo.git.read_tree("--reset", "-u", tree_hash)


def checkout_branch(
    repo: Repo,
    name: str,
    *,
    restore_tree_on_head_failure: bool = False,
) -> str:
    """Checkout a local branch: write its tree, then attach HEAD to it.

    Args:
        repo: The GitPython repository.
        name: Exact local branch name.
        restore_tree_on_head_failure: Write the previous HEAD tree back if
            attaching HEAD fails.

    Returns:
        The commit hash now checked out.

    Raises:
        BranchNotFoundError: If the branch does not exist. Nothing changes.
        CheckoutError: If the tree cannot be written.
        HeadUpdateError: If HEAD cannot be attached after the tree was written.
    """
    logger.info("Checking out branch %s", name)
    ref = find_local_branch(repo, name)
    logger.info("Found branch with ref %s", ref.path)

    try:
        commit = ref.commit
        tree_hash = commit.tree.hexsha
    except (ValueError, BadName, BadObject) as exc:
        logger.error("Failed to peel %s to a tree: %s", ref.path, exc)
        raise CheckoutError(name, f"cannot resolve tree: {exc}") from exc

    previous_label, previous_tree = _head_position(repo)

    try:
        materialize_tree(repo, tree_hash)
    except GitCommandError as exc:
        logger.error("Failed to checkout tree: %s", exc)
        raise CheckoutError(name, str(exc).strip()) from exc

    logmsg = f"checkout: moving from {previous_label or 'nothing'} to {name}"
    try:
        repo.head.set_reference(ref, logmsg=logmsg)
    except (OSError, ValueError, TypeError) as exc:
        logger.error("Failed to set head to: %s", ref.path)
        restored = False
        if restore_tree_on_head_failure and previous_tree is not None:
            restored = _restore_tree(repo, previous_tree)
        raise HeadUpdateError(name, str(exc), restored=restored) from exc

    return commit.hexsha


def _restore_tree(repo: Repo, tree_hash: str) -> bool:
    try:
        materialize_tree(repo, tree_hash)
    except GitCommandError as exc:
        logger.error("Failed to restore previous tree %s: %s", tree_hash, exc)
        return False
    logger.info("Restored previous tree %s", tree_hash)
    return True
