"""Branch CRUD operations for Brancher.

Create, delete, and validate local branches.
Composes GitPython ref primitives into higher-level actions.
"""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING

from git import SymbolicReference
from git.exc import BadName, BadObject, GitCommandError

from brancher.exceptions import (
    BranchCreationError,
    BranchDeletionError,
    BranchExistsError,
    CommitLookupError,
    HeadTargetError,
    InvalidBranchNameError,
)
from brancher.operations.listing import iter_branch_entries

if TYPE_CHECKING:
    from git import Repo

logger = logging.getLogger(__name__)


# Characters forbidden in branch names (git-style): ASCII space and controls, DEL.
# Non-ASCII whitespace such as U+00A0 is allowed, as git allows it.
_FORBIDDEN_CHARS = re.compile(r"[ ~^:?*\[\\\x00-\x1f\x7f]")


def check_branch_name(name: str) -> None:
    """Validate a branch name against git ref naming rules.

    Raises InvalidBranchNameError on violation.
    """
    if not name:
        raise InvalidBranchNameError(name, "branch name cannot be empty")

    if name in ("HEAD", "@"):
        raise InvalidBranchNameError(name, f"'{name}' is reserved")

    if name.startswith("-"):
        raise InvalidBranchNameError(name, "branch name cannot start with '-'")

    if ".." in name:
        raise InvalidBranchNameError(name, "branch name cannot contain '..'")

    if "@{" in name:
        raise InvalidBranchNameError(name, "branch name cannot contain '@{'")

    if name.endswith("."):
        raise InvalidBranchNameError(name, "branch name cannot end with '.'")

    if _FORBIDDEN_CHARS.search(name):
        raise InvalidBranchNameError(
            name,
            "branch name contains forbidden characters "
            "(space, control characters, ~, ^, :, ?, *, [, \\)",
        )

    if name.startswith("/") or name.endswith("/") or "//" in name:
        raise InvalidBranchNameError(name, "branch name has invalid slash usage")

    for component in name.split("/"):
        if component.startswith("."):
            raise InvalidBranchNameError(name, "path component cannot start with '.'")
        if component.endswith(".lock"):
            raise InvalidBranchNameError(name, "path component cannot end with '.lock'")


def is_valid_branch_name(name: str) -> bool:
    """Boolean form of check_branch_name()."""
    try:
        check_branch_name(name)
    except InvalidBranchNameError:
        return False
    return True


def branch_ref_path(name: str) -> str:
    """Full ref path of the local branch *name*."""
    return f"refs/heads/{name}"


def ref_exists(repo: Repo, ref_path: str) -> bool:
    """Whether *ref_path* is present in the ref store (loose or packed)."""
    try:
        SymbolicReference.dereference_recursive(repo, ref_path)
    except ValueError:
        return False
    return True


def create_branch(repo: Repo, name: str) -> str:
    """Create a local branch at the commit HEAD resolves to.

    HEAD is not moved.

    Args:
        repo: The GitPython repository.
        name: Name of the branch to create.

    Returns:
        The commit hash the new branch points to.

    Raises:
        HeadTargetError: If HEAD has no concrete commit target.
        CommitLookupError: If the HEAD commit cannot be loaded.
        InvalidBranchNameError: If the ref store rejects the name.
        BranchExistsError: If a branch with that name exists.
        BranchCreationError: If writing the ref fails.
    """
    logger.info("Creating branch %s", name)
    try:
        head_hash = SymbolicReference.dereference_recursive(repo, "HEAD")
    except ValueError as exc:
        logger.error("Attempted to create a branch from a HEAD without a commit: %s", exc)
        raise HeadTargetError(str(exc)) from exc

    try:
        commit = repo.commit(head_hash)
    except (ValueError, BadName, BadObject) as exc:
        raise CommitLookupError(head_hash) from exc
    logger.info("Using commit for new branch %s", commit.hexsha)

    check_branch_name(name)
    if ref_exists(repo, branch_ref_path(name)):
        raise BranchExistsError(name)

    try:
        repo.create_head(branch_ref_path(name), commit, logmsg="branch: Created from HEAD")
    except (OSError, ValueError) as exc:
        raise BranchCreationError(name, str(exc)) from exc

    logger.info("Successfully created branch %s", name)
    return commit.hexsha


def delete_branch(repo: Repo, name: str) -> bool:
    """Delete the first local branch named *name*.

    Refs that cannot be read are skipped while scanning. A missing branch
    is not an error.

    Returns:
        True if a branch was deleted, False if none matched.

    Raises:
        BranchDeletionError: If the matched branch cannot be deleted
            (for example, it is checked out).
    """
    for entry in iter_branch_entries(repo):
        if not entry.ok or entry.branch.name != name:
            continue
        try:
            repo.delete_head(entry.ref.name, force=True)
        except GitCommandError as exc:
            logger.error("Failed to delete branch %s: %s", name, exc)
            raise BranchDeletionError(name, str(exc).strip()) from exc
        logger.info("Deleted branch %s", name)
        return True

    logger.debug("No local branch named %s, nothing deleted", name)
    return False
