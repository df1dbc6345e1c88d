"""GitRepo -- the repository handle that is the entry point for branch operations."""

from __future__ import annotations

import logging
import os
from typing import TYPE_CHECKING

from git import Repo
from git.exc import InvalidGitRepositoryError, NoSuchPathError

from brancher.exceptions import RepositoryNotFoundError
from brancher.models.config import BrancherConfig
from brancher.operations.listing import current_branch_path, list_local_branches

if TYPE_CHECKING:
    from brancher.models.branch import Branch

logger = logging.getLogger(__name__)


class GitRepo:
    """Handle on one on-disk git repository exposing branch bookkeeping.

    Open a handle with :meth:`GitRepo.from_cwd` or :meth:`GitRepo.discover`.
    Every call reads the repository state fresh; the handle caches nothing.
    A handle must not be used from several threads at once.

    Example::

        with GitRepo.from_cwd() as repo:
            for branch in repo.local_branches():
                print(branch.name, branch.is_head)
            repo.create_branch(Branch.new("feature-x"))
            repo.checkout_branch_from_name("feature-x")
    """

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    def __init__(self, repo: Repo, *, config: BrancherConfig | None = None) -> None:
        self._repo = repo
        self._config = config or BrancherConfig()
        self._closed = False

    @classmethod
    def discover(
        cls,
        path: str | os.PathLike[str],
        *,
        config: BrancherConfig | None = None,
    ) -> GitRepo:
        """Open the repository enclosing *path*.

        Walks up through parent directories unless
        ``config.search_parent_directories`` is False.

        Raises:
            RepositoryNotFoundError: If no repository with a working tree
                encloses *path*.
        """
        config = config or BrancherConfig()
        start = os.fspath(path)
        try:
            repo = Repo(start, search_parent_directories=config.search_parent_directories)
        except (InvalidGitRepositoryError, NoSuchPathError) as exc:
            raise RepositoryNotFoundError(start) from exc

        if repo.bare:
            repo.close()
            raise RepositoryNotFoundError(start, "repository is bare and has no working tree")

        logger.debug("Opened repository at %s", repo.working_dir)
        return cls(repo, config=config)

    @classmethod
    def from_cwd(cls, *, config: BrancherConfig | None = None) -> GitRepo:
        """Open the repository enclosing the current working directory."""
        return cls.discover(os.getcwd(), config=config)

    # ------------------------------------------------------------------
    # Public properties
    # ------------------------------------------------------------------

    @property
    def repo(self) -> Repo:
        """The underlying GitPython repository."""
        return self._repo

    @property
    def config(self) -> BrancherConfig:
        return self._config

    @property
    def working_dir(self) -> str:
        """Root of the working tree."""
        return str(self._repo.working_dir)

    @property
    def current_branch(self) -> str | None:
        """Name of the branch HEAD is attached to, or *None* if detached."""
        path = current_branch_path(self._repo)
        if path is None:
            return None
        return path[len("refs/heads/"):]

    @property
    def head_commit(self) -> str | None:
        """Commit hash HEAD resolves to, or *None* on an unborn branch."""
        try:
            return self._repo.head.commit.hexsha
        except ValueError:
            return None

    # ------------------------------------------------------------------
    # Branch operations
    # ------------------------------------------------------------------

    def local_branches(self) -> list[Branch]:
        """List local branches in ref store order.

        Branches whose name is not valid UTF-8 or whose ref cannot be
        read are left out.

        Raises:
            RepositoryError: If the ref store cannot be enumerated.
        """
        return list_local_branches(self._repo)

    def checkout_branch_from_name(self, name: str) -> str:
        """Write the branch tree to the working directory, then attach HEAD.

        Local changes are overwritten.

        Returns:
            The commit hash now checked out.

        Raises:
            BranchNotFoundError: If no local branch has that name.
            CheckoutError: If the tree cannot be written.
            HeadUpdateError: If HEAD cannot be updated after the tree was
                written. See ``BrancherConfig.restore_tree_on_head_failure``.
        """
        from brancher.operations.navigation import checkout_branch

        return checkout_branch(
            self._repo,
            name,
            restore_tree_on_head_failure=self._config.restore_tree_on_head_failure,
        )

    def checkout_branch(self, branch: Branch) -> str:
        """Checkout a previously listed branch by its name."""
        return self.checkout_branch_from_name(branch.name)

    def validate_branch_name(self, name: str) -> bool:
        """Whether *name* is a valid ref name not used by any local branch."""
        from brancher.operations.branch import is_valid_branch_name

        if any(b.name == name for b in self.local_branches()):
            return False
        return is_valid_branch_name(name)

    def create_branch(self, branch: Branch) -> str:
        """Create ``branch.name`` at the commit HEAD points to.

        HEAD stays where it is. The name is not re-validated against
        existing branches beforehand; call :meth:`validate_branch_name`
        first to avoid a :class:`BranchExistsError`.

        Returns:
            The commit hash the new branch points to.

        Raises:
            HeadTargetError: If HEAD does not resolve to a commit.
            CommitLookupError: If the HEAD commit cannot be loaded.
            BranchCreationError: If the ref cannot be created
                (``BranchExistsError``, ``InvalidBranchNameError``).
        """
        from brancher.operations.branch import create_branch

        return create_branch(self._repo, branch.name)

    def delete_branch(self, branch: Branch) -> bool:
        """Delete the local branch named ``branch.name``.

        Returns:
            True if deleted, False if no such branch existed.

        Raises:
            BranchDeletionError: If the branch exists but cannot be deleted.
        """
        from brancher.operations.branch import delete_branch

        return delete_branch(self._repo, branch.name)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def close(self) -> None:
        """Release the underlying repository's resources."""
        if self._closed:
            return
        self._closed = True
        self._repo.close()

    def __enter__(self) -> GitRepo:
        return self

    def __exit__(self, exc_type: type | None, exc_val: BaseException | None, exc_tb: object) -> None:
        self.close()

    def __repr__(self) -> str:
        if self._closed:
            return f"GitRepo(working_dir='{self.working_dir}', closed=True)"
        return f"GitRepo(working_dir='{self.working_dir}', branch='{self.current_branch}')"
