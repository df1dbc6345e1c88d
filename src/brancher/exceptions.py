"""Brancher exception hierarchy.

All Brancher-specific exceptions inherit from BrancherError.
GitPython errors are chained as ``__cause__`` and never raised directly.
"""


class BrancherError(Exception):
    """Base exception for all Brancher errors."""


class RepositoryError(BrancherError):
    """Raised when the repository cannot be read at all."""


class RepositoryNotFoundError(RepositoryError):
    """Raised when no repository encloses the start directory."""

    def __init__(self, path: str, reason: str | None = None) -> None:
        self.path = path
        self.reason = reason
        msg = f"No git repository found at or above: {path}"
        if reason:
            msg += f" ({reason})"
        super().__init__(msg)


class BranchNotFoundError(BrancherError):
    """Raised when a local branch lookup fails."""

    def __init__(self, branch_name: str) -> None:
        self.branch_name = branch_name
        super().__init__(f"Branch not found: {branch_name}")


class CheckoutError(BrancherError):
    """Raised when the branch tree cannot be written to the working directory."""

    def __init__(self, branch_name: str, reason: str) -> None:
        self.branch_name = branch_name
        self.reason = reason
        super().__init__(f"Failed to checkout tree of '{branch_name}': {reason}")


class HeadUpdateError(BrancherError):
    """Raised when HEAD cannot be moved after a successful tree checkout.

    The working tree already reflects the target branch unless
    ``restored`` is True, in which case the previous tree was written back.
    """

    def __init__(self, branch_name: str, reason: str, *, restored: bool = False) -> None:
        self.branch_name = branch_name
        self.reason = reason
        self.restored = restored
        msg = f"Failed to set HEAD to '{branch_name}': {reason}"
        if restored:
            msg += " (previous working tree restored)"
        super().__init__(msg)


class HeadTargetError(BrancherError):
    """Raised when HEAD does not resolve to a concrete commit."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Cannot branch from HEAD: {reason}")


class CommitLookupError(BrancherError):
    """Raised when a commit object cannot be loaded."""

    def __init__(self, commit_hash: str) -> None:
        self.commit_hash = commit_hash
        super().__init__(f"Commit not found: {commit_hash}")


class BranchCreationError(BrancherError):
    """Raised when the ref store refuses to create a branch."""

    def __init__(self, branch_name: str, reason: str) -> None:
        self.branch_name = branch_name
        self.reason = reason
        super().__init__(f"Cannot create branch '{branch_name}': {reason}")


class BranchExistsError(BranchCreationError):
    """Raised when trying to create a branch that already exists."""

    def __init__(self, branch_name: str) -> None:
        super().__init__(branch_name, "branch already exists")


class InvalidBranchNameError(BranchCreationError):
    """Raised when a branch name violates ref naming rules."""

    def __init__(self, name: str, reason: str) -> None:
        self.name = name
        super().__init__(name, reason)


class BranchDeletionError(BrancherError):
    """Raised when deleting an existing branch fails."""

    def __init__(self, branch_name: str, reason: str) -> None:
        self.branch_name = branch_name
        self.reason = reason
        super().__init__(f"Failed to delete branch '{branch_name}': {reason}")
