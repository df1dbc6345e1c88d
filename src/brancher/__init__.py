"""Brancher: local branch bookkeeping for git repositories.

List, checkout, validate, create, and delete local branches of the
repository enclosing the current directory.
"""

from brancher._version import __version__

# Core entry point
from brancher.repo import GitRepo

# Branch models
from brancher.models.branch import Branch, RemoteBranch

# Configuration
from brancher.models.config import BrancherConfig

# Name rules
from brancher.operations.branch import check_branch_name, is_valid_branch_name

# Exceptions
from brancher.exceptions import (
    BrancherError,
    BranchCreationError,
    BranchDeletionError,
    BranchExistsError,
    BranchNotFoundError,
    CheckoutError,
    CommitLookupError,
    HeadTargetError,
    HeadUpdateError,
    InvalidBranchNameError,
    RepositoryError,
    RepositoryNotFoundError,
)

__all__ = [
    "__version__",
    # Core
    "GitRepo",
    # Models
    "Branch",
    "RemoteBranch",
    # Config
    "BrancherConfig",
    # Name rules
    "check_branch_name",
    "is_valid_branch_name",
    # Exceptions
    "BrancherError",
    "BranchCreationError",
    "BranchDeletionError",
    "BranchExistsError",
    "BranchNotFoundError",
    "CheckoutError",
    "CommitLookupError",
    "HeadTargetError",
    "HeadUpdateError",
    "InvalidBranchNameError",
    "RepositoryError",
    "RepositoryNotFoundError",
]
