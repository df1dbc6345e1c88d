"""Branch domain models for Brancher.

Branch is the SDK-facing value returned when listing local branches.
Values are snapshots: every listing builds fresh instances.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel


class RemoteBranch(BaseModel):
    """Upstream tracking branch of a local branch (e.g. ``origin/main``)."""

    name: str


class Branch(BaseModel):
    """SDK-facing local branch information model.

    Returned by GitRepo.local_branches() and accepted by the
    create/checkout/delete operations, which only read ``name``.
    """

    name: str
    is_head: bool = False
    upstream: Optional[RemoteBranch] = None
    commit_hash: Optional[str] = None  # None when the ref is dangling

    @classmethod
    def new(cls, name: str) -> Branch:
        """A bare branch value carrying only a name."""
        return cls(name=name)
