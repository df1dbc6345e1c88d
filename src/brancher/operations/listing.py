"""Local branch enumeration for Brancher.

Listing is a two-stage pipeline: iter_branch_entries() lazily builds one
fallible BranchEntry per ref, and skip_broken() filters out the entries
that could not be built. Callers that need the raw refs (deletion) consume
the entries directly.
"""

from __future__ import annotations

import configparser
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterable, Iterator

from git import Head
from git.exc import BadName, BadObject, GitCommandError

from brancher.exceptions import RepositoryError
from brancher.models.branch import Branch, RemoteBranch

if TYPE_CHECKING:
    from git import Repo

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BranchEntry:
    """Result of loading a single local branch ref.

    Attributes:
        ref: The underlying GitPython head reference.
        branch: The built value, or None if loading failed.
        error: Why the value could not be built.
    """

    ref: Head
    branch: Branch | None = None
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def current_branch_path(repo: Repo) -> str | None:
    """Full ref path HEAD is attached to, or None when detached."""
    try:
        return repo.head.reference.path
    except (TypeError, ValueError):
        return None


def _utf8_name(name: str) -> str:
    # Ref file names that are not UTF-8 come back with surrogate escapes.
    name.encode("utf-8")
    return name


def _commit_hash(ref: Head) -> str | None:
    try:
        return ref.commit.hexsha
    except (ValueError, OSError, BadName, BadObject):
        return None


def _local_upstream(ref: Head) -> RemoteBranch | None:
    # ``remote = .`` tracks a local branch; GitPython only builds remote refs
    reader = ref.config_reader()
    if not reader.has_option("merge"):
        return None
    upstream = Head(ref.repo, str(reader.get_value("merge")))
    if not upstream.is_valid():
        return None
    return RemoteBranch(name=_utf8_name(upstream.name))


def extract_upstream(ref: Head) -> RemoteBranch | None:
    """Configured upstream of *ref*, if the tracking ref resolves.

    A local upstream (``git branch --set-upstream-to=main``) is reported
    by its branch name, a remote one as ``<remote>/<branch>``.
    """
    try:
        reader = ref.config_reader()
        if reader.has_option("remote") and str(reader.get_value("remote")) == ".":
            return _local_upstream(ref)
        tracking = ref.tracking_branch()
        if tracking is None or not tracking.is_valid():
            return None
        return RemoteBranch(name=_utf8_name(tracking.name))
    except (ValueError, OSError, UnicodeError, configparser.Error):
        return None


def load_entry(ref: Head, head_path: str | None, commit_hash: str | None = None) -> BranchEntry:
    """Build a BranchEntry for *ref*; *head_path* is HEAD's target ref path.

    *commit_hash* skips the tip lookup when the caller already knows it.
    """
    try:
        name = _utf8_name(ref.name)
    except (UnicodeError, ValueError) as exc:
        return BranchEntry(ref=ref, error=exc)

    branch = Branch(
        name=name,
        is_head=head_path is not None and ref.path == head_path,
        upstream=extract_upstream(ref),
        commit_hash=commit_hash or _commit_hash(ref),
    )
    return BranchEntry(ref=ref, branch=branch)


def _refs_from_git(repo: Repo) -> Iterator[tuple[Head, str | None]]:
    """Enumerate refs/heads through ``git for-each-ref`` as raw bytes.

    Used when packed-refs holds a name GitPython cannot decode. Names that
    are not UTF-8 keep their bytes as surrogate escapes and fail in
    load_entry() like undecodable loose refs do.
    """
    try:
        output = repo.git.for_each_ref(
            "refs/heads",
            format="%(objectname) %(refname)",
            stdout_as_string=False,
        )
    except GitCommandError as exc:
        raise RepositoryError(f"Cannot enumerate local branches: {exc}") from exc

    for line in output.splitlines():
        objectname, _, refname = line.partition(b" ")
        yield Head(repo, refname.decode("utf-8", "surrogateescape")), objectname.decode("ascii")


def _local_refs(repo: Repo) -> Iterator[tuple[Head, str | None]]:
    """Yield (ref, known commit hash or None) for every local branch.

    GitPython gathers all ref paths before yielding the first one, so the
    enumeration guard only has to cover the first ``next()``.
    """
    refs = Head.iter_items(repo)
    try:
        first = next(refs, None)
    except UnicodeDecodeError as exc:
        logger.debug("packed-refs is not UTF-8 (%s); enumerating through git", exc)
        yield from _refs_from_git(repo)
        return
    except (OSError, ValueError, TypeError) as exc:
        raise RepositoryError(f"Cannot enumerate local branches: {exc}") from exc

    if first is None:
        return
    yield first, None
    for ref in refs:
        yield ref, None


def iter_branch_entries(repo: Repo) -> Iterator[BranchEntry]:
    """Yield one entry per local branch, in ref store order.

    Entries are built one at a time as the caller consumes them.

    Raises:
        RepositoryError: If the ref store cannot be enumerated at all.
    """
    head_path = current_branch_path(repo)
    for ref, commit_hash in _local_refs(repo):
        yield load_entry(ref, head_path, commit_hash)


def skip_broken(entries: Iterable[BranchEntry]) -> Iterator[Branch]:
    """Drop entries that failed to load, yielding the surviving branches."""
    for entry in entries:
        if not entry.ok:
            logger.debug("Skipping unreadable branch ref %r: %s", entry.ref.path, entry.error)
            continue
        yield entry.branch


def list_local_branches(repo: Repo) -> list[Branch]:
    """All readable local branches of *repo*."""
    return list(skip_broken(iter_branch_entries(repo)))
