"""Shared test fixtures for Brancher.

Provides temporary on-disk git repositories built through GitPython.
"""

from __future__ import annotations

import sys
from pathlib import Path

import pytest
from git import Actor, Head, Repo

from brancher import GitRepo

ACTOR = Actor("Brancher Tests", "tests@example.com")


@pytest.fixture
def repo_path(tmp_path: Path) -> Path:
    path = tmp_path / "project"
    path.mkdir()
    return path


@pytest.fixture
def empty_git_repo(repo_path: Path):
    """Repository on an unborn ``main`` branch (no commits)."""
    repo = Repo.init(repo_path, initial_branch="main")
    with repo.config_writer() as writer:
        writer.set_value("user", "name", ACTOR.name)
        writer.set_value("user", "email", ACTOR.email)
    yield repo
    repo.close()


@pytest.fixture
def git_repo(empty_git_repo: Repo) -> Repo:
    """Repository with one commit on ``main``."""
    commit_file(empty_git_repo, "README.md", "hello\n", "initial commit")
    return empty_git_repo


@pytest.fixture
def handle(git_repo: Repo):
    """GitRepo handle on ``git_repo``."""
    h = GitRepo.discover(git_repo.working_dir)
    yield h
    h.close()


# ------------------------------------------------------------------
# Shared test helpers
# ------------------------------------------------------------------

def commit_file(repo: Repo, name: str, content: str, message: str) -> str:
    """Write *name*, stage it, commit, and return the commit hash."""
    path = Path(repo.working_tree_dir) / name
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)
    repo.index.add([name])
    return repo.index.commit(message, author=ACTOR, committer=ACTOR).hexsha


def make_branch(repo: Repo, name: str, commit: str = "HEAD") -> Head:
    return repo.create_head(name, commit)


def write_raw_ref(repo: Repo, name: bytes, target: str) -> None:
    """Write a loose ref file directly, bypassing name checks."""
    heads_dir = Path(repo.git_dir) / "refs" / "heads"
    with open(bytes(heads_dir) + b"/" + name, "wb") as fp:
        fp.write(target.encode("ascii") + b"\n")


def read_file(repo: Repo, name: str) -> str:
    return (Path(repo.working_tree_dir) / name).read_text()


requires_bytes_paths = pytest.mark.skipif(
    sys.platform != "linux",
    reason="needs a filesystem that accepts non-UTF-8 file names",
)
