"""Tests for local branch listing and the skip-broken-entries filter."""

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest
from git import Reference, RemoteReference, Repo

from brancher import Branch, GitRepo, RemoteBranch, RepositoryError
from brancher.operations import listing
from brancher.operations.listing import (
    BranchEntry,
    iter_branch_entries,
    skip_broken,
)
from tests.conftest import commit_file, make_branch, requires_bytes_paths, write_raw_ref


# ---------------------------------------------------------------------------
# Listing
# ---------------------------------------------------------------------------

class TestLocalBranches:
    def test_single_branch(self, handle: GitRepo, git_repo: Repo):
        assert handle.local_branches() == [
            Branch(name="main", is_head=True, commit_hash=git_repo.head.commit.hexsha)
        ]

    def test_unborn_repository_has_no_branches(self, empty_git_repo: Repo):
        with GitRepo.discover(empty_git_repo.working_dir) as h:
            assert h.local_branches() == []

    def test_all_branches_listed(self, handle: GitRepo, git_repo: Repo):
        for name in ("feature-x", "bugfix/login", "release"):
            make_branch(git_repo, name)

        names = {b.name for b in handle.local_branches()}
        assert names == {"main", "feature-x", "bugfix/login", "release"}

    def test_only_head_is_marked(self, handle: GitRepo, git_repo: Repo):
        make_branch(git_repo, "feature-x")
        make_branch(git_repo, "other")

        heads = [b.name for b in handle.local_branches() if b.is_head]
        assert heads == ["main"]

    def test_detached_head_marks_nothing(self, handle: GitRepo, git_repo: Repo):
        make_branch(git_repo, "feature-x")
        git_repo.head.reference = git_repo.head.commit

        assert not any(b.is_head for b in handle.local_branches())

    def test_commit_hash_follows_branch_tip(self, handle: GitRepo, git_repo: Repo):
        first = git_repo.head.commit.hexsha
        make_branch(git_repo, "old")
        second = commit_file(git_repo, "a.txt", "a\n", "second")

        by_name = {b.name: b for b in handle.local_branches()}
        assert by_name["old"].commit_hash == first
        assert by_name["main"].commit_hash == second

    def test_fresh_snapshot_per_call(self, handle: GitRepo, git_repo: Repo):
        before = handle.local_branches()
        make_branch(git_repo, "late")
        after = handle.local_branches()
        assert len(after) == len(before) + 1

    def test_packed_refs_listed(self, handle: GitRepo, git_repo: Repo):
        make_branch(git_repo, "feature-x")
        make_branch(git_repo, "bugfix/login")
        git_repo.git.pack_refs("--all")

        by_name = {b.name: b for b in handle.local_branches()}
        assert set(by_name) == {"main", "feature-x", "bugfix/login"}
        assert by_name["main"].is_head
        assert by_name["bugfix/login"].commit_hash == git_repo.head.commit.hexsha

    @pytest.mark.parametrize("name", ["ünïcode/日本", "no\u00a0break", "em\u2003space"])
    def test_non_ascii_names_listed(self, handle: GitRepo, name: str):
        handle.create_branch(Branch.new(name))

        assert name in {b.name for b in handle.local_branches()}

    def test_entries_built_on_demand(
        self, git_repo: Repo, monkeypatch: pytest.MonkeyPatch
    ):
        make_branch(git_repo, "a")
        make_branch(git_repo, "b")
        built = []
        original = listing.load_entry

        def counting_load_entry(*args):
            built.append(args[0].name)
            return original(*args)

        monkeypatch.setattr(listing, "load_entry", counting_load_entry)
        entries = iter_branch_entries(git_repo)
        next(entries)

        assert len(built) == 1


class TestUpstream:
    def test_resolvable_upstream(self, handle: GitRepo, git_repo: Repo):
        Reference.create(git_repo, "refs/remotes/origin/main", git_repo.head.commit)
        git_repo.heads.main.set_tracking_branch(
            RemoteReference(git_repo, "refs/remotes/origin/main")
        )

        (main,) = handle.local_branches()
        assert main.upstream == RemoteBranch(name="origin/main")

    def test_no_upstream_configured(self, handle: GitRepo):
        (main,) = handle.local_branches()
        assert main.upstream is None

    def test_configured_but_unresolvable_upstream(self, handle: GitRepo, git_repo: Repo):
        with git_repo.config_writer() as writer:
            writer.set_value('branch "main"', "remote", "origin")
            writer.set_value('branch "main"', "merge", "refs/heads/gone")

        (main,) = handle.local_branches()
        assert main.name == "main"
        assert main.upstream is None

    def test_local_upstream(self, handle: GitRepo, git_repo: Repo):
        make_branch(git_repo, "feat")
        git_repo.git.branch("--set-upstream-to=main", "feat")

        by_name = {b.name: b for b in handle.local_branches()}
        assert by_name["feat"].upstream == RemoteBranch(name="main")
        assert by_name["main"].upstream is None

    def test_local_upstream_missing_branch(self, handle: GitRepo, git_repo: Repo):
        with git_repo.config_writer() as writer:
            writer.set_value('branch "main"', "remote", ".")
            writer.set_value('branch "main"', "merge", "refs/heads/gone")

        (main,) = handle.local_branches()
        assert main.upstream is None


class TestBrokenEntries:
    def test_dangling_ref_listed_without_commit(self, handle: GitRepo, git_repo: Repo):
        write_raw_ref(git_repo, b"dangling", "1" * 40)

        by_name = {b.name: b for b in handle.local_branches()}
        assert "dangling" in by_name
        assert by_name["dangling"].commit_hash is None

    @requires_bytes_paths
    def test_non_utf8_name_skipped(self, handle: GitRepo, git_repo: Repo):
        write_raw_ref(git_repo, b"caf\xe9", git_repo.head.commit.hexsha)

        names = [b.name for b in handle.local_branches()]
        assert names == ["main"]

    @requires_bytes_paths
    def test_non_utf8_entry_reported_as_failed(self, git_repo: Repo):
        write_raw_ref(git_repo, b"caf\xe9", git_repo.head.commit.hexsha)

        entries = list(iter_branch_entries(git_repo))
        failed = [e for e in entries if not e.ok]
        assert len(failed) == 1
        assert isinstance(failed[0].error, UnicodeError)
        assert failed[0].branch is None

    @requires_bytes_paths
    def test_packed_non_utf8_name_skipped(self, handle: GitRepo, git_repo: Repo):
        head = git_repo.head.commit.hexsha
        write_raw_ref(git_repo, b"caf\xe9", head)
        write_raw_ref(git_repo, b"zzz", head)
        git_repo.git.pack_refs("--all")

        branches = handle.local_branches()
        assert [b.name for b in branches] == ["main", "zzz"]
        assert branches[0].is_head
        assert branches[1].commit_hash == head

    def test_corrupt_packed_refs_raises(self, handle: GitRepo, git_repo: Repo):
        # Not UTF-8, so listing falls back to git, which rejects the file too
        packed = Path(git_repo.git_dir) / "packed-refs"
        packed.write_bytes(b"\xff\xfe not utf-8 \xff\n")

        with pytest.raises(RepositoryError):
            handle.local_branches()


_STUB_REF = SimpleNamespace(path="refs/heads/stub")


class TestSkipBroken:
    def test_filters_failed_entries(self):
        good = Branch.new("good")
        entries = [
            BranchEntry(ref=_STUB_REF, branch=good),
            BranchEntry(ref=_STUB_REF, error=UnicodeEncodeError("utf-8", "x", 0, 1, "bad")),
            BranchEntry(ref=_STUB_REF, branch=Branch.new("also-good")),
        ]
        assert list(skip_broken(entries)) == [good, Branch.new("also-good")]

    def test_is_lazy(self):
        def entries():
            yield BranchEntry(ref=_STUB_REF, branch=Branch.new("first"))
            raise AssertionError("consumed too far")

        assert next(skip_broken(entries())) == Branch.new("first")

    def test_empty(self):
        assert list(skip_broken([])) == []
