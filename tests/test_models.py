"""Tests for the branch value models and configuration."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from brancher import Branch, BrancherConfig, RemoteBranch


class TestBranch:
    def test_new_has_only_a_name(self):
        b = Branch.new("feature")
        assert b.name == "feature"
        assert b.is_head is False
        assert b.upstream is None
        assert b.commit_hash is None

    def test_equality_is_by_value(self):
        a = Branch(name="main", is_head=True, upstream=RemoteBranch(name="origin/main"))
        b = Branch(name="main", is_head=True, upstream=RemoteBranch(name="origin/main"))
        assert a == b
        assert a != Branch.new("main")

    def test_name_required(self):
        with pytest.raises(ValidationError):
            Branch()


class TestConfig:
    def test_defaults(self):
        config = BrancherConfig()
        assert config.search_parent_directories is True
        assert config.restore_tree_on_head_failure is False
        assert config.log_level == "WARNING"

    def test_log_level_normalized(self):
        assert BrancherConfig(log_level="debug").log_level == "DEBUG"

    def test_unknown_log_level(self):
        with pytest.raises(ValidationError):
            BrancherConfig(log_level="chatty")
