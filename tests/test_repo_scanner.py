"""Tests for repository discovery and display names"""
import os
from unittest.mock import Mock

import pytest

from git_status_tree.config import Config
from git_status_tree.exceptions import ScanIOError
from git_status_tree.services.repo_scanner import (
    RepositoryScanner,
    list_repositories,
    scan_repositories,
    uniquify,
)


@pytest.fixture
def tree_of_repos(temp_dir):
    """Directory layout::

        a/.git
        b/c/.git
        .hidden/d/.git
        e/
    """
    for path in ("a/.git", "b/c/.git", ".hidden/d/.git", "e"):
        (temp_dir / path).mkdir(parents=True)
    return temp_dir


def names(paths, root):
    return [os.path.relpath(path, root) for path in paths]


class TestRepositoryScanner:
    """Test the depth-bounded walk."""

    def test_depth_two_finds_nested(self, tree_of_repos):
        """Test that repositories two levels down are found."""
        found = scan_repositories([str(tree_of_repos)], 2)
        assert names(found, tree_of_repos) == ["a", os.path.join("b", "c")]

    def test_depth_one(self, tree_of_repos):
        """Test that depth limits the walk."""
        found = scan_repositories([str(tree_of_repos)], 1)
        assert names(found, tree_of_repos) == ["a"]

    def test_hidden_directories_skipped(self, tree_of_repos):
        """Test that dot-directories are never entered."""
        found = scan_repositories([str(tree_of_repos)], 5)
        assert not any(".hidden" in path for path in found)

    def test_depth_zero_checks_only_root(self):
        """Test that depth 0 never lists directories."""
        is_repository = Mock(return_value=False)
        list_directories = Mock(return_value=["/root/child"])

        scanner = RepositoryScanner(is_repository, list_directories)
        assert scanner.scan_root("/root", 0) == []
        list_directories.assert_not_called()
        is_repository.assert_called_once_with("/root")

    def test_repository_not_descended(self, tree_of_repos):
        """Test that a repository nested inside a repository is not reported."""
        (tree_of_repos / "a" / "inner" / ".git").mkdir(parents=True)
        found = scan_repositories([str(tree_of_repos)], 3)
        assert names(found, tree_of_repos) == ["a", os.path.join("b", "c")]

    def test_unreadable_directory_is_skipped(self):
        """Test that an IO error is logged, recorded and skipped."""
        def list_directories(path):
            if path == "/root/broken":
                raise ScanIOError(path, PermissionError("denied"))
            if path == "/root":
                return ["/root/broken", "/root/repo"]
            return []

        scanner = RepositoryScanner(lambda path: path == "/root/repo", list_directories)
        assert scanner.scan_root("/root", 2) == ["/root/repo"]
        assert len(scanner.errors) == 1

    def test_negative_depth(self):
        """Test that a negative depth is rejected."""
        with pytest.raises(ValueError):
            RepositoryScanner().scan_root("/root", -1)


class TestUniquify:
    """Test display name disambiguation."""

    def test_collision_gets_parent(self):
        """Test the first round of disambiguation."""
        entries = uniquify([("repo", "/x/a/repo"), ("repo", "/x/b/repo")])
        assert [e.name for e in entries] == ["repo\\a", "repo\\b"]

    def test_unique_names_pass_through(self):
        """Test that names without collisions are untouched."""
        entries = uniquify([("one", "/x/one"), ("two", "/x/two")])
        assert [e.name for e in entries] == ["one", "two"]

    def test_duplicate_pairs_collapse(self):
        """Test that the same repository found twice is listed once."""
        entries = uniquify([("repo", "/x/repo"), ("repo", "/x/repo")])
        assert [e.name for e in entries] == ["repo"]

    def test_second_level(self):
        """Test names still colliding after one level."""
        entries = uniquify([("repo", "/x/a/repo"), ("repo", "/y/a/repo")])
        assert sorted(e.name for e in entries) == ["repo\\a\\x", "repo\\a\\y"]

    def test_out_of_parents_uses_full_path(self):
        """Test that exhausted parents fall back to the full path."""
        entries = uniquify([("repo", "/repo"), ("repo", "/a/repo")])
        assert sorted(e.name for e in entries) == ["repo\\/repo", "repo\\a"]


class TestListRepositories:
    """Test the combined listing."""

    def test_sorted_by_name(self, tree_of_repos):
        """Test that entries come out sorted by display name."""
        (tree_of_repos / "Z" / ".git").mkdir(parents=True)
        entries = list_repositories([(str(tree_of_repos), 2)])
        assert [e.name for e in entries] == ["a", "c", "Z"]

    def test_accepts_config(self, tree_of_repos):
        """Test that a Config supplies the roots and depths."""
        config = Config(repository_directories=[(str(tree_of_repos), 1)])
        entries = list_repositories(config)
        assert [e.name for e in entries] == ["a"]
