"""Tests for the tag, stash, status, log and diff parsers"""
import pytest

from git_status_tree.exceptions import MalformedLineError
from git_status_tree.models.records import DiffLineKind
from git_status_tree.parsers import (
    parse_cherry_lines,
    parse_count,
    parse_describe,
    parse_diff,
    parse_log_line,
    parse_stash_line,
    parse_stash_lines,
    parse_status_line,
    parse_tag_line,
    parse_tag_lines,
)


class TestTagParsers:
    """Test tag listings and describe output."""

    def test_tag_line(self):
        """Test a plain tag name."""
        tag = parse_tag_line("v1.2.0\n")
        assert tag.name == "v1.2.0"
        assert tag.count is None

    def test_tag_lines_skip_blank(self):
        """Test that blank lines are ignored."""
        assert [t.name for t in parse_tag_lines(["v1", "", "v2"])] == ["v1", "v2"]

    def test_describe(self):
        """Test describe output with a commit count."""
        tag = parse_describe("v1.0-5-g1a2b3c4")
        assert tag.name == "v1.0"
        assert tag.count == 5
        assert tag.hash == "1a2b3c4"

    def test_describe_tag_with_dashes(self):
        """Test that dashes inside the tag name are kept."""
        tag = parse_describe("release-1-2-3-gabcdef0")
        assert tag.name == "release-1-2"
        assert tag.count == 3

    def test_describe_malformed(self):
        """Test describe output without the -N-gHASH suffix."""
        with pytest.raises(MalformedLineError):
            parse_describe("v1.0")

    def test_count(self):
        """Test rev-list --count output."""
        assert parse_count("12\n") == 12
        assert parse_count("") is None
        with pytest.raises(MalformedLineError):
            parse_count("twelve")


class TestStashParser:
    """Test stash list lines."""

    def test_stash_line(self):
        """Test a stash entry."""
        stash = parse_stash_line("stash@{2}: WIP on main: 1a2b3c4 Fix parser")
        assert stash.ref == "stash@{2}"
        assert stash.index == 2
        assert stash.message == "WIP on main: 1a2b3c4 Fix parser"

    def test_malformed_stash_lines(self):
        """Test that lines without a stash ref are reported."""
        diagnostics = []
        stashes = parse_stash_lines(["stash@{0}: On main: ok", "garbage"], diagnostics)
        assert len(stashes) == 1
        assert len(diagnostics) == 1


class TestStatusParser:
    """Test porcelain v1 lines."""

    def test_modified(self):
        """Test a file modified in the working tree."""
        record = parse_status_line(" M src/app.py")
        assert record.index_status == " "
        assert record.worktree_status == "M"
        assert record.path == "src/app.py"
        assert record.modified
        assert not record.staged

    def test_untracked(self):
        """Test an untracked file."""
        record = parse_status_line("?? notes.txt")
        assert record.untracked
        assert record.path == "notes.txt"

    def test_rename(self):
        """Test a staged rename."""
        record = parse_status_line("R  old.py -> new.py")
        assert record.original_path == "old.py"
        assert record.path == "new.py"
        assert record.staged

    def test_quoted_path(self):
        """Test octal escapes of non-ASCII names."""
        record = parse_status_line('?? "caf\\303\\251.txt"')
        assert record.path == "café.txt"

    def test_malformed(self):
        """Test a line too short to carry a path."""
        with pytest.raises(MalformedLineError):
            parse_status_line("M")


class TestLogParsers:
    """Test one-line commit listings."""

    def test_log_line(self):
        """Test hash and subject."""
        commit = parse_log_line("1a2b3c4 Fix the parser")
        assert commit.hash == "1a2b3c4"
        assert commit.subject == "Fix the parser"

    def test_cherry_lines(self):
        """Test cherry markers."""
        commits = parse_cherry_lines(["+ 1a2b3c4 New work", "- 5d6e7f8 Already upstream"])
        assert [c.cherry for c in commits] == ["+", "-"]
        assert commits[1].subject == "Already upstream"


class TestDiffParser:
    """Test unified and combined diffs."""

    def test_two_files(self):
        """Test a modification and a new file."""
        files = parse_diff([
            "diff --git a/app.py b/app.py",
            "index 1111111..2222222 100644",
            "--- a/app.py",
            "+++ b/app.py",
            "@@ -1,3 +1,3 @@",
            " keep",
            "-old",
            "+new",
            " tail",
            "\\ No newline at end of file",
            "diff --git a/new.txt b/new.txt",
            "new file mode 100644",
            "index 0000000..3333333",
            "--- /dev/null",
            "+++ b/new.txt",
            "@@ -0,0 +1 @@",
            "+hello",
        ])

        assert [f.path for f in files] == ["app.py", "new.txt"]
        app, new = files
        assert app.status == "modified"
        assert len(app.hunks) == 1
        assert [line.kind for line in app.hunks[0].lines] == [
            DiffLineKind.CONTEXT,
            DiffLineKind.REMOVED,
            DiffLineKind.ADDED,
            DiffLineKind.CONTEXT,
        ]
        assert new.status == "new file"
        assert new.hunks[0].new_start == 1
        assert new.hunks[0].new_count == 1

    def test_combined_diff(self):
        """Test a conflicted file shown with two parents."""
        files = parse_diff([
            "diff --cc conflict.txt",
            "index 1111111,2222222..0000000",
            "--- a/conflict.txt",
            "+++ b/conflict.txt",
            "@@@ -1,1 -1,1 +1,5 @@@",
            "++<<<<<<< HEAD",
            " +ours",
            "++=======",
            "  both",
            "- gone",
        ])

        assert len(files) == 1
        conflict = files[0]
        assert conflict.status == "unmerged"
        assert conflict.path == "conflict.txt"
        hunk = conflict.hunks[0]
        assert hunk.marker_width == 2
        assert [line.kind for line in hunk.lines] == [
            DiffLineKind.ADDED,
            DiffLineKind.ADDED,
            DiffLineKind.ADDED,
            DiffLineKind.CONTEXT,
            DiffLineKind.REMOVED,
        ]

    def test_empty_hunk_is_dropped(self):
        """Test that a hunk without content lines is never produced."""
        diagnostics = []
        files = parse_diff(
            [
                "diff --git a/a.txt b/a.txt",
                "@@ -1,0 +1,0 @@",
                "diff --git a/b.txt b/b.txt",
                "@@ -1 +1 @@",
                "-x",
                "+y",
            ],
            diagnostics,
        )

        assert files[0].hunks == []
        assert len(files[1].hunks) == 1
        assert len(diagnostics) == 1

    def test_rename(self):
        """Test a rename without content changes."""
        files = parse_diff([
            "diff --git a/old.py b/new.py",
            "similarity index 100%",
            "rename from old.py",
            "rename to new.py",
        ])

        assert files[0].status == "renamed"
        assert files[0].old_path == "old.py"
        assert files[0].path == "new.py"
