"""Tests for mapping hunk positions to file positions"""
import pytest

from git_status_tree.exceptions import MapperOutOfRangeError
from git_status_tree.models.records import DiffLine, DiffLineKind, HunkRecord
from git_status_tree.sections.hunk_mapper import anchor_for, hunk_target, map_hunk_position

CONTEXT = DiffLineKind.CONTEXT
ADDED = DiffLineKind.ADDED
REMOVED = DiffLineKind.REMOVED


def make_lines(*kinds_and_text):
    return [DiffLine(kind=kind, text=text) for kind, text in kinds_and_text]


@pytest.fixture
def lines():
    return make_lines(
        (CONTEXT, " first"),
        (ADDED, "+added"),
        (REMOVED, "-removed"),
        (CONTEXT, " last"),
    )


class TestHunkTarget:
    """Test the line and column arithmetic."""

    def test_lines_advance_except_deletions(self, lines):
        """Test that each surviving line advances the file position."""
        header = "@@ -10,3 +10,3 @@"
        assert [hunk_target(header, lines, n)[0] for n in (1, 2, 3, 4)] == [10, 11, 11, 12]

    def test_deletion_maps_to_column_zero(self, lines):
        """Test that a removed line has no column in the new file."""
        assert hunk_target("@@ -10,3 +10,3 @@", lines, 3, column=5) == (11, 0)

    def test_column_drops_marker(self, lines):
        """Test that the +/-/space prefix is not part of the file column."""
        assert hunk_target("@@ -10,3 +10,3 @@", lines, 2, column=4) == (11, 3)
        assert hunk_target("@@ -10,3 +10,3 @@", lines, 2, column=0) == (11, 0)

    def test_combined_diff_marker_width(self):
        """Test the wider prefix of combined diffs."""
        combined = make_lines((CONTEXT, "  shared"), (ADDED, " +ours"))
        assert hunk_target("@@@ -1,2 -1,2 +1,3 @@@", combined, 2, column=3) == (2, 1)

    def test_floor_at_first_line(self):
        """Test that a hunk deleting everything maps to line 1."""
        removed = make_lines((REMOVED, "-only"))
        assert hunk_target("@@ -1 +0,0 @@", removed, 1) == (1, 0)

    def test_leading_deletion_maps_to_hunk_start(self):
        """Test that a removal before any surviving line stays inside the hunk."""
        leading = make_lines((REMOVED, "-a"), (CONTEXT, " b"))
        assert hunk_target("@@ -10,2 +10,1 @@", leading, 1) == (10, 0)
        assert hunk_target("@@ -10,2 +10,1 @@", leading, 2) == (10, 0)

    @pytest.mark.parametrize("line", [0, 5])
    def test_out_of_range(self, lines, line):
        """Test that positions outside the hunk are a caller error."""
        with pytest.raises(MapperOutOfRangeError):
            hunk_target("@@ -10,3 +10,3 @@", lines, line)

    def test_out_of_range_is_index_error(self, lines):
        """Test that the error can be caught as an IndexError."""
        with pytest.raises(IndexError):
            hunk_target("@@ -10,3 +10,3 @@", lines, 9)


class TestHunkAnchor:
    """Test resolving anchors built from parsed hunks."""

    def test_anchor_round_trip(self, lines):
        """Test that an anchor resolves like the raw call."""
        hunk = HunkRecord(header="@@ -10,3 +10,3 @@", old_start=10, old_count=3,
                          new_start=10, new_count=3, lines=lines)
        assert map_hunk_position(anchor_for(hunk, 4, column=2)) == (12, 1)
