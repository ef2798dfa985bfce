"""Tests for folding and the visible rendering"""
from git_status_tree.constants import ERROR_STYLE, SYMBOL_FOLDED, SYMBOL_UNFOLDED
from git_status_tree.display import (
    fold_marker,
    line_for_offset,
    next_heading,
    render_visible,
    visible_lines,
    visible_text,
)
from git_status_tree.models.section import SectionKind
from git_status_tree.sections import SectionBuilder
from git_status_tree.ui.screens import diagnostics_text

GENERIC = SectionKind.GENERIC
FILE = SectionKind.FILE


def build_tree():
    """Text layout::

        0  Files\\n
        6  a.txt\\n
        12   line a\\n
        21 b.txt\\n
        27   line b\\n
        36 Tail\\n
    """
    builder = SectionBuilder(1)
    with builder.section(GENERIC, "files", "Files\n"):
        with builder.section(FILE, "a.txt", "a.txt\n"):
            builder.insert("  line a\n")
        with builder.section(FILE, "b.txt", "b.txt\n"):
            builder.insert("  line b\n")
    with builder.section(GENERIC, "tail", "Tail\n", collapsible=False):
        pass
    return builder.finish()


class TestVisibleText:
    """Test what folding hides."""

    def test_everything_expanded(self):
        """Test that an expanded tree shows the whole buffer."""
        tree = build_tree()
        assert visible_text(tree) == tree.text

    def test_collapsed_body_is_hidden(self):
        """Test that a hidden section keeps only its heading."""
        tree = build_tree()
        tree.find(((GENERIC, "files"), (FILE, "a.txt"))).hidden = True
        assert visible_text(tree) == "Files\na.txt\nb.txt\n  line b\nTail\n"

    def test_nested_collapse(self):
        """Test that hiding a parent hides its children regardless of their state."""
        tree = build_tree()
        tree.find(((GENERIC, "files"), (FILE, "a.txt"))).hidden = True
        tree.find(((GENERIC, "files"),)).hidden = True
        assert visible_text(tree) == "Files\nTail\n"


class TestVisibleLines:
    """Test line bookkeeping."""

    def test_line_offsets(self):
        """Test line starts and heading markers."""
        tree = build_tree()
        tree.find(((GENERIC, "files"), (FILE, "b.txt"))).hidden = True
        lines = visible_lines(tree)

        assert [line.start for line in lines] == [0, 6, 12, 21, 36]
        assert [line.heading is not None for line in lines] == [True, True, False, True, True]
        assert tree.get(lines[3].section).value == "b.txt"

    def test_line_for_offset(self):
        """Test that hidden offsets map to the heading above."""
        tree = build_tree()
        tree.find(((GENERIC, "files"), (FILE, "b.txt"))).hidden = True
        lines = visible_lines(tree)

        assert line_for_offset(lines, 0) == 0
        assert line_for_offset(lines, 14) == 2
        assert line_for_offset(lines, 30) == 3
        assert line_for_offset([], 5) == 0

    def test_next_heading(self):
        """Test moving between headings."""
        lines = visible_lines(build_tree())
        assert next_heading(lines, 0) == 6
        assert next_heading(lines, 14) == 21
        assert next_heading(lines, 14, backward=True) == 6
        assert next_heading(lines, 36) is None


class TestRendering:
    """Test the rich rendering."""

    def test_fold_markers(self):
        """Test the gutter symbols."""
        tree = build_tree()
        a_txt = tree.find(((GENERIC, "files"), (FILE, "a.txt")))
        tail = tree.find(((GENERIC, "tail"),))
        assert fold_marker(a_txt) == SYMBOL_UNFOLDED
        a_txt.hidden = True
        assert fold_marker(a_txt) == SYMBOL_FOLDED
        assert fold_marker(tail) == " "

    def test_render_with_gutter(self):
        """Test the rendered plain text."""
        tree = build_tree()
        tree.find(((GENERIC, "files"), (FILE, "a.txt"))).hidden = True
        rendering = render_visible(tree, point=0)

        assert rendering.text.plain.split("\n") == [
            f"{SYMBOL_UNFOLDED} Files",
            f"{SYMBOL_FOLDED} a.txt",
            f"{SYMBOL_UNFOLDED} b.txt",
            "    line b",
            "  Tail",
        ]
        assert len(rendering.lines) == 5

    def test_render_without_gutter(self):
        """Test rendering for plain output."""
        rendering = render_visible(build_tree(), gutter=False)
        assert rendering.text.plain == "Files\na.txt\n  line a\nb.txt\n  line b\nTail"


class TestDiagnosticsText:
    """Test the body of the diagnostics screen."""

    def test_one_marked_line_per_diagnostic(self):
        """Test the heading and the error marker on each diagnostic."""
        text = diagnostics_text("status", 3, ["insert_tags: boom", "git fetch exited with 1"])

        assert text.plain == (
            "status view, generation 3\n\n"
            "! insert_tags: boom\n"
            "! git fetch exited with 1\n"
        )
        marker_styles = [span.style for span in text.spans if text.plain[span.start:span.end] == "! "]
        assert marker_styles == [ERROR_STYLE, ERROR_STYLE]
