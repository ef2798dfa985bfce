"""Tests for building section trees"""
import pytest

from git_status_tree.exceptions import SectionError, UnbalancedSectionError
from git_status_tree.models.section import SectionKind, Span
from git_status_tree.sections import SectionBuilder

GENERIC = SectionKind.GENERIC
FILE = SectionKind.FILE


def build_sample(hidden_defaults=None):
    """Files group with two files, followed by an empty group.

    Text layout::

        0  Files\\n
        6  a.txt\\n
        12   line a\\n
        21 b.txt\\n
        27   line b\\n
        36 Tail\\n
    """
    builder = SectionBuilder(1, hidden_defaults)
    with builder.section(GENERIC, "files", "Files\n"):
        with builder.section(FILE, "a.txt", "a.txt\n"):
            builder.insert("  line a\n")
        with builder.section(FILE, "b.txt", "b.txt\n"):
            builder.insert("  line b\n")
    with builder.section(GENERIC, "tail", "Tail\n"):
        pass
    return builder.finish()


def assert_well_nested(tree):
    for node in tree.walk():
        assert node.body_span.start >= node.heading_span.end
        children = tree.children_of(node)
        for child in children:
            assert node.body_span.covers(child.span)
        for before, after in zip(children, children[1:]):
            assert before.end <= after.start


class TestSectionBuilder:
    """Test section construction."""

    def test_spans(self):
        """Test heading and body spans of the sample tree."""
        tree = build_sample()
        files = tree.find(((GENERIC, "files"),))
        a_txt = tree.find(((GENERIC, "files"), (FILE, "a.txt")))
        tail = tree.find(((GENERIC, "tail"),))

        assert tree.text == "Files\na.txt\n  line a\nb.txt\n  line b\nTail\n"
        assert files.heading_span == Span(0, 6)
        assert files.body_span == Span(6, 36)
        assert a_txt.heading_span == Span(6, 12)
        assert a_txt.body_span == Span(12, 21)
        assert tail.span == Span(36, 41)
        assert tree.root.span == Span(0, 41)

    def test_containment(self):
        """Test that children lie inside their parent and siblings are disjoint."""
        assert_well_nested(build_sample())

    def test_key_paths_and_order(self):
        """Test key paths and document order."""
        tree = build_sample()
        assert [node.value for node in tree.walk()] == [None, "files", "a.txt", "b.txt", "tail"]
        b_txt = tree.find(((GENERIC, "files"), (FILE, "b.txt")))
        assert b_txt.key == ((GENERIC, "files"), (FILE, "b.txt"))
        assert tree.parent_of(b_txt).value == "files"

    def test_section_at(self):
        """Test reverse lookup from offsets to sections."""
        tree = build_sample()
        assert tree.section_at(0).value == "files"
        assert tree.section_at(14).value == "a.txt"
        assert tree.section_at(21).value == "b.txt"
        assert tree.section_at(40).value == "tail"
        assert tree.section_at(1000).value == "tail"

    def test_hidden_defaults_policy(self):
        """Test the per-kind fold policy and non-collapsible sections."""
        builder = SectionBuilder(1, {FILE: True})
        with builder.section(FILE, "a", "a\n") as collapsible:
            pass
        with builder.section(FILE, "b", "b\n", collapsible=False) as fixed:
            pass
        with builder.section(FILE, "c", "c\n", hidden=False) as explicit:
            pass
        builder.finish()

        assert collapsible.hidden is True
        assert fixed.hidden is False
        assert explicit.hidden is False

    def test_begin_section_opens_a_child(self):
        """Test that begin_section makes the new section the innermost one."""
        builder = SectionBuilder(1)
        outer = builder.begin_section(GENERIC, "outer")
        assert builder.current is outer
        assert builder.depth == 2

        builder.set_heading("Outer\n")
        inner = builder.begin_section(FILE, "inner")
        builder.set_heading("inner\n")
        builder.end_section(inner)
        builder.end_section(outer)
        tree = builder.finish()

        assert outer.heading_span == Span(0, 6)
        assert inner.heading_span == Span(6, 12)
        assert tree.children_of(outer) == [inner]
        assert inner.key == ((GENERIC, "outer"), (FILE, "inner"))

    def test_end_wrong_section(self):
        """Test that sections must be closed innermost first."""
        builder = SectionBuilder(1)
        outer = builder.begin_section(GENERIC, "outer")
        builder.begin_section(GENERIC, "inner")

        with pytest.raises(UnbalancedSectionError):
            builder.end_section(outer)

    def test_finish_with_open_section(self):
        """Test that finishing with open sections is rejected."""
        builder = SectionBuilder(1)
        builder.begin_section(GENERIC, "open")

        with pytest.raises(UnbalancedSectionError):
            builder.finish()

    def test_heading_after_body(self):
        """Test that the heading must come first."""
        builder = SectionBuilder(1)
        builder.begin_section(GENERIC, "late")
        builder.insert("body\n")

        with pytest.raises(SectionError):
            builder.set_heading("Late\n")

    def test_washer_needs_collapsible_section_with_heading(self):
        """Test the preconditions of deferring a body."""
        builder = SectionBuilder(1)
        fixed = builder.begin_section(GENERIC, "fixed", collapsible=False)
        builder.set_heading("Fixed\n")
        with pytest.raises(SectionError):
            builder.set_washer(lambda b: None)
        builder.end_section(fixed)

        builder.begin_section(GENERIC, "headless")
        with pytest.raises(SectionError):
            builder.set_washer(lambda b: None)

    def test_rollback(self):
        """Test that a rollback discards sections and text."""
        builder = SectionBuilder(1)
        with builder.section(GENERIC, "keep", "Keep\n"):
            pass
        checkpoint = builder.checkpoint()
        broken = builder.begin_section(GENERIC, "broken")
        builder.set_heading("Broken\n")
        builder.begin_section(FILE, "partial")
        builder.insert("partial\n")
        builder.rollback(checkpoint)
        tree = builder.finish()

        assert tree.text == "Keep\n"
        assert len(tree) == 2
        assert tree.root.children == [1]
        assert tree.find(broken.key) is None

    def test_finished_builder_rejects_writes(self):
        """Test that a finished builder cannot be reused."""
        builder = SectionBuilder(1)
        builder.finish()

        with pytest.raises(SectionError):
            builder.insert("late\n")
