"""Folding: the lines of a section tree that are currently visible."""

from bisect import bisect_right
from dataclasses import dataclass
from typing import Dict, List, Optional

from rich.text import Text

from git_status_tree.constants import CURSOR_STYLE, SYMBOL_FOLDED, SYMBOL_UNFOLDED
from git_status_tree.models.section import Section, SectionKind, Span
from git_status_tree.sections.tree import SectionTree


@dataclass
class VisibleLine:
    """One displayed line and where it lives in the buffer."""
    start: int
    end: int  # Offset of the terminating newline, or of the buffer end
    section: int  # Innermost section at ``start``
    heading: Optional[int] = None  # Section whose heading begins on this line


@dataclass
class Rendering:
    lines: List[VisibleLine]
    text: Text


def hidden_ranges(tree: SectionTree) -> List[Span]:
    """Bodies of collapsed sections that are not already inside another collapsed body."""
    ranges: List[Span] = []
    if not len(tree):
        return ranges
    stack = [tree.root]
    while stack:
        node = stack.pop()
        if node.hidden and node.collapsible:
            if len(node.body_span):
                ranges.append(node.body_span)
            continue
        stack.extend(tree.get(i) for i in reversed(node.children))
    return ranges


def visible_segments(tree: SectionTree) -> List[Span]:
    segments: List[Span] = []
    position = 0
    for hidden in hidden_ranges(tree):
        if hidden.start > position:
            segments.append(Span(position, hidden.start))
        position = max(position, hidden.end)
    length = len(tree.buffer)
    if position < length:
        segments.append(Span(position, length))
    return segments


def visible_text(tree: SectionTree) -> str:
    return "".join(tree.buffer.slice(segment.start, segment.end) for segment in visible_segments(tree))


def _heading_starts(tree: SectionTree) -> Dict[int, int]:
    starts: Dict[int, int] = {}
    for node in tree.walk():
        if node.kind != SectionKind.ROOT and len(node.heading_span):
            starts.setdefault(node.heading_span.start, node.index)
    return starts


def visible_lines(tree: SectionTree) -> List[VisibleLine]:
    """Split the visible segments of ``tree`` into lines."""
    headings = _heading_starts(tree)
    text = tree.text
    lines: List[VisibleLine] = []
    for segment in visible_segments(tree):
        position = segment.start
        while position < segment.end:
            newline = text.find("\n", position, segment.end)
            end = segment.end if newline == -1 else newline
            lines.append(
                VisibleLine(
                    start=position,
                    end=end,
                    section=tree.section_at(position).index,
                    heading=headings.get(position),
                )
            )
            position = segment.end if newline == -1 else newline + 1
    return lines


def line_for_offset(lines: List[VisibleLine], offset: int) -> int:
    """Index of the visible line showing ``offset``.

    An offset inside a collapsed body resolves to the line above it, which
    is the heading of the collapsed section.
    """
    if not lines:
        return 0
    starts = [line.start for line in lines]
    return max(bisect_right(starts, offset) - 1, 0)


def fold_marker(section: Section) -> str:
    """Gutter symbol for a heading line."""
    if not section.collapsible or not (section.deferred or len(section.body_span)):
        return " "
    return SYMBOL_FOLDED if section.hidden else SYMBOL_UNFOLDED


def render_visible(tree: SectionTree, point: Optional[int] = None, gutter: bool = True) -> Rendering:
    """Render the visible lines of ``tree`` as rich Text.

    Args:
        tree: Tree to render
        point: Buffer offset of the cursor; its line is highlighted
        gutter: Prefix each line with a fold marker column

    Returns:
        Rendering with the visible lines and their styled text
    """
    lines = visible_lines(tree)
    cursor_line = line_for_offset(lines, point) if point is not None else None
    text = Text()
    for number, line in enumerate(lines):
        if number:
            text.append("\n")
        row = Text()
        if gutter:
            marker = fold_marker(tree.get(line.heading)) if line.heading is not None else " "
            row.append(f"{marker} ")
        row.append_text(tree.buffer.to_text(line.start, line.end))
        if number == cursor_line:
            row.stylize(CURSOR_STYLE)
        text.append_text(row)
    return Rendering(lines=lines, text=text)


def next_heading(lines: List[VisibleLine], offset: int, backward: bool = False) -> Optional[int]:
    """Offset of the next (or previous) visible section heading after ``offset``."""
    current = line_for_offset(lines, offset)
    candidates = range(current - 1, -1, -1) if backward else range(current + 1, len(lines))
    for number in candidates:
        if lines[number].heading is not None:
            return lines[number].start
    return None
