"""Map a position inside a rendered hunk back to the post-image file."""

from typing import Sequence, Tuple

from git_status_tree.exceptions import MalformedLineError, MapperOutOfRangeError
from git_status_tree.models.records import DiffLine, HunkAnchor, HunkRecord
from git_status_tree.parsers.diff import parse_hunk_header


def hunk_target(header: str, lines: Sequence[DiffLine], line: int, column: int = 0) -> Tuple[int, int]:
    """Return the (file line, column) a rendered hunk position refers to.

    Args:
        header: The ``@@ -a,b +c,d @@`` header of the hunk
        lines: The hunk content lines, marker prefixes included
        line: 1-based index of the rendered line, counting from the first content line
        column: Column within the rendered line, marker prefix included

    Returns:
        Tuple of (line in the new file, column in that line). Removed lines
        have no post-image position: they map to the new-file line they
        follow, column 0. A removal before any surviving line maps to the
        first line of the hunk.

    Raises:
        MapperOutOfRangeError: ``line`` does not lie within the hunk
    """
    if not 1 <= line <= len(lines):
        raise MapperOutOfRangeError(line, len(lines))

    hunk = parse_hunk_header(header)
    if hunk is None:
        raise MalformedLineError("hunk header", header)

    # The first surviving line is new_start itself
    goto_line = hunk.new_start - 1
    for content in lines[:line]:
        if not content.is_deletion:
            goto_line += 1
    goto_line = max(goto_line, hunk.new_start, 1)

    target = lines[line - 1]
    if target.is_deletion:
        return goto_line, 0
    return goto_line, max(column - hunk.marker_width, 0)


def map_hunk_position(anchor: HunkAnchor) -> Tuple[int, int]:
    """Resolve a HunkAnchor to (file line, column)."""
    return hunk_target(anchor.header, anchor.lines, anchor.line, anchor.column)


def anchor_for(hunk: HunkRecord, line: int, column: int = 0) -> HunkAnchor:
    """Build a HunkAnchor for a parsed hunk."""
    return HunkAnchor(header=hunk.header, lines=hunk.lines, line=line, column=column)
