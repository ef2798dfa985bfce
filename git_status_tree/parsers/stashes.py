"""Parser for ``git stash list`` output."""

import re
from typing import Iterable, List, Optional

from git_status_tree.exceptions import MalformedLineError
from git_status_tree.models.records import StashRecord
from git_status_tree.parsers.common import parse_lines

STASH_LINE_RE = re.compile(r"^(?P<ref>stash@\{(?P<index>[0-9]+)\}): (?P<message>.*)$")


def parse_stash_line(line: str) -> Optional[StashRecord]:
    """Parse ``stash@{N}: message``."""
    line = line.rstrip("\n")
    if not line.strip():
        return None
    match = STASH_LINE_RE.match(line)
    if not match:
        raise MalformedLineError("stash", line)
    return StashRecord(
        ref=match.group("ref"),
        index=int(match.group("index")),
        message=match.group("message"),
    )


def parse_stash_lines(lines: Iterable[str], diagnostics: Optional[List[str]] = None) -> List[StashRecord]:
    """Parse many stash lines, skipping malformed ones."""
    return parse_lines(parse_stash_line, lines, diagnostics)
