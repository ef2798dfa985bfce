"""Parsers for tag listings and ``git describe`` output."""

import re
from typing import Iterable, List, Optional

from git_status_tree.exceptions import MalformedLineError
from git_status_tree.models.records import TagRecord
from git_status_tree.parsers.common import parse_lines

DESCRIBE_RE = re.compile(r"^(?P<name>.+)-(?P<count>[0-9]+)-g(?P<hash>[0-9a-fA-F]+)$")


def parse_tag_line(line: str) -> Optional[TagRecord]:
    """Parse one line of ``git tag`` output; the commit count is computed separately."""
    name = line.strip()
    if not name:
        return None
    if any(ch.isspace() for ch in name):
        raise MalformedLineError("tag", line, "tag names cannot contain whitespace")
    return TagRecord(name=name)


def parse_tag_lines(lines: Iterable[str], diagnostics: Optional[List[str]] = None) -> List[TagRecord]:
    """Parse many tag lines, skipping malformed ones."""
    return parse_lines(parse_tag_line, lines, diagnostics)


def parse_describe(text: str) -> Optional[TagRecord]:
    """Parse ``git describe --long --tags`` output such as ``v1.0-5-g1a2b3c4``.

    Returns None for empty output (no tag reachable).
    """
    text = text.strip()
    if not text:
        return None
    match = DESCRIBE_RE.match(text)
    if not match:
        raise MalformedLineError("describe", text)
    return TagRecord(
        name=match.group("name"),
        count=int(match.group("count")),
        hash=match.group("hash"),
    )


def parse_count(text: str) -> Optional[int]:
    """Parse ``git rev-list --count`` output."""
    text = text.strip()
    if not text:
        return None
    if not text.isdigit():
        raise MalformedLineError("count", text)
    return int(text)
