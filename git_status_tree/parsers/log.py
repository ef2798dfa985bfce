"""Parsers for one-line commit listings (``git log --format='%h %s'``, ``git cherry -v``)."""

import re
from typing import Iterable, List, Optional

from git_status_tree.exceptions import MalformedLineError
from git_status_tree.models.records import CommitRecord
from git_status_tree.parsers.common import parse_lines

LOG_LINE_RE = re.compile(r"^(?P<hash>[0-9a-fA-F]{4,})(?: (?P<subject>.*))?$")
CHERRY_LINE_RE = re.compile(r"^(?P<cherry>[+-]) (?P<hash>[0-9a-fA-F]{4,})(?: (?P<subject>.*))?$")


def parse_log_line(line: str) -> Optional[CommitRecord]:
    """Parse ``<hash> <subject>``."""
    line = line.rstrip("\n")
    if not line.strip():
        return None
    match = LOG_LINE_RE.match(line)
    if not match:
        raise MalformedLineError("log", line, "missing commit hash")
    return CommitRecord(hash=match.group("hash"), subject=match.group("subject") or "")


def parse_cherry_line(line: str) -> Optional[CommitRecord]:
    """Parse ``+ <hash> <subject>`` as printed by ``git cherry -v``."""
    line = line.rstrip("\n")
    if not line.strip():
        return None
    match = CHERRY_LINE_RE.match(line)
    if not match:
        raise MalformedLineError("cherry", line)
    return CommitRecord(
        hash=match.group("hash"),
        subject=match.group("subject") or "",
        cherry=match.group("cherry"),
    )


def parse_log_lines(lines: Iterable[str], diagnostics: Optional[List[str]] = None) -> List[CommitRecord]:
    """Parse many log lines, skipping malformed ones."""
    return parse_lines(parse_log_line, lines, diagnostics)


def parse_cherry_lines(lines: Iterable[str], diagnostics: Optional[List[str]] = None) -> List[CommitRecord]:
    """Parse many cherry lines, skipping malformed ones."""
    return parse_lines(parse_cherry_line, lines, diagnostics)
