"""Parser turning ``git diff`` output into files and hunks."""

import re
from typing import Iterable, List, Optional

from git_status_tree.models.records import DiffLine, DiffLineKind, FileDiff, HunkRecord
from git_status_tree.utils.logging import get_logger

logger = get_logger(__name__)

DIFF_GIT_RE = re.compile(r"^diff --git a/(?P<old>.+?) b/(?P<new>.+)$")
DIFF_COMBINED_RE = re.compile(r"^diff --(?:cc|combined) (?P<path>.+)$")
HUNK_HEADER_RE = re.compile(
    r"^(?P<ats>@@+) "
    r"-(?P<old_start>[0-9]+)(?:,(?P<old_count>[0-9]+))?"
    r"(?: -[0-9]+(?:,[0-9]+)?)*"
    r" \+(?P<new_start>[0-9]+)(?:,(?P<new_count>[0-9]+))?"
    r" @@+"
)


def parse_hunk_header(header: str) -> Optional[HunkRecord]:
    """Parse ``@@ -a,b +c,d @@`` (any number of ``@`` for combined diffs)."""
    match = HUNK_HEADER_RE.match(header)
    if not match:
        return None
    old_count = match.group("old_count")
    new_count = match.group("new_count")
    return HunkRecord(
        header=header,
        old_start=int(match.group("old_start")),
        old_count=int(old_count) if old_count is not None else 1,
        new_start=int(match.group("new_start")),
        new_count=int(new_count) if new_count is not None else 1,
    )


def classify_line(text: str, marker_width: int) -> DiffLineKind:
    """Classify a content line by its marker prefix."""
    prefix = text[:marker_width]
    if "+" in prefix:
        return DiffLineKind.ADDED
    if "-" in prefix:
        return DiffLineKind.REMOVED
    return DiffLineKind.CONTEXT


def _strip_prefix(path: str, prefix: str) -> str:
    return path[len(prefix):] if path.startswith(prefix) else path


def _close_hunk(current: FileDiff, hunk: Optional[HunkRecord], diagnostics: Optional[List[str]]) -> None:
    if hunk is None:
        return
    if not hunk.lines:
        # A hunk without content has no position to map; never render it
        message = f"Dropping empty hunk {hunk.header!r} in {current.path}"
        logger.warning(message)
        if diagnostics is not None:
            diagnostics.append(message)
        return
    current.hunks.append(hunk)


def parse_diff(lines: Iterable[str], diagnostics: Optional[List[str]] = None) -> List[FileDiff]:
    """Parse a unified diff.

    Args:
        lines: Diff output, one line per item
        diagnostics: Optional list receiving messages about skipped input

    Returns:
        One FileDiff per ``diff --git`` (or ``diff --cc``) block
    """
    files: List[FileDiff] = []
    current: Optional[FileDiff] = None
    hunk: Optional[HunkRecord] = None

    for raw_line in lines:
        line = raw_line.rstrip("\n")

        git_match = DIFF_GIT_RE.match(line)
        combined_match = DIFF_COMBINED_RE.match(line) if not git_match else None
        if git_match or combined_match:
            if current is not None:
                _close_hunk(current, hunk, diagnostics)
                files.append(current)
            hunk = None
            if git_match:
                current = FileDiff(path=git_match.group("new"), old_path=git_match.group("old"))
            else:
                current = FileDiff(path=combined_match.group("path"), status="unmerged")
            current.headers.append(line)
            continue

        if current is None:
            if line.strip():
                logger.debug(f"Ignoring diff line outside of a file block: {line!r}")
            continue

        if line.startswith("@@"):
            parsed = parse_hunk_header(line)
            if parsed is None:
                message = f"Malformed hunk header in {current.path}: {line!r}"
                logger.warning(message)
                if diagnostics is not None:
                    diagnostics.append(message)
                continue
            _close_hunk(current, hunk, diagnostics)
            hunk = parsed
            continue

        if hunk is None:
            current.headers.append(line)
            if line.startswith("new file mode"):
                current.status = "new file"
            elif line.startswith("deleted file mode"):
                current.status = "deleted"
            elif line.startswith("rename from "):
                current.status = "renamed"
                current.old_path = line[len("rename from "):]
            elif line.startswith("rename to "):
                current.path = line[len("rename to "):]
            elif line.startswith("Binary files "):
                current.status = "binary"
            elif line.startswith("+++ ") and line[4:] != "/dev/null":
                current.path = _strip_prefix(line[4:], "b/")
            continue

        if line.startswith("\\"):
            # "\ No newline at end of file" belongs to no side of the diff
            continue

        hunk.lines.append(DiffLine(kind=classify_line(line, hunk.marker_width), text=line))

    if current is not None:
        _close_hunk(current, hunk, diagnostics)
        files.append(current)

    return files
