"""Parser for ``git status --porcelain`` (v1) output."""

from typing import Iterable, List, Optional

from git_status_tree.exceptions import MalformedLineError
from git_status_tree.models.records import FileStatusRecord
from git_status_tree.parsers.common import parse_lines


def _unquote(path: str) -> str:
    if len(path) >= 2 and path.startswith('"') and path.endswith('"'):
        # Octal escapes encode UTF-8 bytes
        raw = path[1:-1].encode("utf-8").decode("unicode_escape")
        return raw.encode("latin-1").decode("utf-8", errors="replace")
    return path


def parse_status_line(line: str) -> Optional[FileStatusRecord]:
    """Parse ``XY path`` or ``XY original -> path``.

    X is the index status, Y the working tree status; ``??`` marks untracked
    files.
    """
    line = line.rstrip("\n")
    if not line:
        return None
    if len(line) < 4 or line[2] != " ":
        raise MalformedLineError("status", line)

    index_status = line[0]
    worktree_status = line[1]
    path = line[3:]
    original_path = None
    if index_status in ("R", "C") and " -> " in path:
        original_path, path = path.split(" -> ", 1)
        original_path = _unquote(original_path)

    return FileStatusRecord(
        index_status=index_status,
        worktree_status=worktree_status,
        path=_unquote(path),
        original_path=original_path,
    )


def parse_status_lines(
    lines: Iterable[str], diagnostics: Optional[List[str]] = None
) -> List[FileStatusRecord]:
    """Parse many porcelain lines, skipping malformed ones."""
    return parse_lines(parse_status_line, lines, diagnostics)
