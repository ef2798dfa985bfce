"""Parser for ``git branch -vv`` / ``git branch -vva`` output.

Line format::

    * main        1a2b3c4 [origin/main: ahead 1, behind 2] Subject line
      feature     5d6e7f8 Subject line
    + other-wt    9a8b7c6 [origin/other-wt: gone] Checked out in a worktree
      remotes/origin/HEAD -> origin/main

The first two columns are a flag (``*`` current branch, ``+`` checked out in
another worktree). The bracketed clause is optional, and inside it the
ahead and behind counts are each optional.
"""

import re
from typing import Iterable, List, Optional

from git_status_tree.exceptions import MalformedLineError
from git_status_tree.models.records import BranchRecord
from git_status_tree.parsers.common import parse_lines

BRANCH_LINE_RE = re.compile(
    r"^(?P<flag>[*+ ]) "
    r"(?P<name>.+?) +"
    r"(?:"
    r"(?P<hash>[0-9a-fA-F]+)"
    r"(?: \[(?P<upstream>[^:\]\n]+?)(?:: )?"
    r"(?:(?P<gone>gone)"
    r"|(?:ahead (?P<ahead>[0-9]+))?(?:, )?(?:behind (?P<behind>[0-9]+))?)"
    r"\])?"
    r"(?: (?P<subject>.*))?"
    r"|"
    r"-> (?P<points_to>.+)"
    r")$"
)

FLAG_ONLY_RE = re.compile(r"^[*+ ] \S")

REMOTE_REF_RE = re.compile(r"^remotes/(?P<remote>[^/]+)/")

DETACHED_MARKERS = ("HEAD detached", "no branch", "detached from", "detached at")


def _is_detached(name: str) -> bool:
    return name.startswith("(") and any(marker in name for marker in DETACHED_MARKERS)


def parse_branch_line(line: str) -> Optional[BranchRecord]:
    """Parse one branch line.

    Returns None for blank lines. Raises MalformedLineError when the line does
    not follow the grammar or lacks the mandatory commit hash.
    """
    line = line.rstrip("\n")
    if not line.strip():
        return None

    match = BRANCH_LINE_RE.match(line)
    if not match:
        if FLAG_ONLY_RE.match(line):
            raise MalformedLineError("branch", line, "missing commit hash")
        raise MalformedLineError("branch", line)

    name = match.group("name").strip()
    remote_match = REMOTE_REF_RE.match(name)
    remote = remote_match.group("remote") if remote_match else None

    if match.group("points_to") is not None:
        return BranchRecord(
            name=name,
            hash=None,
            points_to=match.group("points_to").strip(),
            remote=remote,
        )

    ahead = match.group("ahead")
    behind = match.group("behind")
    upstream = match.group("upstream")

    return BranchRecord(
        name=None if _is_detached(name) else name,
        hash=match.group("hash"),
        subject=match.group("subject") or "",
        upstream=upstream.strip() if upstream else None,
        ahead=int(ahead) if ahead is not None else None,
        behind=int(behind) if behind is not None else None,
        current=match.group("flag") == "*",
        worktree=match.group("flag") == "+",
        gone=match.group("gone") is not None,
        remote=remote,
    )


def parse_branch_lines(
    lines: Iterable[str], diagnostics: Optional[List[str]] = None
) -> List[BranchRecord]:
    """Parse many branch lines, skipping malformed ones."""
    return parse_lines(parse_branch_line, lines, diagnostics)
