"""Records parsed from git output."""
from enum import Enum
from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class BranchRecord:
    """One line of ``git branch -vv`` output."""
    name: Optional[str]  # None = detached HEAD
    hash: Optional[str]  # None only for symbolic ref lines
    subject: str = ""
    upstream: Optional[str] = None
    ahead: Optional[int] = None  # None = not reported, not zero
    behind: Optional[int] = None  # None = not reported, not zero
    current: bool = False
    worktree: bool = False  # Checked out in another worktree
    gone: bool = False  # Upstream configured but deleted
    points_to: Optional[str] = None  # Target of "name -> target" lines
    remote: Optional[str] = None  # Set for remotes/<remote>/<branch> refs

    @property
    def detached(self) -> bool:
        return self.name is None

    @property
    def is_symbolic(self) -> bool:
        return self.points_to is not None

    @property
    def short_name(self) -> Optional[str]:
        """Branch name without the ``remotes/<remote>/`` prefix."""
        if self.name and self.remote:
            prefix = f"remotes/{self.remote}/"
            if self.name.startswith(prefix):
                return self.name[len(prefix):]
        return self.name


@dataclass
class TagRecord:
    """A tag and its distance to a reference commit."""
    name: str
    count: Optional[int] = None  # None = not computed yet
    hash: Optional[str] = None


@dataclass
class StashRecord:
    """One entry of ``git stash list``."""
    ref: str
    index: int
    message: str


@dataclass
class FileStatusRecord:
    """One line of ``git status --porcelain``."""
    index_status: str
    worktree_status: str
    path: str
    original_path: Optional[str] = None  # Source path of renames/copies

    @property
    def untracked(self) -> bool:
        return self.index_status == "?" and self.worktree_status == "?"

    @property
    def staged(self) -> bool:
        return self.index_status not in (" ", "?", "!")

    @property
    def modified(self) -> bool:
        return self.worktree_status not in (" ", "?", "!")


class DiffLineKind(Enum):
    """Kind of a hunk content line."""
    CONTEXT = "context"
    ADDED = "added"
    REMOVED = "removed"


@dataclass
class DiffLine:
    """A content line of a hunk, marker prefix included."""
    kind: DiffLineKind
    text: str

    @property
    def is_deletion(self) -> bool:
        return self.kind == DiffLineKind.REMOVED


@dataclass
class HunkRecord:
    """A hunk of a unified (or combined) diff."""
    header: str
    old_start: int
    old_count: int
    new_start: int
    new_count: int
    lines: List[DiffLine] = field(default_factory=list)

    @property
    def marker_width(self) -> int:
        """Width of the +/-/space prefix: 1, or parents count for combined diffs."""
        ats = len(self.header) - len(self.header.lstrip("@"))
        return max(ats - 1, 1)


@dataclass
class FileDiff:
    """All hunks touching one file."""
    path: str
    old_path: Optional[str] = None
    status: str = "modified"  # modified, new file, deleted, renamed, binary
    headers: List[str] = field(default_factory=list)
    hunks: List[HunkRecord] = field(default_factory=list)


@dataclass
class HunkAnchor:
    """A hunk plus a cursor position inside its rendered content."""
    header: str
    lines: List[DiffLine]
    line: int  # 1-based, counting from the first content line
    column: int = 0


@dataclass
class RepoEntry:
    """A discovered repository."""
    path: str
    name: str

    def __str__(self) -> str:
        return f"{self.name} @ {self.path}"


@dataclass
class CommitRecord:
    """One line of ``git log --format='%h %s'`` or ``git cherry -v`` output."""
    hash: str
    subject: str = ""
    cherry: Optional[str] = None  # "+" not upstream yet, "-" equivalent exists upstream
