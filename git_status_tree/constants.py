"""Shared constants for git-status-tree."""

from git_status_tree.models.section import SectionKind
from git_status_tree.models.branch_sync import SyncStatus


# Per-kind fold policy for sections without recorded state.
# Cherry lists under branches are expensive and start collapsed.
DEFAULT_HIDDEN = {
    SectionKind.BRANCH: True,
    SectionKind.REMOTE: False,
    SectionKind.TAG: False,
    SectionKind.STASH: False,
    SectionKind.UNTRACKED_GROUP: False,
    SectionKind.FILE: False,
    SectionKind.HUNK: False,
    SectionKind.COMMIT: False,
    SectionKind.BRANCH_DESCRIPTION: False,
    SectionKind.MERGE_LOG: False,
    SectionKind.STATUS: False,
    SectionKind.GENERIC: False,
}

# Status view inserters, in display order
DEFAULT_STATUS_SECTIONS = [
    "headers",
    "merge-log",
    "untracked",
    "stashes",
    "unstaged",
    "staged",
    "unpulled",
    "unpushed",
]

DEFAULT_LOG_LIMIT = 256
DEFAULT_REPOSITORY_DEPTH = 3

# Marker for a repository root
REPOSITORY_MARKER = ".git"

# Separator between a colliding repository name and its parent directory
UNIQUIFY_SEPARATOR = "\\"


# Symbol constants
SYMBOL_CURRENT_BRANCH = "*"
SYMBOL_WORKTREE_BRANCH = "+"
SYMBOL_FOLDED = "▸"
SYMBOL_UNFOLDED = "▾"
SYMBOL_CHERRY_NEW = "+"
ERROR_MARKER = "!"


# Sync status display names
SYNC_DISPLAY = {
    SyncStatus.SYNCED: "in sync",
    SyncStatus.AHEAD: "ahead",
    SyncStatus.BEHIND: "behind",
    SyncStatus.DIVERGED: "diverged",
    SyncStatus.LOCAL_ONLY: "no upstream",
    SyncStatus.GONE: "gone",
}


# Rich styles
class Style:
    """Style names used when rendering sections."""

    SECTION_HEADING = "bold"
    BRANCH_CURRENT = "bold green"
    BRANCH_LOCAL = "green"
    BRANCH_REMOTE = "cyan"
    HASH = "yellow"
    TAG = "bold magenta"
    HUNK_HEADER = "magenta"
    FILE_HEADER = "bold"
    DIFF_ADDED = "green"
    DIFF_REMOVED = "red"
    DIFF_CONTEXT = ""
    DIMMED = "dim"
    WARNING = "yellow"


ERROR_STYLE = "bold red"

# Cursor line highlight in the TUI
CURSOR_STYLE = "reverse"


# Legend text for the TUI help screen
LEGEND_TEXT = """
Keys:
tab   = Toggle the section at point
↑/↓   = Move between lines
n/p   = Next/previous section
enter = Show the file position at point
g/r   = Refresh
f     = Fetch all remotes in the background
a     = Apply the stash at point
d     = Show diagnostics
l     = Show this legend
q     = Quit

▸ = Collapsed section     ▾ = Expanded section
* = Current branch        + = Checked out in a worktree
"""
