"""Branch formatting utilities."""

from git_status_tree.constants import (
    SYMBOL_CURRENT_BRANCH,
    SYMBOL_WORKTREE_BRANCH,
    SYNC_DISPLAY,
)
from git_status_tree.models.branch_sync import SyncStatus
from git_status_tree.models.records import BranchRecord


def sync_status(branch: BranchRecord) -> SyncStatus:
    """
    Classify a branch against its upstream.

    A branch without an upstream is LOCAL_ONLY; an upstream that reports no
    counts is SYNCED. Missing counts are never read as zero commits
    ahead/behind of a missing upstream.

    Args:
        branch: Parsed branch line

    Returns:
        SyncStatus of the branch
    """
    if branch.upstream is None:
        return SyncStatus.LOCAL_ONLY
    if branch.gone:
        return SyncStatus.GONE
    ahead = branch.ahead or 0
    behind = branch.behind or 0
    if ahead and behind:
        return SyncStatus.DIVERGED
    if ahead:
        return SyncStatus.AHEAD
    if behind:
        return SyncStatus.BEHIND
    return SyncStatus.SYNCED


def format_tracking(branch: BranchRecord) -> str:
    """
    Format the upstream clause of a branch.

    Args:
        branch: Parsed branch line

    Returns:
        "" when there is no upstream, otherwise e.g.
        "[origin/main]", "[origin/main: behind 2]",
        "[origin/main: ahead 1, behind 2]" or "[origin/main: gone]"
    """
    if branch.upstream is None:
        return ""
    counts = []
    if branch.gone:
        counts.append("gone")
    if branch.ahead is not None:
        counts.append(f"ahead {branch.ahead}")
    if branch.behind is not None:
        counts.append(f"behind {branch.behind}")
    if counts:
        return f"[{branch.upstream}: {', '.join(counts)}]"
    return f"[{branch.upstream}]"


def format_sync(branch: BranchRecord) -> str:
    """
    Format the sync state as short text.

    Example:
        "no upstream", "in sync", "ahead 3", "behind 2", "ahead 1, behind 2", "gone"
    """
    status = sync_status(branch)
    if status == SyncStatus.AHEAD:
        return f"ahead {branch.ahead}"
    if status == SyncStatus.BEHIND:
        return f"behind {branch.behind}"
    if status == SyncStatus.DIVERGED:
        return f"ahead {branch.ahead}, behind {branch.behind}"
    return SYNC_DISPLAY[status]


def format_branch_marker(branch: BranchRecord) -> str:
    """Two-column flag: current branch, worktree branch, or blank."""
    if branch.current:
        return SYMBOL_CURRENT_BRANCH + " "
    if branch.worktree:
        return SYMBOL_WORKTREE_BRANCH + " "
    return "  "


def format_branch_name(branch: BranchRecord, width: int = 0) -> str:
    """
    Format a branch name for display.

    Args:
        branch: Parsed branch line
        width: Pad the name to this width (0 = no padding)

    Returns:
        The branch name, its remote-relative name for remote branches,
        or a "(detached)" placeholder.
    """
    name = branch.short_name if branch.short_name is not None else "(detached)"
    return name.ljust(width) if width else name


def format_branch_heading(branch: BranchRecord, width: int = 0) -> str:
    """
    Format the heading line of a branch section.

    Example:
        "* main     1a2b3c4 [origin/main: ahead 1] Fix parser"
        "  feature  5d6e7f8 Add tests"
        "  HEAD -> origin/main"
    """
    name = format_branch_name(branch, width)
    if branch.is_symbolic:
        return f"  {name.rstrip()} -> {branch.points_to}\n"
    parts = [format_branch_marker(branch) + name, branch.hash or ""]
    tracking = format_tracking(branch)
    if tracking:
        parts.append(tracking)
    if branch.subject:
        parts.append(branch.subject)
    return " ".join(parts) + "\n"
