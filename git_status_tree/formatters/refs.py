"""Tag, stash and commit formatting utilities."""

from typing import Optional

from git_status_tree.models.records import StashRecord, TagRecord


def format_tag(tag: TagRecord) -> str:
    """
    Format a tag with its distance to the reference commit.

    Example:
        "v1.2 (3)" or "v1.2" when the count is unknown
    """
    if tag.count is None:
        return tag.name
    return f"{tag.name} ({tag.count})"


def format_stash(stash: StashRecord) -> str:
    """Format a stash entry as "stash@{0}: WIP on main: 1a2b3c4 message"."""
    return f"{stash.ref}: {stash.message}"


def format_commit_line(abbrev: str, subject: str, marker: Optional[str] = None) -> str:
    """
    Format a one-line commit entry.

    Args:
        abbrev: Abbreviated commit hash
        subject: Commit subject
        marker: Optional leading marker such as "+" for cherry output
    """
    prefix = f"{marker} " if marker else ""
    return f"{prefix}{abbrev} {subject}".rstrip() + "\n"
