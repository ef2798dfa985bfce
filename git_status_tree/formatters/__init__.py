"""Formatting utilities for git-status-tree.

This package provides the text used in section headings and bodies,
organized into logical modules:
- branch: Branch lines, upstream tracking and sync state
- status: File status and diff file headings
- refs: Tags, stashes and commit lines
"""

# Branch formatters
from .branch import (
    sync_status,
    format_tracking,
    format_sync,
    format_branch_marker,
    format_branch_name,
    format_branch_heading,
)

# Status formatters
from .status import format_file_status, format_file_diff_heading

# Ref formatters
from .refs import format_tag, format_stash, format_commit_line

__all__ = [
    # Branch
    "sync_status",
    "format_tracking",
    "format_sync",
    "format_branch_marker",
    "format_branch_name",
    "format_branch_heading",
    # Status
    "format_file_status",
    "format_file_diff_heading",
    # Refs
    "format_tag",
    "format_stash",
    "format_commit_line",
]
