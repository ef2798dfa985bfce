"""Data models for git-status-tree."""

from .section import Section, SectionKey, SectionKind, Span, Washer, WasherState
from .branch_sync import SyncStatus
from .records import (
    BranchRecord,
    CommitRecord,
    DiffLine,
    DiffLineKind,
    FileDiff,
    FileStatusRecord,
    HunkAnchor,
    HunkRecord,
    RepoEntry,
    StashRecord,
    TagRecord,
)

__all__ = [
    "Section",
    "SectionKey",
    "SectionKind",
    "Span",
    "Washer",
    "WasherState",
    "SyncStatus",
    "BranchRecord",
    "CommitRecord",
    "DiffLine",
    "DiffLineKind",
    "FileDiff",
    "FileStatusRecord",
    "HunkAnchor",
    "HunkRecord",
    "RepoEntry",
    "StashRecord",
    "TagRecord",
]
