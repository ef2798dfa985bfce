"""Sync state of a branch with its upstream."""
from enum import Enum


class SyncStatus(Enum):
    """Sync status of a branch with its upstream."""
    SYNCED = "synced"
    AHEAD = "ahead"
    BEHIND = "behind"
    DIVERGED = "diverged"
    LOCAL_ONLY = "local-only"  # No upstream configured
    GONE = "gone"  # Upstream configured but deleted
