"""Section tree construction, reconciliation and lazy expansion."""

from .buffer import RenderedBuffer, StyledSpan
from .tree import SectionTree
from .builder import Checkpoint, SectionBuilder
from .washer import expand_section, run_washer, wash_visible
from .reconciler import (
    CursorAnchor,
    ReconcileResult,
    capture_cursor,
    copy_fold_state,
    reconcile,
    restore_cursor,
)
from .hunk_mapper import anchor_for, hunk_target, map_hunk_position

__all__ = [
    "RenderedBuffer",
    "StyledSpan",
    "SectionTree",
    "Checkpoint",
    "SectionBuilder",
    "expand_section",
    "run_washer",
    "wash_visible",
    "CursorAnchor",
    "ReconcileResult",
    "capture_cursor",
    "copy_fold_state",
    "reconcile",
    "restore_cursor",
    "anchor_for",
    "hunk_target",
    "map_hunk_position",
]
