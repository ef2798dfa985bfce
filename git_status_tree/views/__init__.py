"""Section views: ordered inserter pipelines rebuilt on every refresh."""

from .context import RefreshContext
from .base import Inserter, SectionView
from .status import STATUS_INSERTERS, StatusView, VisitTarget
from .branches import BRANCH_INSERTERS, BranchView

__all__ = [
    "RefreshContext",
    "Inserter",
    "SectionView",
    "STATUS_INSERTERS",
    "StatusView",
    "VisitTarget",
    "BRANCH_INSERTERS",
    "BranchView",
]
