"""
git-status-tree - Collapsible, section-based views of git repositories
"""

from .__version__ import __version__
from .sections import SectionBuilder, SectionTree
from .views import BranchView, StatusView
from .cli.main import main

__all__ = ["SectionBuilder", "SectionTree", "StatusView", "BranchView", "main", "__version__"]
