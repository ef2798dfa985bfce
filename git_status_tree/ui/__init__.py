"""UI components for git-status-tree TUI."""

from .screens import DiagnosticsScreen, MessageScreen
from .widgets import NonExpandingHeader, SectionBuffer, VersionDisplay

__all__ = ["DiagnosticsScreen", "MessageScreen", "NonExpandingHeader", "SectionBuffer", "VersionDisplay"]
