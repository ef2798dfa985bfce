"""Custom widgets for the git-status-tree TUI."""

from typing import List

from textual.app import ComposeResult, RenderResult
from textual.containers import VerticalScroll
from textual.events import Click
from textual.widgets import Header, Static
from textual.widgets._header import HeaderIcon, HeaderTitle, HeaderClockSpace
from rich.text import Text

from git_status_tree.__version__ import __version__
from git_status_tree.display import VisibleLine, line_for_offset, next_heading, render_visible
from git_status_tree.views.base import SectionView


class VersionDisplay(HeaderClockSpace):
    """Custom widget to display version in place of clock."""

    DEFAULT_CSS = """
    VersionDisplay {
        width: auto;
        dock: right;
        padding: 0 1;
        background: $foreground 5%;
        color: $text;
        text-align: center;
        text-opacity: 85%;
    }
    """

    def render(self) -> RenderResult:
        """Render the version string."""
        return Text(f"v{__version__}")


class NonExpandingHeader(Header):
    """Header widget that doesn't expand/contract on click and shows version instead of clock."""

    def compose(self) -> ComposeResult:
        """Compose the header with custom version display."""
        yield HeaderIcon().data_bind(Header.icon)
        yield HeaderTitle()
        yield VersionDisplay() if self._show_clock else HeaderClockSpace()

    def on_click(self, event: Click) -> None:
        """Override to disable click-to-expand behavior."""
        event.stop()


class SectionBuffer(VerticalScroll):
    """Scrollable rendering of a section view with a line cursor."""

    DEFAULT_CSS = """
    SectionBuffer {
        height: 1fr;
    }

    #buffer-text {
        width: auto;
    }
    """

    def __init__(self, view: SectionView, **kwargs):
        super().__init__(**kwargs)
        self.view = view
        self.lines: List[VisibleLine] = []

    def compose(self) -> ComposeResult:
        yield Static(id="buffer-text")

    @property
    def cursor_line(self) -> int:
        return line_for_offset(self.lines, self.view.point)

    def redraw(self) -> None:
        """Re-render the visible lines and keep the cursor on screen."""
        if self.view.tree is None:
            return
        rendering = render_visible(self.view.tree, self.view.point)
        self.lines = rendering.lines
        self.query_one("#buffer-text", Static).update(rendering.text)
        self._scroll_to_cursor()

    def _scroll_to_cursor(self) -> None:
        line = self.cursor_line
        height = max(self.scrollable_content_region.height, 1)
        if line < self.scroll_y:
            self.scroll_to(y=line, animate=False)
        elif line >= self.scroll_y + height:
            self.scroll_to(y=line - height + 1, animate=False)

    def move_cursor(self, delta: int) -> None:
        if not self.lines:
            return
        line = max(0, min(self.cursor_line + delta, len(self.lines) - 1))
        self.view.point = self.lines[line].start
        self.redraw()

    def jump_section(self, backward: bool = False) -> bool:
        """Move to the next (or previous) visible section heading."""
        target = next_heading(self.lines, self.view.point, backward)
        if target is None:
            return False
        self.view.point = target
        self.redraw()
        return True
