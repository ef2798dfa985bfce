"""Interactive TUI for git-status-tree using Textual."""

from typing import Optional

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Footer, Static

from .__version__ import __version__
from .config import Config
from .constants import LEGEND_TEXT
from .models.section import WasherState
from .services.stash_service import StashService
from .utils.logging import LOG_FILE_NAME, get_log_dir, get_logger
from .ui.screens import DiagnosticsScreen, MessageScreen
from .ui.widgets import NonExpandingHeader, SectionBuffer
from .views.base import SectionView
from .views.branches import BranchView
from .views.status import StatusView

logger = get_logger(__name__)


class StatusTreeApp(App):
    """Interactive section buffer for a status or branch view."""

    ENABLE_COMMAND_PALETTE = True
    TITLE = "Git Status Tree"
    SUB_TITLE = f"v{__version__}"

    CSS = """
    Screen {
        background: $surface;
    }

    #status-bar {
        dock: bottom;
        height: auto;
        background: $panel;
        padding: 0 1;
    }

    ToastRack {
        offset: 0 -2;
    }
    """

    BINDINGS = [
        Binding("q", "quit", "Quit"),
        Binding("tab", "toggle_section", "Toggle", priority=True),
        Binding("down", "cursor_down", "Down", show=False),
        Binding("up", "cursor_up", "Up", show=False),
        Binding("n", "next_section", "Next Section"),
        Binding("p", "previous_section", "Previous Section"),
        Binding("enter", "visit", "Visit"),
        Binding("g", "refresh", "Refresh"),
        Binding("r", "refresh", "Refresh", show=False),
        Binding("f", "fetch", "Fetch"),
        Binding("a", "apply_stash", "Apply Stash"),
        Binding("d", "show_diagnostics", "Diagnostics"),
        Binding("l", "show_legend", "Legend"),
    ]

    def __init__(self, view: SectionView, config: Optional[Config] = None):
        super().__init__()
        self.view = view
        self.config = config or view.config
        self.sub_title = f"{view.title} - {view.runner.repo_path}"

    def compose(self) -> ComposeResult:
        """Create child widgets."""
        yield NonExpandingHeader(show_clock=True, icon="")
        yield SectionBuffer(self.view, id="buffer")
        yield Static(id="status-bar")
        yield Footer()

    @property
    def buffer(self) -> SectionBuffer:
        return self.query_one(SectionBuffer)

    def on_mount(self) -> None:
        """Build the first tree and start polling for finished git processes."""
        self._refresh_view()
        self.set_interval(self.config.refresh_interval, self._poll_git)

    def _refresh_view(self) -> None:
        try:
            self.view.refresh()
        except Exception as e:
            logger.error(f"Error refreshing {self.view.title}: {e}", exc_info=True)
            self.push_screen(
                MessageScreen(
                    f"Error refreshing {self.view.title}",
                    str(e),
                    hint=f"Details in {get_log_dir() / LOG_FILE_NAME}",
                )
            )
            return
        self._redraw()

    def _redraw(self) -> None:
        self.buffer.redraw()
        self._update_status()

    def _update_status(self) -> None:
        parts = [f"generation {self.view.generation}"]
        pending = self.view.runner.pending
        if pending:
            parts.append(f"{len(pending)} git process(es) running")
        if self.view.diagnostics:
            parts.append(f"{len(self.view.diagnostics)} diagnostic(s), press d")
        self.query_one("#status-bar", Static).update("  |  ".join(parts))

    def _poll_git(self) -> None:
        """Deliver completions of background git processes."""
        if self.view.runner.poll():
            self._redraw()

    def action_cursor_down(self) -> None:
        self.buffer.move_cursor(1)

    def action_cursor_up(self) -> None:
        self.buffer.move_cursor(-1)

    def action_next_section(self) -> None:
        self.buffer.jump_section()

    def action_previous_section(self) -> None:
        self.buffer.jump_section(backward=True)

    def action_toggle_section(self) -> None:
        """Expand or collapse the section at the cursor."""
        section = self.view.toggle()
        if section is None:
            return
        if section.washer.state == WasherState.FAILED:
            self.notify(f"Could not load {section.value}", severity="warning")
        self._redraw()

    def action_visit(self) -> None:
        """Report what the line at the cursor refers to."""
        if isinstance(self.view, StatusView):
            target = self.view.visit_target()
            if target is None:
                self.notify("Nothing to visit here", severity="warning")
                return
            self.notify(f"{target.path}:{target.line}:{target.column}")
        elif isinstance(self.view, BranchView):
            branch = self.view.branch_at()
            if branch is None or branch.name is None:
                self.notify("No branch here", severity="warning")
                return
            self.notify(f"{branch.name} at {branch.hash or branch.points_to}")

    def action_refresh(self) -> None:
        self._refresh_view()
        self.notify("✓ Refreshed", severity="information")

    def action_fetch(self) -> None:
        """Fetch all remotes in the background; the view refreshes when done."""
        try:
            self.view.run_async(["fetch", "--all", "--prune"])
        except OSError as e:
            logger.error(f"Could not start git fetch: {e}")
            self.notify(f"Could not start git fetch: {e}", severity="error")
            return
        self._update_status()

    def action_apply_stash(self) -> None:
        """Apply the stash at the cursor, keeping it in the stash list."""
        stash = self.view.stash_at() if isinstance(self.view, StatusView) else None
        if stash is None:
            self.notify("No stash here", severity="warning")
            return
        success, error = StashService(self.view.runner).apply(stash.ref)
        self._refresh_view()
        if success:
            self.notify(f"✓ Applied {stash.ref}", severity="information")
        else:
            self.push_screen(MessageScreen(f"Could not apply {stash.ref}", error or "git stash apply failed"))

    def action_show_diagnostics(self) -> None:
        if not self.view.diagnostics:
            self.notify("No diagnostics")
            return
        self.push_screen(DiagnosticsScreen(self.view.title, self.view.generation, self.view.diagnostics))

    def action_show_legend(self) -> None:
        """Show legend explaining keys and symbols."""
        self.push_screen(MessageScreen("Keys and symbols", LEGEND_TEXT))

    async def action_quit(self) -> None:
        """Kill background git processes before exiting."""
        try:
            self.view.runner.cancel_all()
        finally:
            self.exit()
