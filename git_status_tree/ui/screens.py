"""Modal screens for the git-status-tree TUI."""

from typing import Optional, Sequence, Union

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Vertical, VerticalScroll
from textual.screen import ModalScreen
from textual.widgets import Label, Static

from ..constants import ERROR_MARKER, ERROR_STYLE


def diagnostics_text(title: str, generation: int, diagnostics: Sequence[str]) -> Text:
    """One styled line per diagnostic of a refresh."""
    text = Text(f"{title} view, generation {generation}\n\n")
    for diagnostic in diagnostics:
        text.append(f"{ERROR_MARKER} ", style=ERROR_STYLE)
        text.append(f"{diagnostic}\n")
    return text


class MessageScreen(ModalScreen[None]):
    """Titled, scrollable message; closed with escape or q."""

    DEFAULT_CSS = """
    MessageScreen {
        align: center middle;
    }

    MessageScreen > Vertical {
        width: 72;
        max-width: 90%;
        height: auto;
        max-height: 80%;
        border: round $accent;
        background: $panel;
        padding: 0 1;
    }

    MessageScreen .message-title {
        text-style: bold;
        padding-bottom: 1;
    }

    MessageScreen VerticalScroll {
        height: auto;
        max-height: 24;
    }

    MessageScreen .message-hint {
        color: $text-muted;
        padding-top: 1;
    }
    """

    BINDINGS = [("escape", "close", "Close"), ("q", "close", "Close")]

    def __init__(self, title: str, body: Union[str, Text], hint: Optional[str] = None):
        super().__init__()
        self.title_text = title
        self.body = body
        self.hint = hint or "esc / q to close"

    def compose(self) -> ComposeResult:
        with Vertical():
            yield Label(self.title_text, classes="message-title")
            with VerticalScroll():
                yield Static(self.body, markup=False)
            yield Label(self.hint, classes="message-hint")

    def action_close(self) -> None:
        self.dismiss()


class DiagnosticsScreen(MessageScreen):
    """Inserter failures and git exit codes collected by the last refresh."""

    def __init__(self, title: str, generation: int, diagnostics: Sequence[str]):
        super().__init__(
            "Diagnostics",
            diagnostics_text(title, generation, diagnostics),
        )
