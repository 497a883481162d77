"""Loading screen: shown while the app works out where to go."""

from textual.app import ComposeResult
from textual.containers import Center, Vertical
from textual.screen import Screen
from textual.widgets import Footer, Header, Label, LoadingIndicator


class LoadingScreen(Screen):
    """A spinner with a status line."""

    CSS = """
    LoadingScreen {
        align: center middle;
    }
    #loading-container {
        width: 60;
        height: auto;
        padding: 2 4;
        border: round $primary;
        background: $surface;
    }
    #loading-indicator {
        height: 3;
    }
    #status-label {
        text-align: center;
        width: 100%;
    }
    """

    def __init__(self, message: str = "Loading …", **kwargs) -> None:  # type: ignore[no-untyped-def]
        super().__init__(**kwargs)
        self.message = message

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        with Center():
            with Vertical(id="loading-container"):
                yield LoadingIndicator(id="loading-indicator")
                yield Label(self.message, id="status-label")
        yield Footer()
