"""Error screen: what went wrong, with a way out."""

from typing import Optional

from textual import on
from textual.app import ComposeResult
from textual.containers import Center, Horizontal, Vertical
from textual.screen import Screen
from textual.widgets import Button, Footer, Header, Label, Static


class ErrorScreen(Screen):
    """Shows a failure and offers a way out: back, or logout when that is the only exit."""

    BINDINGS = [
        ("b", "go_back", "Back"),
        ("l", "logout", "Logout"),
    ]

    CSS = """
    ErrorScreen {
        align: center middle;
    }
    #error-container {
        width: 72;
        height: auto;
        padding: 1 4;
        border: round $error;
        background: $surface;
    }
    #error-title {
        text-align: center;
        text-style: bold;
        color: $error;
        margin-bottom: 1;
    }
    #error-details {
        text-align: center;
        color: $text-muted;
    }
    #error-buttons {
        height: auto;
        margin-top: 2;
        align-horizontal: center;
    }
    #error-buttons Button {
        margin: 0 1;
    }
    """

    def __init__(
        self, message: str, details: str = "", allow_logout: bool = False, **kwargs
    ) -> None:  # type: ignore[no-untyped-def]
        super().__init__(**kwargs)
        self.message = message
        self.details = details
        self.allow_logout = allow_logout

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        with Center():
            with Vertical(id="error-container"):
                yield Static(f"⚠  {self.message}", id="error-title", markup=False)
                if self.details:
                    yield Label(self.details, id="error-details", markup=False)
                with Horizontal(id="error-buttons"):
                    if self.allow_logout:
                        yield Button("Logout", id="logout-btn", variant="error")
                    else:
                        yield Button("Back", id="back-btn")
        yield Footer()

    def check_action(self, action: str, parameters: tuple[object, ...]) -> Optional[bool]:
        # allow_logout marks a failure the screen underneath cannot recover from
        if action == "go_back":
            return not self.allow_logout
        if action == "logout":
            return self.allow_logout
        return True

    @on(Button.Pressed, "#back-btn")
    def action_go_back(self) -> None:
        self.app.pop_screen()

    @on(Button.Pressed, "#logout-btn")
    def action_logout(self) -> None:
        if self.allow_logout:
            self.app.logout()  # type: ignore[attr-defined]
