"""Username screen: bind the account to a GitHub handle."""

from textual import on
from textual.app import ComposeResult
from textual.containers import Center, Vertical
from textual.screen import Screen
from textual.widgets import Button, Footer, Header, Input, Label, LoadingIndicator, Static


class UsernameScreen(Screen):
    """Prefills the GitHub login found for the account email."""

    CSS = """
    UsernameScreen {
        align: center middle;
    }
    #username-container {
        width: 60;
        height: auto;
        padding: 1 4;
        border: round $primary;
        background: $surface;
    }
    #username-title {
        text-align: center;
        text-style: bold;
        margin-bottom: 1;
    }
    #status-label {
        text-align: center;
        color: $text-muted;
    }
    #username-spinner {
        height: 1;
    }
    #save-btn {
        margin-top: 2;
        width: 100%;
    }
    #error-label {
        color: $error;
        text-align: center;
        margin-top: 1;
    }
    """

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        with Center():
            with Vertical(id="username-container"):
                yield Static("Set Your Username", id="username-title")
                yield Label("Fetching your GitHub info …", id="status-label")
                yield LoadingIndicator(id="username-spinner")
                yield Input(placeholder="Enter your GitHub username", id="username-input")
                yield Button("Save & Continue", id="save-btn", variant="primary", disabled=True)
                yield Label("", id="error-label")
        yield Footer()

    def on_mount(self) -> None:
        self.run_worker(self._suggest(), exclusive=True, group="suggest")

    async def _suggest(self) -> None:
        session = self.app.session  # type: ignore[attr-defined]
        suggestion = await self.app.identity.suggest_handle(session.email)  # type: ignore[attr-defined]
        field = self.query_one("#username-input", Input)
        if suggestion:
            field.placeholder = suggestion
            field.value = suggestion
            status = f"Found GitHub account @{suggestion} for {session.email}"
        else:
            status = "No GitHub account matches your email. Enter it below."
        self.query_one("#status-label", Label).update(status)
        self.query_one("#username-spinner").display = False
        self.query_one("#save-btn", Button).disabled = False
        field.focus()

    @on(Button.Pressed, "#save-btn")
    @on(Input.Submitted, "#username-input")
    def save(self) -> None:
        handle = self.query_one("#username-input", Input).value
        error_label = self.query_one("#error-label", Label)
        if not handle.strip():
            error_label.update("Username cannot be empty.")
            return
        error_label.update("")
        self.query_one("#save-btn", Button).disabled = True
        self.query_one("#username-spinner").display = True
        self.run_worker(self._bind(handle), exclusive=True, group="bind")

    async def _bind(self, handle: str) -> None:
        app = self.app
        result = await app.identity.bind(app.session, handle)  # type: ignore[attr-defined]
        app.handle_bound(result)  # type: ignore[attr-defined]
