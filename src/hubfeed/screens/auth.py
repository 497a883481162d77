"""Auth screen: email / password sign-in and sign-up."""

import logging

from textual import on
from textual.app import ComposeResult
from textual.containers import Center, Horizontal, Vertical
from textual.screen import Screen
from textual.widgets import Button, Footer, Header, Input, Label, LoadingIndicator, Static

from hubfeed.errors import AuthFailed, describe_error

logger = logging.getLogger(__name__)


class AuthScreen(Screen):
    """Collects credentials and signs the user in or up."""

    CSS = """
    AuthScreen {
        align: center middle;
    }
    #auth-container {
        width: 60;
        height: auto;
        padding: 1 4;
        border: round $primary;
        background: $surface;
    }
    #auth-title {
        text-align: center;
        text-style: bold;
        color: $accent;
        margin-bottom: 1;
    }
    .field-label {
        margin-top: 1;
    }
    #auth-buttons {
        height: auto;
        margin-top: 2;
    }
    #auth-buttons Button {
        width: 1fr;
    }
    #auth-spinner {
        height: 1;
        display: none;
    }
    #auth-spinner.busy {
        display: block;
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
            with Vertical(id="auth-container"):
                yield Static("Login / Signup", id="auth-title")
                yield Label("Email:", classes="field-label")
                yield Input(placeholder="Email connected to github", id="email-input")
                yield Label("Password:", classes="field-label")
                yield Input(placeholder="Create a password", password=True, id="password-input")
                with Horizontal(id="auth-buttons"):
                    yield Button("Sign In", id="sign-in-btn", variant="primary")
                    yield Button("Sign Up", id="sign-up-btn", variant="success")
                yield LoadingIndicator(id="auth-spinner")
                yield Label("", id="error-label")
        yield Footer()

    def on_mount(self) -> None:
        self.query_one("#email-input", Input).focus()

    @on(Button.Pressed, "#sign-in-btn")
    def sign_in(self) -> None:
        self._authenticate(sign_up=False)

    @on(Button.Pressed, "#sign-up-btn")
    def sign_up(self) -> None:
        self._authenticate(sign_up=True)

    @on(Input.Submitted, "#password-input")
    def submit_on_enter(self) -> None:
        self._authenticate(sign_up=False)

    def _authenticate(self, sign_up: bool) -> None:
        email = self.query_one("#email-input", Input).value.strip()
        password = self.query_one("#password-input", Input).value
        if not email or not password:
            self._show_error("⚠  Email and password are required")
            return

        self._set_busy(True)
        auth = self.app.auth  # type: ignore[attr-defined]
        action = auth.sign_up if sign_up else auth.sign_in

        def _do_work() -> None:
            try:
                session = action(email, password)
            except AuthFailed as e:
                self.app.call_from_thread(self._show_error, e.message)
                return
            except Exception as e:
                logger.exception("Authentication failed")
                self.app.call_from_thread(self._show_error, describe_error(e))
                return
            self.app.call_from_thread(self.app.signed_in, session)  # type: ignore[attr-defined]

        self.run_worker(_do_work, thread=True, exclusive=True)

    def _set_busy(self, busy: bool) -> None:
        self.query_one("#auth-spinner").set_class(busy, "busy")
        for button in self.query(Button):
            button.disabled = busy
        if busy:
            self.query_one("#error-label", Label).update("")

    def _show_error(self, message: str) -> None:
        self._set_busy(False)
        self.query_one("#error-label", Label).update(message)
