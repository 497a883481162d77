"""Profile screen: header, people dialog, explore strip and repositories."""

import asyncio
from typing import Optional

from rich.markup import escape
from textual import on
from textual.app import ComposeResult
from textual.containers import Horizontal, HorizontalScroll, Vertical, VerticalScroll
from textual.screen import ModalScreen, Screen
from textual.widgets import Button, Footer, Header, Label, LoadingIndicator, Static

from hubfeed.errors import describe_error
from hubfeed.models import Account, ProfilePage


class AccountListScreen(ModalScreen[Optional[str]]):
    """Followers or following, dismissed with the chosen login."""

    BINDINGS = [("escape", "close", "Close")]

    CSS = """
    AccountListScreen {
        align: center middle;
    }
    #dialog {
        width: 50;
        max-height: 75%;
        border: round $primary;
        background: $surface;
        padding: 1 2;
    }
    #dialog-title {
        text-style: bold;
        margin-bottom: 1;
    }
    .account-btn {
        width: 100%;
        height: 1;
        border: none;
        min-width: 0;
    }
    """

    def __init__(self, title: str, accounts: list[Account], **kwargs) -> None:  # type: ignore[no-untyped-def]
        super().__init__(**kwargs)
        self.title_text = title
        self.accounts = accounts

    def compose(self) -> ComposeResult:
        with VerticalScroll(id="dialog"):
            yield Static(self.title_text, id="dialog-title")
            if not self.accounts:
                yield Label("Nobody here yet.")
            for account in self.accounts:
                yield Button(f"@{account.login}", name=account.login, classes="account-btn")

    @on(Button.Pressed, ".account-btn")
    def choose(self, event: Button.Pressed) -> None:
        self.dismiss(event.button.name)

    def action_close(self) -> None:
        self.dismiss(None)


class ProfileScreen(Screen):
    """A GitHub user's profile page."""

    BINDINGS = [
        ("b", "go_back", "Back"),
        ("f", "show_followers", "Followers"),
        ("g", "show_following", "Following"),
        ("l", "logout", "Logout"),
    ]

    CSS = """
    #profile-body {
        padding: 0 2;
    }
    #profile-header {
        height: auto;
        border: round $primary;
        background: $surface;
        padding: 1 2;
        margin-top: 1;
    }
    #profile-actions {
        height: auto;
        margin-top: 1;
    }
    #profile-actions Button {
        margin-right: 1;
    }
    .section-title {
        text-style: bold;
        margin: 1 0;
        color: $secondary;
    }
    #explore-strip {
        height: 3;
    }
    .chip {
        min-width: 0;
        margin-right: 1;
    }
    .repo-card {
        height: auto;
        border: round $primary-lighten-2;
        padding: 0 1;
        margin-bottom: 1;
    }
    .repo-btn {
        min-width: 0;
        height: 1;
        border: none;
        background: transparent;
        color: $accent;
        padding: 0;
        text-style: bold;
    }
    .muted {
        color: $text-muted;
    }
    #error-label {
        color: $error;
        margin: 1 0;
    }
    """

    def __init__(self, login: str, **kwargs) -> None:  # type: ignore[no-untyped-def]
        super().__init__(**kwargs)
        self.login = login
        self.page: Optional[ProfilePage] = None

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        with VerticalScroll(id="profile-body"):
            yield LoadingIndicator(id="profile-spinner")
        yield Footer()

    def on_mount(self) -> None:
        self.run_worker(self._load(), exclusive=True)

    async def _load(self) -> None:
        app = self.app
        body = self.query_one("#profile-body", VerticalScroll)
        handles_task = asyncio.create_task(
            asyncio.to_thread(app.directory.list_handles)  # type: ignore[attr-defined]
        )
        try:
            self.page = await app.profiles.load(self.login)  # type: ignore[attr-defined]
        except Exception as e:
            handles_task.cancel()
            await body.remove_children()
            await body.mount(
                Label(describe_error(e, app.has_token), id="error-label")  # type: ignore[attr-defined]
            )
            return
        handles = await handles_task
        await body.remove_children()
        await body.mount_all(list(self._page_widgets(self.page, handles)))

    def _page_widgets(self, page: ProfilePage, handles: list[str]):  # type: ignore[no-untyped-def]
        user = page.user
        header_lines = [f"[b]{escape(user.display_name)}[/b]  @{user.login}"]
        if user.bio:
            header_lines.append(f"[dim]{escape(user.bio)}[/dim]")
        header_lines.append(f"{user.public_repos} public repositories")
        yield Vertical(
            Static("\n".join(header_lines)),
            Horizontal(
                Button(f"{user.followers} Followers", id="followers-btn"),
                Button(f"{user.following} Following", id="following-btn"),
                Button("Visit GitHub Profile ↗", name=f"url:{user.profile_url}", classes="link"),
                Button("Logout 🚪", id="logout-btn", variant="error"),
                id="profile-actions",
            ),
            id="profile-header",
        )

        if handles:
            yield Static("EXPLORE PEOPLE", classes="section-title")
            yield HorizontalScroll(
                *[Button(h, name=f"profile:{h}", classes="chip link") for h in handles],
                id="explore-strip",
            )

        yield Static("REPOSITORIES", classes="section-title")
        if not page.repos:
            yield Label("No repositories found.", classes="muted")
        for repo in page.repos:
            yield Vertical(
                Button(repo.name, name=f"repo:{repo.id}", classes="repo-btn link"),
                Static(repo.description or "No description", classes="muted", markup=False),
                Label(repo.summary),
                classes="repo-card",
            )

    # ── Actions ───────────────────────────────────────────────────────────

    def _open_people(self, followers: bool) -> None:
        if self.page is None:
            return
        accounts = self.page.followers if followers else self.page.following
        title = "Followers" if followers else "Following"

        def _chosen(login: Optional[str]) -> None:
            if login:
                self.app.open_profile(login)  # type: ignore[attr-defined]

        self.app.push_screen(AccountListScreen(title, accounts), _chosen)

    @on(Button.Pressed, "#followers-btn")
    def action_show_followers(self) -> None:
        self._open_people(followers=True)

    @on(Button.Pressed, "#following-btn")
    def action_show_following(self) -> None:
        self._open_people(followers=False)

    @on(Button.Pressed, "#logout-btn")
    def action_logout(self) -> None:
        self.app.logout()  # type: ignore[attr-defined]

    @on(Button.Pressed, ".link")
    def follow(self, event: Button.Pressed) -> None:
        if event.button.name:
            self.app.follow_link(event.button.name)  # type: ignore[attr-defined]

    def action_go_back(self) -> None:
        self.app.pop_screen()
