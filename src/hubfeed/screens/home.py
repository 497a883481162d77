"""Home screen: profile card, infinite feed and the explore list."""

import asyncio
from typing import Optional

from rich.markup import escape
from textual import on
from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.screen import Screen
from textual.widgets import Button, Footer, Header, Label, LoadingIndicator, Static
from textual.worker import Worker

from hubfeed.feed import FeedAssembler
from hubfeed.models import FeedItem, GitHubUser

ICONS = {
    "bug": "🐞",
    "pull": "🔀",
    "repo": "💻",
    "lang": "🏷️",
    "link": "🔗",
}


class FeedCard(Vertical):
    """One follower / repository pair."""

    def __init__(self, item: FeedItem, **kwargs) -> None:  # type: ignore[no-untyped-def]
        super().__init__(classes="feed-card", **kwargs)
        self.item = item

    def compose(self) -> ComposeResult:
        item = self.item
        repo = item.repo
        yield Button(
            f"@{item.follower.login}",
            name=f"profile:{item.follower.login}",
            classes="link-btn",
        )
        yield Button(
            f"{ICONS['repo']} {repo.name}",
            name=f"repo:{repo.id}",
            classes="link-btn repo-name",
        )
        yield Static(repo.description or "No description", classes="card-desc", markup=False)
        yield Label(
            f"{repo.summary}  ·  {ICONS['bug']} {item.details.issues}"
            f"  ·  {ICONS['pull']} {item.details.pulls}"
        )
        if item.details.languages:
            langs = "  ".join(f"{ICONS['lang']} {lang}" for lang in item.details.languages)
        else:
            langs = "No languages"
        yield Label(langs, classes="card-langs")
        if repo.html_url:
            yield Button(
                f"{ICONS['link']} View on GitHub",
                name=f"url:{repo.html_url}",
                classes="link-btn",
            )


class HomeScreen(Screen):
    """The signed-in user's feed."""

    BINDINGS = [
        ("p", "my_profile", "Profile"),
        ("l", "logout", "Logout"),
        ("m", "load_more", "More"),
    ]

    CSS = """
    HomeScreen {
        layout: vertical;
    }
    #home-body {
        height: 1fr;
    }
    #main-column {
        width: 1fr;
    }
    #profile-card {
        height: auto;
        border: round $primary;
        background: $surface;
        padding: 0 2;
        margin: 0 1;
    }
    #profile-info {
        width: 1fr;
        padding: 1 0;
    }
    #logout-btn {
        margin: 1 0;
    }
    #feed {
        height: 1fr;
        padding: 0 1;
    }
    .feed-card {
        height: auto;
        border: round $primary-lighten-2;
        background: $surface;
        padding: 0 2;
        margin: 1 0 0 0;
    }
    .card-desc {
        color: $text-muted;
    }
    .card-langs {
        color: $secondary;
    }
    .link-btn {
        min-width: 0;
        height: 1;
        border: none;
        background: transparent;
        color: $accent;
        padding: 0;
    }
    .repo-name {
        text-style: bold;
    }
    #empty-label {
        color: $text-muted;
        text-align: center;
        width: 100%;
        margin: 1 0;
    }
    #feed-spinner {
        height: 3;
        display: none;
    }
    #feed-spinner.busy {
        display: block;
    }
    #explore {
        width: 30;
        border: round $primary;
        background: $surface;
        padding: 0 1;
    }
    .section-title {
        text-style: bold;
        margin: 1 0;
        color: $secondary;
    }
    """

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        with Horizontal(id="home-body"):
            with Vertical(id="main-column"):
                with Horizontal(id="profile-card"):
                    yield Static("Loading profile …", id="profile-info")
                    yield Button("Logout", id="logout-btn", variant="error")
                with VerticalScroll(id="feed"):
                    yield Label("No repositories to show yet...", id="empty-label")
                yield LoadingIndicator(id="feed-spinner")
            with VerticalScroll(id="explore"):
                yield Static("EXPLORE PEOPLE", classes="section-title")
        yield Footer()

    def on_mount(self) -> None:
        self.feed = FeedAssembler(
            self.app.fetcher,  # type: ignore[attr-defined]
            sample_size=self.app.settings.feed_sample_size,  # type: ignore[attr-defined]
        )
        self._batch_worker: Optional[Worker] = None
        scroll = self.query_one("#feed", VerticalScroll)
        self.watch(scroll, "scroll_y", self._on_feed_scroll, init=False)
        self.run_worker(self._start(), exclusive=True, group="feed")
        self.run_worker(self._load_explore(), group="explore")

    # ── Feed ──────────────────────────────────────────────────────────────

    async def _start(self) -> None:
        login = self.app.session.username  # type: ignore[attr-defined]
        try:
            user = await self.feed.start(login)
        except Exception as e:
            self.app.show_error(  # type: ignore[attr-defined]
                "Unable to fetch user data", e, allow_logout=True
            )
            return
        self._show_profile(user)
        await self._load_batch()

    def _show_profile(self, user: GitHubUser) -> None:
        text = (
            f"[b]{escape(user.display_name)}[/b]  @{user.login}\n"
            f"{user.followers} followers · {user.following} following · "
            f"{user.public_repos} repositories"
        )
        if user.bio:
            text += f"\n[dim]{escape(user.bio)}[/dim]"
        self.query_one("#profile-info", Static).update(text)

    async def _load_batch(self) -> None:
        spinner = self.query_one("#feed-spinner")
        spinner.add_class("busy")
        try:
            batch = await self.feed.load_more()
        finally:
            spinner.remove_class("busy")
        if batch:
            self.query_one("#empty-label").display = False
            await self.query_one("#feed", VerticalScroll).mount_all(
                [FeedCard(item) for item in batch]
            )
        # A short feed never scrolls, so check again once laid out
        self.call_after_refresh(self._after_batch, batch)

    def _after_batch(self, batch: list[FeedItem]) -> None:
        scroll = self.query_one("#feed", VerticalScroll)
        if self.feed.needs_refill_after(batch, scroll.scroll_y, scroll.max_scroll_y):
            self._request_batch()

    def _on_feed_scroll(self, scroll_y: float) -> None:
        self._check_refill()

    def _check_refill(self) -> None:
        scroll = self.query_one("#feed", VerticalScroll)
        if self.feed.should_refill(scroll.scroll_y, scroll.max_scroll_y):
            self._request_batch()

    def _request_batch(self) -> None:
        if self._batch_worker is not None and not self._batch_worker.is_finished:
            return
        self._batch_worker = self.run_worker(self._load_batch(), group="feed")

    # ── Explore ───────────────────────────────────────────────────────────

    async def _load_explore(self) -> None:
        handles = await asyncio.to_thread(self.app.directory.list_handles)  # type: ignore[attr-defined]
        explore = self.query_one("#explore", VerticalScroll)
        if not handles:
            await explore.mount(Label("Nothing to show here...", classes="card-desc"))
            return
        await explore.mount_all(
            [Button(f"👤 {h}", name=f"profile:{h}", classes="link-btn") for h in handles]
        )

    # ── Actions ───────────────────────────────────────────────────────────

    @on(Button.Pressed, "#logout-btn")
    def action_logout(self) -> None:
        self.app.logout()  # type: ignore[attr-defined]

    def action_my_profile(self) -> None:
        self.app.open_profile()  # type: ignore[attr-defined]

    def action_load_more(self) -> None:
        if not self.feed.loading_more:
            self._request_batch()

    @on(Button.Pressed, ".link-btn")
    def follow(self, event: Button.Pressed) -> None:
        if event.button.name:
            self.app.follow_link(event.button.name)  # type: ignore[attr-defined]
