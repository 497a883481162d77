"""Main Textual TUI application for hubfeed."""

import asyncio
import logging
from typing import Optional

from supabase import Client
from textual.app import App
from textual.screen import Screen

from hubfeed.auth import ROUTE_AUTH, ROUTE_HOME, AuthService, resolve_route
from hubfeed.config import Settings
from hubfeed.directory import HandleDirectory, get_supabase_client
from hubfeed.errors import describe_error
from hubfeed.fetcher import GitHubFetcher
from hubfeed.identity import BindResult, IdentityBinder
from hubfeed.models import Session
from hubfeed.profile import ProfileFetcher
from hubfeed.repo_detail import RepoDetailFetcher
from hubfeed.screens.auth import AuthScreen
from hubfeed.screens.error import ErrorScreen
from hubfeed.screens.home import HomeScreen
from hubfeed.screens.loading import LoadingScreen
from hubfeed.screens.profile import ProfileScreen
from hubfeed.screens.repo import RepoScreen
from hubfeed.screens.username import UsernameScreen

logger = logging.getLogger(__name__)


def parse_link(link: str) -> tuple[str, str]:
    """Split a ``kind:target`` button link, e.g. ``repo:1296269``."""
    kind, sep, target = link.partition(":")
    if not sep or not target:
        return "", ""
    return kind, target


class HubFeedApp(App):
    """TUI social feed over GitHub."""

    TITLE = "hubfeed"
    SUB_TITLE = "Feed · Profiles · Repositories"

    CSS = """
    Screen {
        background: $background;
    }
    """

    BINDINGS = [
        ("q", "quit", "Quit"),
    ]

    def __init__(self, settings: Optional[Settings] = None, **kwargs) -> None:  # type: ignore[no-untyped-def]
        super().__init__(**kwargs)
        self.settings = settings or Settings.from_env()
        self.fetcher = GitHubFetcher(token=self.settings.github_token)
        self._supabase: Optional[Client] = None
        self.auth = AuthService(self.settings, client_factory=self.supabase_client)
        self.directory = HandleDirectory(self.settings, client_factory=self.supabase_client)
        self.identity = IdentityBinder(self.fetcher, self.directory, self.auth)
        self.profiles = ProfileFetcher(self.fetcher)
        self.repos = RepoDetailFetcher(
            self.fetcher,
            contributors_limit=self.settings.contributors_limit,
            siblings_limit=self.settings.sibling_repos_limit,
        )
        self.session: Optional[Session] = None

    def supabase_client(self) -> Client:
        """One Supabase client shared by auth and the handle directory."""
        if self._supabase is None:
            self._supabase = get_supabase_client(self.settings)
        return self._supabase

    # ── Lifecycle ─────────────────────────────────────────────────────────

    def on_mount(self) -> None:
        self.push_screen(LoadingScreen("Restoring session …"))

        async def _restore() -> None:
            self.session = await asyncio.to_thread(self.auth.restore)
            self.show_route()

        self.run_worker(_restore(), exclusive=True, group="session")

    async def on_unmount(self) -> None:
        await self.fetcher.close()

    # ── Routing ───────────────────────────────────────────────────────────

    def show_route(self) -> None:
        """Replace the whole stack with the screen the session calls for."""
        route = resolve_route(self.session)
        logger.debug("Routing to %s", route)
        if route == ROUTE_AUTH:
            screen: Screen = AuthScreen()
        elif route == ROUTE_HOME:
            screen = HomeScreen()
        else:
            screen = UsernameScreen()
        self._reset_to(screen)

    def _reset_to(self, screen: Screen) -> None:
        for _ in range(len(self.screen_stack) - 1):
            self.pop_screen()
        self.push_screen(screen)

    @property
    def has_token(self) -> bool:
        return bool(self.settings.github_token)

    # ── Called from screens ───────────────────────────────────────────────

    def signed_in(self, session: Session) -> None:
        self.session = session
        self.show_route()

    def handle_bound(self, result: BindResult) -> None:
        self.session = result.session
        if result.warning:
            self.notify(result.warning, severity="warning")
        self.show_route()

    def logout(self) -> None:
        async def _sign_out() -> None:
            await asyncio.to_thread(self.auth.sign_out)
            self.session = None
            self.show_route()

        self.run_worker(_sign_out(), exclusive=True, group="session")

    def open_profile(self, login: Optional[str] = None) -> None:
        """Profiles need a signed-in session, like the feed."""
        if self.session is None or not self.session.logged_in:
            self.show_route()
            return
        target = login or self.session.username
        if not target:
            self.show_route()
            return
        self.push_screen(ProfileScreen(target))

    def open_repo(self, repo_id: int) -> None:
        self.push_screen(RepoScreen(repo_id))

    def follow_link(self, link: str) -> bool:
        """Act on a ``kind:target`` link attached to a button."""
        kind, target = parse_link(link)
        if kind == "profile":
            self.open_profile(target)
        elif kind == "repo" and target.isdigit():
            self.open_repo(int(target))
        elif kind == "url":
            self.open_url(target)
        else:
            return False
        return True

    def show_error(
        self, message: str, exc: Optional[BaseException] = None, allow_logout: bool = False
    ) -> None:
        details = describe_error(exc, self.has_token) if exc is not None else ""
        if exc is not None:
            logger.error("%s: %s", message, exc)
        self.push_screen(ErrorScreen(message, details, allow_logout=allow_logout))
