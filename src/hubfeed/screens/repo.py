"""Repository screen: stats, languages, contributors and sibling repos."""

from textual import on
from textual.app import ComposeResult
from textual.containers import Horizontal, HorizontalScroll, Vertical, VerticalScroll
from textual.screen import Screen
from textual.widgets import Button, Footer, Header, Label, LoadingIndicator, Static

from hubfeed.errors import describe_error
from hubfeed.models import RepoPage, time_ago


class RepoScreen(Screen):
    """Detail page for a single repository."""

    BINDINGS = [
        ("b", "go_back", "Back"),
    ]

    CSS = """
    #repo-body {
        padding: 0 2;
        align-horizontal: center;
    }
    #repo-title {
        height: 3;
        background: $primary;
        color: $text;
        text-align: center;
        padding: 1 2;
        text-style: bold;
    }
    #repo-card {
        height: auto;
        max-width: 90;
        border: round $primary;
        background: $surface;
        padding: 1 2;
        margin-top: 1;
    }
    .fork-note {
        color: $warning;
    }
    .muted {
        color: $text-muted;
    }
    #stats {
        height: auto;
        margin: 1 0;
    }
    .stat {
        width: 1fr;
        height: 4;
        border: round $primary-lighten-2;
        text-align: center;
        content-align: center middle;
    }
    .section-title {
        text-style: bold;
        margin: 1 0 0 0;
        color: $secondary;
    }
    .chips {
        height: 3;
    }
    .chip {
        min-width: 0;
        margin-right: 1;
    }
    .sibling {
        width: 26;
        height: auto;
        border: round $primary-lighten-2;
        padding: 0 1;
        margin-right: 1;
    }
    .sibling-btn {
        min-width: 0;
        height: 1;
        border: none;
        background: transparent;
        color: $accent;
        padding: 0;
    }
    #siblings {
        height: auto;
        max-width: 90;
    }
    #error-label {
        color: $error;
        text-align: center;
        margin-top: 2;
    }
    """

    def __init__(self, repo_id: int, **kwargs) -> None:  # type: ignore[no-untyped-def]
        super().__init__(**kwargs)
        self.repo_id = repo_id

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        with VerticalScroll(id="repo-body"):
            yield LoadingIndicator()
        yield Footer()

    def on_mount(self) -> None:
        self.run_worker(self._load(), exclusive=True)

    async def _load(self) -> None:
        body = self.query_one("#repo-body", VerticalScroll)
        try:
            page = await self.app.repos.load(self.repo_id)  # type: ignore[attr-defined]
        except Exception as e:
            await body.remove_children()
            await body.mount(
                Label(describe_error(e, self.app.has_token), id="error-label")  # type: ignore[attr-defined]
            )
            return
        self.sub_title = page.repo.full_name
        await body.remove_children()
        await body.mount_all(list(self._page_widgets(page)))

    def _page_widgets(self, page: RepoPage):  # type: ignore[no-untyped-def]
        repo = page.repo
        yield Static(f"💻  {repo.name}", id="repo-title", markup=False)

        card: list = [
            Button(f"@{repo.owner.login}", name=f"profile:{repo.owner.login}", classes="sibling-btn link"),
        ]
        if repo.created_at is not None:
            card.append(Label(f"Created {time_ago(repo.created_at)}", classes="muted"))
        if repo.fork:
            card.append(Label("🍴 Forked Repository", classes="fork-note"))
        card.append(Static(repo.description or "No description provided.", markup=False))
        card.append(
            Horizontal(
                Static(f"⭐ {repo.stargazers_count}\nStars", classes="stat"),
                Static(f"🍴 {repo.forks_count}\nForks", classes="stat"),
                Static(f"🐛 {repo.open_issues_count}\nIssues", classes="stat"),
                Static(f"🔀 {page.open_pulls}\nPulls", classes="stat"),
                id="stats",
            )
        )
        if page.languages:
            card.append(Static("LANGUAGES", classes="section-title"))
            card.append(Label("  ".join(page.languages)))
        if page.contributors:
            card.append(Static("CONTRIBUTORS", classes="section-title"))
            card.append(
                HorizontalScroll(
                    *[
                        Button(c.login, name=f"profile:{c.login}", classes="chip link")
                        for c in page.contributors
                    ],
                    classes="chips",
                )
            )
        if repo.html_url:
            card.append(
                Button("🔗 View on GitHub", name=f"url:{repo.html_url}", variant="primary", classes="link")
            )
        yield Vertical(*card, id="repo-card")

        if page.other_repos:
            yield Static(f"MORE FROM @{repo.owner.login}", classes="section-title")
            yield HorizontalScroll(
                *[
                    Vertical(
                        Button(r.name, name=f"repo:{r.id}", classes="sibling-btn link"),
                        Label(f"⭐ {r.stargazers_count} | 🍴 {r.forks_count}", classes="muted"),
                        classes="sibling",
                    )
                    for r in page.other_repos
                ],
                id="siblings",
            )

    @on(Button.Pressed, ".link")
    def follow(self, event: Button.Pressed) -> None:
        if event.button.name:
            self.app.follow_link(event.button.name)  # type: ignore[attr-defined]

    def action_go_back(self) -> None:
        self.app.pop_screen()
