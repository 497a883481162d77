"""Data models for hubfeed."""

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, Field


# ── Age formatting ─────────────────────────────────────────────────────────

def _now() -> datetime:
    return datetime.now(timezone.utc)


def _days_between(then: datetime, now: datetime) -> int:
    if then.tzinfo is None:
        then = then.replace(tzinfo=timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    return max((now - then).days, 0)


def repo_age(created: datetime, now: Optional[datetime] = None) -> str:
    """Coarse age used on cards: days under a month, then months, then years."""
    days = _days_between(created, now or _now())
    if days < 30:
        return f"{days} days ago"
    months = days // 30
    if months < 12:
        return f"{months} months ago"
    return f"{months // 12} years ago"


def time_ago(date: datetime, now: Optional[datetime] = None) -> str:
    """Relative time with proper plurals, e.g. ``1 year ago`` / ``3 days ago``."""
    days = _days_between(date, now or _now())
    years = days // 365
    months = days // 30
    if years > 0:
        return f"{years} year{'s' if years != 1 else ''} ago"
    if months > 0:
        return f"{months} month{'s' if months != 1 else ''} ago"
    return f"{days} day{'s' if days != 1 else ''} ago"


# ── Raw GitHub data ───────────────────────────────────────────────────────

class Account(BaseModel):
    """A GitHub account as it appears in follower / following lists."""

    login: str
    id: int = 0
    avatar_url: str = ""
    html_url: str = ""

    @property
    def profile_url(self) -> str:
        return self.html_url or f"https://github.com/{self.login}"


class Contributor(Account):
    """A repository contributor."""

    contributions: int = 0


class GitHubUser(Account):
    """A full public GitHub profile."""

    name: Optional[str] = None
    bio: Optional[str] = None
    followers: int = 0
    following: int = 0
    public_repos: int = 0

    @property
    def display_name(self) -> str:
        return self.name or self.login


class Repository(BaseModel):
    """A GitHub repository."""

    id: int
    name: str
    full_name: str = ""
    owner: Account
    description: Optional[str] = None
    html_url: str = ""
    fork: bool = False
    language: Optional[str] = None
    stargazers_count: int = 0
    forks_count: int = 0
    watchers_count: int = 0
    open_issues_count: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def age(self) -> str:
        if self.created_at is None:
            return "unknown"
        return repo_age(self.created_at)

    @property
    def summary(self) -> str:
        return f"⭐ {self.stargazers_count} | 🍴 {self.forks_count} | ⏳ {self.age}"


# ── Feed ──────────────────────────────────────────────────────────────────

class RepoDetails(BaseModel):
    """Counts gathered for a feed entry."""

    issues: int = 0
    pulls: int = 0
    languages: list[str] = Field(default_factory=list)


class FeedItem(BaseModel):
    """One sampled follower and one of their repositories."""

    follower: Account
    repo: Repository
    details: RepoDetails = Field(default_factory=RepoDetails)


# ── Pages ─────────────────────────────────────────────────────────────────

class ProfilePage(BaseModel):
    """Everything shown on a profile page."""

    user: GitHubUser
    repos: list[Repository] = Field(default_factory=list)
    followers: list[Account] = Field(default_factory=list)
    following: list[Account] = Field(default_factory=list)


class RepoPage(BaseModel):
    """Everything shown on a repository page."""

    repo: Repository
    languages: list[str] = Field(default_factory=list)
    contributors: list[Contributor] = Field(default_factory=list)
    open_pulls: int = 0
    other_repos: list[Repository] = Field(default_factory=list)


# ── Session ───────────────────────────────────────────────────────────────

class Session(BaseModel):
    """The signed-in account and its bound GitHub handle."""

    email: str
    logged_in: bool = True
    username: Optional[str] = None

    @property
    def has_handle(self) -> bool:
        return bool(self.username)
