"""Feed assembly: random follower repositories, loaded in batches.

The home feed has no upstream cursor. Each batch samples a handful of the
signed-in user's followers, picks one random repository from each, and
enriches it with issue, pull request and language data. Batches are appended
as the user scrolls toward the end of the list.
"""

import asyncio
import logging
import random
from typing import Optional

import httpx

from hubfeed.fetcher import GitHubFetcher
from hubfeed.models import Account, FeedItem, GitHubUser, RepoDetails

logger = logging.getLogger(__name__)

DEFAULT_SAMPLE_SIZE = 10
# Rows from the bottom at which the next batch is requested
DEFAULT_REFILL_THRESHOLD = 3


class FeedAssembler:
    """Builds the home feed for one signed-in user."""

    def __init__(
        self,
        fetcher: GitHubFetcher,
        sample_size: int = DEFAULT_SAMPLE_SIZE,
        threshold: int = DEFAULT_REFILL_THRESHOLD,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.fetcher = fetcher
        self.sample_size = sample_size
        self.threshold = threshold
        self._rng = rng or random.Random()
        self.user: Optional[GitHubUser] = None
        self.followers: list[Account] = []
        self.items: list[FeedItem] = []
        self.loading_more = False

    async def start(self, login: str) -> GitHubUser:
        """Load the user and their followers. Failures propagate."""
        self.user = await self.fetcher.fetch_user(login)
        self.followers = await self.fetcher.fetch_followers(self.user.login)
        logger.info("Feed for %s: %d followers to sample", login, len(self.followers))
        return self.user

    def sample_followers(self) -> list[Account]:
        """Up to ``sample_size`` distinct followers in random order."""
        k = min(self.sample_size, len(self.followers))
        return self._rng.sample(self.followers, k)

    async def load_more(self) -> list[FeedItem]:
        """Append one batch to the feed and return it."""
        if not self.followers or self.loading_more:
            return []
        self.loading_more = True
        try:
            picked = self.sample_followers()
            results = await asyncio.gather(*(self._entry_for(f) for f in picked))
            batch = [item for item in results if item is not None]
        except Exception:
            logger.exception("Feed batch failed")
            return []
        finally:
            self.loading_more = False
        self.items.extend(batch)
        logger.debug("Feed batch: %d of %d followers yielded a repo", len(batch), len(picked))
        return batch

    def should_refill(self, scroll_y: float, max_scroll_y: float) -> bool:
        """True when the view is within ``threshold`` rows of the end."""
        if self.loading_more or not self.followers:
            return False
        return max_scroll_y - scroll_y <= self.threshold

    def needs_refill_after(
        self, batch: list[FeedItem], scroll_y: float, max_scroll_y: float
    ) -> bool:
        """Whether a batch that just landed should be followed by another.

        An empty batch never schedules a follow-up, otherwise a feed whose
        followers have no repositories would request batches forever. A
        non-empty batch on a feed still too short to scroll asks for more.
        """
        if not batch:
            return False
        return self.should_refill(scroll_y, max_scroll_y)

    # ── One follower ──────────────────────────────────────────────────────

    async def _entry_for(self, follower: Account) -> Optional[FeedItem]:
        try:
            repos = await self.fetcher.fetch_user_repos(follower.login)
        except httpx.HTTPError as e:
            logger.info("Skipping %s: repos unavailable (%s)", follower.login, e)
            return None
        if not repos:
            return None

        repo = self._rng.choice(repos)
        owner = repo.owner.login or follower.login
        issues, pulls, languages = await asyncio.gather(
            self.fetcher.fetch_open_issues(owner, repo.name),
            self.fetcher.fetch_open_pulls(owner, repo.name),
            self.fetcher.fetch_languages(owner, repo.name),
            return_exceptions=True,
        )
        return FeedItem(
            follower=follower,
            repo=repo,
            details=RepoDetails(
                issues=_or_empty(issues, f"issues for {repo.full_name}", len),
                pulls=_or_empty(pulls, f"pulls for {repo.full_name}", len),
                languages=_or_empty(languages, f"languages for {repo.full_name}", list),
            ),
        )


def _or_empty(result, what: str, convert):  # type: ignore[no-untyped-def]
    """Apply ``convert`` to a gathered result, or to an empty list on failure."""
    if isinstance(result, Exception):
        logger.debug("No %s: %s", what, result)
        return convert([])
    return convert(result)
