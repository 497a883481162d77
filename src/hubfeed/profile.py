"""Profile page data: user, repositories, followers and following."""

import asyncio
import logging

import httpx

from hubfeed.fetcher import GitHubFetcher
from hubfeed.models import ProfilePage

logger = logging.getLogger(__name__)


class ProfileFetcher:
    """Loads a profile page for any GitHub login."""

    def __init__(self, fetcher: GitHubFetcher, list_pages: int = 1) -> None:
        self.fetcher = fetcher
        self.list_pages = list_pages

    async def load(self, login: str) -> ProfilePage:
        user = await self.fetcher.fetch_user(login)
        page = ProfilePage(user=user)

        try:
            page.repos = await self.fetcher.fetch_user_repos(user.login, max_pages=self.list_pages)
        except httpx.HTTPError as e:
            logger.warning("Repositories for %s unavailable: %s", user.login, e)

        followers, following = await asyncio.gather(
            self.fetcher.fetch_followers(user.login, max_pages=self.list_pages),
            self.fetcher.fetch_following(user.login, max_pages=self.list_pages),
            return_exceptions=True,
        )
        if isinstance(followers, httpx.HTTPError):
            logger.warning("Followers of %s unavailable: %s", user.login, followers)
        elif isinstance(followers, BaseException):
            raise followers
        else:
            page.followers = followers
        if isinstance(following, httpx.HTTPError):
            logger.warning("Following of %s unavailable: %s", user.login, following)
        elif isinstance(following, BaseException):
            raise following
        else:
            page.following = following
        return page
