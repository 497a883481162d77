"""Repository page data: the repo, its languages, contributors and siblings."""

import logging

import httpx

from hubfeed.fetcher import GitHubFetcher
from hubfeed.models import RepoPage

logger = logging.getLogger(__name__)


class RepoDetailFetcher:
    """Loads everything shown on a repository page."""

    def __init__(
        self,
        fetcher: GitHubFetcher,
        contributors_limit: int = 6,
        siblings_limit: int = 10,
    ) -> None:
        self.fetcher = fetcher
        self.contributors_limit = contributors_limit
        self.siblings_limit = siblings_limit

    async def load(self, repo_id: int) -> RepoPage:
        repo = await self.fetcher.fetch_repo_by_id(repo_id)
        page = RepoPage(repo=repo)
        owner = repo.owner.login

        try:
            page.languages = await self.fetcher.fetch_languages(owner, repo.name)
        except httpx.HTTPError as e:
            logger.warning("Languages for %s unavailable: %s", repo.full_name, e)

        try:
            contributors = await self.fetcher.fetch_contributors(owner, repo.name)
            page.contributors = contributors[: self.contributors_limit]
        except httpx.HTTPError as e:
            logger.warning("Contributors for %s unavailable: %s", repo.full_name, e)

        try:
            page.open_pulls = len(await self.fetcher.fetch_open_pulls(owner, repo.name))
        except httpx.HTTPError as e:
            logger.warning("Pull requests for %s unavailable: %s", repo.full_name, e)

        try:
            siblings = await self.fetcher.fetch_user_repos(owner)
            page.other_repos = [r for r in siblings if r.id != repo.id][: self.siblings_limit]
        except httpx.HTTPError as e:
            logger.warning("Other repositories of %s unavailable: %s", owner, e)

        return page
