"""GitHub data fetching via REST API."""

import logging
from typing import Optional
from urllib.parse import quote

import httpx

from hubfeed.models import Account, Contributor, GitHubUser, Repository

logger = logging.getLogger(__name__)


def _seg(value: str) -> str:
    """Percent-encode one URL path segment."""
    return quote(value, safe="")


class GitHubFetcher:
    """Fetches users, followers and repositories from the GitHub REST API."""

    def __init__(self, token: Optional[str] = None, timeout: float = 30.0) -> None:
        self.token = token
        self.base_url = "https://api.github.com"
        self.timeout = timeout
        self._client: Optional[httpx.AsyncClient] = None

    # ── HTTP plumbing ─────────────────────────────────────────────────────

    @property
    def headers(self) -> dict[str, str]:
        h: dict[str, str] = {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
        }
        if self.token:
            h["Authorization"] = f"Bearer {self.token}"
        return h

    async def _client_instance(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                headers=self.headers,
                timeout=self.timeout,
            )
        return self._client

    async def _get(self, path: str, **kwargs) -> httpx.Response:  # type: ignore[no-untyped-def]
        """GET with rate-limit awareness."""
        client = await self._client_instance()
        resp = await client.get(path, **kwargs)
        if resp.status_code == 403 and "rate limit" in resp.text.lower():
            remaining = resp.headers.get("x-ratelimit-remaining", "0")
            reset = resp.headers.get("x-ratelimit-reset", "")
            logger.warning("Rate limit hit on %s (remaining=%s, reset=%s)", path, remaining, reset)
            if self.token:
                hint = (
                    f"Authenticated rate limit hit (remaining: {remaining}). "
                    "Wait a few minutes and retry."
                )
            else:
                hint = "Running unauthenticated (60 req/hour). Set GITHUB_TOKEN for 5 000 req/hour."
            raise httpx.HTTPStatusError(
                f"GitHub API rate limit exceeded. {hint}",
                request=resp.request,
                response=resp,
            )
        return resp

    async def _get_json(self, path: str, **kwargs):  # type: ignore[no-untyped-def]
        resp = await self._get(path, **kwargs)
        resp.raise_for_status()
        return resp.json()

    async def close(self) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None

    # ── Paginated helper ──────────────────────────────────────────────────

    async def _paginate(
        self,
        path: str,
        params: Optional[dict[str, str]] = None,
        max_pages: int = 1,
    ) -> list[dict]:
        """Fetch up to ``max_pages`` pages from a list endpoint."""
        params = dict(params or {})
        params.setdefault("per_page", "100")

        results: list[dict] = []
        for page in range(1, max_pages + 1):
            params["page"] = str(page)
            resp = await self._get(path, params=params)
            resp.raise_for_status()
            if resp.status_code == 204:
                break
            data = resp.json()
            if not data:
                break
            results.extend(data)
            if len(data) < int(params["per_page"]):
                break
        return results

    # ── Users ─────────────────────────────────────────────────────────────

    async def search_user_by_email(self, email: str) -> Optional[str]:
        """Return the login of the first user matching ``email``, if any."""
        data = await self._get_json("/search/users", params={"q": email})
        if not data.get("total_count") or not data.get("items"):
            return None
        return data["items"][0]["login"]

    async def fetch_user(self, login: str) -> GitHubUser:
        """Fetch a public user profile."""
        data = await self._get_json(f"/users/{_seg(login)}")
        return GitHubUser.model_validate(data)

    async def fetch_followers(self, login: str, max_pages: int = 1) -> list[Account]:
        raw = await self._paginate(f"/users/{_seg(login)}/followers", max_pages=max_pages)
        return [Account.model_validate(item) for item in raw]

    async def fetch_following(self, login: str, max_pages: int = 1) -> list[Account]:
        raw = await self._paginate(f"/users/{_seg(login)}/following", max_pages=max_pages)
        return [Account.model_validate(item) for item in raw]

    # ── Repositories ──────────────────────────────────────────────────────

    async def fetch_user_repos(self, login: str, max_pages: int = 1) -> list[Repository]:
        """Fetch a user's public repositories."""
        raw = await self._paginate(f"/users/{_seg(login)}/repos", max_pages=max_pages)
        return [Repository.model_validate(item) for item in raw]

    async def fetch_repo_by_id(self, repo_id: int) -> Repository:
        """Fetch a repository by its numeric id."""
        data = await self._get_json(f"/repositories/{repo_id}")
        return Repository.model_validate(data)

    async def fetch_languages(self, owner: str, repo: str) -> list[str]:
        """Language names, largest byte count first."""
        data = await self._get_json(f"/repos/{_seg(owner)}/{_seg(repo)}/languages")
        return list(data.keys())

    async def fetch_contributors(self, owner: str, repo: str) -> list[Contributor]:
        """Fetch contributors (empty repositories answer 204)."""
        raw = await self._paginate(f"/repos/{_seg(owner)}/{_seg(repo)}/contributors")
        return [Contributor.model_validate(item) for item in raw]

    async def fetch_open_issues(self, owner: str, repo: str) -> list[dict]:
        """Open issues on the first page (excludes PRs)."""
        raw = await self._paginate(
            f"/repos/{_seg(owner)}/{_seg(repo)}/issues", params={"state": "open"}
        )
        return [item for item in raw if "pull_request" not in item]

    async def fetch_open_pulls(self, owner: str, repo: str) -> list[dict]:
        """Open pull requests on the first page."""
        return await self._paginate(
            f"/repos/{_seg(owner)}/{_seg(repo)}/pulls", params={"state": "open"}
        )
