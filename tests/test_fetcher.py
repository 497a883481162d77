"""Tests for the fetcher module."""

import httpx
import pytest
import respx

from hubfeed.fetcher import GitHubFetcher

from github_payloads import account_json, repo_json, user_json


@pytest.fixture
def github_fetcher():
    return GitHubFetcher(token="test-token")


class TestHeaders:
    def test_init_with_token(self):
        fetcher = GitHubFetcher(token="my-token")
        assert fetcher.token == "my-token"
        assert fetcher.headers["Authorization"] == "Bearer my-token"

    def test_init_without_token(self):
        fetcher = GitHubFetcher()
        assert fetcher.token is None
        assert "Authorization" not in fetcher.headers

    def test_headers_include_api_version(self, github_fetcher):
        assert "X-GitHub-Api-Version" in github_fetcher.headers


class TestUsers:
    @pytest.mark.asyncio
    @respx.mock
    async def test_fetch_user(self, github_fetcher):
        respx.get("https://api.github.com/users/octocat").mock(
            return_value=httpx.Response(200, json=user_json("octocat", bio="hi"))
        )
        user = await github_fetcher.fetch_user("octocat")
        await github_fetcher.close()

        assert user.login == "octocat"
        assert user.followers == 2
        assert user.bio == "hi"

    @pytest.mark.asyncio
    @respx.mock
    async def test_fetch_user_not_found(self, github_fetcher):
        respx.get("https://api.github.com/users/ghost").mock(
            return_value=httpx.Response(404, json={"message": "Not Found"})
        )
        with pytest.raises(httpx.HTTPStatusError):
            await github_fetcher.fetch_user("ghost")
        await github_fetcher.close()

    @pytest.mark.asyncio
    @respx.mock
    async def test_fetch_followers_and_following(self, github_fetcher):
        respx.get("https://api.github.com/users/octocat/followers").mock(
            return_value=httpx.Response(
                200, json=[account_json("alice", 2), account_json("bob", 3)]
            )
        )
        respx.get("https://api.github.com/users/octocat/following").mock(
            return_value=httpx.Response(200, json=[account_json("carol", 4)])
        )
        followers = await github_fetcher.fetch_followers("octocat")
        following = await github_fetcher.fetch_following("octocat")
        await github_fetcher.close()

        assert [f.login for f in followers] == ["alice", "bob"]
        assert following[0].login == "carol"

    @pytest.mark.asyncio
    @respx.mock
    async def test_login_is_one_path_segment(self, github_fetcher):
        route = respx.route(host="api.github.com").mock(
            return_value=httpx.Response(200, json=user_json("octocat"))
        )
        await github_fetcher.fetch_user("octocat?x=1")
        assert route.calls.last.request.url.raw_path == b"/users/octocat%3Fx%3D1"

        route.mock(return_value=httpx.Response(200, json=[]))
        await github_fetcher.fetch_followers("octocat/followers")
        await github_fetcher.close()

        raw_path = route.calls.last.request.url.raw_path
        assert raw_path.startswith(b"/users/octocat%2Ffollowers/followers?")

    @pytest.mark.asyncio
    @respx.mock
    async def test_search_user_by_email_found(self, github_fetcher):
        route = respx.get("https://api.github.com/search/users").mock(
            return_value=httpx.Response(
                200,
                json={"total_count": 1, "items": [account_json("octocat")]},
            )
        )
        login = await github_fetcher.search_user_by_email("octo@github.com")
        await github_fetcher.close()

        assert login == "octocat"
        assert route.calls.last.request.url.params["q"] == "octo@github.com"

    @pytest.mark.asyncio
    @respx.mock
    async def test_search_user_by_email_no_match(self, github_fetcher):
        respx.get("https://api.github.com/search/users").mock(
            return_value=httpx.Response(200, json={"total_count": 0, "items": []})
        )
        assert await github_fetcher.search_user_by_email("nobody@example.com") is None
        await github_fetcher.close()


class TestRepositories:
    @pytest.mark.asyncio
    @respx.mock
    async def test_fetch_user_repos(self, github_fetcher):
        respx.get("https://api.github.com/users/alice/repos").mock(
            return_value=httpx.Response(
                200, json=[repo_json("alice", "one", 11), repo_json("alice", "two", 12)]
            )
        )
        repos = await github_fetcher.fetch_user_repos("alice")
        await github_fetcher.close()

        assert [r.name for r in repos] == ["one", "two"]
        assert repos[0].owner.login == "alice"
        assert repos[0].created_at is not None

    @pytest.mark.asyncio
    @respx.mock
    async def test_fetch_repo_by_id(self, github_fetcher):
        respx.get("https://api.github.com/repositories/42").mock(
            return_value=httpx.Response(200, json=repo_json("alice", "answer", 42))
        )
        repo = await github_fetcher.fetch_repo_by_id(42)
        await github_fetcher.close()

        assert repo.id == 42
        assert repo.full_name == "alice/answer"

    @pytest.mark.asyncio
    @respx.mock
    async def test_fetch_languages_keeps_order(self, github_fetcher):
        respx.get("https://api.github.com/repos/alice/one/languages").mock(
            return_value=httpx.Response(200, json={"Python": 9000, "Shell": 120})
        )
        langs = await github_fetcher.fetch_languages("alice", "one")
        await github_fetcher.close()

        assert langs == ["Python", "Shell"]

    @pytest.mark.asyncio
    @respx.mock
    async def test_fetch_contributors_empty_repo(self, github_fetcher):
        respx.get("https://api.github.com/repos/alice/empty/contributors").mock(
            return_value=httpx.Response(204)
        )
        contributors = await github_fetcher.fetch_contributors("alice", "empty")
        await github_fetcher.close()

        assert contributors == []

    @pytest.mark.asyncio
    @respx.mock
    async def test_fetch_open_issues_excludes_prs(self, github_fetcher):
        respx.get("https://api.github.com/repos/alice/one/issues").mock(
            return_value=httpx.Response(
                200,
                json=[
                    {"number": 1, "title": "Bug"},
                    {"number": 2, "title": "PR", "pull_request": {"url": "..."}},
                ],
            )
        )
        issues = await github_fetcher.fetch_open_issues("alice", "one")
        await github_fetcher.close()

        assert [i["number"] for i in issues] == [1]

    @pytest.mark.asyncio
    @respx.mock
    async def test_paginate_stops_on_short_page(self, github_fetcher):
        route = respx.get("https://api.github.com/users/alice/repos").mock(
            return_value=httpx.Response(200, json=[repo_json("alice", "one", 11)])
        )
        await github_fetcher.fetch_user_repos("alice", max_pages=5)
        await github_fetcher.close()

        assert route.call_count == 1


class TestRateLimit:
    @pytest.mark.asyncio
    @respx.mock
    async def test_rate_limit_error(self, github_fetcher):
        respx.get("https://api.github.com/users/octocat").mock(
            return_value=httpx.Response(
                403,
                text="API rate limit exceeded",
                headers={
                    "x-ratelimit-remaining": "0",
                    "x-ratelimit-reset": "1700000000",
                },
            )
        )
        with pytest.raises(httpx.HTTPStatusError, match="rate limit"):
            await github_fetcher.fetch_user("octocat")
        await github_fetcher.close()

    @pytest.mark.asyncio
    @respx.mock
    async def test_rate_limit_hint_without_token(self):
        fetcher = GitHubFetcher()
        respx.get("https://api.github.com/users/octocat").mock(
            return_value=httpx.Response(403, text="API rate limit exceeded")
        )
        with pytest.raises(httpx.HTTPStatusError, match="GITHUB_TOKEN"):
            await fetcher.fetch_user("octocat")
        await fetcher.close()
