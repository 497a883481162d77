"""Tests for the profile and repository page loaders."""

import httpx
import pytest
import respx

from hubfeed.fetcher import GitHubFetcher
from hubfeed.profile import ProfileFetcher
from hubfeed.repo_detail import RepoDetailFetcher

from github_payloads import account_json, repo_json, user_json

API = "https://api.github.com"


@pytest.fixture
def fetcher():
    return GitHubFetcher(token="test-token")


class TestProfileFetcher:
    @pytest.mark.asyncio
    @respx.mock
    async def test_load_full_profile(self, fetcher):
        respx.get(f"{API}/users/octocat").mock(
            return_value=httpx.Response(200, json=user_json("octocat"))
        )
        respx.get(f"{API}/users/octocat/repos").mock(
            return_value=httpx.Response(200, json=[repo_json("octocat", "hello", 1)])
        )
        respx.get(f"{API}/users/octocat/followers").mock(
            return_value=httpx.Response(200, json=[account_json("alice", 2)])
        )
        respx.get(f"{API}/users/octocat/following").mock(
            return_value=httpx.Response(200, json=[account_json("bob", 3)])
        )
        page = await ProfileFetcher(fetcher).load("octocat")
        await fetcher.close()

        assert page.user.login == "octocat"
        assert [r.name for r in page.repos] == ["hello"]
        assert page.followers[0].login == "alice"
        assert page.following[0].login == "bob"

    @pytest.mark.asyncio
    @respx.mock
    async def test_secondary_failures_leave_lists_empty(self, fetcher):
        respx.get(f"{API}/users/octocat").mock(
            return_value=httpx.Response(200, json=user_json("octocat"))
        )
        respx.get(f"{API}/users/octocat/repos").mock(return_value=httpx.Response(500))
        respx.get(f"{API}/users/octocat/followers").mock(return_value=httpx.Response(502))
        respx.get(f"{API}/users/octocat/following").mock(
            return_value=httpx.Response(200, json=[account_json("bob", 3)])
        )
        page = await ProfileFetcher(fetcher).load("octocat")
        await fetcher.close()

        assert page.repos == []
        assert page.followers == []
        assert [a.login for a in page.following] == ["bob"]

    @pytest.mark.asyncio
    @respx.mock
    async def test_missing_user_raises(self, fetcher):
        respx.get(f"{API}/users/ghost").mock(return_value=httpx.Response(404))
        with pytest.raises(httpx.HTTPStatusError):
            await ProfileFetcher(fetcher).load("ghost")
        await fetcher.close()


class TestRepoDetailFetcher:
    @pytest.mark.asyncio
    @respx.mock
    async def test_load_repo_page(self, fetcher):
        respx.get(f"{API}/repositories/11").mock(
            return_value=httpx.Response(200, json=repo_json("alice", "one", 11))
        )
        respx.get(f"{API}/repos/alice/one/languages").mock(
            return_value=httpx.Response(200, json={"Go": 10, "Makefile": 1})
        )
        respx.get(f"{API}/repos/alice/one/contributors").mock(
            return_value=httpx.Response(
                200,
                json=[dict(account_json(f"dev{i}", i), contributions=10 - i) for i in range(8)],
            )
        )
        respx.get(f"{API}/repos/alice/one/pulls").mock(
            return_value=httpx.Response(200, json=[{"number": 1}, {"number": 2}])
        )
        respx.get(f"{API}/users/alice/repos").mock(
            return_value=httpx.Response(
                200,
                json=[repo_json("alice", "one", 11)]
                + [repo_json("alice", f"r{i}", 100 + i) for i in range(12)],
            )
        )
        page = await RepoDetailFetcher(fetcher).load(11)
        await fetcher.close()

        assert page.repo.name == "one"
        assert page.languages == ["Go", "Makefile"]
        assert len(page.contributors) == 6
        assert page.contributors[0].contributions == 10
        assert page.open_pulls == 2
        assert len(page.other_repos) == 10
        assert all(r.id != 11 for r in page.other_repos)

    @pytest.mark.asyncio
    @respx.mock
    async def test_secondary_failures_are_tolerated(self, fetcher):
        respx.get(f"{API}/repositories/11").mock(
            return_value=httpx.Response(200, json=repo_json("alice", "one", 11))
        )
        respx.get(f"{API}/repos/alice/one/languages").mock(return_value=httpx.Response(500))
        respx.get(f"{API}/repos/alice/one/contributors").mock(return_value=httpx.Response(204))
        respx.get(f"{API}/repos/alice/one/pulls").mock(return_value=httpx.Response(500))
        respx.get(f"{API}/users/alice/repos").mock(return_value=httpx.Response(500))
        page = await RepoDetailFetcher(fetcher).load(11)
        await fetcher.close()

        assert page.languages == []
        assert page.contributors == []
        assert page.open_pulls == 0
        assert page.other_repos == []

    @pytest.mark.asyncio
    @respx.mock
    async def test_missing_repo_raises(self, fetcher):
        respx.get(f"{API}/repositories/404").mock(return_value=httpx.Response(404))
        with pytest.raises(httpx.HTTPStatusError):
            await RepoDetailFetcher(fetcher).load(404)
        await fetcher.close()
