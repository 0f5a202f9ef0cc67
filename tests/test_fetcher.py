"""Tests for the fetcher module."""

import httpx
import pytest
import respx

from gitscope.errors import (
    AuthenticationFailed,
    NotFound,
    ProviderError,
    RateLimitedOrForbidden,
    TransportFailure,
)
from gitscope.fetcher import GitHubFetcher

from conftest import API, commit_payload


@pytest.fixture
def github_fetcher():
    return GitHubFetcher(token="test-token")


class TestGitHubFetcher:
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
        assert github_fetcher.headers["Accept"] == "application/vnd.github+json"

    def test_base_url_trailing_slash(self):
        fetcher = GitHubFetcher(base_url="https://ghe.example.com/api/v3/")
        assert fetcher.base_url == "https://ghe.example.com/api/v3"


class TestFetchAccount:
    @pytest.mark.asyncio
    @respx.mock
    async def test_maps_profile(self, github_fetcher, user_payload):
        respx.get(f"{API}/users/acme").mock(
            return_value=httpx.Response(200, json=user_payload)
        )
        account = await github_fetcher.fetch_account("acme")
        await github_fetcher.close()

        assert account.login == "acme"
        assert account.name == "acme"  # falls back to login
        assert account.bio == ""
        assert account.followers == 12
        assert account.created_at.year == 2015

    @pytest.mark.asyncio
    @respx.mock
    async def test_sends_bearer_token(self, github_fetcher, user_payload):
        route = respx.get(f"{API}/users/acme").mock(
            return_value=httpx.Response(200, json=user_payload)
        )
        await github_fetcher.fetch_account("acme")
        await github_fetcher.close()
        assert route.calls.last.request.headers["Authorization"] == "Bearer test-token"

    @pytest.mark.asyncio
    @respx.mock
    async def test_404_is_not_found(self, github_fetcher):
        respx.get(f"{API}/users/ghost").mock(
            return_value=httpx.Response(404, json={"message": "Not Found"})
        )
        with pytest.raises(NotFound):
            await github_fetcher.fetch_account("ghost")
        await github_fetcher.close()


class TestErrorClassification:
    @pytest.mark.asyncio
    @respx.mock
    @pytest.mark.parametrize(
        "path, call",
        [
            ("/users/acme", lambda f: f.fetch_account("acme")),
            ("/users/acme/repos", lambda f: f.fetch_repositories("acme")),
            ("/repos/acme/x/languages", lambda f: f.fetch_languages("acme", "x")),
            ("/repos/acme/x/branches", lambda f: f.fetch_branches("acme", "x")),
            ("/repos/acme/x/commits", lambda f: f.fetch_branch_commits("acme", "x", "main")),
            ("/repos/acme/x/contributors", lambda f: f.fetch_contributors("acme", "x")),
        ],
    )
    async def test_401_is_authentication_failed(self, github_fetcher, path, call):
        respx.get(f"{API}{path}").mock(
            return_value=httpx.Response(401, json={"message": "Bad credentials"})
        )
        with pytest.raises(AuthenticationFailed):
            await call(github_fetcher)
        await github_fetcher.close()

    @pytest.mark.asyncio
    @respx.mock
    async def test_403_is_rate_limited(self, github_fetcher):
        respx.get(f"{API}/users/acme").mock(
            return_value=httpx.Response(
                403,
                json={"message": "API rate limit exceeded"},
                headers={"x-ratelimit-remaining": "0"},
            )
        )
        with pytest.raises(RateLimitedOrForbidden, match="rate limit"):
            await github_fetcher.fetch_account("acme")
        await github_fetcher.close()

    @pytest.mark.asyncio
    @respx.mock
    async def test_403_forbidden_without_rate_limit_headers(self, github_fetcher):
        respx.get(f"{API}/repos/acme/x/branches").mock(
            return_value=httpx.Response(403, json={"message": "Forbidden"})
        )
        with pytest.raises(RateLimitedOrForbidden):
            await github_fetcher.fetch_branches("acme", "x")
        await github_fetcher.close()

    @pytest.mark.asyncio
    @respx.mock
    async def test_other_status_carries_provider_message(self, github_fetcher):
        respx.get(f"{API}/repos/acme/x/languages").mock(
            return_value=httpx.Response(422, json={"message": "Validation Failed"})
        )
        with pytest.raises(ProviderError) as excinfo:
            await github_fetcher.fetch_languages("acme", "x")
        await github_fetcher.close()
        assert excinfo.value.message == "Validation Failed"
        assert excinfo.value.status_code == 422
        assert "Validation Failed" in str(excinfo.value)

    @pytest.mark.asyncio
    @respx.mock
    async def test_other_status_without_body(self, github_fetcher):
        respx.get(f"{API}/repos/acme/x/languages").mock(
            return_value=httpx.Response(502, text="<html>bad gateway</html>")
        )
        with pytest.raises(ProviderError) as excinfo:
            await github_fetcher.fetch_languages("acme", "x")
        await github_fetcher.close()
        assert excinfo.value.message == "Unknown error"

    @pytest.mark.asyncio
    @respx.mock
    async def test_transport_error(self, github_fetcher):
        respx.get(f"{API}/users/acme").mock(side_effect=httpx.ConnectError("boom"))
        with pytest.raises(TransportFailure) as excinfo:
            await github_fetcher.fetch_account("acme")
        await github_fetcher.close()
        assert isinstance(excinfo.value.__cause__, httpx.ConnectError)


class TestFetchRepositories:
    @pytest.mark.asyncio
    @respx.mock
    async def test_single_page_sorted_by_update(self, github_fetcher, repos_payload):
        route = respx.get(f"{API}/users/acme/repos").mock(
            return_value=httpx.Response(200, json=repos_payload)
        )
        repos = await github_fetcher.fetch_repositories("acme")
        await github_fetcher.close()

        assert route.call_count == 1
        params = route.calls.last.request.url.params
        assert params["sort"] == "updated"
        assert params["per_page"] == "100"
        assert [r.name for r in repos] == ["x", "legacy"]
        assert repos[0].default_branch == "main"
        assert repos[1].language is None


class TestCommitActivity:
    @pytest.mark.asyncio
    @respx.mock
    async def test_returns_weeks(self, github_fetcher):
        respx.get(f"{API}/repos/acme/x/stats/commit_activity").mock(
            return_value=httpx.Response(
                200, json=[{"week": 1700000000, "total": 3, "days": [0, 1, 2, 0, 0, 0, 0]}]
            )
        )
        weeks = await github_fetcher.fetch_commit_activity("acme", "x")
        await github_fetcher.close()
        assert len(weeks) == 1
        assert weeks[0].total == 3

    @pytest.mark.asyncio
    @respx.mock
    async def test_failure_returns_empty(self, github_fetcher):
        respx.get(f"{API}/repos/acme/x/stats/commit_activity").mock(
            return_value=httpx.Response(500, json={"message": "oops"})
        )
        assert await github_fetcher.fetch_commit_activity("acme", "x") == []
        await github_fetcher.close()

    @pytest.mark.asyncio
    @respx.mock
    async def test_still_computing_returns_empty(self, github_fetcher):
        respx.get(f"{API}/repos/acme/x/stats/commit_activity").mock(
            return_value=httpx.Response(202, json={})
        )
        assert await github_fetcher.fetch_commit_activity("acme", "x") == []
        await github_fetcher.close()


class TestFetchReadme:
    @pytest.mark.asyncio
    @respx.mock
    async def test_raw_text_for_ref(self, github_fetcher):
        route = respx.get(f"{API}/repos/acme/x/readme").mock(
            return_value=httpx.Response(200, text="# Hello")
        )
        readme = await github_fetcher.fetch_readme("acme", "x", "dev")
        await github_fetcher.close()

        assert readme == "# Hello"
        request = route.calls.last.request
        assert request.url.params["ref"] == "dev"
        assert request.headers["Accept"] == "application/vnd.github.raw"

    @pytest.mark.asyncio
    @respx.mock
    async def test_missing_readme_is_empty(self, github_fetcher):
        respx.get(f"{API}/repos/acme/x/readme").mock(
            return_value=httpx.Response(404, json={"message": "Not Found"})
        )
        assert await github_fetcher.fetch_readme("acme", "x", "main") == ""
        await github_fetcher.close()


class TestBranchesCommitsContributors:
    @pytest.mark.asyncio
    @respx.mock
    async def test_fetch_branches(self, github_fetcher):
        respx.get(f"{API}/repos/acme/x/branches").mock(
            return_value=httpx.Response(
                200,
                json=[
                    {"name": "main", "commit": {"sha": "abc123"}},
                    {"name": "dev", "commit": {"sha": "def456"}},
                ],
            )
        )
        branches = await github_fetcher.fetch_branches("acme", "x")
        await github_fetcher.close()
        assert [(b.name, b.sha) for b in branches] == [("main", "abc123"), ("dev", "def456")]

    @pytest.mark.asyncio
    @respx.mock
    async def test_fetch_branches_requests_full_page(self, github_fetcher):
        route = respx.get(f"{API}/repos/acme/x/branches").mock(
            return_value=httpx.Response(200, json=[])
        )
        await github_fetcher.fetch_branches("acme", "x")
        await github_fetcher.close()
        assert route.calls.last.request.url.params["per_page"] == "100"

    @pytest.mark.asyncio
    @respx.mock
    async def test_fetch_branch_commits(self, github_fetcher):
        route = respx.get(f"{API}/repos/acme/x/commits").mock(
            return_value=httpx.Response(
                200, json=[commit_payload("a1", "alice"), commit_payload("a2", None)]
            )
        )
        commits = await github_fetcher.fetch_branch_commits("acme", "x", "dev")
        await github_fetcher.close()

        params = route.calls.last.request.url.params
        assert params["sha"] == "dev"
        assert params["per_page"] == "100"
        assert commits[0].author_login == "alice"
        assert commits[0].is_attributed
        assert commits[1].author_login is None
        assert not commits[1].is_attributed

    @pytest.mark.asyncio
    @respx.mock
    async def test_fetch_contributors_seeds_total(self, github_fetcher):
        respx.get(f"{API}/repos/acme/x/contributors").mock(
            return_value=httpx.Response(
                200,
                json=[
                    {
                        "login": "alice",
                        "avatar_url": "https://avatars/alice",
                        "html_url": "https://github.com/alice",
                        "contributions": 5,
                    },
                    {"type": "Anonymous", "email": "x@y", "contributions": 2},
                ],
            )
        )
        contributors = await github_fetcher.fetch_contributors("acme", "x")
        await github_fetcher.close()

        assert len(contributors) == 1
        assert contributors[0].contributions == 5
        assert contributors[0].total_commits == 5

    @pytest.mark.asyncio
    @respx.mock
    async def test_empty_repository_has_no_contributors(self, github_fetcher):
        respx.get(f"{API}/repos/acme/x/contributors").mock(
            return_value=httpx.Response(204)
        )
        assert await github_fetcher.fetch_contributors("acme", "x") == []
        await github_fetcher.close()
