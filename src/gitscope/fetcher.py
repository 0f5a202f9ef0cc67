"""GitHub data fetching via REST API."""

import logging
from typing import Any, Optional

import httpx

from gitscope.config import DEFAULT_GITHUB_API_URL
from gitscope.errors import (
    AuthenticationFailed,
    NotFound,
    ProviderError,
    RateLimitedOrForbidden,
    TransportFailure,
)
from gitscope.models import (
    Account,
    Branch,
    Commit,
    CommitActivityWeek,
    Contributor,
    Repository,
)

logger = logging.getLogger(__name__)

RAW_MEDIA_TYPE = "application/vnd.github.raw"
PER_PAGE = 100


class GitHubFetcher:
    """Fetches profiles, repositories, branches and commits from the GitHub REST API."""

    def __init__(
        self,
        token: Optional[str] = None,
        base_url: str = DEFAULT_GITHUB_API_URL,
        timeout: float = 30.0,
    ) -> None:
        self.token = token
        self.base_url = base_url.rstrip("/")
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

    async def close(self) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "GitHubFetcher":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    @staticmethod
    def _raise_for_status(resp: httpx.Response) -> None:
        """Translate a non-2xx response into a domain error."""
        if resp.is_success:
            return
        status = resp.status_code
        if status == 401:
            raise AuthenticationFailed()
        if status == 403:
            remaining = resp.headers.get("x-ratelimit-remaining")
            if remaining == "0":
                raise RateLimitedOrForbidden(
                    "GitHub API rate limit exceeded. Wait a few minutes and retry."
                )
            raise RateLimitedOrForbidden()
        if status == 404:
            raise NotFound()
        message = ""
        try:
            body = resp.json()
            if isinstance(body, dict):
                message = body.get("message") or ""
        except ValueError:
            pass
        raise ProviderError(message or "Unknown error", status_code=status)

    async def _get(self, path: str, **kwargs: Any) -> httpx.Response:
        """GET ``path`` and classify the outcome."""
        client = await self._client_instance()
        logger.debug("GET %s %s", path, kwargs.get("params") or "")
        try:
            resp = await client.get(path, **kwargs)
        except httpx.TransportError as exc:
            raise TransportFailure(f"Could not reach GitHub: {exc}") from exc
        self._raise_for_status(resp)
        return resp

    async def _get_json(self, path: str, **kwargs: Any) -> Any:
        resp = await self._get(path, **kwargs)
        if resp.status_code == 204 or not resp.content:
            return None
        return resp.json()

    # ── Accounts & repositories ───────────────────────────────────────────

    async def fetch_account(self, login: str) -> Account:
        """Fetch a user profile."""
        data = await self._get_json(f"/users/{login}")
        return Account(
            login=data["login"],
            name=data.get("name") or data["login"],
            avatar_url=data.get("avatar_url") or "",
            bio=data.get("bio") or "",
            followers=data.get("followers") or 0,
            following=data.get("following") or 0,
            public_repos=data.get("public_repos") or 0,
            html_url=data.get("html_url") or "",
            created_at=data["created_at"],
        )

    async def fetch_repositories(self, login: str) -> list[Repository]:
        """Fetch the (up to) 100 most recently updated repositories."""
        data = await self._get_json(
            f"/users/{login}/repos",
            params={"sort": "updated", "per_page": str(PER_PAGE)},
        )
        return [_to_repository(item) for item in data or []]

    async def fetch_commit_activity(
        self, owner: str, repo: str
    ) -> list[CommitActivityWeek]:
        """Weekly commit histogram; empty on any failure."""
        try:
            data = await self._get_json(f"/repos/{owner}/{repo}/stats/commit_activity")
            if not isinstance(data, list):
                return []
            return [
                CommitActivityWeek(
                    week=item["week"],
                    total=item.get("total", 0),
                    days=item.get("days") or [],
                )
                for item in data
            ]
        except Exception as exc:
            logger.warning("Commit activity unavailable for %s/%s: %s", owner, repo, exc)
            return []

    async def fetch_languages(self, owner: str, repo: str) -> dict[str, int]:
        """Language name → byte count, in the order GitHub returns them."""
        data = await self._get_json(f"/repos/{owner}/{repo}/languages")
        return dict(data or {})

    async def fetch_readme(self, owner: str, repo: str, ref: str) -> str:
        """Raw README text at ``ref``; empty string if it cannot be fetched."""
        try:
            resp = await self._get(
                f"/repos/{owner}/{repo}/readme",
                params={"ref": ref},
                headers={"Accept": RAW_MEDIA_TYPE},
            )
        except Exception as exc:
            logger.warning("README unavailable for %s/%s@%s: %s", owner, repo, ref, exc)
            return ""
        return resp.text

    # ── Branches, commits & contributors ──────────────────────────────────

    async def fetch_branches(self, owner: str, repo: str) -> list[Branch]:
        data = await self._get_json(
            f"/repos/{owner}/{repo}/branches",
            params={"per_page": str(PER_PAGE)},
        )
        return [
            Branch(name=item["name"], sha=(item.get("commit") or {}).get("sha", ""))
            for item in data or []
        ]

    async def fetch_branch_commits(
        self, owner: str, repo: str, branch: str
    ) -> list[Commit]:
        """Fetch up to 100 commits reachable from ``branch``."""
        data = await self._get_json(
            f"/repos/{owner}/{repo}/commits",
            params={"sha": branch, "per_page": str(PER_PAGE)},
        )
        commits: list[Commit] = []
        for item in data or []:
            author = item.get("author") or {}
            commits.append(
                Commit(
                    sha=item["sha"],
                    author_login=author.get("login") or None,
                    author_avatar_url=author.get("avatar_url") or "",
                )
            )
        return commits

    async def fetch_contributors(self, owner: str, repo: str) -> list[Contributor]:
        """GitHub's own contributor ranking (baseline counts)."""
        data = await self._get_json(
            f"/repos/{owner}/{repo}/contributors",
            params={"per_page": str(PER_PAGE)},
        )
        contributors: list[Contributor] = []
        for item in data or []:
            # Anonymous entries carry no login and cannot be reconciled
            if not item.get("login"):
                continue
            contributions = item.get("contributions") or 0
            contributors.append(
                Contributor(
                    login=item["login"],
                    avatar_url=item.get("avatar_url") or "",
                    html_url=item.get("html_url") or "",
                    contributions=contributions,
                    total_commits=contributions,
                )
            )
        return contributors


def _to_repository(item: dict) -> Repository:
    return Repository(
        id=item["id"],
        name=item["name"],
        description=item.get("description"),
        html_url=item.get("html_url") or "",
        stargazers_count=item.get("stargazers_count") or 0,
        forks_count=item.get("forks_count") or 0,
        language=item.get("language"),
        updated_at=item["updated_at"],
        created_at=item["created_at"],
        default_branch=item.get("default_branch") or None,
    )
