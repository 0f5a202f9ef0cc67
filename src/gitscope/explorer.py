"""Account exploration engine.

Orchestrates GitHub fetching, contributor reconciliation and Gemini
summaries into the views the dashboard renders.
"""

import asyncio
import logging
from typing import Callable, Optional

from gitscope.analysis.contributors import reconcile_contributors
from gitscope.analysis.summary import summarize_repository
from gitscope.analysis.timeline import build_timeline
from gitscope.config import Settings
from gitscope.errors import GitScopeError
from gitscope.fetcher import GitHubFetcher
from gitscope.llm import GeminiClient
from gitscope.models import (
    Account,
    CommitActivityWeek,
    Contributor,
    Exploration,
    Repository,
    Timeline,
)

logger = logging.getLogger(__name__)

# Stages of `Explorer.explore`, in the order their status messages are emitted
EXPLORE_STEPS = (
    "Profile and repositories",
    "Contributors across all branches",
    "Weekly commit activity",
    "Gemini summary",
)


class Explorer:
    """Entry point for everything the UI asks about an account."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        on_status: Optional[Callable[[str], None]] = None,
        fetcher: Optional[GitHubFetcher] = None,
        llm: Optional[GeminiClient] = None,
    ) -> None:
        self.settings = settings or Settings.from_env()
        self._on_status = on_status or (lambda _: None)
        self._fetcher = fetcher or GitHubFetcher(
            token=self.settings.github_token,
            base_url=self.settings.github_api_url,
            timeout=self.settings.timeout,
        )
        self._llm = llm or GeminiClient(
            api_key=self.settings.gemini_api_key,
            model=self.settings.gemini_model,
            base_url=self.settings.gemini_api_url,
        )

    # ── Status helper ─────────────────────────────────────────────────────

    def _status(self, msg: str) -> None:
        self._on_status(msg)

    async def close(self) -> None:
        """Tear down HTTP clients."""
        await self._fetcher.close()
        await self._llm.close()

    async def __aenter__(self) -> "Explorer":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    # ── Produced interface ────────────────────────────────────────────────

    async def get_account(self, login: str) -> Account:
        return await self._fetcher.fetch_account(login)

    async def get_repositories(self, login: str) -> list[Repository]:
        return await self._fetcher.fetch_repositories(login)

    async def get_contributors(self, owner: str, repo: str) -> list[Contributor]:
        """Reconciled contributor ranking; raises on any fetch failure."""
        return await reconcile_contributors(
            self._fetcher, owner, repo, web_url=self.settings.github_web_url
        )

    async def get_repository_summary(self, owner: str, repo: str) -> str:
        """Gemini summary, or the fixed fallback text."""
        return await summarize_repository(self._fetcher, self._llm, owner, repo)

    async def get_commit_activity(
        self, owner: str, repo: str
    ) -> list[CommitActivityWeek]:
        return await self._fetcher.fetch_commit_activity(owner, repo)

    async def get_timeline(self, login: str) -> Timeline:
        repos, account = await asyncio.gather(
            self._fetcher.fetch_repositories(login),
            self._fetcher.fetch_account(login),
        )
        return build_timeline(repos, account)

    # ── Full dashboard ────────────────────────────────────────────────────

    async def explore(self, login: str, repo: Optional[str] = None) -> Exploration:
        """Load profile, repositories and the selected repository's views.

        Account and repository failures propagate. A contributor failure is
        recorded on the result so the rest of the dashboard still renders.
        """
        self._status("Fetching profile and repositories …")
        account, repos = await asyncio.gather(
            self._fetcher.fetch_account(login),
            self._fetcher.fetch_repositories(login),
        )
        result = Exploration(
            account=account,
            repositories=repos,
            timeline=build_timeline(repos, account),
        )

        selected = repo or (repos[0].name if repos else None)
        if selected is None:
            self._status("No repositories to inspect.")
            return result
        result.selected_repo = selected

        self._status(f"Reconciling contributors of {selected} …")
        try:
            result.contributors = await self.get_contributors(login, selected)
        except GitScopeError as exc:
            logger.warning("Contributors unavailable for %s/%s: %s", login, selected, exc)
            result.contributors_error = str(exc)

        self._status("Fetching commit activity …")
        result.commit_activity = await self.get_commit_activity(login, selected)

        self._status("Generating summary …")
        result.summary = await self.get_repository_summary(login, selected)

        self._status("Done!")
        return result
