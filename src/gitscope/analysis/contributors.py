"""Contributor reconciliation — baseline ranking merged with branch history."""

import logging
from typing import Iterable

from gitscope.config import DEFAULT_GITHUB_WEB_URL
from gitscope.fetcher import GitHubFetcher
from gitscope.models import Commit, Contributor

logger = logging.getLogger(__name__)


class ContributorTally:
    """Login-keyed accumulator folded over every branch's commits.

    Only ever mutated by the sequential branch loop in
    :func:`reconcile_contributors`.
    """

    def __init__(
        self,
        baseline: Iterable[Contributor] = (),
        web_url: str = DEFAULT_GITHUB_WEB_URL,
    ) -> None:
        self.web_url = web_url.rstrip("/")
        self._by_login: dict[str, Contributor] = {}
        for c in baseline:
            if c.login in self._by_login:
                continue
            self._by_login[c.login] = c.model_copy(
                update={"total_commits": c.contributions}
            )

    def __len__(self) -> int:
        return len(self._by_login)

    def __contains__(self, login: object) -> bool:
        return login in self._by_login

    def add_commit(self, commit: Commit) -> None:
        """Count one commit; unattributed commits are ignored."""
        if not commit.is_attributed:
            return
        login = commit.author_login
        existing = self._by_login.get(login)
        if existing is not None:
            existing.total_commits += 1
            return
        self._by_login[login] = Contributor(
            login=login,
            avatar_url=commit.author_avatar_url,
            html_url=f"{self.web_url}/{login}",
            contributions=0,
            total_commits=1,
        )

    def add_commits(self, commits: Iterable[Commit]) -> None:
        for commit in commits:
            self.add_commit(commit)

    def ranked(self) -> list[Contributor]:
        """Descending by total commits, ties broken by login."""
        return sorted(
            self._by_login.values(), key=lambda c: (-c.total_commits, c.login)
        )


async def reconcile_contributors(
    fetcher: GitHubFetcher,
    owner: str,
    repo: str,
    web_url: str = DEFAULT_GITHUB_WEB_URL,
) -> list[Contributor]:
    """Merge the contributor ranking with commits found on every branch.

    Branches are walked one at a time. Any failed fetch aborts the whole
    reconciliation; no partial list is returned.
    """
    branches = await fetcher.fetch_branches(owner, repo)
    baseline = await fetcher.fetch_contributors(owner, repo)

    tally = ContributorTally(baseline, web_url=web_url)
    for branch in branches:
        commits = await fetcher.fetch_branch_commits(owner, repo, branch.name)
        tally.add_commits(commits)
        logger.info(
            "%s/%s: counted %d commits on %s", owner, repo, len(commits), branch.name
        )

    return tally.ranked()
