"""Timeline — repository creation events in chronological order."""

from typing import Optional

from gitscope.models import Account, Repository, Timeline, TimelineEvent


def build_timeline(
    repos: list[Repository], account: Optional[Account] = None
) -> Timeline:
    """One event per repository, oldest first."""
    events = [
        TimelineEvent(
            date=r.created_at,
            name=r.name,
            title=f"Created {r.name}",
            description=r.description or "No description provided",
            language=r.language,
            stars=r.stargazers_count,
            forks=r.forks_count,
        )
        for r in sorted(repos, key=lambda r: r.created_at)
    ]
    return Timeline(
        events=events,
        first_contribution=account.created_at if account else None,
    )
