"""Dashboard aggregates — deterministic views over fetched data."""

from collections import Counter
from typing import Optional

from gitscope.models import (
    CommitActivityWeek,
    Contributor,
    HeatmapCell,
    LanguageShare,
    Repository,
)

SORT_KEYS = {
    "stars": lambda r: r.stargazers_count,
    "forks": lambda r: r.forks_count,
    "updated": lambda r: r.updated_at,
}


def sort_repositories(repos: list[Repository], by: str = "stars") -> list[Repository]:
    """Sort descending by ``stars``, ``forks`` or ``updated``."""
    try:
        key = SORT_KEYS[by]
    except KeyError:
        raise ValueError(
            f"Unknown sort key {by!r}; expected one of {', '.join(SORT_KEYS)}"
        ) from None
    return sorted(repos, key=key, reverse=True)


def filter_repositories(repos: list[Repository], query: str) -> list[Repository]:
    """Case-insensitive match on name or description."""
    q = query.strip().lower()
    if not q:
        return list(repos)
    return [
        r for r in repos
        if q in r.name.lower() or q in (r.description or "").lower()
    ]


def language_distribution(
    repos: list[Repository], limit: int = 5
) -> list[LanguageShare]:
    """Repositories per primary language, most common first."""
    counts = Counter(r.language for r in repos if r.language)
    ranked = sorted(counts.items(), key=lambda x: (-x[1], x[0]))
    return [LanguageShare(name=name, value=n) for name, n in ranked[:limit]]


def activity_level(count: int) -> int:
    if count == 0:
        return 0
    if count < 5:
        return 1
    if count < 10:
        return 2
    return 3


def activity_heatmap(weeks: list[CommitActivityWeek]) -> list[HeatmapCell]:
    """Flatten weekly histograms into day cells."""
    return [
        HeatmapCell(week=w.week, day=day, count=count, level=activity_level(count))
        for w in weeks
        for day, count in enumerate(w.days)
    ]


def most_and_least_active(
    contributors: list[Contributor],
) -> tuple[Optional[Contributor], Optional[Contributor]]:
    """First and last entries of a ranked list."""
    if not contributors:
        return None, None
    return contributors[0], contributors[-1]
