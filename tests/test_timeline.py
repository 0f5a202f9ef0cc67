"""Tests for the timeline composer."""

from datetime import datetime, timezone

from gitscope.analysis.timeline import build_timeline
from gitscope.models import Account, Repository


def _repo(name: str, created: datetime, **kw) -> Repository:
    return Repository(
        id=hash(name) & 0xFFFF,
        name=name,
        created_at=created,
        updated_at=created,
        **kw,
    )


class TestBuildTimeline:
    def test_sorted_oldest_first(self):
        repos = [
            _repo("new", datetime(2023, 1, 1, tzinfo=timezone.utc)),
            _repo("old", datetime(2018, 1, 1, tzinfo=timezone.utc)),
            _repo("mid", datetime(2020, 6, 1, tzinfo=timezone.utc)),
        ]
        timeline = build_timeline(repos)
        assert [e.name for e in timeline.events] == ["old", "mid", "new"]

    def test_event_fields(self):
        repo = _repo(
            "x",
            datetime(2021, 1, 1, tzinfo=timezone.utc),
            description=None,
            language="Go",
            stargazers_count=7,
            forks_count=2,
        )
        ev = build_timeline([repo]).events[0]
        assert ev.type == "repository"
        assert ev.title == "Created x"
        assert ev.description == "No description provided"
        assert ev.language == "Go"
        assert (ev.stars, ev.forks) == (7, 2)
        assert ev.date == repo.created_at

    def test_first_contribution_from_account(self):
        account = Account(login="acme", created_at=datetime(2015, 3, 1, tzinfo=timezone.utc))
        timeline = build_timeline([], account)
        assert timeline.events == []
        assert timeline.first_contribution == account.created_at

    def test_does_not_reorder_input(self):
        repos = [
            _repo("b", datetime(2022, 1, 1, tzinfo=timezone.utc)),
            _repo("a", datetime(2019, 1, 1, tzinfo=timezone.utc)),
        ]
        build_timeline(repos)
        assert [r.name for r in repos] == ["b", "a"]
