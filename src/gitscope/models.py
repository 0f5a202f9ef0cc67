"""Data models for gitscope."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


# ── Account & repositories ─────────────────────────────────────────────────

class Account(BaseModel):
    """A GitHub user profile snapshot."""

    login: str
    name: str = ""
    avatar_url: str = ""
    bio: str = ""
    followers: int = 0
    following: int = 0
    public_repos: int = 0
    html_url: str = ""
    created_at: datetime

    def model_post_init(self, _ctx: object) -> None:
        if not self.name:
            self.name = self.login


class Repository(BaseModel):
    """One repository owned by an account."""

    id: int
    name: str
    description: Optional[str] = None
    html_url: str = ""
    stargazers_count: int = 0
    forks_count: int = 0
    language: Optional[str] = None
    updated_at: datetime
    created_at: datetime
    default_branch: Optional[str] = None


class CommitActivityWeek(BaseModel):
    """Weekly commit histogram as returned by the stats endpoint."""

    week: int
    total: int = 0
    days: list[int] = Field(default_factory=list)


# ── Branches, commits & contributors ──────────────────────────────────────

class Branch(BaseModel):
    """A branch and the sha of its tip commit."""

    name: str
    sha: str = ""


class Commit(BaseModel):
    """A commit with its (optional) GitHub author identity."""

    sha: str
    author_login: Optional[str] = None
    author_avatar_url: str = ""

    @property
    def is_attributed(self) -> bool:
        return bool(self.author_login)


class Contributor(BaseModel):
    """A contributor, baseline count plus commits observed on branches."""

    login: str
    avatar_url: str = ""
    html_url: str = ""
    contributions: int = 0
    total_commits: int = 0


# ── Derived views ─────────────────────────────────────────────────────────

class TimelineEvent(BaseModel):
    """A "repository created" event."""

    type: str = "repository"
    date: datetime
    name: str
    title: str = ""
    description: str = ""
    language: Optional[str] = None
    stars: int = 0
    forks: int = 0


class Timeline(BaseModel):
    """Chronological repository events for one account."""

    events: list[TimelineEvent] = Field(default_factory=list)
    first_contribution: Optional[datetime] = None


class LanguageShare(BaseModel):
    """Number of repositories whose primary language is ``name``."""

    name: str
    value: int


class HeatmapCell(BaseModel):
    """One day in the commit activity heatmap."""

    week: int
    day: int
    count: int
    level: int = 0


class Exploration(BaseModel):
    """Everything the dashboard shows for one account."""

    account: Account
    repositories: list[Repository] = Field(default_factory=list)
    selected_repo: Optional[str] = None
    contributors: list[Contributor] = Field(default_factory=list)
    contributors_error: str = ""
    summary: str = ""
    commit_activity: list[CommitActivityWeek] = Field(default_factory=list)
    timeline: Timeline = Field(default_factory=Timeline)
    generated_at: datetime = Field(default_factory=datetime.now)
