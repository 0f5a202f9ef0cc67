"""Pytest configuration and fixtures."""

import pytest

API = "https://api.github.com"


@pytest.fixture(scope="session")
def anyio_backend():
    """Configure anyio backend for async tests."""
    return "asyncio"


@pytest.fixture
def user_payload():
    """A /users/{login} response."""
    return {
        "login": "acme",
        "name": None,
        "avatar_url": "https://avatars.githubusercontent.com/u/1",
        "bio": None,
        "followers": 12,
        "following": 3,
        "public_repos": 2,
        "html_url": "https://github.com/acme",
        "created_at": "2015-03-01T12:00:00Z",
    }


@pytest.fixture
def repos_payload():
    """A /users/{login}/repos response, most recently updated first."""
    return [
        {
            "id": 2,
            "name": "x",
            "description": None,
            "html_url": "https://github.com/acme/x",
            "stargazers_count": 4,
            "forks_count": 1,
            "language": "TypeScript",
            "updated_at": "2024-06-01T00:00:00Z",
            "created_at": "2021-01-01T00:00:00Z",
            "default_branch": "main",
        },
        {
            "id": 1,
            "name": "legacy",
            "description": "Old stuff",
            "html_url": "https://github.com/acme/legacy",
            "stargazers_count": 10,
            "forks_count": 3,
            "language": None,
            "updated_at": "2020-01-01T00:00:00Z",
            "created_at": "2016-05-05T00:00:00Z",
            "default_branch": "master",
        },
    ]


def commit_payload(sha: str, login: str | None) -> dict:
    """A /commits list item; ``login=None`` gives an unattributed commit."""
    author = None
    if login is not None:
        author = {"login": login, "avatar_url": f"https://avatars/{login}"}
    return {"sha": sha, "commit": {"message": "msg"}, "author": author}
