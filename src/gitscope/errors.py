"""Domain errors raised by the GitHub client and the explorer."""

from typing import Optional


class GitScopeError(Exception):
    """Base class for every failure surfaced by gitscope."""


class AuthenticationFailed(GitScopeError):
    """GitHub rejected the credential (HTTP 401)."""

    def __init__(self, message: str = "GitHub API authentication failed. Please check your token.") -> None:
        super().__init__(message)


class RateLimitedOrForbidden(GitScopeError):
    """GitHub refused the request (HTTP 403), usually a rate limit."""

    def __init__(self, message: str = "GitHub API rate limit exceeded or access forbidden.") -> None:
        super().__init__(message)


class NotFound(GitScopeError):
    """The user, repository or branch does not exist (HTTP 404)."""

    def __init__(self, message: str = "Repository or user not found.") -> None:
        super().__init__(message)


class ProviderError(GitScopeError):
    """Any other non-2xx answer from a remote provider."""

    def __init__(self, message: str = "Unknown error", status_code: Optional[int] = None) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(f"GitHub API error: {message}")


class TransportFailure(GitScopeError):
    """No response was received (DNS, connect, timeout ...)."""
