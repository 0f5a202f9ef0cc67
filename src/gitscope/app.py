"""Main Textual TUI application for gitscope."""

from typing import Optional

from textual.app import App

from gitscope.config import Settings
from gitscope.errors import (
    AuthenticationFailed,
    GitScopeError,
    NotFound,
    RateLimitedOrForbidden,
    TransportFailure,
)
from gitscope.explorer import Explorer
from gitscope.models import Exploration
from gitscope.screens.home import HomeScreen
from gitscope.screens.loading import LoadingScreen
from gitscope.screens.results import ResultsScreen


def describe_error(exc: Exception, login: str, has_token: bool) -> str:
    """User-facing message for a failed exploration."""
    if isinstance(exc, NotFound):
        return f"❌ User '{login}' not found. Check the login and try again."
    if isinstance(exc, AuthenticationFailed):
        return "❌ Authentication failed. Please check your GitHub token."
    if isinstance(exc, RateLimitedOrForbidden):
        if has_token:
            return f"❌ {exc} If the error persists, check your token's permissions."
        return (
            "❌ GitHub API rate limit exceeded "
            "(unauthenticated: 60 req/hour). "
            "Set GITHUB_TOKEN to get 5 000 req/hour."
        )
    if isinstance(exc, TransportFailure):
        return "❌ Could not connect to GitHub. Check your internet connection."
    if isinstance(exc, GitScopeError):
        return f"❌ {exc}"
    return f"❌ Unexpected error: {exc}"


class GitScopeApp(App):
    """TUI application for exploring a GitHub account."""

    TITLE = "gitscope"
    SUB_TITLE = "Profile · Repositories · Contributors · Summary · Timeline"

    CSS = """
    Screen {
        background: $background;
    }
    """

    BINDINGS = [
        ("q", "quit", "Quit"),
    ]

    def __init__(self, settings: Optional[Settings] = None, **kwargs) -> None:  # type: ignore[no-untyped-def]
        super().__init__(**kwargs)
        self.settings = settings or Settings.from_env()

    def on_mount(self) -> None:
        self.push_screen(HomeScreen())

    def run_exploration(self, login: str, repo: Optional[str] = None) -> None:
        """Kick off the exploration — called from HomeScreen."""
        loading = LoadingScreen(target=f"{login}/{repo}" if repo else login)
        self.push_screen(loading)

        async def _do_work() -> None:
            def on_status(msg: str) -> None:
                self.call_from_thread(loading.advance, msg)

            explorer = Explorer(settings=self.settings, on_status=on_status)
            try:
                result = await explorer.explore(login, repo)
                self.call_from_thread(loading.finish)
                self.call_from_thread(self._show_results, result)
            except Exception as e:
                msg = describe_error(e, login, bool(self.settings.github_token))
                self.call_from_thread(loading.fail, msg)
            finally:
                await explorer.close()

        self.run_worker(_do_work(), thread=True)

    def _show_results(self, result: Exploration) -> None:
        """Replace loading screen with results."""
        self.pop_screen()
        self.push_screen(ResultsScreen(result))
