"""Home screen — account (and optional repository) input."""

from typing import Optional

from textual import on
from textual.app import ComposeResult
from textual.containers import Center, Vertical
from textual.screen import Screen
from textual.widgets import Button, Footer, Header, Input, Label, Static


def parse_target(value: str) -> tuple[str, Optional[str]]:
    """Split ``login`` or ``login/repo``; raises ValueError when malformed."""
    value = value.strip().strip("/")
    if not value:
        raise ValueError("Enter a GitHub login (e.g. octocat)")
    parts = value.split("/")
    if len(parts) > 2 or not all(parts):
        raise ValueError("Enter a login or login/repo (e.g. octocat/Hello-World)")
    if len(parts) == 1:
        return parts[0], None
    return parts[0], parts[1]


class HomeScreen(Screen):
    """Initial screen to collect the account to explore."""

    CSS = """
    HomeScreen {
        align: center middle;
    }
    #home-container {
        width: 72;
        height: auto;
        padding: 1 4;
        border: round $primary;
        background: $surface;
    }
    #title-art {
        text-align: center;
        color: $accent;
    }
    #subtitle {
        text-align: center;
        color: $text-muted;
        margin-bottom: 2;
    }
    .field-label {
        margin-top: 1;
        color: $text;
    }
    #start-btn {
        margin-top: 2;
        width: 100%;
    }
    #error-label {
        color: $error;
        text-align: center;
        margin-top: 1;
    }
    """

    TITLE_ART = """
  ┏━╸╻╺┳╸┏━┓┏━╸┏━┓┏━┓┏━╸
  ┃╺┓┃ ┃ ┗━┓┃  ┃ ┃┣━┛┣╸
  ┗━┛╹ ╹ ┗━┛┗━╸┗━┛╹  ┗━╸
"""

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        with Center():
            with Vertical(id="home-container"):
                yield Static(self.TITLE_ART, id="title-art")
                yield Static(
                    "Profile · Contributors · AI Summary · Timeline",
                    id="subtitle",
                )
                yield Label("GitHub login (optionally login/repo):", classes="field-label")
                yield Input(placeholder="e.g. octocat or octocat/Hello-World", id="login-input")
                yield Button("▶  Explore", id="start-btn", variant="primary")
                yield Label("", id="error-label")
        yield Footer()

    def on_mount(self) -> None:
        self.query_one("#login-input", Input).focus()

    @on(Button.Pressed, "#start-btn")
    def start_exploration(self) -> None:
        value = self.query_one("#login-input", Input).value
        error_label = self.query_one("#error-label", Label)
        try:
            login, repo = parse_target(value)
        except ValueError as e:
            error_label.update(f"⚠  {e}")
            return
        error_label.update("")
        self.app.run_exploration(login, repo)  # type: ignore[attr-defined]

    @on(Input.Submitted, "#login-input")
    def submit_on_enter(self) -> None:
        self.start_exploration()
