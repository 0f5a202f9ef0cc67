"""Exploration progress screen: one checklist row per explorer stage."""

from typing import Sequence

from textual.app import ComposeResult
from textual.containers import Center, Vertical
from textual.css.query import NoMatches
from textual.screen import Screen
from textual.widgets import Footer, Header, Label, ProgressBar, Static

from gitscope.explorer import EXPLORE_STEPS

DONE, ACTIVE, PENDING, FAILED = "✔", "▶", "·", "✖"


def checklist(steps: Sequence[str], current: int, failed: bool = False) -> list[str]:
    """Render ``steps`` with everything before ``current`` ticked off.

    ``current`` may equal ``len(steps)``, meaning every stage is done.
    """
    lines = []
    for i, step in enumerate(steps):
        if i < current:
            mark = DONE
        elif i == current:
            mark = FAILED if failed else ACTIVE
        else:
            mark = PENDING
        lines.append(f"{mark} {step}")
    return lines


class LoadingScreen(Screen):
    """Tracks `Explorer.explore` while it runs in a worker thread.

    Every status message moves the checklist one stage forward.
    """

    BINDINGS = [
        ("b", "go_back", "Back"),
    ]

    CSS = """
    LoadingScreen {
        align: center middle;
    }
    #explore-panel {
        width: 64;
        height: auto;
        padding: 1 3;
        border: heavy $accent;
        background: $surface;
    }
    #explore-target {
        text-style: bold;
        margin-bottom: 1;
    }
    .step {
        padding-left: 1;
    }
    #explore-message {
        margin-top: 1;
        color: $text-muted;
    }
    """

    def __init__(self, target: str = "", steps: Sequence[str] = EXPLORE_STEPS, **kwargs) -> None:  # type: ignore[no-untyped-def]
        super().__init__(**kwargs)
        self.target = target
        self.steps = tuple(steps)
        self.current = -1
        self.failed = False

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        with Center():
            with Vertical(id="explore-panel"):
                yield Static(f"🔭  {self.target or 'account'}", id="explore-target")
                for i, line in enumerate(checklist(self.steps, self.current)):
                    yield Label(line, id=f"step-{i}", classes="step")
                yield ProgressBar(total=len(self.steps), show_eta=False, id="explore-progress")
                yield Label("", id="explore-message")
        yield Footer()

    def advance(self, message: str) -> None:
        """Move to the next stage and show the explorer's message."""
        self.current = min(self.current + 1, len(self.steps))
        self._refresh(message)

    def finish(self) -> None:
        self.current = len(self.steps)
        self._refresh("Complete!")

    def fail(self, message: str) -> None:
        """Mark the running stage as failed and offer a way back."""
        self.current = max(self.current, 0)
        self.failed = True
        self._refresh(f"{message}\nPress [b]b[/b] to go back and try again.")

    def _refresh(self, message: str) -> None:
        try:
            for i, line in enumerate(checklist(self.steps, self.current, self.failed)):
                self.query_one(f"#step-{i}", Label).update(line)
            self.query_one("#explore-progress", ProgressBar).update(
                progress=max(self.current, 0)
            )
            self.query_one("#explore-message", Label).update(message)
        except NoMatches:
            pass  # popped before the worker reported back

    def action_go_back(self) -> None:
        self.app.pop_screen()
