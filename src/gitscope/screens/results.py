"""Results screen — tabbed dashboard for one account."""

from textual import on
from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.screen import Screen
from textual.widgets import (
    DataTable,
    Footer,
    Header,
    Input,
    Label,
    Markdown,
    Select,
    Static,
    TabbedContent,
    TabPane,
)

from gitscope.analysis.insights import (
    activity_heatmap,
    filter_repositories,
    language_distribution,
    most_and_least_active,
    sort_repositories,
)
from gitscope.models import Exploration, Repository

HEAT_GLYPHS = ["·", "░", "▒", "█"]


def repository_rows(
    repos: list[Repository], query: str = "", sort_by: str = "stars"
) -> list[tuple[str, ...]]:
    """Table rows for the repositories matching ``query``, sorted by ``sort_by``."""
    return [
        (
            r.name,
            str(r.stargazers_count),
            str(r.forks_count),
            r.language or "—",
            f"{r.updated_at:%Y-%m-%d}",
            (r.description or "")[:60],
        )
        for r in sort_repositories(filter_repositories(repos, query), sort_by)
    ]


class ResultsScreen(Screen):
    """Main results display."""

    SORT_OPTIONS = [
        ("Most stars", "stars"),
        ("Most forks", "forks"),
        ("Recently updated", "updated"),
    ]

    CSS = """
    ResultsScreen {
        layout: vertical;
    }
    #results-header {
        height: 3;
        background: $primary;
        color: $text;
        text-align: center;
        padding: 1 2;
        text-style: bold;
    }
    .section-title {
        text-style: bold;
        margin: 1 0;
        color: $secondary;
    }
    .insight-card {
        border: round $primary-lighten-2;
        padding: 1 2;
        margin: 1 0;
        background: $surface;
        height: auto;
    }
    #repo-controls {
        height: auto;
    }
    #repo-filter {
        width: 1fr;
    }
    #repo-sort {
        width: 28;
    }
    DataTable {
        height: auto;
        max-height: 24;
        margin: 1 0;
    }
    """

    BINDINGS = [
        ("q", "quit", "Quit"),
        ("b", "go_back", "Back"),
    ]

    def __init__(self, result: Exploration, **kwargs) -> None:  # type: ignore[no-untyped-def]
        super().__init__(**kwargs)
        self.result = result

    def compose(self) -> ComposeResult:
        a = self.result.account
        yield Header(show_clock=True)
        yield Static(f"  🔭  {a.name} (@{a.login})  ", id="results-header")

        with TabbedContent(
            "👤 Profile", "📚 Repositories", "👥 Contributors",
            "🤖 Summary", "🕰 Timeline", "🔥 Activity",
        ):
            with TabPane("👤 Profile"):
                yield from self._compose_profile()
            with TabPane("📚 Repositories"):
                yield from self._compose_repositories()
            with TabPane("👥 Contributors"):
                yield from self._compose_contributors()
            with TabPane("🤖 Summary"):
                yield from self._compose_summary()
            with TabPane("🕰 Timeline"):
                yield from self._compose_timeline()
            with TabPane("🔥 Activity"):
                yield from self._compose_activity()

        yield Footer()

    # ── Profile tab ───────────────────────────────────────────────────────

    def _compose_profile(self) -> ComposeResult:
        a = self.result.account
        with VerticalScroll():
            yield Static("PROFILE", classes="section-title")
            md = f"### {a.name}\n\n"
            if a.bio:
                md += f"{a.bio}\n\n"
            md += (
                f"**Followers:** {a.followers}  ·  **Following:** {a.following}  ·  "
                f"**Public repos:** {a.public_repos}\n\n"
                f"Member since {a.created_at:%Y-%m-%d} — {a.html_url}"
            )
            yield Markdown(md)

            langs = language_distribution(self.result.repositories)
            if langs:
                yield Static("TOP LANGUAGES", classes="section-title")
                for share in langs:
                    yield Label(f"{share.name:<16} {'■' * share.value} {share.value}")

    # ── Repositories tab ──────────────────────────────────────────────────

    def _compose_repositories(self) -> ComposeResult:
        with VerticalScroll():
            if not self.result.repositories:
                yield Label("No repositories found.")
                return
            with Horizontal(id="repo-controls"):
                yield Input(placeholder="Filter by name or description", id="repo-filter")
                yield Select(
                    [(label, key) for label, key in self.SORT_OPTIONS],
                    value="stars",
                    allow_blank=False,
                    id="repo-sort",
                )
            table = DataTable(id="repo-table")
            table.add_columns("Name", "★", "Forks", "Language", "Updated", "Description")
            table.add_rows(repository_rows(self.result.repositories))
            yield table
            yield Label("", id="repo-empty")

    @on(Input.Changed, "#repo-filter")
    @on(Select.Changed, "#repo-sort")
    def refresh_repositories(self) -> None:
        query = self.query_one("#repo-filter", Input).value
        sort_by = self.query_one("#repo-sort", Select).value
        if sort_by is Select.BLANK:
            sort_by = "stars"
        rows = repository_rows(self.result.repositories, query, str(sort_by))
        table = self.query_one("#repo-table", DataTable)
        table.clear()
        table.add_rows(rows)
        self.query_one("#repo-empty", Label).update(
            "" if rows else f"No repositories match {query.strip()!r}."
        )

    # ── Contributors tab ──────────────────────────────────────────────────

    def _compose_contributors(self) -> ComposeResult:
        res = self.result
        with VerticalScroll():
            yield Static(
                f"CONTRIBUTORS · {res.selected_repo or '—'}", classes="section-title"
            )
            if res.contributors_error:
                yield Label(f"⚠ {res.contributors_error}")
                return
            if not res.contributors:
                yield Label("No contributor data available")
                return

            most, least = most_and_least_active(res.contributors)
            if most and least:
                yield Label(
                    f"Most active: @{most.login} ({most.total_commits})  ·  "
                    f"Least active: @{least.login} ({least.total_commits})"
                )
            table = DataTable()
            table.add_columns("Contributor", "Total commits", "Baseline", "Profile")
            for c in res.contributors:
                table.add_row(
                    f"@{c.login}", str(c.total_commits), str(c.contributions), c.html_url
                )
            yield table

    # ── Summary tab ───────────────────────────────────────────────────────

    def _compose_summary(self) -> ComposeResult:
        with VerticalScroll():
            yield Static("AI-GENERATED SUMMARY", classes="section-title")
            with Vertical(classes="insight-card"):
                yield Markdown(self.result.summary or "_No repository selected._")

    # ── Timeline tab ──────────────────────────────────────────────────────

    def _compose_timeline(self) -> ComposeResult:
        t = self.result.timeline
        with VerticalScroll():
            if not t.events:
                yield Label("No timeline data available")
                return
            if t.first_contribution:
                yield Label(f"Joined GitHub on {t.first_contribution:%Y-%m-%d}")
            for ev in t.events:
                md = f"**{ev.date:%Y-%m-%d}** — {ev.title}\n\n{ev.description}\n\n"
                md += f"{ev.language or '—'}  ·  ★ {ev.stars}  ·  forks {ev.forks}"
                with Vertical(classes="insight-card"):
                    yield Markdown(md)

    # ── Activity tab ──────────────────────────────────────────────────────

    def _compose_activity(self) -> ComposeResult:
        with VerticalScroll():
            cells = activity_heatmap(self.result.commit_activity)
            if not cells:
                yield Label("No commit activity data available")
                return
            rows = ["", "", "", "", "", "", ""]
            for cell in cells:
                if 0 <= cell.day < 7:
                    rows[cell.day] += HEAT_GLYPHS[cell.level]
            yield Static("\n".join(rows))

    def action_go_back(self) -> None:
        self.app.pop_screen()
