"""Counter screen — splash with progress, then the live "days since last commit" view.

Two fetches (commit count, last commit time) run as independent workers and
each writes only its own slot. A 250 ms timer keeps the elapsed time live
from the fixed anchor without touching the network; a 50 ms timer drives the
splash progress bar until the data is in and the minimum splash time passed.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from rich.text import Text
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.screen import Screen
from textual.timer import Timer
from textual.widgets import Footer, ProgressBar, Static

from commitclock.clock import ElapsedSample, LoadGate, PollingClock, wall_clock_ms
from commitclock.config import Config
from commitclock.services.commits import resolve_commit_count, resolve_last_commit_ms
from commitclock.services.github import GitHubClient
from commitclock.timefmt import format_calendar_date, format_duration

logger = logging.getLogger(__name__)

PENDING_DAYS = "–"
PENDING = "…"

COMMITS_SLOT = "commits"
LAST_COMMIT_SLOT = "last-commit"


def days_text(anchor_ms: int | None, sample: ElapsedSample) -> str:
    return PENDING_DAYS if anchor_ms is None else str(sample.days)


def timer_text(anchor_ms: int | None, sample: ElapsedSample) -> str:
    if anchor_ms is None:
        return PENDING
    return f"{format_duration(sample.elapsed_ms)} since last commit"


def commits_text(total_commits: int | None) -> str:
    return f"Commits: {PENDING if total_commits is None else total_commits}"


class CounterScreen(Screen):
    """Live counter for one repository."""

    BINDINGS = [
        Binding("r", "reload", "Reload", show=True),
        Binding("o", "open_profile", "GitHub", show=True),
        Binding("question_mark", "open_help", "Help", show=True),
        Binding("q", "quit_app", "Quit", show=True),
    ]

    DEFAULT_CSS = """
    CounterScreen {
        align: center middle;
    }
    #splash, #stats {
        width: 60;
        height: auto;
        padding: 1 2;
        border: round $primary;
    }
    #splash-title, #days {
        text-style: bold;
    }
    #footer-bar {
        height: 1;
        margin-top: 1;
    }
    #timer {
        width: 1fr;
    }
    #commits {
        width: auto;
    }
    """

    def __init__(
        self,
        config: Config,
        client: GitHubClient,
        now: Callable[[], int] = wall_clock_ms,
    ) -> None:
        super().__init__()
        self.config = config
        self.client = client
        self._now = now

        self.total_commits: int | None = None
        self.last_commit_ms: int | None = None
        self.sample = ElapsedSample()
        self.revealed = False

        self._alive = False
        self._clock = PollingClock(self._on_sample, now=now, anchor_ms=config.anchor_ms)
        pending = [COMMITS_SLOT]
        if config.anchor_ms is None:
            pending.append(LAST_COMMIT_SLOT)
        self._gate = LoadGate(min_duration_ms=config.min_splash_ms, now=now, pending=pending)
        self._progress_timer: Timer | None = None

    @property
    def anchor_ms(self) -> int | None:
        return self._clock.anchor_ms

    @property
    def progress(self) -> int:
        return self._gate.progress

    def compose(self) -> ComposeResult:
        with Vertical(id="splash"):
            yield Static("\U0001F44B Hello Founder,", id="splash-title")
            yield Static("[dim]building something great...[/]", id="splash-sub")
            yield ProgressBar(total=100, show_eta=False, id="splash-progress")
        with Vertical(id="stats"):
            yield Static(f"[bold]{self.config.repo}[/]  [dim]{self.config.slug}[/]", id="brand")
            yield Static("", id="days")
            yield Static("[dim]since last commit[/]", id="days-caption")
            yield Static("", id="date")
            with Horizontal(id="footer-bar"):
                yield Static("", id="timer")
                yield Static("", id="commits")
        yield Footer()

    def on_mount(self) -> None:
        self._alive = True
        self.query_one("#stats").display = False

        self._clock.attach(self.set_interval(self.config.tick_interval, self._clock.tick))
        self._progress_timer = self.set_interval(
            self.config.progress_interval, self._on_progress_tick
        )

        self.run_worker(self._load_commit_count(), name=COMMITS_SLOT, exit_on_error=False)
        if self.anchor_ms is None:
            self.run_worker(self._load_last_commit(), name=LAST_COMMIT_SLOT, exit_on_error=False)

        self._clock.tick()
        self._render_stats()

    def on_unmount(self) -> None:
        self._alive = False
        self._clock.stop()
        self._stop_progress()

    # -- Fetching --

    async def _load_commit_count(self) -> None:
        try:
            count = await resolve_commit_count(self.client, self.config.owner, self.config.repo)
        except Exception:
            logger.exception("Commit count resolution crashed")
            count = 0
        self._apply_commit_count(count)

    async def _load_last_commit(self) -> None:
        try:
            last_ms = await resolve_last_commit_ms(self.client, self.config.owner, self.config.repo)
        except Exception:
            logger.exception("Last commit resolution crashed")
            last_ms = None
        self._apply_last_commit(last_ms)

    def _apply_commit_count(self, count: int) -> None:
        if not self._alive:
            logger.debug("Dropping commit count %s for a dismounted screen", count)
            return
        self.total_commits = count
        self._gate.settle(COMMITS_SLOT)
        self._render_stats()
        self._maybe_reveal()

    def _apply_last_commit(self, last_ms: int | None) -> None:
        if not self._alive:
            logger.debug("Dropping last commit %s for a dismounted screen", last_ms)
            return
        self.last_commit_ms = last_ms
        if last_ms is not None:
            self._clock.fix_anchor(last_ms)
            self._clock.tick()
        self._gate.settle(LAST_COMMIT_SLOT)
        self._render_stats()
        self._maybe_reveal()

    # -- Timers --

    def _on_sample(self, sample: ElapsedSample) -> None:
        if not self._alive:
            return
        self.sample = sample
        self._render_elapsed()

    def _on_progress_tick(self) -> None:
        if not self._alive:
            return
        self.query_one("#splash-progress", ProgressBar).update(progress=self._gate.tick())
        self._maybe_reveal()

    def _stop_progress(self) -> None:
        if self._progress_timer is not None:
            self._progress_timer.stop()
            self._progress_timer = None

    def _maybe_reveal(self) -> None:
        if self.revealed or not self._gate.ready:
            return
        self.query_one("#splash-progress", ProgressBar).update(progress=self._gate.tick())
        self._stop_progress()
        self.revealed = True
        self.query_one("#splash").display = False
        self.query_one("#stats").display = True

    # -- Rendering --

    def _render_elapsed(self) -> None:
        anchor = self.anchor_ms
        self.query_one("#days", Static).update(
            Text(f"{days_text(anchor, self.sample)} days", style="bold")
        )
        self.query_one("#timer", Static).update(
            Text(f"● {timer_text(anchor, self.sample)}")
        )

    def _render_stats(self) -> None:
        self._render_elapsed()
        anchor = self.anchor_ms
        self.query_one("#date", Static).update(
            Text(format_calendar_date(anchor) if anchor is not None else "", style="dim")
        )
        self.query_one("#commits", Static).update(Text(commits_text(self.total_commits)))

    # -- Actions --

    def action_reload(self) -> None:
        """Throw this screen away and resolve everything again."""
        self.app.switch_screen(CounterScreen(self.config, self.client, now=self._now))

    def action_open_profile(self) -> None:
        import webbrowser
        webbrowser.open(self.config.profile_url)
        self.notify(f"Opened {self.config.profile_url}")

    def action_open_help(self) -> None:
        self.app.push_screen("help")

    def action_quit_app(self) -> None:
        self.app.exit()
