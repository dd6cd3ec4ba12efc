"""commitclock — how long since the last commit, live in the terminal.

Main entry point. Launches the Textual TUI app.
"""

from __future__ import annotations

import sys
from collections.abc import Callable

from textual.app import App

from commitclock.clock import wall_clock_ms
from commitclock.config import Config, configure_logging, load_config
from commitclock.screens.counter import CounterScreen
from commitclock.screens.help import HelpScreen
from commitclock.services.github import GitHubClient


class CommitClockApp(App):
    """The main commitclock application."""

    TITLE = "commitclock"

    def __init__(
        self,
        config: Config | None = None,
        client: GitHubClient | None = None,
        now: Callable[[], int] | None = None,
    ) -> None:
        super().__init__()
        self.config = config or load_config()
        self.client = client or GitHubClient(
            api_url=self.config.api_url,
            timeout=self.config.request_timeout,
        )
        self._now = now or wall_clock_ms

    def on_mount(self) -> None:
        self.sub_title = self.config.slug
        self.install_screen(HelpScreen(), name="help")
        self.push_screen(CounterScreen(self.config, self.client, now=self._now))

    async def on_unmount(self) -> None:
        await self.client.aclose()


def parse_target(target: str) -> tuple[str, str] | None:
    """Split ``owner/repo``; None if it isn't exactly two non-empty parts."""
    parts = target.strip().strip("/").split("/")
    if len(parts) != 2 or not all(parts):
        return None
    return parts[0], parts[1]


def main() -> None:
    """CLI entry point."""
    config = load_config()
    target = sys.argv[1] if len(sys.argv) > 1 else ""

    if target == "--help":
        print("commitclock — live time since the last commit to a GitHub repo")
        print()
        print("Usage: commitclock [owner/repo]")
        print()
        print("  (no args)     Watch the configured repository")
        print(f"                (currently {config.slug})")
        print("  owner/repo    Watch another repository")
        print("  --help        This message")
        print("  --version     Show version")
        return

    if target == "--version":
        from commitclock import __version__
        print(f"commitclock {__version__}")
        return

    if target:
        parsed = parse_target(target)
        if parsed is None:
            print(f"Error: expected owner/repo, got '{target}'", file=sys.stderr)
            sys.exit(2)
        config.owner, config.repo = parsed

    configure_logging(config)
    app = CommitClockApp(config=config)
    app.run()


if __name__ == "__main__":
    main()
