"""Help screen — what the counter shows and how to configure it."""

from __future__ import annotations

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import VerticalScroll
from textual.screen import Screen
from textual.widgets import Footer, Markdown

HELP_TEXT = """\
# commitclock

A live counter of how long it has been since the last commit to a GitHub
repository, plus a rough total commit count.

## Reading the display

- **N days** — whole days since the last push to the repository
- **HH:MM:SS since last commit** — the same interval, ticking every quarter second
  (hours keep counting past 24)
- **Commits** — summed contributor counts; if GitHub's contributor listing
  fails this drops to `1`, meaning "at least one commit"
- `–` / `…` — still loading, or nothing could be found

Nothing is retried automatically. Press `r` to fetch everything again.

## Keys

| Key | Action |
| --- | --- |
| `r` | Reload (fresh fetch, restarts the splash) |
| `o` | Open the owner's GitHub profile |
| `?` | This help |
| `q` | Quit |

## Configuration

Optional file `~/.commitclock/config.yaml` (override the directory with
`COMMITCLOCK_HOME`):

```yaml
owner: pragnesh64
repo: my-first-startup

# Count from a fixed instant (epoch ms) instead of the last commit
anchor_ms: 1762194514910

# Seconds; no timeout unless set
request_timeout: 10

# Skip the 3 second splash
min_splash_ms: 0

log_level: DEBUG
log_file: /tmp/commitclock.log
```

You can also pass the repository on the command line:
`commitclock owner/repo`.

All requests are unauthenticated, so GitHub's anonymous rate limit applies.
"""


class HelpScreen(Screen):
    """Built-in help accessible from the counter."""

    BINDINGS = [
        Binding("escape", "go_back", "Back", show=True),
        Binding("q", "go_back", "Back", show=False),
    ]

    def compose(self) -> ComposeResult:
        with VerticalScroll(id="help-scroll"):
            yield Markdown(HELP_TEXT, id="help-content")
        yield Footer()

    def action_go_back(self) -> None:
        self.app.pop_screen()
