"""Configuration loading for commitclock.

Everything has a compiled-in default, so the config file is optional.
Nothing is ever written back: the app keeps no state between runs.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

import yaml
from textual.logging import TextualHandler

from commitclock.services.github import DEFAULT_API_URL

logger = logging.getLogger(__name__)

DEFAULT_OWNER = "pragnesh64"
DEFAULT_REPO = "my-first-startup"

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@dataclass
class Config:
    """Application configuration."""

    owner: str = DEFAULT_OWNER
    repo: str = DEFAULT_REPO
    api_url: str = DEFAULT_API_URL
    # Fixed reference instant; None means "use the repo's last commit"
    anchor_ms: int | None = None
    tick_interval: float = 0.25
    progress_interval: float = 0.05
    min_splash_ms: int = 3000
    request_timeout: float | None = None
    log_level: str = "WARNING"
    log_file: str = ""

    @property
    def slug(self) -> str:
        return f"{self.owner}/{self.repo}"

    @property
    def profile_url(self) -> str:
        return f"https://github.com/{self.owner}"


def commitclock_home() -> Path:
    """Return the commitclock home directory."""
    env = os.environ.get("COMMITCLOCK_HOME")
    if env:
        return Path(env)
    return Path.home() / ".commitclock"


def config_path() -> Path:
    return commitclock_home() / "config.yaml"


def _is_number(value: object) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def load_config() -> Config:
    """Load config from ~/.commitclock/config.yaml, falling back to defaults.

    Keys with a value of the wrong type are skipped one by one, so a typo in
    one setting doesn't discard the rest of the file.
    """
    cfg = Config()
    path = config_path()

    if not path.exists():
        return cfg

    try:
        with open(path) as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as exc:
        logger.warning("Ignoring unreadable config %s: %s", path, exc)
        return cfg

    if not isinstance(data, dict):
        logger.warning("Ignoring config %s: expected a mapping", path)
        return cfg

    for key in ("owner", "repo", "api_url", "log_level", "log_file"):
        value = data.get(key)
        if isinstance(value, str) and value:
            setattr(cfg, key, value)

    anchor = data.get("anchor_ms")
    if _is_number(anchor):
        cfg.anchor_ms = int(anchor)

    for key in ("tick_interval", "progress_interval", "request_timeout"):
        value = data.get(key)
        if _is_number(value) and value > 0:
            setattr(cfg, key, float(value))

    splash = data.get("min_splash_ms")
    if _is_number(splash) and splash >= 0:
        cfg.min_splash_ms = int(splash)

    return cfg


def configure_logging(config: Config) -> None:
    """Route log records to a file or to Textual's devtools console.

    Writing to stderr while the TUI owns the terminal would garble the
    display, hence no plain StreamHandler.
    """
    if config.log_file:
        handler: logging.Handler = logging.FileHandler(config.log_file)
    else:
        handler = TextualHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    level = logging.getLevelName(config.log_level.upper())
    if not isinstance(level, int):
        level = logging.WARNING

    root = logging.getLogger()
    root.setLevel(level)
    root.addHandler(handler)
