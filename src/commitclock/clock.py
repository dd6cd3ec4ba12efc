"""Elapsed-time sampling and the synthetic loading progress.

Neither class knows about Textual: the screen drives them from its own
timers, which keeps the arithmetic testable with a fake clock.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Protocol

from commitclock.timefmt import days_elapsed

logger = logging.getLogger(__name__)


def wall_clock_ms() -> int:
    """Current time as epoch milliseconds."""
    return time.time_ns() // 1_000_000


@dataclass(frozen=True)
class ElapsedSample:
    """Time since the anchor, as of one tick."""

    days: int = 0
    elapsed_ms: int = 0

    @classmethod
    def between(cls, anchor_ms: int | None, now_ms: int) -> ElapsedSample:
        if anchor_ms is None:
            return cls()
        elapsed = max(0, now_ms - anchor_ms)
        return cls(days=days_elapsed(elapsed), elapsed_ms=elapsed)


class Stoppable(Protocol):
    def stop(self) -> None: ...


class PollingClock:
    """Recomputes an ``ElapsedSample`` on every tick and hands it to ``sink``.

    The anchor can be known up front (a fixed instant from config) or fixed
    later once the last commit time arrives. Once fixed it never changes.
    """

    def __init__(
        self,
        sink: Callable[[ElapsedSample], None],
        now: Callable[[], int] = wall_clock_ms,
        anchor_ms: int | None = None,
    ) -> None:
        self._sink = sink
        self._now = now
        self._anchor_ms = anchor_ms
        self._timer: Stoppable | None = None
        self._stopped = False

    @property
    def anchor_ms(self) -> int | None:
        return self._anchor_ms

    @property
    def running(self) -> bool:
        return not self._stopped

    def fix_anchor(self, anchor_ms: int) -> None:
        if self._anchor_ms is not None and self._anchor_ms != anchor_ms:
            raise RuntimeError(
                f"anchor already fixed at {self._anchor_ms}, refusing {anchor_ms}"
            )
        self._anchor_ms = anchor_ms

    def attach(self, timer: Stoppable) -> None:
        """Remember the timer driving ``tick`` so ``stop`` can cancel it."""
        self._timer = timer

    def sample(self) -> ElapsedSample:
        return ElapsedSample.between(self._anchor_ms, self._now())

    def tick(self) -> None:
        if self._stopped:
            return
        self._sink(self.sample())

    def stop(self) -> None:
        self._stopped = True
        if self._timer is not None:
            self._timer.stop()
            self._timer = None


class LoadGate:
    """Fake-but-honest progress for the splash screen.

    Progress creeps toward ``cap`` over ``min_duration_ms`` and only reaches
    100 once every pending fetch has settled and the minimum duration has
    passed, so the splash never flashes by.
    """

    def __init__(
        self,
        min_duration_ms: int = 3000,
        cap: int = 95,
        now: Callable[[], int] = wall_clock_ms,
        pending: Iterable[str] = (),
    ) -> None:
        self.min_duration_ms = min_duration_ms
        self.cap = cap
        self._now = now
        self._started_at = now()
        self._pending = set(pending)
        self.progress = 0

    @property
    def floor_passed(self) -> bool:
        return self._now() - self._started_at >= self.min_duration_ms

    @property
    def ready(self) -> bool:
        return not self._pending and self.floor_passed

    def tick(self) -> int:
        """Advance ``progress`` and return it."""
        if self.ready:
            self.progress = 100
            return self.progress
        elapsed = self._now() - self._started_at
        if self.min_duration_ms <= 0:
            base = self.cap
        else:
            base = min(self.cap, int(elapsed * self.cap // self.min_duration_ms))
        self.progress = max(self.progress, base)
        return self.progress

    def settle(self, name: str) -> None:
        """Mark the fetch called ``name`` as finished."""
        self._pending.discard(name)
        logger.debug("Load gate: %s settled, waiting on %s", name, sorted(self._pending) or "nothing")
