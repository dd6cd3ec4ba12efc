"""Ordered fallback attempts: the first one to settle wins."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Iterable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class Outcome(Generic[T]):
    """Result of a single attempt.

    A settled outcome ends the resolution with ``value``, even when that value
    is a "nothing here" answer such as a 404. An unsettled one passes control
    to the next attempt.
    """

    value: T | None = None
    settled: bool = False


def hit(value: Any) -> Outcome:
    return Outcome(value=value, settled=True)


def miss() -> Outcome:
    return Outcome()


Attempt = Callable[[], Awaitable[Outcome]]


async def first_success(attempts: Iterable[Attempt], default: T) -> T:
    """Run ``attempts`` in order and return the first settled value.

    Returns ``default`` when every attempt misses. An attempt that raises
    counts as a miss.
    """
    for attempt in attempts:
        name = getattr(attempt, "__name__", repr(attempt))
        try:
            outcome = await attempt()
        except Exception:
            logger.exception("Attempt %s raised; trying the next one", name)
            continue
        if outcome.settled:
            logger.debug("Attempt %s settled with %r", name, outcome.value)
            return outcome.value
        logger.debug("Attempt %s missed", name)
    return default
