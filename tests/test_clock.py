"""Tests for the polling clock and the splash load gate."""

from unittest.mock import Mock

import pytest

from commitclock.clock import ElapsedSample, LoadGate, PollingClock, wall_clock_ms
from commitclock.screens.counter import commits_text, days_text, timer_text
from conftest import FakeClock

ANCHOR_MS = 1_762_194_514_910


class TestElapsedSample:
    def test_unknown_anchor(self):
        assert ElapsedSample.between(None, ANCHOR_MS) == ElapsedSample(0, 0)

    def test_future_anchor_clamps(self):
        assert ElapsedSample.between(ANCHOR_MS, ANCHOR_MS - 10) == ElapsedSample(0, 0)

    def test_days_and_remainder(self):
        sample = ElapsedSample.between(ANCHOR_MS, ANCHOR_MS + 90_000_000)
        assert sample == ElapsedSample(days=1, elapsed_ms=90_000_000)


class TestPollingClock:
    def test_tick_writes_sample(self):
        clock = FakeClock(ANCHOR_MS + 5_000)
        sink = Mock()
        PollingClock(sink, now=clock, anchor_ms=ANCHOR_MS).tick()
        sink.assert_called_once_with(ElapsedSample(days=0, elapsed_ms=5_000))

    def test_elapsed_strictly_increases_between_ticks(self):
        clock = FakeClock(ANCHOR_MS)
        samples = []
        polling = PollingClock(samples.append, now=clock, anchor_ms=ANCHOR_MS)
        polling.tick()
        clock.advance(250)
        polling.tick()
        assert samples[1].elapsed_ms > samples[0].elapsed_ms

    def test_no_writes_after_stop(self):
        clock = FakeClock(ANCHOR_MS)
        sink = Mock()
        timer = Mock()
        polling = PollingClock(sink, now=clock, anchor_ms=ANCHOR_MS)
        polling.attach(timer)
        polling.stop()
        clock.advance(1_000)
        polling.tick()
        sink.assert_not_called()
        timer.stop.assert_called_once()
        assert not polling.running

    def test_stop_twice_stops_timer_once(self):
        timer = Mock()
        polling = PollingClock(Mock())
        polling.attach(timer)
        polling.stop()
        polling.stop()
        timer.stop.assert_called_once()

    def test_anchor_is_fixed_once(self):
        polling = PollingClock(Mock(), now=FakeClock(ANCHOR_MS))
        assert polling.anchor_ms is None
        polling.fix_anchor(ANCHOR_MS)
        polling.fix_anchor(ANCHOR_MS)
        with pytest.raises(RuntimeError):
            polling.fix_anchor(ANCHOR_MS + 1)
        assert polling.anchor_ms == ANCHOR_MS

    def test_ticks_before_anchor_are_zero(self):
        sink = Mock()
        PollingClock(sink, now=FakeClock(ANCHOR_MS)).tick()
        sink.assert_called_once_with(ElapsedSample())

    def test_wall_clock_is_epoch_ms(self):
        assert wall_clock_ms() > ANCHOR_MS


class TestLoadGate:
    def test_progress_creeps_to_cap(self):
        clock = FakeClock(0)
        gate = LoadGate(min_duration_ms=3000, now=clock, pending=["commits"])
        assert gate.tick() == 0
        clock.advance(1500)
        assert gate.tick() == 47
        clock.advance(10_000)
        assert gate.tick() == 95

    def test_waits_for_floor_even_with_data(self):
        clock = FakeClock(0)
        gate = LoadGate(min_duration_ms=3000, now=clock, pending=["commits"])
        gate.settle("commits")
        clock.advance(2999)
        assert not gate.ready
        assert gate.tick() < 100
        clock.advance(1)
        assert gate.ready
        assert gate.tick() == 100

    def test_waits_for_every_pending_fetch(self):
        clock = FakeClock(0)
        gate = LoadGate(min_duration_ms=0, now=clock, pending=["commits", "last-commit"])
        gate.settle("commits")
        assert not gate.ready
        assert gate.tick() == 95
        gate.settle("last-commit")
        assert gate.ready

    def test_progress_never_goes_backwards(self):
        clock = FakeClock(0)
        gate = LoadGate(min_duration_ms=3000, now=clock, pending=["commits"])
        clock.advance(2000)
        high = gate.tick()
        clock.now_ms = 100
        assert gate.tick() == high


class TestDisplayText:
    def test_placeholders_until_resolved(self):
        assert days_text(None, ElapsedSample()) == "–"
        assert timer_text(None, ElapsedSample()) == "…"
        assert commits_text(None) == "Commits: …"

    def test_fixed_anchor_end_to_end(self):
        clock = FakeClock(ANCHOR_MS + 90_000_000)
        samples = []
        PollingClock(samples.append, now=clock, anchor_ms=ANCHOR_MS).tick()
        sample = samples[-1]
        assert days_text(ANCHOR_MS, sample) == "1"
        assert timer_text(ANCHOR_MS, sample) == "25:00:00 since last commit"

    def test_commit_count(self):
        assert commits_text(0) == "Commits: 0"
        assert commits_text(8) == "Commits: 8"
