"""Tests for duration, day and timestamp helpers."""

import re
from datetime import datetime

import pytest

from commitclock.timefmt import (
    MS_PER_DAY,
    days_elapsed,
    format_calendar_date,
    format_duration,
    parse_timestamp,
)


class TestFormatDuration:
    def test_zero(self):
        assert format_duration(0) == "00:00:00"

    def test_hours_minutes_seconds(self):
        assert format_duration(3_661_000) == "01:01:01"

    def test_negative_clamps_to_zero(self):
        assert format_duration(-5_000) == "00:00:00"

    def test_not_a_number_clamps_to_zero(self):
        assert format_duration(float("nan")) == "00:00:00"

    def test_floors_partial_seconds(self):
        assert format_duration(1_999) == "00:00:01"

    def test_hours_are_not_wrapped_at_a_day(self):
        assert format_duration(90_000_000) == "25:00:00"

    @pytest.mark.parametrize("ms", [0, 999, 59_999, 3_599_999, 86_399_999, 359_999_000])
    def test_shape(self, ms):
        assert re.fullmatch(r"\d{2}:\d{2}:\d{2}", format_duration(ms))


class TestDaysElapsed:
    def test_exactly_one_day(self):
        assert days_elapsed(86_400_000) == 1

    def test_just_under_one_day(self):
        assert days_elapsed(86_399_999) == 0

    def test_monotonic(self):
        samples = [0, 1, MS_PER_DAY - 1, MS_PER_DAY, 3 * MS_PER_DAY + 7, 40 * MS_PER_DAY]
        days = [days_elapsed(ms) for ms in samples]
        assert days == sorted(days)

    def test_negative_is_zero(self):
        assert days_elapsed(-1) == 0


class TestFormatCalendarDate:
    def test_local_date(self):
        ms = 1_704_153_600_000  # 2024-01-02T00:00:00Z
        local = datetime.fromtimestamp(ms / 1000)
        assert format_calendar_date(ms) == f"{local:%b} {local.day}, {local.year}"

    def test_none_is_empty(self):
        assert format_calendar_date(None) == ""

    def test_out_of_range_is_empty(self):
        assert format_calendar_date(10**20) == ""


class TestParseTimestamp:
    def test_utc_suffix(self):
        assert parse_timestamp("2024-01-01T00:00:00Z") == 1_704_067_200_000

    def test_explicit_offset(self):
        assert parse_timestamp("2024-01-01T02:00:00+02:00") == 1_704_067_200_000

    def test_naive_is_utc(self):
        assert parse_timestamp("2024-01-01T00:00:00") == 1_704_067_200_000

    def test_keeps_milliseconds(self):
        assert parse_timestamp("2024-01-01T00:00:00.123+00:00") == 1_704_067_200_123

    @pytest.mark.parametrize("value", [None, "", "   ", "yesterday", 1_704_067_200, ["2024"]])
    def test_unparseable(self, value):
        assert parse_timestamp(value) is None
