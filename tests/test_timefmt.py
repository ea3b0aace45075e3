"""Tests for PHP-style timestamp rendering and timezone resolution."""

from __future__ import annotations

from datetime import timedelta, timezone

import pytest

from debuglog.timefmt import (
    DEFAULT_DATE_FORMAT,
    format_time,
    render_datetime,
    resolve_timezone,
    to_datetime,
)

TS = 1700000000.123456  # Tue 2023-11-14 22:13:20.123456 UTC


class TestResolveTimezone:
    def test_none_means_local(self):
        assert resolve_timezone(None) is None

    def test_named_zone(self):
        tz = resolve_timezone("Europe/Berlin")
        assert tz is not None
        assert getattr(tz, "key") == "Europe/Berlin"

    def test_invalid_zone_falls_back(self):
        assert resolve_timezone("Mars/Olympus_Mons") is None

    @pytest.mark.parametrize("name", ["../../etc/passwd", "+25:00", "+24", "-30:00"])
    def test_garbage_zone_falls_back(self, name):
        assert resolve_timezone(name) is None

    @pytest.mark.parametrize(
        "name,offset",
        [
            ("+02:00", timedelta(hours=2)),
            ("-0530", -timedelta(hours=5, minutes=30)),
            ("+3", timedelta(hours=3)),
        ],
    )
    def test_numeric_offsets(self, name, offset):
        assert resolve_timezone(name) == timezone(offset)


class TestToDatetime:
    def test_microseconds_rounded(self):
        dt = to_datetime(TS, timezone.utc)
        assert dt.microsecond == 123456
        assert dt.second == 20

    def test_rounding_carries_into_seconds(self):
        dt = to_datetime(1700000000.9999999, timezone.utc)
        assert dt.second == 21
        assert dt.microsecond == 0

    def test_negative_timestamp(self):
        dt = to_datetime(-0.5, timezone.utc)
        assert (dt.year, dt.hour, dt.minute, dt.second, dt.microsecond) == (
            1969, 23, 59, 59, 500000,
        )

    def test_local_zone_is_aware(self):
        assert to_datetime(TS).tzinfo is not None


class TestFormatTime:
    def test_default_pattern_utc(self):
        assert format_time(TS, DEFAULT_DATE_FORMAT, "UTC") == "2023-11-14 22:13:20.123456"

    def test_named_zone_shifts_wall_clock(self):
        assert format_time(TS, "Y-m-d H:i:s", "America/New_York") == "2023-11-14 17:13:20"

    def test_out_of_range_offset_matches_local(self):
        assert format_time(TS, DEFAULT_DATE_FORMAT, "+25:00") == format_time(
            TS, DEFAULT_DATE_FORMAT, None
        )

    def test_invalid_zone_matches_local(self):
        assert format_time(TS, DEFAULT_DATE_FORMAT, "No/Such_Zone") == format_time(
            TS, DEFAULT_DATE_FORMAT, None
        )

    @pytest.mark.parametrize(
        "pattern,expected",
        [
            ("d D j l N w z", "14 Tue 14 Tuesday 2 2 317"),
            ("W", "46"),
            ("F m M n t L", "November 11 Nov 11 30 0"),
            ("o Y y", "2023 2023 23"),
            ("a A g G h H i s", "pm PM 10 22 10 22 13 20"),
            ("u v", "123456 123"),
            ("e T P O p Z", "UTC UTC +00:00 +0000 Z 0"),
            ("U", "1700000000"),
            ("c", "2023-11-14T22:13:20+00:00"),
            ("r", "Tue, 14 Nov 2023 22:13:20 +0000"),
        ],
    )
    def test_pattern_characters(self, pattern, expected):
        assert format_time(TS, pattern, "UTC") == expected

    def test_escaped_and_literal_characters(self):
        assert format_time(TS, "\\Y\\-m [Y] #", "UTC") == "Y-11 [2023] #"

    def test_trailing_backslash_dropped(self):
        assert format_time(TS, "Y\\", "UTC") == "2023"

    def test_offset_zone_rendering(self):
        dt = to_datetime(TS, resolve_timezone("+05:30"))
        assert render_datetime(dt, "H:i P O p Z e") == "03:43 +05:30 +0530 +05:30 19800 +05:30"

    def test_zone_identifier_and_abbreviation(self):
        assert format_time(TS, "e T", "Europe/Berlin") == "Europe/Berlin CET"
