"""Tests for the pure date and math helpers."""

from __future__ import annotations

from datetime import UTC, date, datetime, time
from zoneinfo import ZoneInfo

import pytest

from custom_components.project50.utils import dt_utils, math_utils


@pytest.fixture
def pacific_default():
    """Temporarily set the default zone to US/Pacific."""
    previous = dt_utils.get_default_timezone()
    dt_utils.set_default_timezone(ZoneInfo("US/Pacific"))
    yield
    dt_utils.set_default_timezone(previous)


class TestDateParsing:
    """Test date and datetime parsing."""

    def test_parse_date_variants(self) -> None:
        """ISO dates, ISO datetimes and date objects all parse."""
        assert dt_utils.dt_parse_date("2025-04-07") == date(2025, 4, 7)
        assert dt_utils.dt_parse_date("2025-04-07T10:00:00+02:00") == date(2025, 4, 7)
        assert dt_utils.dt_parse_date(date(2025, 4, 7)) == date(2025, 4, 7)
        assert dt_utils.dt_parse_date(datetime(2025, 4, 7, 9)) == date(2025, 4, 7)

    def test_parse_date_invalid(self) -> None:
        """Garbage parses to None."""
        assert dt_utils.dt_parse_date("not a date") is None
        assert dt_utils.dt_parse_date("") is None
        assert dt_utils.dt_parse_date(None) is None

    def test_parse_datetime_naive_uses_default_zone(self, pacific_default) -> None:
        """Naive values are read in the configured zone."""
        result = dt_utils.dt_parse_datetime("2025-04-07T10:00:00")
        assert result is not None
        assert result.tzinfo == ZoneInfo("US/Pacific")

    def test_parse_datetime_aware(self) -> None:
        """Aware values keep their offset."""
        result = dt_utils.dt_parse_datetime("2025-04-07T10:00:00+00:00")
        assert result == datetime(2025, 4, 7, 10, tzinfo=UTC)

    def test_parse_datetime_invalid(self) -> None:
        """Garbage parses to None."""
        assert dt_utils.dt_parse_datetime("yesterday-ish") is None


class TestLocalDates:
    """Test local calendar helpers."""

    def test_local_date_of_utc_instant(self, pacific_default) -> None:
        """An explicit zone converts before taking the date."""
        instant = datetime(2025, 1, 2, 3, 0, tzinfo=UTC)
        assert dt_utils.dt_local_date(instant, ZoneInfo("US/Pacific")) == date(2025, 1, 1)
        assert dt_utils.dt_local_date(instant) == date(2025, 1, 2)

    def test_days_between(self) -> None:
        """Whole days, negative when reversed."""
        assert dt_utils.dt_days_between(date(2025, 1, 1), date(2025, 1, 4)) == 3
        assert dt_utils.dt_days_between(date(2025, 1, 4), date(2025, 1, 1)) == -3


class TestReminderTime:
    """Test reminder time normalization."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("7:05", "07:05"),
            ("07:05:00", "07:05"),
            (time(21, 30), "21:30"),
            ("25:00", None),
            ("", None),
            (None, None),
        ],
    )
    def test_normalize(self, value, expected) -> None:
        """Valid times normalize to HH:MM; anything else is None."""
        assert dt_utils.dt_parse_reminder_time(value) == expected


class TestMath:
    """Test math helpers."""

    def test_percentage(self) -> None:
        """Rounded percentage with zero-target protection."""
        assert math_utils.calculate_percentage(1, 3) == 33.33
        assert math_utils.calculate_percentage(5, 0) == 0.0

    def test_clamp(self) -> None:
        """Values are bounded on both sides."""
        assert math_utils.clamp(51, 1, 50) == 50
        assert math_utils.clamp(-2, 1, 50) == 1
        assert math_utils.clamp(7, 1, 50) == 7

    def test_runs(self) -> None:
        """Longest run and run ending at a value."""
        assert math_utils.longest_run([1, 2, 3, 5, 6]) == 3
        assert math_utils.longest_run([]) == 0
        assert math_utils.run_ending_at([1, 2, 3, 5], 3) == 3
        assert math_utils.run_ending_at([1, 2, 3, 5], 4) == 0
