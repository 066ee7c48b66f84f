"""Day Resolver - Pure logic mapping the wall clock onto challenge days.

Given the challenge start date and the current wall-clock time, works out
which challenge day it is. The caller passes `now` on every call, already
expressed in the time zone that is configured at that moment, so time-zone
changes and manual clock adjustments are picked up on the next call.

ARCHITECTURE: This is a pure logic engine with NO Home Assistant dependencies.
All functions are static methods that operate on passed-in data.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from .. import const
from ..utils.dt_utils import dt_days_between, dt_local_date
from ..utils.math_utils import clamp

if TYPE_CHECKING:
    from datetime import date, datetime


@dataclass(frozen=True)
class DayResolution:
    """Outcome of resolving the current challenge day.

    Attributes:
        days_since_start: Whole calendar days between the start date and today.
                          Negative when the clock is before the start date.
        raw_day: days_since_start + 1, not clamped.
        day: raw_day clamped to [1, CHALLENGE_LENGTH_DAYS].
    """

    days_since_start: int
    raw_day: int
    day: int

    @property
    def before_start(self) -> bool:
        """Clock reads earlier than the start date."""
        return self.raw_day < const.FIRST_DAY

    @property
    def past_final_day(self) -> bool:
        """Calendar has moved beyond the last challenge day."""
        return self.raw_day > const.CHALLENGE_LENGTH_DAYS

    @property
    def on_or_past_final_day(self) -> bool:
        """Calendar has reached the last challenge day."""
        return self.raw_day >= const.CHALLENGE_LENGTH_DAYS


class DayResolver:
    """Pure logic for challenge-day resolution.

    All methods are static - no instance state and no cached calendar.
    """

    @staticmethod
    def days_since_start(start_date: date, now: datetime) -> int:
        """Return whole calendar days from start-of-day(start) to start-of-day(now)."""
        return dt_days_between(start_date, dt_local_date(now))

    @staticmethod
    def resolve(start_date: date, now: datetime) -> DayResolution:
        """Resolve the challenge day for `now`.

        Examples (start 2025-01-01):
            now 2025-01-01 23:59 → day 1
            now 2025-01-04 00:00 → day 4
            now 2024-12-30 → day 1 (raw_day -1)
            now 2025-03-01 → day 50 (raw_day 60)
        """
        days = DayResolver.days_since_start(start_date, now)
        raw_day = days + 1
        return DayResolution(
            days_since_start=days,
            raw_day=raw_day,
            day=clamp(raw_day, const.FIRST_DAY, const.CHALLENGE_LENGTH_DAYS),
        )

    @staticmethod
    def resolve_day(start_date: date, now: datetime) -> int:
        """Return only the clamped challenge day for `now`."""
        return DayResolver.resolve(start_date, now).day

    @staticmethod
    def day_has_advanced(last_known_day: int, candidate_day: int) -> bool:
        """Return True when the resolved day differs from the stored one."""
        return candidate_day != last_known_day

    @staticmethod
    def skipped_days(last_known_day: int, candidate_day: int) -> int:
        """Return how many whole days were jumped over between two days.

        Moving from day 3 to day 4 skips nothing; from day 3 to day 6 skips
        days 4 and 5.
        """
        return max(0, candidate_day - last_known_day - 1)
