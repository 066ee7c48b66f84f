"""Engine modules for the Project 50 integration.

Contains pure computation engines:
- day_resolver: Wall clock → challenge day resolution
- challenge_engine: Challenge status FSM, toggles, day advancement and queries
"""

from .challenge_engine import ChallengeEngine, DayAdvanceEffect, ToggleEffect
from .day_resolver import DayResolution, DayResolver

__all__ = [
    "ChallengeEngine",
    "DayAdvanceEffect",
    "DayResolution",
    "DayResolver",
    "ToggleEffect",
]
