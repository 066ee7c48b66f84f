"""Challenge Engine - Pure logic for challenge state transitions and queries.

This engine provides stateless, pure Python functions for:
- Challenge status FSM (ongoing → completed / failed)
- Task toggle planning and completed-day recomputation
- Day-advance planning, including the drift policy
- Day-status queries for the calendar overview
- Note upsert and streak statistics

ARCHITECTURE: This is a pure logic engine with NO Home Assistant dependencies.
All functions are static methods that operate on passed-in data.
State ownership, locking and persistence belong in the coordinator.
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import TYPE_CHECKING

from .. import const
from ..utils.math_utils import calculate_percentage, longest_run, run_ending_at
from .day_resolver import DayResolver

if TYPE_CHECKING:
    from ..type_defs import ChallengeData, DayStatus, NoteData, TaskData
    from .day_resolver import DayResolution

_LOGGER = logging.getLogger(__name__)


# =============================================================================
# EFFECT DATA STRUCTURES
# =============================================================================


@dataclass
class ToggleEffect:
    """Effect of toggling one task on the current day.

    Attributes:
        task_index: Position of the task in the challenge task list
        completed: New value of the task's completed flag
        completed_days: Full replacement for challenge completed_days
        new_status: Status to move to, when the toggle finishes the last day
    """

    task_index: int
    completed: bool
    completed_days: list[int]
    new_status: str | None = None


@dataclass
class DayAdvanceEffect:
    """Effect of a status check against the wall clock.

    Returned by ChallengeEngine.calculate_day_advance() only when something
    has to change.

    Attributes:
        previous_day: current_day before the check
        new_day: current_day after the check (never lower than previous_day)
        reset_tasks: Whether every task's completed flag goes back to False
        new_status: Target status, or None to keep the current one
        skipped_days: Whole days jumped over without a check
    """

    previous_day: int
    new_day: int
    reset_tasks: bool = False
    new_status: str | None = None
    skipped_days: int = 0


# =============================================================================
# CHALLENGE ENGINE
# =============================================================================


class ChallengeEngine:
    """Pure logic engine for challenge transitions and calculations.

    All methods are static - no instance state. This enables easy unit testing
    without any Home Assistant mocking.
    """

    # Status moves forward only; a new ongoing challenge needs a full reset.
    VALID_TRANSITIONS: dict[str, list[str]] = {
        const.CHALLENGE_STATUS_ONGOING: [
            const.CHALLENGE_STATUS_COMPLETED,
            const.CHALLENGE_STATUS_FAILED,
        ],
        const.CHALLENGE_STATUS_COMPLETED: [],
        const.CHALLENGE_STATUS_FAILED: [],
    }

    # =========================================================================
    # STATUS FSM
    # =========================================================================

    @staticmethod
    def can_transition(current_status: str, target_status: str) -> bool:
        """Check if a status transition is allowed."""
        return target_status in ChallengeEngine.VALID_TRANSITIONS.get(
            current_status, []
        )

    @staticmethod
    def is_terminal(status: str) -> bool:
        """Return True for statuses with no outgoing transitions."""
        return not ChallengeEngine.VALID_TRANSITIONS.get(status)

    # =========================================================================
    # TASKS
    # =========================================================================

    @staticmethod
    def find_task_index(tasks: list[TaskData], task_id: str) -> int | None:
        """Return the index of the task with `task_id`, or None."""
        for index, task in enumerate(tasks):
            if task[const.DATA_TASK_INTERNAL_ID] == task_id:
                return index
        return None

    @staticmethod
    def all_tasks_completed(tasks: list[TaskData]) -> bool:
        """Return True when there is at least one task and all are checked."""
        return bool(tasks) and all(task[const.DATA_TASK_COMPLETED] for task in tasks)

    @staticmethod
    def recompute_completed_days(
        completed_days: list[int], day: int, tasks: list[TaskData]
    ) -> list[int]:
        """Return completed_days with `day` added or removed per task state.

        Only membership of `day` is touched, so calling this repeatedly with the
        same task state always yields the same list.
        """
        days = set(completed_days)
        if ChallengeEngine.all_tasks_completed(tasks):
            days.add(day)
        else:
            days.discard(day)
        return sorted(days)

    @staticmethod
    def calculate_toggle(challenge: ChallengeData, task_id: str) -> ToggleEffect | None:
        """Plan a toggle of `task_id` on the current day.

        Returns:
            ToggleEffect, or None when the task is unknown or the challenge
            is no longer ongoing.
        """
        if ChallengeEngine.is_terminal(challenge[const.DATA_CHALLENGE_STATUS]):
            return None

        tasks = challenge[const.DATA_CHALLENGE_TASKS]
        index = ChallengeEngine.find_task_index(tasks, task_id)
        if index is None:
            return None

        current_day = challenge[const.DATA_CHALLENGE_CURRENT_DAY]
        new_completed = not tasks[index][const.DATA_TASK_COMPLETED]
        planned = [dict(task) for task in tasks]
        planned[index][const.DATA_TASK_COMPLETED] = new_completed

        effect = ToggleEffect(
            task_index=index,
            completed=new_completed,
            completed_days=ChallengeEngine.recompute_completed_days(
                challenge[const.DATA_CHALLENGE_COMPLETED_DAYS],
                current_day,
                planned,  # type: ignore[arg-type]
            ),
        )

        # Finishing day 50 completes the challenge right away.
        if (
            current_day == const.CHALLENGE_LENGTH_DAYS
            and const.CHALLENGE_LENGTH_DAYS in effect.completed_days
            and ChallengeEngine.can_transition(
                challenge[const.DATA_CHALLENGE_STATUS],
                const.CHALLENGE_STATUS_COMPLETED,
            )
        ):
            effect.new_status = const.CHALLENGE_STATUS_COMPLETED
        return effect

    # =========================================================================
    # DAY ADVANCEMENT
    # =========================================================================

    @staticmethod
    def calculate_day_advance(
        challenge: ChallengeData,
        resolution: DayResolution,
        drift_policy: str = const.DEFAULT_DRIFT_POLICY,
    ) -> DayAdvanceEffect | None:
        """Plan the changes a status check should apply.

        Rules:
        - Terminal challenges never change.
        - A resolved day lower than current_day (clock moved backward) is
          ignored; current_day never decreases.
        - A higher resolved day jumps straight to it and resets every task.
        - With DRIFT_POLICY_MARK_FAILED, a jump that skips at least one whole
          day fails the challenge.
        - Once the calendar reaches day 50 and day 50 is fully completed, the
          challenge is completed.

        Returns:
            DayAdvanceEffect, or None when nothing needs to change.
        """
        status = challenge[const.DATA_CHALLENGE_STATUS]
        if ChallengeEngine.is_terminal(status):
            return None

        current_day = challenge[const.DATA_CHALLENGE_CURRENT_DAY]
        candidate_day = resolution.day
        effect = DayAdvanceEffect(previous_day=current_day, new_day=current_day)

        if (
            DayResolver.day_has_advanced(current_day, candidate_day)
            and candidate_day > current_day
        ):
            effect.new_day = candidate_day
            effect.reset_tasks = True
            effect.skipped_days = DayResolver.skipped_days(current_day, candidate_day)
            if (
                drift_policy == const.DRIFT_POLICY_MARK_FAILED
                and effect.skipped_days > 0
            ):
                effect.new_status = const.CHALLENGE_STATUS_FAILED

        if (
            effect.new_status is None
            and resolution.on_or_past_final_day
            and effect.new_day == const.CHALLENGE_LENGTH_DAYS
            and const.CHALLENGE_LENGTH_DAYS
            in challenge[const.DATA_CHALLENGE_COMPLETED_DAYS]
        ):
            effect.new_status = const.CHALLENGE_STATUS_COMPLETED

        if effect.new_status is not None and not ChallengeEngine.can_transition(
            status, effect.new_status
        ):
            _LOGGER.warning(
                "Rejected challenge status transition %s → %s", status, effect.new_status
            )
            effect.new_status = None

        if not effect.reset_tasks and effect.new_status is None:
            return None
        return effect

    # =========================================================================
    # QUERIES
    # =========================================================================

    @staticmethod
    def get_day_status(challenge: ChallengeData | None, day: int) -> DayStatus:
        """Classify `day` for the calendar overview.

        - upcoming: day > current_day
        - current: day == current_day and not completed
        - completed: day <= current_day and in completed_days
        - failed: day < current_day and not completed

        Without a challenge every day is upcoming and has no note.
        """
        if challenge is None:
            return {
                const.DAY_STATUS_KEY_DAY: day,
                const.DAY_STATUS_KEY_STATUS: const.DAY_STATUS_UPCOMING,
                const.DAY_STATUS_KEY_HAS_NOTE: False,
            }

        current_day = challenge[const.DATA_CHALLENGE_CURRENT_DAY]
        is_completed = day in challenge[const.DATA_CHALLENGE_COMPLETED_DAYS]

        if day > current_day:
            status = const.DAY_STATUS_UPCOMING
        elif is_completed:
            status = const.DAY_STATUS_COMPLETED
        elif day == current_day:
            status = const.DAY_STATUS_CURRENT
        else:
            status = const.DAY_STATUS_FAILED

        return {
            const.DAY_STATUS_KEY_DAY: day,
            const.DAY_STATUS_KEY_STATUS: status,
            const.DAY_STATUS_KEY_HAS_NOTE: str(day)
            in challenge[const.DATA_CHALLENGE_NOTES],
        }

    @staticmethod
    def get_day_statuses(challenge: ChallengeData | None) -> list[DayStatus]:
        """Return the status of every challenge day, in order."""
        return [
            ChallengeEngine.get_day_status(challenge, day)
            for day in range(const.FIRST_DAY, const.CHALLENGE_LENGTH_DAYS + 1)
        ]

    @staticmethod
    def get_note(challenge: ChallengeData | None, day: int) -> NoteData | None:
        """Return the note for `day`, if any."""
        if challenge is None:
            return None
        return challenge[const.DATA_CHALLENGE_NOTES].get(str(day))

    @staticmethod
    def upsert_note(notes: dict[str, NoteData], note: NoteData) -> dict[str, NoteData]:
        """Return a copy of `notes` with `note` stored under its day number."""
        updated = dict(notes)
        updated[str(note[const.DATA_NOTE_DAY_NUMBER])] = note
        return updated

    # =========================================================================
    # STATISTICS
    # =========================================================================

    @staticmethod
    def calculate_streaks(challenge: ChallengeData) -> tuple[int, int]:
        """Return (current_streak, longest_streak) in completed days.

        The current streak still counts while today is open: it is the run
        ending today if today is done, else the run ending yesterday.
        """
        completed_days = challenge[const.DATA_CHALLENGE_COMPLETED_DAYS]
        current_day = challenge[const.DATA_CHALLENGE_CURRENT_DAY]
        current = run_ending_at(completed_days, current_day) or run_ending_at(
            completed_days, current_day - 1
        )
        return current, longest_run(completed_days)

    @staticmethod
    def calculate_today_progress(tasks: list[TaskData]) -> tuple[int, int, float]:
        """Return (completed, total, percentage) for the current day's tasks."""
        done = sum(1 for task in tasks if task[const.DATA_TASK_COMPLETED])
        total = len(tasks)
        return done, total, calculate_percentage(done, total)
