# File: coordinator.py
"""Coordinator for the Project 50 integration.

Owns the single active challenge record. Every mutation (user intents, the
recurring time check, and host time signals) runs under one asyncio lock
as a complete read-modify-write, is persisted through the store, and is then
published to listeners as a fresh snapshot.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
import copy
from datetime import datetime, timedelta
from typing import TYPE_CHECKING, Any

from homeassistant.core import HomeAssistant, callback
from homeassistant.helpers.event import async_track_time_interval
from homeassistant.helpers.update_coordinator import DataUpdateCoordinator
from homeassistant.util import dt as dt_util

from . import const
from . import data_builders as db
from .engines import ChallengeEngine, DayResolver
from .utils.dt_utils import dt_parse_date, dt_parse_datetime

if TYPE_CHECKING:
    from homeassistant.config_entries import ConfigEntry

    from .store import Project50Store
    from .type_defs import (
        ChallengeData,
        ChallengeSnapshot,
        DayStatus,
        NoteData,
        TaskData,
    )


class Project50Coordinator(DataUpdateCoordinator[dict[str, Any]]):
    """Coordinator for the Project 50 integration.

    The store is injected so tests can hand in a double. The recurring check
    is started and stopped explicitly with async_start_schedule() and
    async_stop_schedule().
    """

    def __init__(
        self,
        hass: HomeAssistant,
        config_entry: ConfigEntry,
        store: Project50Store,
    ) -> None:
        """Initialize the Project50Coordinator."""
        super().__init__(
            hass,
            const.LOGGER,
            config_entry=config_entry,
            name=f"{const.DOMAIN}{const.COORDINATOR_SUFFIX}",
            update_interval=None,
        )
        self.store = store
        self._lock = asyncio.Lock()
        self._challenge: ChallengeData | None = None
        self._selected_day: int | None = None
        self._show_edit_tip = False
        self._unsub_schedule: Callable[[], None] | None = None

    # -------------------------------------------------------------------------------------
    # Options
    # -------------------------------------------------------------------------------------

    @property
    def drift_policy(self) -> str:
        """Return the configured drift policy."""
        return self.config_entry.options.get(
            const.CONF_DRIFT_POLICY, const.DEFAULT_DRIFT_POLICY
        )

    @property
    def check_interval(self) -> timedelta:
        """Return the configured interval between time checks."""
        return timedelta(
            seconds=self.config_entry.options.get(
                const.CONF_CHECK_INTERVAL, const.DEFAULT_CHECK_INTERVAL
            )
        )

    # -------------------------------------------------------------------------------------
    # Read-only state
    # -------------------------------------------------------------------------------------

    @property
    def challenge(self) -> ChallengeData | None:
        """Return the active challenge record, if any."""
        return self._challenge

    @property
    def selected_day(self) -> int | None:
        """Return the day selected for editing, if any."""
        return self._selected_day

    @property
    def show_edit_tip(self) -> bool:
        """Return whether the first-run edit tip should be shown."""
        return self._show_edit_tip

    def get_snapshot(self) -> ChallengeSnapshot:
        """Return the current read-only snapshot."""
        return {
            const.SNAPSHOT_CURRENT_CHALLENGE: self._challenge,
            const.SNAPSHOT_SELECTED_DAY: self._selected_day,
            const.SNAPSHOT_SHOW_EDIT_TIP: self._show_edit_tip,
            const.SNAPSHOT_LAST_UPDATE: self.store.last_update,
        }

    def get_day_status(self, day: int) -> DayStatus:
        """Return the calendar status of `day`. Never mutates state."""
        return ChallengeEngine.get_day_status(self._challenge, day)

    def get_day_statuses(self) -> list[DayStatus]:
        """Return the calendar status of every challenge day."""
        return ChallengeEngine.get_day_statuses(self._challenge)

    def get_note(self, day: int) -> NoteData | None:
        """Return the note stored for `day`, if any."""
        return ChallengeEngine.get_note(self._challenge, day)

    # -------------------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------------------

    async def async_load(self) -> None:
        """Load the persisted challenge into memory."""
        self._challenge = self.store.load_challenge()
        if self._challenge is None:
            const.LOGGER.info("INFO: No active challenge found in storage")
        else:
            const.LOGGER.info(
                "INFO: Loaded challenge %s on day %s (%s)",
                self._challenge[const.DATA_CHALLENGE_INTERNAL_ID],
                self._challenge[const.DATA_CHALLENGE_CURRENT_DAY],
                self._challenge[const.DATA_CHALLENGE_STATUS],
            )

    async def _async_update_data(self) -> ChallengeSnapshot:
        """Run a time check and return the snapshot (used by first refresh)."""
        async with self._lock:
            await self._async_apply_time_check()
        return self.get_snapshot()

    @callback
    def async_start_schedule(self) -> None:
        """Start the recurring time check. Safe to call more than once."""
        if self._unsub_schedule is not None:
            return
        self._unsub_schedule = async_track_time_interval(
            self.hass, self._async_scheduled_check, self.check_interval
        )
        const.LOGGER.debug(
            "DEBUG: Scheduled challenge status check every %s", self.check_interval
        )

    @callback
    def async_stop_schedule(self) -> None:
        """Stop the recurring time check."""
        if self._unsub_schedule is None:
            return
        self._unsub_schedule()
        self._unsub_schedule = None
        const.LOGGER.debug("DEBUG: Stopped challenge status check schedule")

    @property
    def schedule_active(self) -> bool:
        """Return True while the recurring check is registered."""
        return self._unsub_schedule is not None

    async def async_shutdown(self) -> None:
        """Cancel the schedule and shut down the coordinator."""
        self.async_stop_schedule()
        await super().async_shutdown()

    async def _async_scheduled_check(self, _now: datetime) -> None:
        """Handle a tick of the recurring schedule."""
        await self.async_check_challenge_status()

    # -------------------------------------------------------------------------------------
    # Time handling
    # -------------------------------------------------------------------------------------

    async def async_check_challenge_status(self) -> bool:
        """Bring current_day in line with the wall clock.

        Re-entrant and idempotent: a second call on the same calendar day
        changes nothing.

        Returns:
            True when the challenge changed.
        """
        async with self._lock:
            changed = await self._async_apply_time_check()
        self._publish()
        return changed

    async def async_handle_external_time_signal(self) -> bool:
        """Handle a host signal (startup, resume, time-zone change)."""
        const.LOGGER.debug("DEBUG: External time signal received")
        return await self.async_check_challenge_status()

    async def _async_apply_time_check(self) -> bool:
        """Apply the day resolver to the record. Caller must hold the lock."""
        challenge = self._challenge
        if challenge is None:
            return False

        now = dt_util.now()
        start_date = dt_parse_date(challenge[const.DATA_CHALLENGE_START_DATE])
        if start_date is None:
            const.LOGGER.error(
                "ERROR: Challenge has an unreadable start date '%s'",
                challenge[const.DATA_CHALLENGE_START_DATE],
            )
            return False

        resolution = DayResolver.resolve(start_date, now)
        current_day = challenge[const.DATA_CHALLENGE_CURRENT_DAY]
        if resolution.day < current_day:
            const.LOGGER.warning(
                "WARNING: Clock reads day %s but challenge is on day %s; "
                "keeping day %s",
                resolution.day,
                current_day,
                current_day,
            )

        effect = ChallengeEngine.calculate_day_advance(
            challenge, resolution, self.drift_policy
        )
        if effect is None:
            if self._marker_is_stale(now):
                await self.store.async_save_challenge(challenge, now.isoformat())
            return False

        updated = copy.deepcopy(challenge)
        updated[const.DATA_CHALLENGE_CURRENT_DAY] = effect.new_day
        if effect.reset_tasks:
            for task in updated[const.DATA_CHALLENGE_TASKS]:
                task[const.DATA_TASK_COMPLETED] = False
        if effect.new_status is not None:
            updated[const.DATA_CHALLENGE_STATUS] = effect.new_status  # type: ignore[typeddict-item]

        self._challenge = updated
        await self.store.async_save_challenge(updated, now.isoformat())

        if effect.reset_tasks:
            const.LOGGER.info(
                "INFO: Challenge advanced from day %s to day %s (%s skipped); "
                "tasks reset",
                effect.previous_day,
                effect.new_day,
                effect.skipped_days,
            )
        if effect.new_status is not None:
            const.LOGGER.info(
                "INFO: Challenge status changed to '%s' on day %s",
                effect.new_status,
                effect.new_day,
            )
        return True

    def _marker_is_stale(self, now: datetime) -> bool:
        """Return True when the last-update marker is from an earlier day."""
        marker = dt_parse_datetime(self.store.last_update)
        if marker is None:
            return True
        return dt_util.as_local(marker).date() != now.date()

    # -------------------------------------------------------------------------------------
    # Intents
    # -------------------------------------------------------------------------------------

    async def async_start_new_challenge(self, tasks: list[TaskData]) -> bool:
        """Start a new challenge with `tasks`, replacing any active one.

        Returns:
            False when the task selection is empty (nothing is created).
        """
        errors = db.validate_task_selection(tasks)
        if errors:
            const.LOGGER.warning(
                "WARNING: Start Challenge: %s", errors.get("base", errors)
            )
            return False

        async with self._lock:
            if self._challenge is not None:
                const.LOGGER.info(
                    "INFO: Replacing active challenge %s",
                    self._challenge[const.DATA_CHALLENGE_INTERNAL_ID],
                )
            now = dt_util.now()
            challenge = db.build_challenge(tasks, now.date(), dt_util.utcnow())
            self._challenge = challenge
            self._selected_day = None
            self._show_edit_tip = True
            await self.store.async_save_challenge(challenge, now.isoformat())

        const.LOGGER.info(
            "INFO: Started challenge %s with %s tasks on %s",
            challenge[const.DATA_CHALLENGE_INTERNAL_ID],
            len(tasks),
            challenge[const.DATA_CHALLENGE_START_DATE],
        )
        self._publish()
        return True

    async def async_reset_challenge(self) -> None:
        """Discard the active challenge and all persisted data."""
        async with self._lock:
            self._challenge = None
            self._selected_day = None
            self._show_edit_tip = False
            await self.store.async_clear()

        const.LOGGER.info("INFO: Challenge reset; no active challenge")
        self._publish()

    async def async_toggle_task(self, task_id: str) -> bool:
        """Flip a task's completed flag on the current day.

        The time check runs first inside the same lock, so a toggle made just
        after midnight lands on the new day.

        Returns:
            False for a missing challenge, unknown task or finished challenge.
        """
        async with self._lock:
            await self._async_apply_time_check()
            challenge = self._challenge
            if challenge is None:
                const.LOGGER.warning(
                    "WARNING: Toggle Task: %s", const.ERROR_NO_ACTIVE_CHALLENGE
                )
                return False

            effect = ChallengeEngine.calculate_toggle(challenge, task_id)
            if effect is None:
                const.LOGGER.warning(
                    "WARNING: Toggle Task: ignored for task '%s' (challenge %s)",
                    task_id,
                    challenge[const.DATA_CHALLENGE_STATUS],
                )
                self._publish()
                return False

            updated = copy.deepcopy(challenge)
            updated[const.DATA_CHALLENGE_TASKS][effect.task_index][
                const.DATA_TASK_COMPLETED
            ] = effect.completed
            updated[const.DATA_CHALLENGE_COMPLETED_DAYS] = effect.completed_days
            if effect.new_status is not None:
                updated[const.DATA_CHALLENGE_STATUS] = effect.new_status  # type: ignore[typeddict-item]
            self._challenge = updated
            await self.store.async_save_challenge(updated)

        const.LOGGER.debug(
            "DEBUG: Task '%s' completed=%s on day %s",
            task_id,
            effect.completed,
            updated[const.DATA_CHALLENGE_CURRENT_DAY],
        )
        if effect.new_status is not None:
            const.LOGGER.info(
                "INFO: Challenge status changed to '%s' on day %s",
                effect.new_status,
                updated[const.DATA_CHALLENGE_CURRENT_DAY],
            )
        self._publish()
        return True

    async def async_update_task_description(self, task_id: str, description: str) -> bool:
        """Edit a task's description in place."""
        async with self._lock:
            challenge = self._challenge
            if challenge is None:
                const.LOGGER.warning(
                    "WARNING: Update Task Description: %s",
                    const.ERROR_NO_ACTIVE_CHALLENGE,
                )
                return False

            index = ChallengeEngine.find_task_index(
                challenge[const.DATA_CHALLENGE_TASKS], task_id
            )
            if index is None:
                const.LOGGER.warning(
                    "WARNING: Update Task Description: %s",
                    const.ERROR_TASK_NOT_FOUND_FMT.format(task_id),
                )
                return False

            updated = copy.deepcopy(challenge)
            updated[const.DATA_CHALLENGE_TASKS][index][
                const.DATA_TASK_DESCRIPTION
            ] = description
            self._challenge = updated
            await self.store.async_save_challenge(updated)

        self._publish()
        return True

    async def async_add_or_update_note(
        self, day_number: int, content: str, mood: str | None = None
    ) -> bool:
        """Store the note for `day_number`; a later note replaces an earlier one."""
        errors = db.validate_note_data(day_number, content, mood)
        if errors:
            const.LOGGER.warning("WARNING: Add Note: %s", errors)
            return False

        async with self._lock:
            challenge = self._challenge
            if challenge is None:
                const.LOGGER.warning(
                    "WARNING: Add Note: %s", const.ERROR_NO_ACTIVE_CHALLENGE
                )
                return False

            existing = ChallengeEngine.get_note(challenge, day_number)
            note = db.build_note(
                day_number, content, mood, existing=existing, now=dt_util.utcnow()
            )
            updated = copy.deepcopy(challenge)
            updated[const.DATA_CHALLENGE_NOTES] = ChallengeEngine.upsert_note(
                updated[const.DATA_CHALLENGE_NOTES], note
            )
            self._challenge = updated
            await self.store.async_save_challenge(updated)

        const.LOGGER.debug(
            "DEBUG: %s note for day %s",
            "Updated" if existing else "Added",
            day_number,
        )
        self._publish()
        return True

    async def async_hide_edit_tip(self) -> None:
        """Clear the first-run edit tip flag."""
        async with self._lock:
            self._show_edit_tip = False
        self._publish()

    async def async_select_day(self, day: int | None) -> bool:
        """Select a day for editing, or clear the selection with None."""
        if day is not None and not db.is_valid_day(day):
            const.LOGGER.warning(
                "WARNING: Select Day: %s",
                const.ERROR_DAY_OUT_OF_RANGE_FMT.format(
                    day, const.CHALLENGE_LENGTH_DAYS
                ),
            )
            return False
        async with self._lock:
            self._selected_day = day
        self._publish()
        return True

    # -------------------------------------------------------------------------------------
    # Publishing
    # -------------------------------------------------------------------------------------

    @callback
    def _publish(self) -> None:
        """Push the current snapshot to listeners."""
        self.async_set_updated_data(self.get_snapshot())

    def as_dict(self) -> dict[str, Any]:
        """Return snapshot plus derived calendar data (diagnostics)."""
        return {
            **self.get_snapshot(),
            const.ATTR_DAY_STATUSES: self.get_day_statuses(),
        }
