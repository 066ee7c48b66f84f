# File: sensor.py
"""Sensors for the Project 50 integration.

Sensors Defined in This File (3):

01. ChallengeCurrentDaySensor
02. ChallengeStatusSensor
03. ChallengeTodayProgressSensor

All sensors read the coordinator snapshot only; none of them mutates state.
"""

from typing import Any

from homeassistant.components.sensor import (
    SensorDeviceClass,
    SensorEntity,
    SensorStateClass,
)
from homeassistant.config_entries import ConfigEntry
from homeassistant.const import PERCENTAGE
from homeassistant.core import HomeAssistant

from . import const
from .coordinator import Project50Coordinator
from .engines import ChallengeEngine
from .entity import Project50CoordinatorEntity


async def async_setup_entry(
    hass: HomeAssistant, entry: ConfigEntry, async_add_entities
):
    """Set up sensors for the Project 50 integration."""
    data = hass.data[const.DOMAIN][entry.entry_id]
    coordinator: Project50Coordinator = data[const.COORDINATOR]

    async_add_entities(
        [
            ChallengeCurrentDaySensor(coordinator, entry),
            ChallengeStatusSensor(coordinator, entry),
            ChallengeTodayProgressSensor(coordinator, entry),
        ]
    )


# ------------------------------------------------------------------------------------------
class ChallengeCurrentDaySensor(Project50CoordinatorEntity, SensorEntity):
    """Sensor for the current challenge day.

    Carries the calendar overview, completed days, streaks, notes count and
    the editing state in its attributes so a dashboard can render the whole
    challenge from this one entity.
    """

    _attr_icon = const.ICON_CALENDAR
    _attr_state_class = SensorStateClass.MEASUREMENT

    def __init__(self, coordinator: Project50Coordinator, entry: ConfigEntry):
        """Initialize the sensor."""
        super().__init__(coordinator, entry, const.SENSOR_KEY_CURRENT_DAY)

    @property
    def native_value(self) -> int | None:
        """Return the current day, or None without a challenge."""
        challenge = self.coordinator.challenge
        if challenge is None:
            return None
        return challenge[const.DATA_CHALLENGE_CURRENT_DAY]

    @property
    def extra_state_attributes(self) -> dict[str, Any]:
        """Expose the challenge overview."""
        coordinator = self.coordinator
        attributes: dict[str, Any] = {
            const.ATTR_SELECTED_DAY: coordinator.selected_day,
            const.ATTR_SHOW_EDIT_TIP: coordinator.show_edit_tip,
            const.ATTR_LAST_UPDATE: coordinator.store.last_update,
        }
        challenge = coordinator.challenge
        if challenge is None:
            return attributes

        current_streak, longest_streak = ChallengeEngine.calculate_streaks(challenge)
        completed_days = list(challenge[const.DATA_CHALLENGE_COMPLETED_DAYS])
        attributes.update(
            {
                const.ATTR_START_DATE: challenge[const.DATA_CHALLENGE_START_DATE],
                const.ATTR_STATUS: challenge[const.DATA_CHALLENGE_STATUS],
                const.ATTR_COMPLETED_DAYS: completed_days,
                const.ATTR_COMPLETED_DAY_COUNT: len(completed_days),
                const.ATTR_CURRENT_STREAK: current_streak,
                const.ATTR_LONGEST_STREAK: longest_streak,
                const.ATTR_NOTE_COUNT: len(challenge[const.DATA_CHALLENGE_NOTES]),
                const.ATTR_DAY_STATUSES: {
                    str(day_status[const.DAY_STATUS_KEY_DAY]): {
                        const.DAY_STATUS_KEY_STATUS: day_status[
                            const.DAY_STATUS_KEY_STATUS
                        ],
                        const.DAY_STATUS_KEY_HAS_NOTE: day_status[
                            const.DAY_STATUS_KEY_HAS_NOTE
                        ],
                    }
                    for day_status in coordinator.get_day_statuses()
                },
            }
        )
        return attributes


# ------------------------------------------------------------------------------------------
class ChallengeStatusSensor(Project50CoordinatorEntity, SensorEntity):
    """Sensor for the challenge status (ongoing / completed / failed)."""

    _attr_icon = const.ICON_STATUS
    _attr_device_class = SensorDeviceClass.ENUM
    _attr_options = const.CHALLENGE_STATUSES

    def __init__(self, coordinator: Project50Coordinator, entry: ConfigEntry):
        """Initialize the sensor."""
        super().__init__(coordinator, entry, const.SENSOR_KEY_STATUS)

    @property
    def native_value(self) -> str | None:
        """Return the challenge status, or None without a challenge."""
        challenge = self.coordinator.challenge
        if challenge is None:
            return None
        return challenge[const.DATA_CHALLENGE_STATUS]


# ------------------------------------------------------------------------------------------
class ChallengeTodayProgressSensor(Project50CoordinatorEntity, SensorEntity):
    """Sensor for the share of today's tasks already completed.

    The task list itself is exposed in the attributes, which is where the
    task ids needed by the toggle_task service come from.
    """

    _attr_icon = const.ICON_PROGRESS
    _attr_native_unit_of_measurement = PERCENTAGE
    _attr_state_class = SensorStateClass.MEASUREMENT

    def __init__(self, coordinator: Project50Coordinator, entry: ConfigEntry):
        """Initialize the sensor."""
        super().__init__(coordinator, entry, const.SENSOR_KEY_TODAY_PROGRESS)

    @property
    def native_value(self) -> float | None:
        """Return today's completion percentage."""
        challenge = self.coordinator.challenge
        if challenge is None:
            return None
        _, _, percentage = ChallengeEngine.calculate_today_progress(
            challenge[const.DATA_CHALLENGE_TASKS]
        )
        return percentage

    @property
    def extra_state_attributes(self) -> dict[str, Any]:
        """Expose today's tasks and counts."""
        challenge = self.coordinator.challenge
        if challenge is None:
            return {}
        tasks = challenge[const.DATA_CHALLENGE_TASKS]
        done, total, _ = ChallengeEngine.calculate_today_progress(tasks)
        return {
            const.ATTR_TASKS_COMPLETED: done,
            const.ATTR_TASKS_TOTAL: total,
            const.ATTR_TASKS: [dict(task) for task in tasks],
        }
