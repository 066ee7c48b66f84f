"""Tests for the Project 50 sensors."""

import pytest
from homeassistant.core import HomeAssistant
from homeassistant.helpers import entity_registry as er
from pytest_homeassistant_custom_component.common import MockConfigEntry

from custom_components.project50 import const
from tests.conftest import (
    create_mock_challenge,
    create_mock_storage,
    create_mock_task,
    get_coordinator,
)

PROGRESSING = create_mock_storage(
    create_mock_challenge(
        current_day=3,
        tasks=[
            create_mock_task("Wake up", completed=True),
            create_mock_task("Exercise"),
            create_mock_task("Reading"),
        ],
        completed_days=[1, 2],
        notes={
            "1": {
                "internal_id": "n1",
                "day_number": 1,
                "content": "Started",
                "mood": "great",
                "created_at": "2026-02-28T20:00:00+00:00",
            }
        },
        start_date="2026-02-28",
    ),
    "2026-03-02T12:00:00-08:00",
)


def _entity_id(hass: HomeAssistant, entry: MockConfigEntry, key: str) -> str:
    entity_id = er.async_get(hass).async_get_entity_id(
        "sensor", const.DOMAIN, f"{entry.entry_id}_{key}"
    )
    assert entity_id is not None
    return entity_id


async def test_sensors_without_challenge(
    hass: HomeAssistant, init_integration: MockConfigEntry
) -> None:
    """With no challenge the sensors are unknown."""
    for key in (
        const.SENSOR_KEY_CURRENT_DAY,
        const.SENSOR_KEY_STATUS,
        const.SENSOR_KEY_TODAY_PROGRESS,
    ):
        state = hass.states.get(_entity_id(hass, init_integration, key))
        assert state is not None
        assert state.state == "unknown"


@pytest.mark.parametrize("mock_storage_data", [PROGRESSING])
async def test_sensor_states_and_attributes(
    hass: HomeAssistant, init_integration: MockConfigEntry
) -> None:
    """Sensors expose the day, status, progress and overview."""
    day_state = hass.states.get(
        _entity_id(hass, init_integration, const.SENSOR_KEY_CURRENT_DAY)
    )
    assert day_state.state == "3"
    attrs = day_state.attributes
    assert attrs[const.ATTR_START_DATE] == "2026-02-28"
    assert attrs[const.ATTR_COMPLETED_DAYS] == [1, 2]
    assert attrs[const.ATTR_COMPLETED_DAY_COUNT] == 2
    assert attrs[const.ATTR_CURRENT_STREAK] == 2
    assert attrs[const.ATTR_LONGEST_STREAK] == 2
    assert attrs[const.ATTR_NOTE_COUNT] == 1
    assert attrs[const.ATTR_DAY_STATUSES]["1"] == {
        "status": const.DAY_STATUS_COMPLETED,
        "has_note": True,
    }
    assert attrs[const.ATTR_DAY_STATUSES]["3"] == {
        "status": const.DAY_STATUS_CURRENT,
        "has_note": False,
    }
    assert attrs[const.ATTR_DAY_STATUSES]["4"]["status"] == const.DAY_STATUS_UPCOMING
    assert len(attrs[const.ATTR_DAY_STATUSES]) == const.CHALLENGE_LENGTH_DAYS

    status_state = hass.states.get(
        _entity_id(hass, init_integration, const.SENSOR_KEY_STATUS)
    )
    assert status_state.state == const.CHALLENGE_STATUS_ONGOING

    progress_state = hass.states.get(
        _entity_id(hass, init_integration, const.SENSOR_KEY_TODAY_PROGRESS)
    )
    assert float(progress_state.state) == 33.33
    assert progress_state.attributes[const.ATTR_TASKS_COMPLETED] == 1
    assert progress_state.attributes[const.ATTR_TASKS_TOTAL] == 3
    assert len(progress_state.attributes[const.ATTR_TASKS]) == 3


@pytest.mark.parametrize("mock_storage_data", [PROGRESSING])
async def test_sensors_follow_changes(
    hass: HomeAssistant, init_integration: MockConfigEntry
) -> None:
    """Every published change reaches the sensors."""
    coordinator = get_coordinator(hass, init_integration)

    await coordinator.async_toggle_task("task-exercise")
    await coordinator.async_toggle_task("task-reading")
    await hass.async_block_till_done()

    progress_state = hass.states.get(
        _entity_id(hass, init_integration, const.SENSOR_KEY_TODAY_PROGRESS)
    )
    assert float(progress_state.state) == 100.0

    day_state = hass.states.get(
        _entity_id(hass, init_integration, const.SENSOR_KEY_CURRENT_DAY)
    )
    assert day_state.attributes[const.ATTR_COMPLETED_DAYS] == [1, 2, 3]
    assert day_state.attributes[const.ATTR_CURRENT_STREAK] == 3


@pytest.mark.parametrize("mock_storage_data", [PROGRESSING])
async def test_calendar_overview_tracks_notes(
    hass: HomeAssistant, init_integration: MockConfigEntry
) -> None:
    """Adding a note flags that day in the calendar overview."""
    coordinator = get_coordinator(hass, init_integration)
    entity_id = _entity_id(hass, init_integration, const.SENSOR_KEY_CURRENT_DAY)
    assert hass.states.get(entity_id).attributes[const.ATTR_DAY_STATUSES]["3"][
        "has_note"
    ] is False

    assert await coordinator.async_add_or_update_note(3, "Halfway through the week")
    await hass.async_block_till_done()

    overview = hass.states.get(entity_id).attributes[const.ATTR_DAY_STATUSES]
    assert overview["3"] == {"status": const.DAY_STATUS_CURRENT, "has_note": True}
    assert overview["2"] == {"status": const.DAY_STATUS_COMPLETED, "has_note": False}
