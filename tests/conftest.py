"""Shared fixtures for Project 50 tests."""

import copy
from typing import Any

from freezegun import freeze_time
import pytest
from homeassistant.core import HomeAssistant
from pytest_homeassistant_custom_component.common import MockConfigEntry

from custom_components.project50 import const
from custom_components.project50.coordinator import Project50Coordinator

# pylint: disable=invalid-name
pytest_plugins = "pytest_homeassistant_custom_component"
# pylint: enable=invalid-name

# Noon in the test time zone (US/Pacific) on 2026-03-02
START_MOMENT = "2026-03-02 20:00:00"
START_DATE = "2026-03-02"


@pytest.fixture(autouse=True)
def auto_enable_custom_integrations(enable_custom_integrations: Any) -> Any:
    """Enable custom integrations in tests."""
    # pylint: disable=unused-argument
    yield


@pytest.fixture
def frozen_time():
    """Freeze the clock at START_MOMENT; tests move it with move_to/tick."""
    with freeze_time(START_MOMENT) as frozen:
        yield frozen


@pytest.fixture
def entry_options() -> dict[str, Any]:
    """Return the options of the mock config entry."""
    return {
        const.CONF_DRIFT_POLICY: const.DRIFT_POLICY_FAST_FORWARD,
        const.CONF_CHECK_INTERVAL: const.DEFAULT_CHECK_INTERVAL,
    }


@pytest.fixture
def mock_config_entry(
    entry_options: dict[str, Any],  # pylint: disable=redefined-outer-name
) -> MockConfigEntry:
    """Return a mock config entry."""
    return MockConfigEntry(
        domain=const.DOMAIN,
        title=const.PROJECT50_TITLE,
        data={},
        options=entry_options,
        entry_id="test_entry_id",
    )


@pytest.fixture
def mock_storage_data() -> dict[str, Any] | None:
    """Return the storage blob present before setup (None: fresh install)."""
    return None


@pytest.fixture
async def init_integration(
    hass: HomeAssistant,
    hass_storage: dict[str, Any],
    frozen_time: Any,  # pylint: disable=redefined-outer-name,unused-argument
    mock_config_entry: MockConfigEntry,  # pylint: disable=redefined-outer-name
    mock_storage_data: dict[str, Any] | None,  # pylint: disable=redefined-outer-name
) -> MockConfigEntry:
    """Set up the Project 50 integration with the given storage contents."""
    if mock_storage_data is not None:
        hass_storage[const.STORAGE_KEY] = {
            "version": const.STORAGE_VERSION,
            "minor_version": 1,
            "key": const.STORAGE_KEY,
            "data": copy.deepcopy(mock_storage_data),
        }

    mock_config_entry.add_to_hass(hass)
    assert await hass.config_entries.async_setup(mock_config_entry.entry_id)
    await hass.async_block_till_done()

    return mock_config_entry


def get_coordinator(hass: HomeAssistant, entry: MockConfigEntry) -> Project50Coordinator:
    """Return the coordinator of a loaded entry."""
    return hass.data[const.DOMAIN][entry.entry_id][const.COORDINATOR]


def stored_data(hass_storage: dict[str, Any]) -> dict[str, Any]:
    """Return the blob most recently written to storage."""
    return hass_storage[const.STORAGE_KEY]["data"]


def create_mock_task(
    title: str = "Test Task",
    completed: bool = False,
    task_id: str | None = None,
    category: str = const.TASK_CATEGORY_CUSTOM,
) -> dict[str, Any]:
    """Create mock task data for testing."""
    return {
        "internal_id": task_id or f"task-{title.lower().replace(' ', '-')}",
        "title": title,
        "description": "",
        "category": category,
        "icon": "mdi:star",
        "completed": completed,
        "reminder_time": None,
    }


def create_mock_challenge(
    start_date: str = START_DATE,
    current_day: int = 1,
    tasks: list[dict[str, Any]] | None = None,
    completed_days: list[int] | None = None,
    status: str = const.CHALLENGE_STATUS_ONGOING,
    notes: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Create mock challenge data for testing."""
    if tasks is None:
        tasks = [
            create_mock_task("Wake up"),
            create_mock_task("Exercise"),
            create_mock_task("Reading"),
        ]
    return {
        "internal_id": "challenge-1",
        "start_date": start_date,
        "current_day": current_day,
        "tasks": tasks,
        "notes": notes or {},
        "completed_days": completed_days or [],
        "status": status,
        "created_at": "2026-03-02T20:00:00+00:00",
    }


def create_mock_storage(
    challenge: dict[str, Any] | None = None, last_update: str | None = None
) -> dict[str, Any]:
    """Create a complete storage blob for testing."""
    return {
        "meta": {"schema_version": const.SCHEMA_VERSION},
        "challenge": challenge,
        "last_update": last_update,
    }
