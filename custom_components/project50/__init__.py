"""Initialization file for the Project 50 integration.

Handles setting up the integration, including loading configuration entries,
initializing data storage, and preparing the coordinator for data handling.

Key Features:
- Config entry setup and unload support.
- Coordinator initialization and the recurring challenge status check.
- Forwarding of startup and time-zone change events to the coordinator.
"""

from __future__ import annotations

from homeassistant.config_entries import ConfigEntry
from homeassistant.const import EVENT_CORE_CONFIG_UPDATE
from homeassistant.core import Event, HomeAssistant
from homeassistant.exceptions import ConfigEntryNotReady
from homeassistant.helpers.start import async_at_started
from homeassistant.util import dt as dt_util

from . import const
from .coordinator import Project50Coordinator
from .services import async_setup_services, async_unload_services
from .store import Project50Store
from .utils.dt_utils import set_default_timezone


def _sync_default_timezone(hass: HomeAssistant) -> None:
    """Point the pure date helpers at the configured time zone."""
    time_zone = dt_util.get_time_zone(hass.config.time_zone)
    if time_zone is not None:
        set_default_timezone(time_zone)


async def async_setup_entry(hass: HomeAssistant, entry: ConfigEntry) -> bool:
    """Set up the integration from a config entry."""
    const.LOGGER.info("INFO: Starting setup for Project 50 entry: %s", entry.entry_id)

    # Must be done before any component uses the date helpers
    _sync_default_timezone(hass)

    store = Project50Store(hass, const.STORAGE_KEY)
    await store.async_initialize()

    coordinator = Project50Coordinator(hass, entry, store)
    await coordinator.async_load()

    try:
        # First refresh runs the initial time check.
        await coordinator.async_config_entry_first_refresh()
    except ConfigEntryNotReady as e:
        const.LOGGER.error("ERROR: Failed to refresh coordinator data: %s", e)
        raise

    hass.data.setdefault(const.DOMAIN, {})[entry.entry_id] = {
        const.COORDINATOR: coordinator,
        const.STORE: store,
    }

    coordinator.async_start_schedule()
    entry.async_on_unload(coordinator.async_stop_schedule)

    async def _handle_config_update(_event: Event) -> None:
        """Re-check the day after a core config (time zone) change."""
        _sync_default_timezone(hass)
        await coordinator.async_handle_external_time_signal()

    async def _handle_started(_hass: HomeAssistant) -> None:
        """Re-check the day once Home Assistant has fully started."""
        await coordinator.async_handle_external_time_signal()

    entry.async_on_unload(
        hass.bus.async_listen(EVENT_CORE_CONFIG_UPDATE, _handle_config_update)
    )
    entry.async_on_unload(async_at_started(hass, _handle_started))
    entry.async_on_unload(entry.add_update_listener(_async_update_listener))

    async_setup_services(hass)

    await hass.config_entries.async_forward_entry_setups(entry, const.PLATFORMS)

    const.LOGGER.info("INFO: Project 50 setup complete for entry: %s", entry.entry_id)
    return True


async def _async_update_listener(hass: HomeAssistant, entry: ConfigEntry) -> None:
    """Reload the entry after its options changed."""
    await hass.config_entries.async_reload(entry.entry_id)


async def async_unload_entry(hass: HomeAssistant, entry: ConfigEntry) -> bool:
    """Unload a config entry."""
    const.LOGGER.info("INFO: Unloading Project 50 entry: %s", entry.entry_id)

    unload_ok = await hass.config_entries.async_unload_platforms(entry, const.PLATFORMS)

    if unload_ok:
        entry_data = hass.data[const.DOMAIN].pop(entry.entry_id)
        entry_data[const.COORDINATOR].async_stop_schedule()

        if not hass.data[const.DOMAIN]:
            await async_unload_services(hass)

    return unload_ok


async def async_remove_entry(hass: HomeAssistant, entry: ConfigEntry) -> None:
    """Handle removal of a config entry."""
    const.LOGGER.info("INFO: Removing Project 50 entry: %s", entry.entry_id)

    store = Project50Store(hass, const.STORAGE_KEY)
    await store.async_clear()

    const.LOGGER.info("INFO: Project 50 entry data cleared: %s", entry.entry_id)
