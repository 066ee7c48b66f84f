"""Diagnostics support for the Project 50 integration.

Returns the raw storage blob next to the live snapshot so a stored challenge
can be compared against what the sensors show.
"""

from typing import Any

from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant

from . import const
from .coordinator import Project50Coordinator


async def async_get_config_entry_diagnostics(
    hass: HomeAssistant, entry: ConfigEntry
) -> dict[str, Any]:
    """Return diagnostics for a config entry."""
    coordinator: Project50Coordinator = hass.data[const.DOMAIN][entry.entry_id][
        const.COORDINATOR
    ]

    return {
        "options": dict(entry.options),
        "storage": coordinator.store.data,
        "state": coordinator.as_dict(),
    }
