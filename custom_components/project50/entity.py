"""Base entity classes for the Project 50 integration."""

from __future__ import annotations

from homeassistant.config_entries import ConfigEntry
from homeassistant.helpers.device_registry import DeviceEntryType, DeviceInfo
from homeassistant.helpers.update_coordinator import CoordinatorEntity

from . import const
from .coordinator import Project50Coordinator


def create_challenge_device_info(entry: ConfigEntry) -> DeviceInfo:
    """Return the single service device that groups all challenge entities."""
    return DeviceInfo(
        identifiers={(const.DOMAIN, entry.entry_id)},
        name=const.PROJECT50_TITLE,
        manufacturer=const.PROJECT50_TITLE,
        entry_type=DeviceEntryType.SERVICE,
    )


class Project50CoordinatorEntity(CoordinatorEntity[Project50Coordinator]):
    """Base entity class for Project 50 sensors with typed coordinator access."""

    _attr_has_entity_name = True

    def __init__(
        self, coordinator: Project50Coordinator, entry: ConfigEntry, key: str
    ) -> None:
        """Initialize the entity.

        Args:
            coordinator: Project50Coordinator instance for data access.
            entry: ConfigEntry for this integration instance.
            key: Entity key, used for the unique id and the translation key.
        """
        super().__init__(coordinator)
        self._attr_unique_id = f"{entry.entry_id}_{key}"
        self._attr_translation_key = key
        self._attr_device_info = create_challenge_device_info(entry)
