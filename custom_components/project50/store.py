# File: store.py
"""Handles persistent data storage for the Project 50 integration.

Uses Home Assistant's Storage helper to save and load the active challenge,
ensuring the state is preserved across restarts. The blob holds two keys:
the serialized challenge record and the "last update" marker written after
every time check.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from homeassistant.exceptions import HomeAssistantError
from homeassistant.helpers.storage import Store

from . import const
from .data_builders import parse_challenge

if TYPE_CHECKING:
    from homeassistant.core import HomeAssistant

    from .type_defs import ChallengeData, StorageData


class Project50Store:
    """Persistence gateway for the single active challenge.

    Thin wrapper around Home Assistant's Store API. The coordinator only
    needs load/save/clear; everything about file handling stays here.
    """

    def __init__(
        self, hass: HomeAssistant, storage_key: str = const.STORAGE_KEY
    ) -> None:
        """Initialize the store.

        Args:
            hass: Home Assistant core object.
            storage_key: Key to identify storage location (default: const.STORAGE_KEY).

        """
        self.hass = hass
        self._storage_key = storage_key
        self._store: Store = Store(hass, const.STORAGE_VERSION, storage_key)
        self._data: StorageData = Project50Store.get_default_structure()

    @staticmethod
    def get_default_structure() -> StorageData:
        """Return canonical empty data structure for fresh installations."""
        return {
            const.DATA_META: {
                const.DATA_META_SCHEMA_VERSION: const.SCHEMA_VERSION,
            },
            const.DATA_CHALLENGE: None,
            const.DATA_LAST_UPDATE: None,
        }

    async def async_initialize(self) -> None:
        """Load data from storage during startup.

        If no data exists, or the file cannot be decoded, initializes with an
        empty structure.
        """
        const.LOGGER.debug("DEBUG: Project50Store: Loading data from storage")
        try:
            existing_data = await self._store.async_load()
        except HomeAssistantError as err:
            const.LOGGER.error(
                "ERROR: Stored challenge data could not be decoded: %s. "
                "Starting without an active challenge",
                err,
            )
            existing_data = None

        if not isinstance(existing_data, dict):
            if existing_data is not None:
                const.LOGGER.error(
                    "ERROR: Stored challenge data has unexpected type %s. "
                    "Starting without an active challenge",
                    type(existing_data).__name__,
                )
            const.LOGGER.info("INFO: No existing storage found. Initializing new data")
            self._data = Project50Store.get_default_structure()
            return

        self._data = Project50Store.get_default_structure()
        self._data[const.DATA_CHALLENGE] = existing_data.get(const.DATA_CHALLENGE)
        self._data[const.DATA_LAST_UPDATE] = existing_data.get(const.DATA_LAST_UPDATE)
        const.LOGGER.debug(
            "DEBUG: Loaded existing data from storage: challenge=%s, last_update=%s",
            self._data[const.DATA_CHALLENGE] is not None,
            self._data[const.DATA_LAST_UPDATE],
        )

    @property
    def data(self) -> StorageData:
        """Retrieve the in-memory data cache."""
        return self._data

    @property
    def last_update(self) -> str | None:
        """Return the ISO timestamp of the last time check, if any."""
        return self._data[const.DATA_LAST_UPDATE]

    def get_storage_path(self) -> str:
        """Get the storage file path."""
        return self._store.path

    def load_challenge(self) -> ChallengeData | None:
        """Return the stored challenge, or None if absent or unusable.

        A record that fails to parse is treated as "no challenge exists".
        """
        raw: Any = self._data[const.DATA_CHALLENGE]
        if raw is None:
            return None
        try:
            return parse_challenge(raw)
        except (KeyError, TypeError, ValueError) as err:
            const.LOGGER.error(
                "ERROR: Stored challenge is invalid and will be ignored: %s", err
            )
            return None

    async def async_save_challenge(
        self, challenge: ChallengeData | None, last_update: str | None = None
    ) -> None:
        """Replace the stored challenge (and optionally the marker) and save."""
        self._data[const.DATA_CHALLENGE] = challenge
        if last_update is not None:
            self._data[const.DATA_LAST_UPDATE] = last_update
        await self.async_save()

    async def async_save(self) -> None:
        """Save the current data structure to storage asynchronously.

        Raises:
            No exceptions raised - errors are logged and the session continues
            with in-memory state only.
            HomeAssistantError: Logged when the storage helper fails to write
                (WriteError) or to serialize (SerializationError) the data.
            OSError: Logged when file system issues prevent saving.
            TypeError: Logged when data contains non-serializable types.
            ValueError: Logged when data is invalid for JSON serialization.
        """
        try:
            await self._store.async_save(self._data)
            const.LOGGER.debug("DEBUG: Data saved successfully to storage")
        except HomeAssistantError as err:
            const.LOGGER.error(
                "ERROR: Failed to save storage: %s. Continuing with in-memory "
                "data for %s",
                err,
                self._store.path,
            )
        except OSError as err:
            const.LOGGER.error(
                "ERROR: Failed to save storage due to file system error: %s. "
                "Check disk space and file permissions for %s",
                err,
                self._store.path,
            )
        except TypeError as err:
            const.LOGGER.error(
                "ERROR: Failed to save storage due to non-serializable data: %s. "
                "Data contains types that cannot be converted to JSON",
                err,
            )
        except ValueError as err:
            const.LOGGER.error(
                "ERROR: Failed to save storage due to invalid data format: %s. "
                "Data structure may be corrupted",
                err,
            )

    async def async_clear(self) -> None:
        """Drop the challenge and marker, and remove the storage file."""
        const.LOGGER.warning("WARNING: Clearing all Project 50 data and storage")
        self._data = Project50Store.get_default_structure()

        try:
            await self._store.async_remove()
            const.LOGGER.info(
                "INFO: Storage file removed successfully: %s",
                self._store.path,
            )
        except (HomeAssistantError, OSError) as err:
            const.LOGGER.error(
                "ERROR: Failed to remove storage file %s: %s. Check file permissions",
                self._store.path,
                err,
            )
