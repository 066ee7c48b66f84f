# File: services.py
"""Defines custom services for the Project 50 integration.

These services carry user intents from scripts, automations and dashboards
to the coordinator, plus a response-returning day-status query.
"""

from __future__ import annotations

import voluptuous as vol
from homeassistant.core import (
    HomeAssistant,
    ServiceCall,
    ServiceResponse,
    SupportsResponse,
)
from homeassistant.exceptions import HomeAssistantError, ServiceValidationError
from homeassistant.helpers import config_validation as cv

from . import const
from . import data_builders as db
from .coordinator import Project50Coordinator

# --- Service Schemas ---
DAY_NUMBER = vol.All(
    vol.Coerce(int), vol.Range(min=const.FIRST_DAY, max=const.CHALLENGE_LENGTH_DAYS)
)

CUSTOM_TASK_SCHEMA = vol.Schema(
    {
        vol.Required(const.FIELD_TITLE): cv.string,
        vol.Optional(const.FIELD_DESCRIPTION, default=""): cv.string,
        vol.Optional(const.FIELD_CATEGORY, default=const.TASK_CATEGORY_CUSTOM): vol.In(
            const.TASK_CATEGORIES
        ),
        vol.Optional(const.FIELD_REMINDER_TIME): cv.string,
    }
)

START_CHALLENGE_SCHEMA = vol.Schema(
    {
        vol.Optional(const.FIELD_TEMPLATES, default=[]): vol.All(
            cv.ensure_list, [cv.string]
        ),
        vol.Optional(const.FIELD_CUSTOM_TASKS, default=[]): vol.All(
            cv.ensure_list, [CUSTOM_TASK_SCHEMA]
        ),
    }
)

RESET_CHALLENGE_SCHEMA = vol.Schema({})

TOGGLE_TASK_SCHEMA = vol.Schema(
    {
        vol.Required(const.FIELD_TASK_ID): cv.string,
    }
)

UPDATE_TASK_DESCRIPTION_SCHEMA = vol.Schema(
    {
        vol.Required(const.FIELD_TASK_ID): cv.string,
        vol.Required(const.FIELD_DESCRIPTION): cv.string,
    }
)

ADD_OR_UPDATE_NOTE_SCHEMA = vol.Schema(
    {
        vol.Required(const.FIELD_DAY): DAY_NUMBER,
        vol.Required(const.FIELD_CONTENT): cv.string,
        vol.Optional(const.FIELD_MOOD): vol.In(const.MOODS),
    }
)

CHECK_CHALLENGE_STATUS_SCHEMA = vol.Schema({})

HIDE_EDIT_TIP_SCHEMA = vol.Schema({})

SELECT_DAY_SCHEMA = vol.Schema(
    {
        vol.Optional(const.FIELD_DAY): vol.Any(DAY_NUMBER, None),
    }
)

GET_DAY_STATUS_SCHEMA = vol.Schema(
    {
        vol.Required(const.FIELD_DAY): DAY_NUMBER,
    }
)

SERVICES = [
    const.SERVICE_START_CHALLENGE,
    const.SERVICE_RESET_CHALLENGE,
    const.SERVICE_TOGGLE_TASK,
    const.SERVICE_UPDATE_TASK_DESCRIPTION,
    const.SERVICE_ADD_OR_UPDATE_NOTE,
    const.SERVICE_CHECK_CHALLENGE_STATUS,
    const.SERVICE_HIDE_EDIT_TIP,
    const.SERVICE_SELECT_DAY,
    const.SERVICE_GET_DAY_STATUS,
]


def _get_coordinator(hass: HomeAssistant) -> Project50Coordinator:
    """Return the coordinator of the (single) loaded entry."""
    entries = hass.data.get(const.DOMAIN, {})
    if not entries:
        raise HomeAssistantError(const.MSG_NO_ENTRY_FOUND)
    entry_data = next(iter(entries.values()))
    return entry_data[const.COORDINATOR]


def _require_challenge(coordinator: Project50Coordinator, action: str) -> None:
    """Raise when there is no active challenge to act on."""
    if coordinator.challenge is None:
        const.LOGGER.warning("WARNING: %s: %s", action, const.ERROR_NO_ACTIVE_CHALLENGE)
        raise HomeAssistantError(const.ERROR_NO_ACTIVE_CHALLENGE)


def async_setup_services(hass: HomeAssistant) -> None:
    """Register Project 50 services."""
    if hass.services.has_service(const.DOMAIN, const.SERVICE_START_CHALLENGE):
        return

    async def handle_start_challenge(call: ServiceCall) -> None:
        """Handle starting a new challenge."""
        coordinator = _get_coordinator(hass)
        tasks, errors = db.build_task_selection(
            call.data[const.FIELD_TEMPLATES], call.data[const.FIELD_CUSTOM_TASKS]
        )
        if errors:
            raise ServiceValidationError("; ".join(errors.values()))
        if not await coordinator.async_start_new_challenge(tasks):
            raise ServiceValidationError(const.ERROR_EMPTY_TASK_SELECTION)

    async def handle_reset_challenge(_call: ServiceCall) -> None:
        """Handle resetting the challenge."""
        coordinator = _get_coordinator(hass)
        await coordinator.async_reset_challenge()

    async def handle_toggle_task(call: ServiceCall) -> None:
        """Handle toggling a task on the current day."""
        coordinator = _get_coordinator(hass)
        _require_challenge(coordinator, "Toggle Task")
        task_id = call.data[const.FIELD_TASK_ID]
        if not await coordinator.async_toggle_task(task_id):
            challenge = coordinator.challenge
            if challenge is not None and challenge[
                const.DATA_CHALLENGE_STATUS
            ] != const.CHALLENGE_STATUS_ONGOING:
                raise HomeAssistantError(
                    const.ERROR_CHALLENGE_NOT_ONGOING_FMT.format(
                        challenge[const.DATA_CHALLENGE_STATUS]
                    )
                )
            raise HomeAssistantError(const.ERROR_TASK_NOT_FOUND_FMT.format(task_id))

    async def handle_update_task_description(call: ServiceCall) -> None:
        """Handle editing a task description."""
        coordinator = _get_coordinator(hass)
        _require_challenge(coordinator, "Update Task Description")
        task_id = call.data[const.FIELD_TASK_ID]
        if not await coordinator.async_update_task_description(
            task_id, call.data[const.FIELD_DESCRIPTION]
        ):
            raise HomeAssistantError(const.ERROR_TASK_NOT_FOUND_FMT.format(task_id))

    async def handle_add_or_update_note(call: ServiceCall) -> None:
        """Handle adding or replacing the note for a day."""
        coordinator = _get_coordinator(hass)
        _require_challenge(coordinator, "Add Note")
        content = call.data[const.FIELD_CONTENT]
        if not content.strip():
            raise ServiceValidationError(const.ERROR_EMPTY_NOTE)
        await coordinator.async_add_or_update_note(
            call.data[const.FIELD_DAY], content, call.data.get(const.FIELD_MOOD)
        )

    async def handle_check_challenge_status(_call: ServiceCall) -> None:
        """Handle a manual status check."""
        coordinator = _get_coordinator(hass)
        await coordinator.async_check_challenge_status()

    async def handle_hide_edit_tip(_call: ServiceCall) -> None:
        """Handle dismissing the edit tip."""
        coordinator = _get_coordinator(hass)
        await coordinator.async_hide_edit_tip()

    async def handle_select_day(call: ServiceCall) -> None:
        """Handle selecting (or clearing) the day being edited."""
        coordinator = _get_coordinator(hass)
        await coordinator.async_select_day(call.data.get(const.FIELD_DAY))

    async def handle_get_day_status(call: ServiceCall) -> ServiceResponse:
        """Return the status of a day and its note, if any."""
        coordinator = _get_coordinator(hass)
        day = call.data[const.FIELD_DAY]
        result = dict(coordinator.get_day_status(day))
        note = coordinator.get_note(day)
        result[const.FIELD_CONTENT] = note[const.DATA_NOTE_CONTENT] if note else None
        result[const.FIELD_MOOD] = note[const.DATA_NOTE_MOOD] if note else None
        return result

    hass.services.async_register(
        const.DOMAIN,
        const.SERVICE_START_CHALLENGE,
        handle_start_challenge,
        schema=START_CHALLENGE_SCHEMA,
    )
    hass.services.async_register(
        const.DOMAIN,
        const.SERVICE_RESET_CHALLENGE,
        handle_reset_challenge,
        schema=RESET_CHALLENGE_SCHEMA,
    )
    hass.services.async_register(
        const.DOMAIN,
        const.SERVICE_TOGGLE_TASK,
        handle_toggle_task,
        schema=TOGGLE_TASK_SCHEMA,
    )
    hass.services.async_register(
        const.DOMAIN,
        const.SERVICE_UPDATE_TASK_DESCRIPTION,
        handle_update_task_description,
        schema=UPDATE_TASK_DESCRIPTION_SCHEMA,
    )
    hass.services.async_register(
        const.DOMAIN,
        const.SERVICE_ADD_OR_UPDATE_NOTE,
        handle_add_or_update_note,
        schema=ADD_OR_UPDATE_NOTE_SCHEMA,
    )
    hass.services.async_register(
        const.DOMAIN,
        const.SERVICE_CHECK_CHALLENGE_STATUS,
        handle_check_challenge_status,
        schema=CHECK_CHALLENGE_STATUS_SCHEMA,
    )
    hass.services.async_register(
        const.DOMAIN,
        const.SERVICE_HIDE_EDIT_TIP,
        handle_hide_edit_tip,
        schema=HIDE_EDIT_TIP_SCHEMA,
    )
    hass.services.async_register(
        const.DOMAIN,
        const.SERVICE_SELECT_DAY,
        handle_select_day,
        schema=SELECT_DAY_SCHEMA,
    )
    hass.services.async_register(
        const.DOMAIN,
        const.SERVICE_GET_DAY_STATUS,
        handle_get_day_status,
        schema=GET_DAY_STATUS_SCHEMA,
        supports_response=SupportsResponse.ONLY,
    )

    const.LOGGER.info("INFO: Project 50 services have been registered successfully")


async def async_unload_services(hass: HomeAssistant) -> None:
    """Unregister Project 50 services when unloading the integration."""
    for service in SERVICES:
        if hass.services.has_service(const.DOMAIN, service):
            hass.services.async_remove(const.DOMAIN, service)

    const.LOGGER.info("INFO: Project 50 services have been unregistered")
