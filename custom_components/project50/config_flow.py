# File: config_flow.py
"""Config flow for the Project 50 integration.

Only one instance is allowed; the challenge itself is started through the
start_challenge service, so the flow only creates the entry.
"""

from typing import Any, Optional

from homeassistant import config_entries
from homeassistant.core import callback

from . import const
from .options_flow import Project50OptionsFlowHandler


class Project50ConfigFlow(config_entries.ConfigFlow, domain=const.DOMAIN):
    """Config Flow for Project 50."""

    VERSION = 1

    async def async_step_user(self, user_input: Optional[dict[str, Any]] = None):
        """Create the single Project 50 entry."""

        # Check if there's an existing Project 50 entry
        if any(self._async_current_entries()):
            return self.async_abort(reason=const.TRANS_KEY_ERROR_SINGLE_INSTANCE)

        if user_input is not None:
            const.LOGGER.info("INFO: Creating Project 50 config entry")
            return self.async_create_entry(
                title=const.PROJECT50_TITLE,
                data={},
                options={
                    const.CONF_DRIFT_POLICY: const.DEFAULT_DRIFT_POLICY,
                    const.CONF_CHECK_INTERVAL: const.DEFAULT_CHECK_INTERVAL,
                },
            )

        return self.async_show_form(step_id=const.CONFIG_FLOW_STEP_USER)

    @staticmethod
    @callback
    def async_get_options_flow(config_entry):
        """Return the Options Flow."""
        return Project50OptionsFlowHandler(config_entry)
