# File: options_flow.py
"""Options Flow for the Project 50 integration.

Edits the drift policy and the status check interval. Saving the options
reloads the entry so the new schedule takes effect.
"""

from homeassistant import config_entries

from . import const
from . import flow_helpers as fh


class Project50OptionsFlowHandler(config_entries.OptionsFlow):
    """Options Flow for the challenge scheduling options."""

    def __init__(self, _config_entry: config_entries.ConfigEntry):
        """Initialize the options flow."""
        self._entry_options = {}

    async def async_step_init(self, user_input=None):
        """Show and save the general options."""
        errors = {}
        self._entry_options = dict(self.config_entry.options)

        if user_input is not None:
            errors = fh.validate_options_input(user_input)
            if not errors:
                self._entry_options[const.CONF_DRIFT_POLICY] = user_input[
                    const.CONF_DRIFT_POLICY
                ]
                self._entry_options[const.CONF_CHECK_INTERVAL] = int(
                    user_input[const.CONF_CHECK_INTERVAL]
                )
                const.LOGGER.debug(
                    "DEBUG: Options Updated: Drift Policy=%s, Check Interval=%s",
                    self._entry_options[const.CONF_DRIFT_POLICY],
                    self._entry_options[const.CONF_CHECK_INTERVAL],
                )
                return self.async_create_entry(title="", data=self._entry_options)

        return self.async_show_form(
            step_id=const.OPTIONS_FLOW_STEP_INIT,
            data_schema=fh.build_options_schema(user_input or self._entry_options),
            errors=errors,
        )
