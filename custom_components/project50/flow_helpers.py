# File: flow_helpers.py
"""Helpers for the Project 50 config and options flows."""

from typing import Any, Optional

import voluptuous as vol
from homeassistant.helpers import selector

from . import const


def build_options_schema(default: Optional[dict[str, Any]] = None) -> vol.Schema:
    """Build schema for the drift policy and the status check interval."""
    default = default or {}

    default_policy = default.get(const.CONF_DRIFT_POLICY, const.DEFAULT_DRIFT_POLICY)
    default_interval = default.get(
        const.CONF_CHECK_INTERVAL, const.DEFAULT_CHECK_INTERVAL
    )

    return vol.Schema(
        {
            vol.Required(
                const.CONF_DRIFT_POLICY, default=default_policy
            ): selector.SelectSelector(
                selector.SelectSelectorConfig(
                    options=const.DRIFT_POLICIES,
                    mode=selector.SelectSelectorMode.LIST,
                    translation_key=const.CONF_DRIFT_POLICY,
                )
            ),
            vol.Required(
                const.CONF_CHECK_INTERVAL, default=default_interval
            ): selector.NumberSelector(
                selector.NumberSelectorConfig(
                    mode=selector.NumberSelectorMode.BOX,
                    min=const.MIN_CHECK_INTERVAL,
                    max=const.MAX_CHECK_INTERVAL,
                    step=1,
                    unit_of_measurement="s",
                )
            ),
        }
    )


def validate_options_input(user_input: dict[str, Any]) -> dict[str, str]:
    """Validate options input. Returns errors keyed by field."""
    errors: dict[str, str] = {}

    if user_input.get(const.CONF_DRIFT_POLICY) not in const.DRIFT_POLICIES:
        errors[const.CONF_DRIFT_POLICY] = const.TRANS_KEY_ERROR_INVALID_DRIFT_POLICY

    try:
        interval = int(user_input.get(const.CONF_CHECK_INTERVAL))
    except (TypeError, ValueError):
        interval = None
    if interval is None or not (
        const.MIN_CHECK_INTERVAL <= interval <= const.MAX_CHECK_INTERVAL
    ):
        errors[const.CONF_CHECK_INTERVAL] = const.TRANS_KEY_ERROR_INVALID_INTERVAL

    return errors
