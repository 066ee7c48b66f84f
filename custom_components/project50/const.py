# File: const.py
"""Constants for the Project 50 integration.

This file centralizes configuration keys, defaults, storage keys, service names
and field names for consistency across the integration.
"""

import logging

from homeassistant.const import Platform

# ------------------------------------------------------------------------------------------------
# General / Integration Information
# ------------------------------------------------------------------------------------------------
# Integration Name
PROJECT50_TITLE = "Project 50"

# Integration Domain
DOMAIN = "project50"

# Logger
LOGGER = logging.getLogger(__package__)

# Supported Platforms
PLATFORMS = [
    Platform.SENSOR,
]

# Coordinator
COORDINATOR = "coordinator"
COORDINATOR_SUFFIX = "_coordinator"

# Storage and Versioning
STORE = "store"
STORAGE_KEY = "project50_data"
STORAGE_VERSION = 1
SCHEMA_VERSION = 1

# ------------------------------------------------------------------------------------------------
# Challenge Rules
# ------------------------------------------------------------------------------------------------
CHALLENGE_LENGTH_DAYS = 50
FIRST_DAY = 1

# Challenge Status
CHALLENGE_STATUS_ONGOING = "ongoing"
CHALLENGE_STATUS_COMPLETED = "completed"
CHALLENGE_STATUS_FAILED = "failed"

CHALLENGE_STATUSES = [
    CHALLENGE_STATUS_ONGOING,
    CHALLENGE_STATUS_COMPLETED,
    CHALLENGE_STATUS_FAILED,
]

# Day Status (calendar overview)
DAY_STATUS_UPCOMING = "upcoming"
DAY_STATUS_CURRENT = "current"
DAY_STATUS_COMPLETED = "completed"
DAY_STATUS_FAILED = "failed"

# Drift Policies
DRIFT_POLICY_FAST_FORWARD = "fast_forward"
DRIFT_POLICY_MARK_FAILED = "mark_failed"

DRIFT_POLICIES = [
    DRIFT_POLICY_FAST_FORWARD,
    DRIFT_POLICY_MARK_FAILED,
]

# Task Categories
TASK_CATEGORY_WAKE_UP = "wake_up"
TASK_CATEGORY_EXERCISE = "exercise"
TASK_CATEGORY_READING = "reading"
TASK_CATEGORY_LEARNING = "learning"
TASK_CATEGORY_DIET = "diet"
TASK_CATEGORY_JOURNAL = "journal"
TASK_CATEGORY_CUSTOM = "custom"

TASK_CATEGORIES = [
    TASK_CATEGORY_WAKE_UP,
    TASK_CATEGORY_EXERCISE,
    TASK_CATEGORY_READING,
    TASK_CATEGORY_LEARNING,
    TASK_CATEGORY_DIET,
    TASK_CATEGORY_JOURNAL,
    TASK_CATEGORY_CUSTOM,
]

# Note Moods
MOOD_GREAT = "great"
MOOD_GOOD = "good"
MOOD_OKAY = "okay"
MOOD_BAD = "bad"
MOOD_AWFUL = "awful"

MOODS = [
    MOOD_GREAT,
    MOOD_GOOD,
    MOOD_OKAY,
    MOOD_BAD,
    MOOD_AWFUL,
]

# ------------------------------------------------------------------------------------------------
# Configuration Keys / Defaults
# ------------------------------------------------------------------------------------------------
CONF_DRIFT_POLICY = "drift_policy"
CONF_CHECK_INTERVAL = "check_interval"

DEFAULT_DRIFT_POLICY = DRIFT_POLICY_FAST_FORWARD
DEFAULT_CHECK_INTERVAL = 60  # seconds
MIN_CHECK_INTERVAL = 10
MAX_CHECK_INTERVAL = 3600

# Config Flow Steps
CONFIG_FLOW_STEP_USER = "user"
OPTIONS_FLOW_STEP_INIT = "init"

# ------------------------------------------------------------------------------------------------
# Data Keys (storage)
# ------------------------------------------------------------------------------------------------
DATA_META = "meta"
DATA_META_SCHEMA_VERSION = "schema_version"
DATA_CHALLENGE = "challenge"
DATA_LAST_UPDATE = "last_update"

# Challenge
DATA_CHALLENGE_INTERNAL_ID = "internal_id"
DATA_CHALLENGE_START_DATE = "start_date"
DATA_CHALLENGE_CURRENT_DAY = "current_day"
DATA_CHALLENGE_TASKS = "tasks"
DATA_CHALLENGE_NOTES = "notes"
DATA_CHALLENGE_COMPLETED_DAYS = "completed_days"
DATA_CHALLENGE_STATUS = "status"
DATA_CHALLENGE_CREATED_AT = "created_at"

# Task
DATA_TASK_INTERNAL_ID = "internal_id"
DATA_TASK_TITLE = "title"
DATA_TASK_DESCRIPTION = "description"
DATA_TASK_CATEGORY = "category"
DATA_TASK_ICON = "icon"
DATA_TASK_COMPLETED = "completed"
DATA_TASK_REMINDER_TIME = "reminder_time"

# Note
DATA_NOTE_INTERNAL_ID = "internal_id"
DATA_NOTE_DAY_NUMBER = "day_number"
DATA_NOTE_CONTENT = "content"
DATA_NOTE_MOOD = "mood"
DATA_NOTE_CREATED_AT = "created_at"
DATA_NOTE_UPDATED_AT = "updated_at"

# Snapshot (published coordinator data)
SNAPSHOT_CURRENT_CHALLENGE = "current_challenge"
SNAPSHOT_SELECTED_DAY = "selected_day_for_editing"
SNAPSHOT_SHOW_EDIT_TIP = "show_edit_tip"
SNAPSHOT_LAST_UPDATE = "last_update"

# Day status result
DAY_STATUS_KEY_DAY = "day"
DAY_STATUS_KEY_STATUS = "status"
DAY_STATUS_KEY_HAS_NOTE = "has_note"

# ------------------------------------------------------------------------------------------------
# Services
# ------------------------------------------------------------------------------------------------
SERVICE_START_CHALLENGE = "start_challenge"
SERVICE_RESET_CHALLENGE = "reset_challenge"
SERVICE_TOGGLE_TASK = "toggle_task"
SERVICE_UPDATE_TASK_DESCRIPTION = "update_task_description"
SERVICE_ADD_OR_UPDATE_NOTE = "add_or_update_note"
SERVICE_CHECK_CHALLENGE_STATUS = "check_challenge_status"
SERVICE_HIDE_EDIT_TIP = "hide_edit_tip"
SERVICE_SELECT_DAY = "select_day"
SERVICE_GET_DAY_STATUS = "get_day_status"

# Service Fields
FIELD_TEMPLATES = "templates"
FIELD_CUSTOM_TASKS = "custom_tasks"
FIELD_TASK_ID = "task_id"
FIELD_TITLE = "title"
FIELD_DESCRIPTION = "description"
FIELD_CATEGORY = "category"
FIELD_REMINDER_TIME = "reminder_time"
FIELD_DAY = "day"
FIELD_CONTENT = "content"
FIELD_MOOD = "mood"

# ------------------------------------------------------------------------------------------------
# Sensors
# ------------------------------------------------------------------------------------------------
SENSOR_KEY_CURRENT_DAY = "current_day"
SENSOR_KEY_STATUS = "status"
SENSOR_KEY_TODAY_PROGRESS = "today_progress"

ATTR_START_DATE = "start_date"
ATTR_STATUS = "status"
ATTR_TASKS = "tasks"
ATTR_COMPLETED_DAYS = "completed_days"
ATTR_COMPLETED_DAY_COUNT = "completed_day_count"
ATTR_CURRENT_STREAK = "current_streak"
ATTR_LONGEST_STREAK = "longest_streak"
ATTR_DAY_STATUSES = "day_statuses"
ATTR_NOTE_COUNT = "note_count"
ATTR_SELECTED_DAY = "selected_day_for_editing"
ATTR_SHOW_EDIT_TIP = "show_edit_tip"
ATTR_LAST_UPDATE = "last_update"
ATTR_TASKS_COMPLETED = "tasks_completed"
ATTR_TASKS_TOTAL = "tasks_total"

ICON_CALENDAR = "mdi:calendar-check"
ICON_STATUS = "mdi:flag-checkered"
ICON_PROGRESS = "mdi:progress-check"

# ------------------------------------------------------------------------------------------------
# Errors / Messages
# ------------------------------------------------------------------------------------------------
MSG_NO_ENTRY_FOUND = "No Project 50 entry found"
ERROR_NO_ACTIVE_CHALLENGE = "No active challenge"
ERROR_TASK_NOT_FOUND_FMT = "Task '{}' not found"
ERROR_DAY_OUT_OF_RANGE_FMT = "Day {} is outside 1-{}"
ERROR_EMPTY_TASK_SELECTION = "Select at least one task to start a challenge"
ERROR_EMPTY_NOTE = "Note content cannot be empty"
ERROR_UNKNOWN_TEMPLATE_FMT = "Unknown task template '{}'"
ERROR_CHALLENGE_NOT_ONGOING_FMT = "Challenge is {}"

TRANS_KEY_ERROR_SINGLE_INSTANCE = "single_instance_allowed"
TRANS_KEY_ERROR_INVALID_DRIFT_POLICY = "invalid_drift_policy"
TRANS_KEY_ERROR_INVALID_INTERVAL = "invalid_check_interval"
