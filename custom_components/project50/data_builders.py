"""Record building, validation and parsing helpers.

This module is the SINGLE SOURCE OF TRUTH for:
- Record field defaults
- Business-rule validation of user input
- Complete record structure building
- Parsing persisted data back into records

### Build Functions
Each record type has a `build_<record>()` function that:
- Generates internal_id (UUID) for new records
- Sets timestamps (created_at, updated_at)
- Applies field defaults
- Returns a complete dict ready for storage

### Validation Functions
`validate_*()` functions return a dict of errors (empty if valid).

Consumers:
- coordinator.py (intent handling)
- services.py (service payload conversion)
- store.py (loading persisted data)
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Any, cast
import uuid

from . import const
from .task_registry import get_category_icon, get_template
from .type_defs import (
    ChallengeData,
    CustomTaskInput,
    NoteData,
    TaskData,
)
from .utils.dt_utils import dt_now_utc, dt_parse_date, dt_parse_reminder_time
from .utils.math_utils import clamp

# ==============================================================================
# TASKS
# ==============================================================================


def build_task(
    title: str,
    description: str = "",
    category: str = const.TASK_CATEGORY_CUSTOM,
    reminder_time: Any = None,
    icon: str | None = None,
) -> TaskData:
    """Build a fresh, unchecked task record."""
    if category not in const.TASK_CATEGORIES:
        category = const.TASK_CATEGORY_CUSTOM
    return {
        const.DATA_TASK_INTERNAL_ID: str(uuid.uuid4()),
        const.DATA_TASK_TITLE: title.strip(),
        const.DATA_TASK_DESCRIPTION: description,
        const.DATA_TASK_CATEGORY: category,
        const.DATA_TASK_ICON: icon or get_category_icon(category),
        const.DATA_TASK_COMPLETED: False,
        const.DATA_TASK_REMINDER_TIME: dt_parse_reminder_time(reminder_time),
    }


def build_task_from_template(key: str) -> TaskData | None:
    """Build a task from a registry template, or None for unknown keys."""
    template = get_template(key)
    if template is None:
        return None
    return build_task(
        title=template["title"],
        description=template["description"],
        category=template["category"],
        icon=template["icon"],
    )


def build_task_selection(
    template_keys: list[str] | None = None,
    custom_tasks: list[CustomTaskInput] | None = None,
) -> tuple[list[TaskData], dict[str, str]]:
    """Turn service input into an ordered task list.

    Template tasks come first, in the order given, followed by custom tasks.

    Returns:
        (tasks, errors) where errors is empty when every entry was valid.
    """
    tasks: list[TaskData] = []
    errors: dict[str, str] = {}

    for key in template_keys or []:
        task = build_task_from_template(key)
        if task is None:
            errors[const.FIELD_TEMPLATES] = const.ERROR_UNKNOWN_TEMPLATE_FMT.format(key)
            continue
        tasks.append(task)

    for custom in custom_tasks or []:
        title = str(custom.get(const.FIELD_TITLE, "")).strip()
        if not title:
            errors[const.FIELD_CUSTOM_TASKS] = "Custom tasks need a title"
            continue
        tasks.append(
            build_task(
                title=title,
                description=str(custom.get(const.FIELD_DESCRIPTION, "")),
                category=custom.get(const.FIELD_CATEGORY, const.TASK_CATEGORY_CUSTOM),
                reminder_time=custom.get(const.FIELD_REMINDER_TIME),
            )
        )

    return tasks, errors


def validate_task_selection(tasks: list[TaskData]) -> dict[str, str]:
    """Validate the task list for a new challenge."""
    errors: dict[str, str] = {}
    if not tasks:
        errors["base"] = const.ERROR_EMPTY_TASK_SELECTION
    return errors


# ==============================================================================
# CHALLENGE
# ==============================================================================


def build_challenge(
    tasks: list[TaskData], start_date: date, now: datetime | None = None
) -> ChallengeData:
    """Build a fresh challenge record starting on `start_date` (day 1)."""
    created_at = (now or dt_now_utc()).isoformat()
    fresh_tasks: list[TaskData] = []
    for task in tasks:
        fresh = cast("TaskData", dict(task))
        fresh[const.DATA_TASK_COMPLETED] = False
        fresh_tasks.append(fresh)

    return {
        const.DATA_CHALLENGE_INTERNAL_ID: str(uuid.uuid4()),
        const.DATA_CHALLENGE_START_DATE: start_date.isoformat(),
        const.DATA_CHALLENGE_CURRENT_DAY: const.FIRST_DAY,
        const.DATA_CHALLENGE_TASKS: fresh_tasks,
        const.DATA_CHALLENGE_NOTES: {},
        const.DATA_CHALLENGE_COMPLETED_DAYS: [],
        const.DATA_CHALLENGE_STATUS: const.CHALLENGE_STATUS_ONGOING,
        const.DATA_CHALLENGE_CREATED_AT: created_at,
    }


# ==============================================================================
# NOTES
# ==============================================================================


def is_valid_day(day: Any) -> bool:
    """Return True when `day` is an int within the challenge window."""
    return (
        isinstance(day, int)
        and not isinstance(day, bool)
        and const.FIRST_DAY <= day <= const.CHALLENGE_LENGTH_DAYS
    )


def validate_note_data(day_number: Any, content: str, mood: str | None) -> dict[str, str]:
    """Validate note input. Returns a dict of errors keyed by field."""
    errors: dict[str, str] = {}
    if not is_valid_day(day_number):
        errors[const.FIELD_DAY] = const.ERROR_DAY_OUT_OF_RANGE_FMT.format(
            day_number, const.CHALLENGE_LENGTH_DAYS
        )
    if not content or not content.strip():
        errors[const.FIELD_CONTENT] = const.ERROR_EMPTY_NOTE
    if mood is not None and mood not in const.MOODS:
        errors[const.FIELD_MOOD] = f"Unknown mood '{mood}'"
    return errors


def build_note(
    day_number: int,
    content: str,
    mood: str | None = None,
    existing: NoteData | None = None,
    now: datetime | None = None,
) -> NoteData:
    """Build a note for `day_number`.

    When `existing` is given, its internal_id and created_at are kept so the
    entry keeps its identity across edits.
    """
    timestamp = (now or dt_now_utc()).isoformat()
    return {
        const.DATA_NOTE_INTERNAL_ID: (
            existing[const.DATA_NOTE_INTERNAL_ID] if existing else str(uuid.uuid4())
        ),
        const.DATA_NOTE_DAY_NUMBER: day_number,
        const.DATA_NOTE_CONTENT: content,
        const.DATA_NOTE_MOOD: mood,
        const.DATA_NOTE_CREATED_AT: (
            existing[const.DATA_NOTE_CREATED_AT] if existing else timestamp
        ),
        const.DATA_NOTE_UPDATED_AT: timestamp,
    }


# ==============================================================================
# PARSING PERSISTED DATA
# ==============================================================================


def _parse_task(raw: dict[str, Any]) -> TaskData:
    category = raw.get(const.DATA_TASK_CATEGORY, const.TASK_CATEGORY_CUSTOM)
    if category not in const.TASK_CATEGORIES:
        category = const.TASK_CATEGORY_CUSTOM
    return {
        const.DATA_TASK_INTERNAL_ID: str(raw[const.DATA_TASK_INTERNAL_ID]),
        const.DATA_TASK_TITLE: str(raw[const.DATA_TASK_TITLE]),
        const.DATA_TASK_DESCRIPTION: str(raw.get(const.DATA_TASK_DESCRIPTION, "")),
        const.DATA_TASK_CATEGORY: category,
        const.DATA_TASK_ICON: raw.get(const.DATA_TASK_ICON)
        or get_category_icon(category),
        const.DATA_TASK_COMPLETED: bool(raw.get(const.DATA_TASK_COMPLETED, False)),
        const.DATA_TASK_REMINDER_TIME: dt_parse_reminder_time(
            raw.get(const.DATA_TASK_REMINDER_TIME)
        ),
    }


def _parse_note(raw: dict[str, Any]) -> NoteData:
    day_number = int(raw[const.DATA_NOTE_DAY_NUMBER])
    if not is_valid_day(day_number):
        raise ValueError(f"Note day {day_number} out of range")
    note: NoteData = {
        const.DATA_NOTE_INTERNAL_ID: str(raw[const.DATA_NOTE_INTERNAL_ID]),
        const.DATA_NOTE_DAY_NUMBER: day_number,
        const.DATA_NOTE_CONTENT: str(raw[const.DATA_NOTE_CONTENT]),
        const.DATA_NOTE_MOOD: (
            raw.get(const.DATA_NOTE_MOOD)
            if raw.get(const.DATA_NOTE_MOOD) in const.MOODS
            else None
        ),
        const.DATA_NOTE_CREATED_AT: str(raw[const.DATA_NOTE_CREATED_AT]),
    }
    if raw.get(const.DATA_NOTE_UPDATED_AT):
        note[const.DATA_NOTE_UPDATED_AT] = str(raw[const.DATA_NOTE_UPDATED_AT])
    return note


def parse_challenge(raw: Any) -> ChallengeData:
    """Rebuild a challenge record from persisted data.

    Out-of-range values are normalized (current_day clamped, completed days
    limited to 1..current_day). Structural problems raise.

    Raises:
        KeyError, TypeError, ValueError: when the data is not a usable record.
    """
    if not isinstance(raw, dict):
        raise TypeError(f"Challenge must be a dict, got {type(raw).__name__}")

    start_date = dt_parse_date(raw[const.DATA_CHALLENGE_START_DATE])
    if start_date is None:
        raise ValueError(
            f"Invalid start date '{raw[const.DATA_CHALLENGE_START_DATE]}'"
        )

    status = raw.get(const.DATA_CHALLENGE_STATUS, const.CHALLENGE_STATUS_ONGOING)
    if status not in const.CHALLENGE_STATUSES:
        raise ValueError(f"Invalid challenge status '{status}'")

    current_day = clamp(
        int(raw[const.DATA_CHALLENGE_CURRENT_DAY]),
        const.FIRST_DAY,
        const.CHALLENGE_LENGTH_DAYS,
    )

    tasks = [_parse_task(task) for task in raw[const.DATA_CHALLENGE_TASKS]]

    notes: dict[str, NoteData] = {}
    raw_notes = raw.get(const.DATA_CHALLENGE_NOTES) or {}
    # Older blobs may hold a list; the later entry for a day wins.
    note_items = raw_notes.values() if isinstance(raw_notes, dict) else raw_notes
    for raw_note in note_items:
        try:
            note = _parse_note(raw_note)
        except (KeyError, TypeError, ValueError) as err:
            const.LOGGER.warning("WARNING: Skipping unreadable stored note: %s", err)
            continue
        notes[str(note[const.DATA_NOTE_DAY_NUMBER])] = note

    completed_days = sorted(
        {
            int(day)
            for day in raw.get(const.DATA_CHALLENGE_COMPLETED_DAYS, [])
            if const.FIRST_DAY <= int(day) <= current_day
        }
    )

    return {
        const.DATA_CHALLENGE_INTERNAL_ID: str(raw[const.DATA_CHALLENGE_INTERNAL_ID]),
        const.DATA_CHALLENGE_START_DATE: start_date.isoformat(),
        const.DATA_CHALLENGE_CURRENT_DAY: current_day,
        const.DATA_CHALLENGE_TASKS: tasks,
        const.DATA_CHALLENGE_NOTES: notes,
        const.DATA_CHALLENGE_COMPLETED_DAYS: completed_days,
        const.DATA_CHALLENGE_STATUS: status,
        const.DATA_CHALLENGE_CREATED_AT: str(
            raw.get(const.DATA_CHALLENGE_CREATED_AT, "")
        ),
    }
