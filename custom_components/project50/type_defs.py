"""Type definitions for Project 50 data structures.

TypedDict is used for the fixed-shape records that are persisted to storage.
Notes are kept in a plain dict keyed by the day number as a string, because
JSON object keys are always strings.

IMPORTANT: This file must NOT import from coordinator.py or any module that
imports the coordinator, to avoid circular dependencies.

NOTE: TypedDict is STATIC ANALYSIS ONLY. Runtime validation of loaded data
happens in data_builders.parse_challenge().
"""

from typing import Any, Literal, NotRequired, TypedDict

# =============================================================================
# Type Aliases (for readability)
# =============================================================================

TaskId = str  # UUID string
NoteId = str  # UUID string
ISODatetime = str  # ISO 8601 datetime string "2026-01-18T12:30:00+00:00"
ISODate = str  # ISO 8601 date string (no time) "2026-01-18"

ChallengeStatus = Literal["ongoing", "completed", "failed"]
DayStatusValue = Literal["upcoming", "current", "completed", "failed"]


# =============================================================================
# Entity Types
# =============================================================================


class TaskTemplate(TypedDict):
    """A selectable task template from the registry."""

    title: str
    description: str
    category: str
    icon: str


class TaskData(TypedDict):
    """A task instance owned by the active challenge.

    `completed` only describes the challenge's current day.
    """

    internal_id: TaskId
    title: str
    description: str
    category: str
    icon: str
    completed: bool
    reminder_time: str | None  # "HH:MM"


class NoteData(TypedDict):
    """A journal entry attached to one challenge day."""

    internal_id: NoteId
    day_number: int
    content: str
    mood: str | None
    created_at: ISODatetime
    updated_at: NotRequired[ISODatetime]


class ChallengeData(TypedDict):
    """The single active challenge record."""

    internal_id: str
    start_date: ISODate
    current_day: int
    tasks: list[TaskData]
    notes: dict[str, NoteData]  # keyed by str(day_number)
    completed_days: list[int]  # sorted, unique
    status: ChallengeStatus
    created_at: ISODatetime


class DayStatus(TypedDict):
    """Result of a day-status query."""

    day: int
    status: DayStatusValue
    has_note: bool


# =============================================================================
# Storage / Snapshot Types
# =============================================================================


class StorageMeta(TypedDict):
    """Metadata section of the persisted blob."""

    schema_version: int


class StorageData(TypedDict):
    """Complete persisted blob."""

    meta: StorageMeta
    challenge: ChallengeData | None
    last_update: ISODatetime | None


class ChallengeSnapshot(TypedDict):
    """Read-only state published to listeners after every change."""

    current_challenge: ChallengeData | None
    selected_day_for_editing: int | None
    show_edit_tip: bool
    last_update: ISODatetime | None


# Service payloads are validated by voluptuous and passed on as plain dicts.
CustomTaskInput = dict[str, Any]
