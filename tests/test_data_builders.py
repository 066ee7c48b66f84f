"""Tests for record building, validation and parsing."""

from __future__ import annotations

from datetime import UTC, date, datetime

import pytest

from custom_components.project50 import const
from custom_components.project50 import data_builders as db
from custom_components.project50.task_registry import TASK_TEMPLATES
from tests.conftest import create_mock_challenge, create_mock_task

NOW = datetime(2026, 3, 2, 20, 0, tzinfo=UTC)


class TestTasks:
    """Test task building."""

    def test_template_task(self) -> None:
        """Template tasks copy the registry entry."""
        task = db.build_task_from_template(const.TASK_CATEGORY_EXERCISE)
        assert task is not None
        assert task["title"] == TASK_TEMPLATES[const.TASK_CATEGORY_EXERCISE]["title"]
        assert task["category"] == const.TASK_CATEGORY_EXERCISE
        assert task["completed"] is False
        assert task["internal_id"]

    def test_unknown_template(self) -> None:
        """Unknown template keys build nothing."""
        assert db.build_task_from_template("skydiving") is None

    def test_template_ids_are_unique(self) -> None:
        """Two tasks from one template get their own ids."""
        first = db.build_task_from_template(const.TASK_CATEGORY_READING)
        second = db.build_task_from_template(const.TASK_CATEGORY_READING)
        assert first["internal_id"] != second["internal_id"]

    def test_custom_task_defaults(self) -> None:
        """Unknown categories fall back to custom with its icon."""
        task = db.build_task("  Cold shower ", category="nonsense", reminder_time="7:05")
        assert task["title"] == "Cold shower"
        assert task["category"] == const.TASK_CATEGORY_CUSTOM
        assert task["icon"] == "mdi:star"
        assert task["reminder_time"] == "07:05"

    def test_selection_orders_templates_first(self) -> None:
        """Templates come before custom tasks."""
        tasks, errors = db.build_task_selection(
            [const.TASK_CATEGORY_WAKE_UP, const.TASK_CATEGORY_JOURNAL],
            [{"title": "Meditate", "description": "10 minutes"}],
        )
        assert errors == {}
        assert [task["title"] for task in tasks] == [
            "Wake up early",
            "Journal",
            "Meditate",
        ]

    def test_selection_reports_bad_entries(self) -> None:
        """Unknown templates and untitled custom tasks are reported."""
        tasks, errors = db.build_task_selection(["bogus"], [{"title": "  "}])
        assert tasks == []
        assert const.FIELD_TEMPLATES in errors
        assert const.FIELD_CUSTOM_TASKS in errors

    def test_empty_selection_invalid(self) -> None:
        """A challenge needs at least one task."""
        assert db.validate_task_selection([]) == {
            "base": const.ERROR_EMPTY_TASK_SELECTION
        }
        assert db.validate_task_selection([create_mock_task()]) == {}


class TestChallenge:
    """Test challenge building."""

    def test_new_challenge(self) -> None:
        """A new challenge starts on day 1 with unchecked task copies."""
        source = [create_mock_task("A", completed=True)]
        challenge = db.build_challenge(source, date(2026, 3, 2), NOW)
        assert challenge["start_date"] == "2026-03-02"
        assert challenge["current_day"] == 1
        assert challenge["status"] == const.CHALLENGE_STATUS_ONGOING
        assert challenge["completed_days"] == []
        assert challenge["notes"] == {}
        assert challenge["tasks"][0]["completed"] is False
        assert source[0]["completed"] is True
        assert challenge["created_at"] == NOW.isoformat()


class TestNotes:
    """Test note validation and building."""

    @pytest.mark.parametrize("day", [0, 51, -1, "3", True, None])
    def test_invalid_days(self, day) -> None:
        """Only ints 1..50 are valid days."""
        assert not db.is_valid_day(day)
        assert const.FIELD_DAY in db.validate_note_data(day, "text", None)

    def test_empty_content(self) -> None:
        """Blank notes are rejected."""
        assert db.validate_note_data(3, "   ", None) == {
            const.FIELD_CONTENT: const.ERROR_EMPTY_NOTE
        }

    def test_unknown_mood(self) -> None:
        """Moods come from a fixed list."""
        assert const.FIELD_MOOD in db.validate_note_data(3, "text", "ecstatic")
        assert db.validate_note_data(3, "text", const.MOOD_GREAT) == {}

    def test_update_keeps_identity(self) -> None:
        """Rewriting a note keeps its id and creation time."""
        first = db.build_note(3, "one", const.MOOD_OKAY, now=NOW)
        later = datetime(2026, 3, 5, 8, 0, tzinfo=UTC)
        second = db.build_note(3, "two", None, existing=first, now=later)
        assert second["internal_id"] == first["internal_id"]
        assert second["created_at"] == NOW.isoformat()
        assert second["updated_at"] == later.isoformat()
        assert second["content"] == "two"
        assert second["mood"] is None


class TestParseChallenge:
    """Test parsing persisted records."""

    def test_round_trip_of_valid_record(self) -> None:
        """A valid record parses to the same values."""
        raw = create_mock_challenge(current_day=4, completed_days=[1, 3])
        parsed = db.parse_challenge(raw)
        assert parsed["current_day"] == 4
        assert parsed["completed_days"] == [1, 3]
        assert [task["title"] for task in parsed["tasks"]] == [
            "Wake up",
            "Exercise",
            "Reading",
        ]

    def test_normalizes_out_of_range_values(self) -> None:
        """current_day is clamped and completed days limited to 1..current_day."""
        raw = create_mock_challenge(current_day=70, completed_days=[50, 0, 3, 3, 60])
        parsed = db.parse_challenge(raw)
        assert parsed["current_day"] == 50
        assert parsed["completed_days"] == [3, 50]

    def test_notes_list_is_keyed_by_day(self) -> None:
        """Notes stored as a list are keyed by day; the last entry wins."""
        raw = create_mock_challenge()
        raw["notes"] = [
            {
                "internal_id": "a",
                "day_number": 2,
                "content": "first",
                "created_at": "2026-03-03T20:00:00+00:00",
            },
            {
                "internal_id": "b",
                "day_number": 2,
                "content": "second",
                "mood": "sleepy",
                "created_at": "2026-03-03T21:00:00+00:00",
            },
        ]
        parsed = db.parse_challenge(raw)
        assert list(parsed["notes"]) == ["2"]
        assert parsed["notes"]["2"]["content"] == "second"
        assert parsed["notes"]["2"]["mood"] is None

    def test_unreadable_note_is_skipped(self, caplog) -> None:
        """A bad note is dropped; the rest of the record survives."""
        raw = create_mock_challenge(current_day=3, completed_days=[1, 2])
        raw["notes"] = {
            "1": {
                "internal_id": "a",
                "day_number": 1,
                "content": "kept",
                "created_at": "2026-03-02T20:00:00+00:00",
            },
            "99": {
                "internal_id": "b",
                "day_number": 99,
                "content": "out of range",
                "created_at": "2026-03-02T20:00:00+00:00",
            },
            "2": {"internal_id": "c", "day_number": 2},
        }
        parsed = db.parse_challenge(raw)
        assert list(parsed["notes"]) == ["1"]
        assert parsed["notes"]["1"]["content"] == "kept"
        assert parsed["completed_days"] == [1, 2]
        assert len(parsed["tasks"]) == 3
        assert "Skipping unreadable stored note" in caplog.text

    def test_not_a_dict(self) -> None:
        """Non-dict data raises TypeError."""
        with pytest.raises(TypeError):
            db.parse_challenge(["nope"])

    def test_bad_start_date(self) -> None:
        """Unreadable start dates raise ValueError."""
        with pytest.raises(ValueError):
            db.parse_challenge(create_mock_challenge(start_date="someday"))

    def test_bad_status(self) -> None:
        """Unknown statuses raise ValueError."""
        with pytest.raises(ValueError):
            db.parse_challenge(create_mock_challenge(status="paused"))

    def test_missing_field(self) -> None:
        """Missing required fields raise KeyError."""
        raw = create_mock_challenge()
        del raw["tasks"]
        with pytest.raises(KeyError):
            db.parse_challenge(raw)
