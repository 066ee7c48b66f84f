"""Static registry of selectable task templates.

Pure data. The templates are offered when starting a challenge; every
challenge gets its own copies, so editing a task never touches the registry.
"""

from __future__ import annotations

from . import const
from .type_defs import TaskTemplate

CATEGORY_ICONS: dict[str, str] = {
    const.TASK_CATEGORY_WAKE_UP: "mdi:weather-sunset-up",
    const.TASK_CATEGORY_EXERCISE: "mdi:run",
    const.TASK_CATEGORY_READING: "mdi:book-open-variant",
    const.TASK_CATEGORY_LEARNING: "mdi:brain",
    const.TASK_CATEGORY_DIET: "mdi:leaf",
    const.TASK_CATEGORY_JOURNAL: "mdi:notebook-edit",
    const.TASK_CATEGORY_CUSTOM: "mdi:star",
}

TASK_TEMPLATES: dict[str, TaskTemplate] = {
    const.TASK_CATEGORY_WAKE_UP: {
        "title": "Wake up early",
        "description": "Get up at 6:00 every day",
        "category": const.TASK_CATEGORY_WAKE_UP,
        "icon": CATEGORY_ICONS[const.TASK_CATEGORY_WAKE_UP],
    },
    const.TASK_CATEGORY_EXERCISE: {
        "title": "Exercise",
        "description": "Work out for one hour",
        "category": const.TASK_CATEGORY_EXERCISE,
        "icon": CATEGORY_ICONS[const.TASK_CATEGORY_EXERCISE],
    },
    const.TASK_CATEGORY_READING: {
        "title": "Reading",
        "description": "Read 10 pages of a book",
        "category": const.TASK_CATEGORY_READING,
        "icon": CATEGORY_ICONS[const.TASK_CATEGORY_READING],
    },
    const.TASK_CATEGORY_LEARNING: {
        "title": "Learning",
        "description": "Practice a new skill",
        "category": const.TASK_CATEGORY_LEARNING,
        "icon": CATEGORY_ICONS[const.TASK_CATEGORY_LEARNING],
    },
    const.TASK_CATEGORY_DIET: {
        "title": "Healthy eating",
        "description": "Log what you ate today",
        "category": const.TASK_CATEGORY_DIET,
        "icon": CATEGORY_ICONS[const.TASK_CATEGORY_DIET],
    },
    const.TASK_CATEGORY_JOURNAL: {
        "title": "Journal",
        "description": "Write down today's thoughts",
        "category": const.TASK_CATEGORY_JOURNAL,
        "icon": CATEGORY_ICONS[const.TASK_CATEGORY_JOURNAL],
    },
}


def get_template(key: str) -> TaskTemplate | None:
    """Return the template registered under `key`, or None."""
    return TASK_TEMPLATES.get(key)


def get_category_icon(category: str) -> str:
    """Return the icon for a category, falling back to the custom icon."""
    return CATEGORY_ICONS.get(category, CATEGORY_ICONS[const.TASK_CATEGORY_CUSTOM])
