# tasks/task_models.py

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import date, datetime
from enum import StrEnum

DATE_KEY_FORMAT = "%Y-%m-%d"


class TaskCategory(StrEnum):
    """
    Closed set of task classifications.

    Used both for display color and for chart grouping.
    """

    SUCCESS = "success"
    WARNING = "warning"
    ISSUE = "issue"
    INFO = "info"

    @classmethod
    def parse(cls, raw: str | None) -> TaskCategory | None:
        if not raw:
            return None
        try:
            return cls(raw.strip().lower())
        except ValueError:
            return None

    @property
    def label(self) -> str:
        return f"{CATEGORY_MARKERS[self]} {self.value.capitalize()}"

    @property
    def color(self) -> str:
        return CATEGORY_COLORS[self]


CATEGORY_COLORS: dict[TaskCategory, str] = {
    TaskCategory.SUCCESS: "#52c41a",
    TaskCategory.WARNING: "#faad14",
    TaskCategory.ISSUE: "#f5222d",
    TaskCategory.INFO: "#1890ff",
}

CATEGORY_MARKERS: dict[TaskCategory, str] = {
    TaskCategory.SUCCESS: "✅",
    TaskCategory.WARNING: "⚠️",
    TaskCategory.ISSUE: "❌",
    TaskCategory.INFO: "ℹ️",
}


def _new_task_id() -> str:
    return uuid.uuid4().hex


@dataclass(frozen=True, slots=True)
class Task:
    title: str
    category: TaskCategory
    date: str
    description: str = ""
    id: str = field(default_factory=_new_task_id)


def to_date_key(value: date | datetime | str) -> str:
    """
    Normalize a calendar date into the store's grouping key (ISO YYYY-MM-DD).

    Strings are parsed strictly so that "2024-5-1" and "2024-05-01" can never
    end up as two different keys.
    """
    if isinstance(value, datetime):
        return value.date().strftime(DATE_KEY_FORMAT)
    if isinstance(value, date):
        return value.strftime(DATE_KEY_FORMAT)
    return datetime.strptime(value.strip(), DATE_KEY_FORMAT).date().strftime(DATE_KEY_FORMAT)


def format_date_key(date_key: str) -> str:
    """Human-readable form used in headers, e.g. "01 May 2024"."""
    return datetime.strptime(date_key, DATE_KEY_FORMAT).strftime("%d %b %Y")
