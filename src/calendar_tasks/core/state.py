# src/calendar_tasks/core/state.py

from __future__ import annotations

from dataclasses import dataclass

from ..tasks.task_models import TaskCategory
from ..tasks.task_store import TaskStore


@dataclass
class AppState:
    """
    Presentation-layer state for one interactive session.

    The store holds tasks only. Everything the user is "in the middle of"
    (selected day, chart filter draft) lives here and is passed to handlers
    explicitly.
    """

    settings: object
    task_store: TaskStore

    selected_date: str | None = None

    # Chart filter: the draft is picked with /filter, applied with /apply.
    filter_draft: TaskCategory | None = None
    chart_filter: TaskCategory | None = None

    def select_date(self, date_key: str) -> None:
        self.selected_date = date_key

    def apply_filter(self) -> None:
        self.chart_filter = self.filter_draft

    def reset_filter(self) -> None:
        self.filter_draft = None
        self.chart_filter = None
