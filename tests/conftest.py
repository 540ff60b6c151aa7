# tests/conftest.py

from __future__ import annotations

from types import SimpleNamespace

import pytest

from calendar_tasks.core.state import AppState
from calendar_tasks.tasks.task_models import Task, TaskCategory
from calendar_tasks.tasks.task_store import TaskStore


@pytest.fixture()
def settings() -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and the command handlers.

    A SimpleNamespace rather than the real config keeps tests independent of
    the environment.
    """
    return SimpleNamespace(
        app_name="Task Manager",
        log_level="WARNING",
        chart_width=20,
        sort_chart=True,
        color=False,
    )


@pytest.fixture()
def store() -> TaskStore:
    return TaskStore()


@pytest.fixture()
def state(settings: SimpleNamespace, store: TaskStore) -> AppState:
    return AppState(settings=settings, task_store=store)


@pytest.fixture()
def make_task():
    def _make(
        title: str = "Report",
        category: TaskCategory = TaskCategory.INFO,
        date: str = "2024-05-01",
        description: str = "",
    ) -> Task:
        return Task(title=title, category=category, date=date, description=description)

    return _make
