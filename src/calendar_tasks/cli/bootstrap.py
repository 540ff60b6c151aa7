# src/calendar_tasks/cli/bootstrap.py

"""
CLI bootstrap: the composition root.

Loads settings once and wires a fresh, empty TaskStore into AppState.
Nothing is loaded from disk; every session starts with no tasks.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.state import AppState
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


def create_initial_state(*, settings=None) -> AppState:
    """
    Create AppState from the provided settings.

    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    state = AppState(settings=settings, task_store=TaskStore())
    logger.debug("Initial state created app=%s", getattr(settings, "app_name", "?"))
    return state
