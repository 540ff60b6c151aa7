# tasks/validation.py

"""
Form validation at the boundary between the presentation layer and the store.

The store accepts anything it is given. Callers build tasks through
``build_task`` so that a rejected submission never reaches a store command.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from .task_models import Task, TaskCategory

logger = logging.getLogger(__name__)


class TaskValidationError(ValueError):
    """Rejected task submission. ``errors`` maps field name -> message."""

    def __init__(self, errors: dict[str, str]) -> None:
        self.errors = dict(errors)
        super().__init__("; ".join(f"{k}: {v}" for k, v in self.errors.items()))


class TaskForm(BaseModel):
    # Missing fields must still go through the validators below.
    model_config = ConfigDict(validate_default=True)

    title: str = ""
    description: str = ""
    category: str = ""

    @field_validator("title", "description", "category", mode="before")
    @classmethod
    def none_to_empty(cls, v: Any) -> Any:
        return "" if v is None else v

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Title is required")
        return v.strip()

    @field_validator("category")
    @classmethod
    def validate_category(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Category is required")
        category = TaskCategory.parse(v)
        if category is None:
            allowed = ", ".join(c.value for c in TaskCategory)
            raise ValueError(f"Unknown category (expected one of: {allowed})")
        return category.value


def _field_errors(exc: ValidationError) -> dict[str, str]:
    out: dict[str, str] = {}
    for err in exc.errors():
        loc = err.get("loc") or ("form",)
        name = str(loc[0])
        msg = str(err.get("msg", "Invalid value"))
        # pydantic prefixes messages raised from validators.
        msg = msg.removeprefix("Value error, ")
        out.setdefault(name, msg)
    return out


def validate_form(values: Mapping[str, Any]) -> TaskForm:
    try:
        return TaskForm.model_validate(dict(values))
    except ValidationError as e:
        errors = _field_errors(e)
        logger.debug("Task form rejected: %s", errors)
        raise TaskValidationError(errors) from e


def build_task(values: Mapping[str, Any], date: str, *, task_id: str | None = None) -> Task:
    """
    Validate raw form values and build a Task stored under ``date``.

    ``task_id`` keeps the identity of a task being edited.
    """
    form = validate_form(values)
    category = TaskCategory(form.category)
    if task_id is None:
        return Task(title=form.title, description=form.description, category=category, date=date)
    return Task(
        title=form.title,
        description=form.description,
        category=category,
        date=date,
        id=task_id,
    )
