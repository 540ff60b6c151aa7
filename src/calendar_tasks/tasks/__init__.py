from .aggregation import ChartSlice, aggregate, chart_slices
from .task_models import Task, TaskCategory, to_date_key
from .task_store import AddTask, DeleteTask, EditTask, TaskStore, reduce, replay
from .validation import TaskForm, TaskValidationError, build_task

__all__ = [
    "AddTask",
    "ChartSlice",
    "DeleteTask",
    "EditTask",
    "Task",
    "TaskCategory",
    "TaskForm",
    "TaskStore",
    "TaskValidationError",
    "aggregate",
    "build_task",
    "chart_slices",
    "reduce",
    "replay",
    "to_date_key",
]
