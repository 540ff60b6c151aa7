# tasks/task_store.py

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass

from .task_models import Task

logger = logging.getLogger(__name__)

StoreState = Mapping[str, tuple[Task, ...]]
StoreListener = Callable[[StoreState, "TaskCommand"], None]

EMPTY_STATE: StoreState = {}


@dataclass(frozen=True, slots=True)
class AddTask:
    date: str
    task: Task


@dataclass(frozen=True, slots=True)
class DeleteTask:
    date: str
    index: int


@dataclass(frozen=True, slots=True)
class EditTask:
    date: str
    index: int
    updated_task: Task


TaskCommand = AddTask | DeleteTask | EditTask


def _has_index(state: StoreState, date: str, index: int) -> bool:
    tasks = state.get(date)
    return bool(tasks) and 0 <= index < len(tasks)


def reduce(state: StoreState, command: TaskCommand) -> StoreState:
    """
    Apply one command to a store snapshot and return the next snapshot.

    The input snapshot is never mutated. A command that does not apply
    (unknown date, index out of range) returns the very same snapshot object,
    so callers can detect a no-op with ``new is old``.

    The store performs no validation of task contents; that happens before a
    command is built (see tasks.validation).
    """
    if isinstance(command, AddTask):
        new_state = dict(state)
        new_state[command.date] = (*state.get(command.date, ()), command.task)
        return new_state

    if isinstance(command, DeleteTask):
        if not _has_index(state, command.date, command.index):
            return state
        tasks = state[command.date]
        remaining = tasks[: command.index] + tasks[command.index + 1 :]
        new_state = dict(state)
        if remaining:
            new_state[command.date] = remaining
        else:
            # No empty sequences under a present key.
            del new_state[command.date]
        return new_state

    if isinstance(command, EditTask):
        if not _has_index(state, command.date, command.index):
            return state
        tasks = list(state[command.date])
        tasks[command.index] = command.updated_task
        new_state = dict(state)
        new_state[command.date] = tuple(tasks)
        return new_state

    raise TypeError(f"Unsupported task command: {command!r}")


def replay(commands: Iterable[TaskCommand], initial: StoreState = EMPTY_STATE) -> StoreState:
    """Fold a command sequence into a snapshot, starting from ``initial``."""
    state = initial
    for command in commands:
        state = reduce(state, command)
    return state


class TaskStore:
    """
    In-memory, date-keyed task store.

    Holds the current snapshot and applies commands through ``reduce``.
    Tasks are addressed by (date, index) within the current snapshot;
    ``find``/``edit_by_id``/``delete_by_id`` resolve a stable task id to that
    position first.

    Listeners registered with ``subscribe`` run after an applied transition,
    never during one. The store keeps no UI state.
    """

    def __init__(self, initial: StoreState | None = None) -> None:
        # Same shape as reduce output: tuples only, no empty dates.
        self._state: StoreState = (
            {date: tuple(tasks) for date, tasks in initial.items() if tasks} if initial else EMPTY_STATE
        )
        self._listeners: list[StoreListener] = []
        logger.debug("TaskStore ready dates=%s total=%s", len(self._state), self.count())

    # ---- queries ----

    @property
    def state(self) -> StoreState:
        return self._state

    def tasks_for(self, date: str) -> tuple[Task, ...]:
        return self._state.get(date, ())

    def all_tasks(self) -> list[Task]:
        return [task for tasks in self._state.values() for task in tasks]

    def dates(self) -> list[str]:
        return sorted(self._state)

    def count(self) -> int:
        return sum(len(tasks) for tasks in self._state.values())

    def find(self, task_id: str) -> tuple[str, int] | None:
        for date, tasks in self._state.items():
            for index, task in enumerate(tasks):
                if task.id == task_id:
                    return date, index
        return None

    # ---- commands ----

    def dispatch(self, command: TaskCommand) -> bool:
        """
        Apply ``command``. Returns True if the state changed.

        Delete/edit commands that miss (unknown date, stale or invalid index)
        are ignored and logged; they never touch neighbouring entries.
        """
        new_state = reduce(self._state, command)
        if new_state is self._state:
            logger.warning(
                "%s ignored: no task at date=%s index=%s (have %s)",
                type(command).__name__,
                command.date,
                getattr(command, "index", None),
                len(self.tasks_for(command.date)),
            )
            return False

        self._state = new_state
        logger.debug("Applied %s date=%s total=%s", type(command).__name__, command.date, self.count())

        for listener in list(self._listeners):
            try:
                listener(new_state, command)
            except Exception:
                logger.exception("Store listener failed after %s", type(command).__name__)
        return True

    def add_task(self, date: str, task: Task) -> bool:
        return self.dispatch(AddTask(date=date, task=task))

    def delete_task(self, date: str, index: int) -> bool:
        return self.dispatch(DeleteTask(date=date, index=index))

    def edit_task(self, date: str, index: int, updated_task: Task) -> bool:
        return self.dispatch(EditTask(date=date, index=index, updated_task=updated_task))

    def delete_by_id(self, task_id: str) -> bool:
        where = self.find(task_id)
        if where is None:
            logger.warning("delete_by_id ignored: unknown task_id=%s", task_id)
            return False
        date, index = where
        return self.delete_task(date, index)

    def edit_by_id(self, task_id: str, updated_task: Task) -> bool:
        where = self.find(task_id)
        if where is None:
            logger.warning("edit_by_id ignored: unknown task_id=%s", task_id)
            return False
        date, index = where
        return self.edit_task(date, index, updated_task)

    # ---- listeners ----

    def subscribe(self, listener: StoreListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe
