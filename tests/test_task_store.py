# tests/test_task_store.py

from __future__ import annotations

import logging

import pytest

from calendar_tasks.tasks.task_models import Task, TaskCategory
from calendar_tasks.tasks.task_store import (
    EMPTY_STATE,
    AddTask,
    DeleteTask,
    EditTask,
    TaskStore,
    reduce,
    replay,
)

DAY = "2024-05-01"
OTHER_DAY = "2024-05-02"


def test_add_to_empty_store_creates_date(store: TaskStore, make_task) -> None:
    task = make_task(title="Report", category=TaskCategory.INFO)

    assert store.add_task(DAY, task) is True

    assert dict(store.state) == {DAY: (task,)}


def test_adds_keep_call_order_per_date(store: TaskStore, make_task) -> None:
    a = make_task(title="a")
    b = make_task(title="b", date=OTHER_DAY)
    c = make_task(title="c")

    for t in (a, b, c):
        store.add_task(t.date, t)

    assert store.tasks_for(DAY) == (a, c)
    assert store.tasks_for(OTHER_DAY) == (b,)
    assert store.count() == 3


def test_deleting_last_task_removes_date(store: TaskStore, make_task) -> None:
    store.add_task(DAY, make_task())

    assert store.delete_task(DAY, 0) is True

    assert dict(store.state) == {}
    assert DAY not in store.state


def test_delete_first_of_two_keeps_second(store: TaskStore, make_task) -> None:
    first = make_task(title="first")
    second = make_task(title="second")
    store.add_task(DAY, first)
    store.add_task(DAY, second)

    store.delete_task(DAY, 0)

    assert store.tasks_for(DAY) == (second,)


def test_delete_never_leaves_empty_sequence(store: TaskStore, make_task) -> None:
    for i in range(3):
        store.add_task(DAY, make_task(title=f"t{i}"))

    while store.tasks_for(DAY):
        store.delete_task(DAY, len(store.tasks_for(DAY)) - 1)
        assert all(store.state.values())

    assert DAY not in store.state


@pytest.mark.parametrize("index", [1, 5, -1])
def test_delete_out_of_range_is_noop_and_reported(
    store: TaskStore, make_task, caplog: pytest.LogCaptureFixture, index: int
) -> None:
    task = make_task()
    store.add_task(DAY, task)
    before = store.state

    with caplog.at_level(logging.WARNING, logger="calendar_tasks.tasks.task_store"):
        assert store.delete_task(DAY, index) is False

    assert store.state is before
    assert store.tasks_for(DAY) == (task,)
    assert "DeleteTask ignored" in caplog.text


def test_delete_unknown_date_is_noop(store: TaskStore) -> None:
    assert store.delete_task(DAY, 0) is False
    assert dict(store.state) == {}


def test_edit_changes_only_target(store: TaskStore, make_task) -> None:
    a = make_task(title="a")
    b = make_task(title="b")
    other = make_task(title="other", date=OTHER_DAY)
    store.add_task(DAY, a)
    store.add_task(DAY, b)
    store.add_task(OTHER_DAY, other)

    updated = make_task(title="b2", category=TaskCategory.ISSUE)
    assert store.edit_task(DAY, 1, updated) is True

    assert store.tasks_for(DAY) == (a, updated)
    assert store.tasks_for(OTHER_DAY) == (other,)


def test_edit_is_idempotent(make_task) -> None:
    state = replay([AddTask(DAY, make_task(title="a")), AddTask(DAY, make_task(title="b"))])
    cmd = EditTask(DAY, 0, make_task(title="changed"))

    once = reduce(state, cmd)
    twice = reduce(once, cmd)

    assert twice == once


def test_edit_missing_target_is_noop(store: TaskStore, make_task) -> None:
    store.add_task(DAY, make_task())
    before = store.state

    assert store.edit_task(DAY, 3, make_task(title="x")) is False
    assert store.edit_task(OTHER_DAY, 0, make_task(title="x")) is False

    assert store.state is before
    assert OTHER_DAY not in store.state


def test_reduce_does_not_mutate_input(make_task) -> None:
    first = make_task(title="first")
    state = reduce(EMPTY_STATE, AddTask(DAY, first))
    snapshot = dict(state)

    reduce(state, AddTask(DAY, make_task(title="second")))
    reduce(state, EditTask(DAY, 0, make_task(title="edited")))
    reduce(state, DeleteTask(DAY, 0))

    assert dict(state) == snapshot
    assert EMPTY_STATE == {}


def test_replay_is_independent_of_batching(make_task) -> None:
    tasks = [make_task(title=f"t{i}", date=DAY if i % 2 else OTHER_DAY) for i in range(6)]
    commands = [AddTask(t.date, t) for t in tasks]
    commands += [DeleteTask(DAY, 0), EditTask(OTHER_DAY, 1, make_task(title="edited"))]

    all_at_once = replay(commands)
    in_batches = replay(commands[4:], initial=replay(commands[:4]))

    assert in_batches == all_at_once


def test_reduce_rejects_unknown_command() -> None:
    with pytest.raises(TypeError):
        reduce(EMPTY_STATE, object())  # type: ignore[arg-type]


def test_store_accepts_unvalidated_tasks(store: TaskStore) -> None:
    malformed = Task(title="", category="nope", date=DAY)  # type: ignore[arg-type]

    assert store.add_task(DAY, malformed) is True
    assert store.tasks_for(DAY) == (malformed,)


def test_id_based_edit_and_delete(store: TaskStore, make_task) -> None:
    a = make_task(title="a")
    b = make_task(title="b")
    store.add_task(DAY, a)
    store.add_task(DAY, b)

    assert store.find(b.id) == (DAY, 1)

    store.delete_by_id(a.id)
    assert store.find(b.id) == (DAY, 0)

    renamed = Task(title="b renamed", category=b.category, date=DAY, id=b.id)
    assert store.edit_by_id(b.id, renamed) is True
    assert store.tasks_for(DAY) == (renamed,)

    assert store.delete_by_id("missing") is False
    assert store.edit_by_id("missing", renamed) is False


def test_ids_are_unique(make_task) -> None:
    assert make_task().id != make_task().id


def test_subscribers_run_only_on_applied_transitions(store: TaskStore, make_task) -> None:
    seen: list[tuple[int, str]] = []
    unsubscribe = store.subscribe(lambda s, cmd: seen.append((len(s), type(cmd).__name__)))

    store.add_task(DAY, make_task())
    store.delete_task(DAY, 4)
    store.delete_task(DAY, 0)
    unsubscribe()
    store.add_task(DAY, make_task())

    assert seen == [(1, "AddTask"), (0, "DeleteTask")]


def test_failing_subscriber_does_not_undo_transition(store: TaskStore, make_task) -> None:
    def boom(_state, _cmd) -> None:
        raise RuntimeError("listener failed")

    store.subscribe(boom)

    assert store.add_task(DAY, make_task()) is True
    assert store.count() == 1


def test_initial_state_is_normalized(make_task) -> None:
    task = make_task()
    seq = [task]

    store = TaskStore({DAY: seq, OTHER_DAY: ()})
    seq.clear()

    assert dict(store.state) == {DAY: (task,)}
    assert OTHER_DAY not in store.state


def test_all_tasks_flattens_every_date(store: TaskStore, make_task) -> None:
    a = make_task(title="a")
    b = make_task(title="b", date=OTHER_DAY)
    store.add_task(DAY, a)
    store.add_task(OTHER_DAY, b)

    assert sorted(t.title for t in store.all_tasks()) == ["a", "b"]
    assert len(store.all_tasks()) == store.count()
