# tasks/aggregation.py

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass

from .task_models import CATEGORY_COLORS, TaskCategory
from .task_store import StoreState

CategoryCount = tuple[TaskCategory, int]

UNKNOWN_COLOR = "#8c8c8c"


@dataclass(frozen=True, slots=True)
class ChartSlice:
    category: TaskCategory
    count: int
    percent: float
    color: str


def aggregate(
    state: StoreState,
    category: TaskCategory | None = None,
    *,
    sort: bool = False,
) -> list[CategoryCount]:
    """
    Count tasks per category across every date in ``state``.

    With ``category`` set, only that category is counted, so the result has
    at most one entry. Categories without tasks are omitted, never reported
    as zero. Pairs come in first-occurrence order of the scan unless
    ``sort`` is set, in which case they are ordered by category name.
    """
    counts: Counter[TaskCategory] = Counter()
    for tasks in state.values():
        for task in tasks:
            if category is not None and task.category != category:
                continue
            counts[task.category] += 1

    pairs = list(counts.items())
    if sort:
        pairs.sort(key=lambda p: str(p[0]))
    return pairs


def category_color(category: TaskCategory | str) -> str:
    """Display color; tasks that bypassed validation get a neutral grey."""
    parsed = TaskCategory.parse(str(category))
    return CATEGORY_COLORS[parsed] if parsed is not None else UNKNOWN_COLOR


def chart_slices(pairs: list[CategoryCount]) -> list[ChartSlice]:
    total = sum(count for _, count in pairs)
    if total <= 0:
        return []
    return [
        ChartSlice(
            category=cat,
            count=count,
            percent=100.0 * count / total,
            color=category_color(cat),
        )
        for cat, count in pairs
    ]
