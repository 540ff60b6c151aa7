# src/calendar_tasks/cli/render.py

"""Plain-text renderers for the task list and the category chart."""

from __future__ import annotations

from collections.abc import Sequence

from ..tasks.aggregation import ChartSlice, category_color
from ..tasks.task_models import Task, TaskCategory, format_date_key

RESET = "\033[0m"


def _ansi_fg(hex_color: str) -> str:
    h = hex_color.lstrip("#")
    r, g, b = int(h[0:2], 16), int(h[2:4], 16), int(h[4:6], 16)
    return f"\033[38;2;{r};{g};{b}m"


def paint(text: str, hex_color: str, *, enabled: bool = True) -> str:
    if not enabled:
        return text
    return f"{_ansi_fg(hex_color)}{text}{RESET}"


def category_tag(category: TaskCategory | str, *, color: bool = True) -> str:
    return paint(f"[{category}]", category_color(category), enabled=color)


def render_task_list(date_key: str, tasks: Sequence[Task], *, color: bool = True) -> str:
    header = f"Tasks for {format_date_key(date_key)}:"
    if not tasks:
        return f"{header}\n  (no tasks)"
    lines = [header]
    for i, task in enumerate(tasks):
        line = f"  {i}. {category_tag(task.category, color=color)} {task.title}"
        if task.description:
            line += f" - {task.description}"
        lines.append(line)
    return "\n".join(lines)


def render_chart(
    slices: Sequence[ChartSlice],
    *,
    width: int = 40,
    color: bool = True,
    title: str = "Task Category Overview",
    chart_filter: TaskCategory | None = None,
) -> str:
    header = title if chart_filter is None else f"{title} (filter: {chart_filter})"
    if not slices:
        return f"{header}\n  No tasks to display."

    label_width = max(len(str(s.category)) for s in slices)
    lines = [header]
    for s in slices:
        filled = max(1, round(width * s.percent / 100.0))
        bar = paint("█" * filled, s.color, enabled=color)
        lines.append(f"  {str(s.category):<{label_width}} {bar} {s.count} ({s.percent:.0f}%)")
    return "\n".join(lines)
