# src/calendar_tasks/cli/commands.py

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import date

from ..core.state import AppState
from ..tasks.aggregation import aggregate, chart_slices
from ..tasks.task_models import TaskCategory, format_date_key, to_date_key
from ..tasks.validation import TaskValidationError, build_task
from .render import render_chart, render_task_list

CommandHandler = Callable[[AppState, str], str]

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Simple slash-command registry used by the console (/help, /add, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(self, state: AppState, line: str) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        name, _, rest = line[1:].strip().partition(" ")
        if not name:
            return "Empty command. Use /help to list available commands."

        handler = self._handlers.get(name.lower())
        if not handler:
            return f"Unknown command: /{name.lower()}. Use /help to list available commands."

        return handler(state, rest.strip())

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


def _color(state: AppState) -> bool:
    return bool(getattr(state.settings, "color", False))


def _no_date_selected() -> str:
    return "No date selected. Use /date YYYY-MM-DD or /date today first."


def _parse_form(text: str) -> dict[str, str]:
    """
    "<category> <title> [| description]" -> raw form values.

    Missing parts stay empty so validation reports them per field.
    """
    head, _, description = text.partition("|")
    category, _, title = head.strip().partition(" ")
    return {"category": category, "title": title, "description": description.strip()}


def _parse_index(raw: str) -> int | None:
    try:
        return int(raw)
    except ValueError:
        return None


def _format_errors(exc: TaskValidationError) -> str:
    lines = ["Task not saved:"]
    for name, msg in exc.errors.items():
        lines.append(f"  {name}: {msg}")
    return "\n".join(lines)


def cmd_help(state: AppState, args: str) -> str:
    # /exit is handled by the console loop, not the registry.
    return registry.build_help() + "\n  /exit - Quit the session (alias: /quit)."


def cmd_status(state: AppState, args: str) -> str:
    selected = state.selected_date or "(none)"
    draft = state.filter_draft.value if state.filter_draft else "(none)"
    applied = state.chart_filter.value if state.chart_filter else "(none)"
    return (
        "Status:\n"
        f"  Selected date: {selected}\n"
        f"  Tasks stored: {state.task_store.count()} on {len(state.task_store.dates())} date(s)\n"
        f"  Chart filter: {applied} (draft: {draft})"
    )


def cmd_date(state: AppState, args: str) -> str:
    """
    /date              -> show selected date
    /date today        -> select today
    /date YYYY-MM-DD   -> select that date
    """
    if not args:
        if state.selected_date is None:
            return _no_date_selected()
        return f"Selected date: {format_date_key(state.selected_date)}"

    try:
        key = to_date_key(date.today()) if args.lower() == "today" else to_date_key(args)
    except ValueError:
        return f"Invalid date: {args!r}. Use YYYY-MM-DD."

    state.select_date(key)
    logger.debug("Date selected %s", key)
    return render_task_list(key, state.task_store.tasks_for(key), color=_color(state))


def cmd_dates(state: AppState, args: str) -> str:
    dates = state.task_store.dates()
    if not dates:
        return "No tasks on any date."
    lines = ["Dates with tasks:"]
    for key in dates:
        lines.append(f"  {key}  {len(state.task_store.tasks_for(key))} task(s)")
    return "\n".join(lines)


def cmd_list(state: AppState, args: str) -> str:
    if state.selected_date is None:
        return _no_date_selected()
    key = state.selected_date
    return render_task_list(key, state.task_store.tasks_for(key), color=_color(state))


def cmd_add(state: AppState, args: str) -> str:
    """/add <category> <title> [| description]"""
    if state.selected_date is None:
        return _no_date_selected()
    key = state.selected_date

    try:
        task = build_task(_parse_form(args), key)
    except TaskValidationError as e:
        return _format_errors(e)

    state.task_store.add_task(key, task)
    logger.info("Task added date=%s category=%s", key, task.category.value)
    return f"Added task #{len(state.task_store.tasks_for(key)) - 1} on {format_date_key(key)}."


def cmd_edit(state: AppState, args: str) -> str:
    """/edit <n> <category> <title> [| description]"""
    if state.selected_date is None:
        return _no_date_selected()
    key = state.selected_date

    raw_index, _, form_text = args.partition(" ")
    index = _parse_index(raw_index)
    if index is None:
        return "Usage: /edit <n> <category> <title> [| description]"

    tasks = state.task_store.tasks_for(key)
    if not 0 <= index < len(tasks):
        return f"No task #{index} on {format_date_key(key)}."

    try:
        updated = build_task(_parse_form(form_text), key, task_id=tasks[index].id)
    except TaskValidationError as e:
        return _format_errors(e)

    if not state.task_store.edit_task(key, index, updated):
        return f"No task #{index} on {format_date_key(key)}."
    logger.info("Task edited date=%s index=%s", key, index)
    return f"Updated task #{index} on {format_date_key(key)}."


def cmd_del(state: AppState, args: str) -> str:
    """/del <n>"""
    if state.selected_date is None:
        return _no_date_selected()
    key = state.selected_date

    index = _parse_index(args)
    if index is None:
        return "Usage: /del <n>"

    if not state.task_store.delete_task(key, index):
        return f"No task #{index} on {format_date_key(key)}."
    logger.info("Task deleted date=%s index=%s", key, index)
    return f"Deleted task #{index} on {format_date_key(key)}."


def cmd_filter(state: AppState, args: str) -> str:
    """
    /filter <category>  -> pick a chart filter (takes effect on /apply)
    /filter             -> clear the picked filter
    """
    if not args:
        state.filter_draft = None
        return "Filter cleared. Use /apply to show all categories."

    category = TaskCategory.parse(args)
    if category is None:
        allowed = ", ".join(c.value for c in TaskCategory)
        return f"Unknown category: {args!r}. Expected one of: {allowed}."

    state.filter_draft = category
    return f"Filter set to {category.label}. Use /apply to update the chart."


def cmd_apply(state: AppState, args: str) -> str:
    state.apply_filter()
    return cmd_chart(state, "")


def cmd_reset(state: AppState, args: str) -> str:
    state.reset_filter()
    return cmd_chart(state, "")


def cmd_chart(state: AppState, args: str) -> str:
    pairs = aggregate(
        state.task_store.state,
        state.chart_filter,
        sort=bool(getattr(state.settings, "sort_chart", False)),
    )
    return render_chart(
        chart_slices(pairs),
        width=int(getattr(state.settings, "chart_width", 40)),
        color=_color(state),
        chart_filter=state.chart_filter,
    )


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("status", cmd_status, help_text="Show selected date, totals and chart filter.")
registry.register("date", cmd_date, help_text="Select a date: /date YYYY-MM-DD | /date today.")
registry.register("dates", cmd_dates, help_text="List dates that have tasks.")
registry.register("list", cmd_list, help_text="List tasks for the selected date.", aliases=["ls"])
registry.register(
    "add", cmd_add, help_text="Add a task: /add <category> <title> [| description]."
)
registry.register(
    "edit", cmd_edit, help_text="Edit a task: /edit <n> <category> <title> [| description]."
)
registry.register("del", cmd_del, help_text="Delete a task: /del <n>.", aliases=["rm"])
registry.register("filter", cmd_filter, help_text="Pick a chart filter: /filter <category>.")
registry.register("apply", cmd_apply, help_text="Apply the picked chart filter.")
registry.register("reset", cmd_reset, help_text="Clear the chart filter.")
registry.register("chart", cmd_chart, help_text="Show task counts per category.")
