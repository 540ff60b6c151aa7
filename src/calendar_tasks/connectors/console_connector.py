# src/calendar_tasks/connectors/console_connector.py

from __future__ import annotations

import logging
from collections.abc import Callable

from ..cli.commands import registry as command_registry
from ..core.state import AppState

logger = logging.getLogger(__name__)


def _prompt(state: AppState) -> str:
    return f"[{state.selected_date or 'no date'}] >>> "


def handle_line(state: AppState, line: str) -> str | None:
    """
    Route one input line. Returns the text to show, or None for empty input.
    """
    line = line.strip()
    if not line:
        return None

    if not line.startswith("/"):
        return "Commands start with '/'. Use /help to list available commands."

    try:
        return command_registry.handle(state, line)
    except Exception:
        logger.exception("Command handler crashed.")
        return "Internal error while handling a command."


def run_console_loop(
    state: AppState,
    *,
    read_line: Callable[[str], str] = input,
    write: Callable[[str], None] = print,
) -> None:
    logger.info("Console started.")
    app_name = str(getattr(state.settings, "app_name", "Task Manager"))
    write(f"{app_name}. Use /help for commands, /exit to quit.\n")

    while True:
        try:
            user_input = read_line(_prompt(state))
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            write("")
            break

        if user_input.strip().lower() in ("/exit", "/quit"):
            logger.info("Console exit command received.")
            break

        reply = handle_line(state, user_input)
        if reply is not None:
            write(reply)

    logger.info("Console finished.")
