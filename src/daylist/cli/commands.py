# src/daylist/cli/commands.py

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable
from datetime import date, timedelta
from typing import cast

from ..core.state import AppState
from ..tasks import task_api
from ..tasks.task_models import Task

CommandEmitter = Callable[[str], None]
CommandHandler2 = Callable[[AppState, list[str]], str]
CommandHandler3 = Callable[[AppState, list[str], CommandEmitter | None], str]
CommandHandler = CommandHandler2 | CommandHandler3

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

    def handle(
        self,
        state: AppState,
        line: str,
        emit: CommandEmitter | None = None,
    ) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        try:
            nparams = len(inspect.signature(handler).parameters)
        except (TypeError, ValueError):
            nparams = 3

        if nparams >= 3:
            h3 = cast(CommandHandler3, handler)
            return h3(state, args, emit)

        h2 = cast(CommandHandler2, handler)
        return h2(state, args)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


# ---- parsing helpers ----


def parse_day(raw: str, today: date | None = None) -> date:
    """
    Accepts YYYY-MM-DD, "today", "tomorrow", "yesterday", or a day offset like +1 / -3.
    Raises ValueError otherwise.
    """
    if today is None:
        today = date.today()
    s = raw.strip().lower()
    if s == "today":
        return today
    if s == "tomorrow":
        return today + timedelta(days=1)
    if s == "yesterday":
        return today - timedelta(days=1)
    if s[:1] in ("+", "-") and s[1:].isdigit():
        return today + timedelta(days=int(s))
    return date.fromisoformat(s)


def split_title_description(args: list[str]) -> tuple[str, str]:
    """'/add Buy milk | 2 liters' -> ("Buy milk", "2 liters")."""
    text = " ".join(args)
    title, _, description = text.partition("|")
    return title.strip(), description.strip()


def parse_rows(args: list[str]) -> list[int]:
    """1-based row numbers from the command line -> 0-based rows. Raises ValueError."""
    rows: list[int] = []
    for a in args:
        for piece in a.split(","):
            if not piece:
                continue
            n = int(piece)
            if n < 1:
                raise ValueError(f"row numbers start at 1, got {n}")
            rows.append(n - 1)
    return rows


def _row_task(state: AppState, raw: str) -> Task | str:
    """Task at 1-based row `raw` of the selected date, or an error message."""
    try:
        (row,) = parse_rows([raw])
    except ValueError:
        return f"Not a row number: {raw}"
    view = task_api.tasks_for_selected_date(state)
    if row >= len(view):
        return f"No task #{row + 1} on {state.selected_date.isoformat()}."
    return view[row]


def render_task_list(state: AppState) -> str:
    day = state.selected_date
    tasks = task_api.tasks_for_selected_date(state)
    header = f"Tasks for {day.isoformat()} ({day.strftime('%A')}):"
    if not tasks:
        return f"{header}\n  (no tasks)"
    lines = [header]
    for i, t in enumerate(tasks, start=1):
        mark = "x" if t.is_completed else " "
        lines.append(f"  {i}. [{mark}] {t.title}")
        if t.description:
            lines.append(f"         {t.description}")
    return "\n".join(lines)


# ---- handlers ----


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_status(state: AppState, args: list[str]) -> str:
    backend = str(getattr(state.settings, "storage_backend", "sqlite"))
    return (
        "Status:\n"
        f"  Storage: {backend} (key={state.task_store.key})\n"
        f"  Selected date: {state.selected_date.isoformat()}\n"
        f"  Tasks on that date: {len(task_api.tasks_for_selected_date(state))}\n"
        f"  Tasks total: {state.task_store.count_tasks()}"
    )


def cmd_date(state: AppState, args: list[str]) -> str:
    """
    /date            -> show selected date
    /date 2025-03-22 -> select that day
    /date +1         -> move by days
    """
    if not args:
        return f"Selected date: {state.selected_date.isoformat()}"
    try:
        day = parse_day(args[0], today=date.today())
    except ValueError:
        return "Usage: /date YYYY-MM-DD | today | tomorrow | yesterday | +N | -N"
    state.selected_date = day
    logger.debug("Selected date -> %s", day)
    return render_task_list(state)


def cmd_list(state: AppState, args: list[str]) -> str:
    return render_task_list(state)


def cmd_add(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    title, description = split_title_description(args)
    if not title:
        return "Usage: /add <title> [| description]  (title must not be empty)"
    task = task_api.add_task_for_selected_date(state, title=title, description=description)
    return f"Added: {task.title}"


def cmd_edit(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    if len(args) < 2:
        return "Usage: /edit <n> <title> [| description]"
    found = _row_task(state, args[0])
    if isinstance(found, str):
        return found
    title, description = split_title_description(args[1:])
    if not title:
        return "Title must not be empty."
    updated = task_api.edit_task(
        state, found, title=title, description=description, day=state.selected_date
    )
    return f"Updated: {updated.title}"


def cmd_done(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    if not args:
        return "Usage: /done <n>"
    found = _row_task(state, args[0])
    if isinstance(found, str):
        return found
    updated = task_api.toggle_completed(state, found)
    return f"{'Completed' if updated.is_completed else 'Reopened'}: {updated.title}"


def cmd_del(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    if not args:
        return "Usage: /del <n> [n ...]"
    try:
        rows = parse_rows(args)
    except ValueError:
        return "Usage: /del <n> [n ...]  (row numbers from /list)"
    removed = task_api.delete_tasks_for_view(state, rows)
    return f"Deleted {removed} task(s)."


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("status", cmd_status, help_text="Show storage and task totals.")
registry.register(
    "date", cmd_date, help_text="Show/select the date: /date YYYY-MM-DD | today | +N | -N."
)
registry.register("list", cmd_list, help_text="List tasks for the selected date.", aliases=["ls"])
registry.register("add", cmd_add, help_text="Add a task: /add <title> [| description].")
registry.register("edit", cmd_edit, help_text="Edit a task: /edit <n> <title> [| description].")
registry.register("done", cmd_done, help_text="Toggle completion: /done <n>.", aliases=["toggle"])
registry.register("del", cmd_del, help_text="Delete tasks: /del <n> [n ...].", aliases=["rm"])
