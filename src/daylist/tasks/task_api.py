# src/daylist/tasks/task_api.py

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import replace
from datetime import date, datetime

from ..core.state import AppState
from .task_models import Task, as_datetime, calendar_day

logger = logging.getLogger(__name__)


def at_day(day: date, now: datetime | None = None) -> datetime:
    """
    Timestamp for a new task on `day`.

    Keeps the current time-of-day (like a date picker does), only the day matters for filtering.
    """
    if now is None:
        now = datetime.now()
    return datetime.combine(day, now.time().replace(microsecond=0))


def tasks_for_selected_date(state: AppState) -> list[Task]:
    return state.task_store.tasks_for_date(state.selected_date)


def add_task_for_selected_date(state: AppState, *, title: str, description: str = "") -> Task:
    """Caller-side validation: the store itself accepts any title."""
    title = title.strip()
    if not title:
        raise ValueError("title is required")
    return state.task_store.add_task(title, description.strip(), at_day(state.selected_date))


def toggle_completed(state: AppState, task: Task) -> Task:
    """Flip the completion flag of a task obtained from the store."""
    updated = replace(task, is_completed=not task.is_completed)
    state.task_store.update_task(updated)
    return updated


def edit_task(
    state: AppState,
    task: Task,
    *,
    title: str,
    description: str,
    day: date | None = None,
) -> Task:
    """
    Rewrite title/description (and optionally move to `day`).

    Keeps the id and the completion flag, so the store replaces it in place.
    """
    title = title.strip()
    if not title:
        raise ValueError("title is required")

    new_date = as_datetime(task.date)
    if day is not None and day != calendar_day(task.date):
        new_date = datetime.combine(day, new_date.timetz())

    updated = replace(task, title=title, description=description.strip(), date=new_date)
    state.task_store.update_task(updated)
    return updated


def delete_tasks_for_view(state: AppState, rows: Iterable[int]) -> int:
    """
    Delete by 0-based rows of the selected date's view.

    Rows are resolved to ids right here and deleted by id, so a view that changes
    later cannot redirect the delete to another task.
    """
    view = tasks_for_selected_date(state)
    ids: list[str] = []
    for row in rows:
        if 0 <= row < len(view):
            ids.append(view[row].id)
        else:
            logger.debug("delete_tasks_for_view: row %s out of range (%d tasks)", row, len(view))
    if not ids:
        return 0
    return state.task_store.delete_tasks_by_id(ids)
