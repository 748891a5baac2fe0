# tests/test_task_api.py

from __future__ import annotations

from datetime import date, datetime

import pytest

from daylist.core.state import AppState
from daylist.tasks import task_api
from daylist.tasks.task_models import Task
from daylist.tasks.task_store import TaskStore

from .fakes import FakeBlobStore


def test_at_day_keeps_time_of_day() -> None:
    now = datetime(2025, 1, 1, 14, 5, 9, 999)
    assert task_api.at_day(date(2025, 3, 22), now=now) == datetime(2025, 3, 22, 14, 5, 9)


def test_add_for_selected_date_validates_title(state: AppState) -> None:
    with pytest.raises(ValueError):
        task_api.add_task_for_selected_date(state, title="   ")
    assert state.task_store.count_tasks() == 0

    task = task_api.add_task_for_selected_date(state, title=" Buy milk ", description=" 2 l ")
    assert (task.title, task.description) == ("Buy milk", "2 l")
    assert task_api.tasks_for_selected_date(state) == [task]


def test_toggle_completed_round_trip(state: AppState) -> None:
    task = task_api.add_task_for_selected_date(state, title="A")

    done = task_api.toggle_completed(state, task)
    assert done.is_completed is True
    assert state.task_store.get_task(task.id).is_completed is True

    reopened = task_api.toggle_completed(state, done)
    assert reopened.is_completed is False


def test_edit_keeps_id_position_and_completion(state: AppState) -> None:
    a = task_api.add_task_for_selected_date(state, title="A")
    b = task_api.add_task_for_selected_date(state, title="B")
    b = task_api.toggle_completed(state, b)

    edited = task_api.edit_task(state, b, title="B2", description="details")

    assert edited.id == b.id
    assert edited.is_completed is True
    assert [t.title for t in state.task_store.all_tasks()] == ["A", "B2"]
    assert state.task_store.all_tasks()[0] == a


def test_edit_can_move_to_another_day(state: AppState) -> None:
    a = task_api.add_task_for_selected_date(state, title="A")

    moved = task_api.edit_task(state, a, title="A", description="", day=date(2025, 3, 25))

    assert moved.date.date() == date(2025, 3, 25)
    assert moved.date.time() == a.date.time()
    assert task_api.tasks_for_selected_date(state) == []


def test_edit_rejects_empty_title(state: AppState) -> None:
    a = task_api.add_task_for_selected_date(state, title="A")
    with pytest.raises(ValueError):
        task_api.edit_task(state, a, title="", description="")
    assert state.task_store.get_task(a.id).title == "A"


def test_delete_tasks_for_view_uses_rows_of_selected_day(state: AppState) -> None:
    other = state.task_store.add_task("other day", "", datetime(2025, 3, 21, 8, 0))
    a = task_api.add_task_for_selected_date(state, title="A")
    b = task_api.add_task_for_selected_date(state, title="B")

    assert task_api.delete_tasks_for_view(state, [0, 5]) == 1
    assert state.task_store.all_tasks() == [other, b]
    assert a not in state.task_store.all_tasks()

    assert task_api.delete_tasks_for_view(state, [9]) == 0


def test_edit_after_restart_of_task_added_with_plain_date(settings) -> None:
    blob_store = FakeBlobStore()
    TaskStore(blob_store).add_task("A", "", date(2025, 3, 22))

    state = AppState(
        settings=settings, task_store=TaskStore(blob_store), selected_date=date(2025, 3, 22)
    )
    (task,) = task_api.tasks_for_selected_date(state)

    moved = task_api.edit_task(state, task, title="A2", description="", day=date(2025, 3, 23))

    assert moved.date == datetime(2025, 3, 23, 0, 0)
    assert [t.title for t in state.task_store.tasks_for_date(date(2025, 3, 23))] == ["A2"]


def test_edit_accepts_task_carrying_plain_date(state: AppState) -> None:
    loose = Task(title="A", description="", date=date(2025, 3, 22))

    edited = task_api.edit_task(state, loose, title="A", description="", day=date(2025, 3, 24))

    assert edited.date == datetime(2025, 3, 24, 0, 0)
