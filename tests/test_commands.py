# tests/test_commands.py

from __future__ import annotations

from datetime import date

import pytest

from daylist.cli.commands import (
    CommandRegistry,
    parse_day,
    parse_rows,
    registry,
    split_title_description,
)
from daylist.core.state import AppState


def test_command_registry_routes_2_and_3_params(state) -> None:
    reg = CommandRegistry()
    called = {"h2": 0, "h3": 0}

    def h2(state, args):
        called["h2"] += 1
        return "h2"

    def h3(state, args, emit):
        called["h3"] += 1
        if emit is not None:
            emit("note")
        return "h3"

    reg.register("a", h2, "a")
    reg.register("b", h3, "b")

    assert reg.handle(state, "/a x") == "h2"
    assert reg.handle(state, "/b y", emit=lambda _: None) == "h3"
    assert called["h2"] == 1
    assert called["h3"] == 1


def test_command_registry_unknown_and_non_command(state) -> None:
    reg = CommandRegistry()
    assert reg.handle(state, "hello") is None
    assert "Unknown command" in (reg.handle(state, "/nope") or "")
    assert "Empty command" in (reg.handle(state, "/") or "")


def test_help_lists_commands(state) -> None:
    text = registry.handle(state, "/help") or ""
    for name in ("/add", "/edit", "/done", "/del", "/date", "/list"):
        assert name in text


def test_parse_day() -> None:
    today = date(2025, 3, 22)
    assert parse_day("today", today=today) == today
    assert parse_day("tomorrow", today=today) == date(2025, 3, 23)
    assert parse_day("yesterday", today=today) == date(2025, 3, 21)
    assert parse_day("+10", today=today) == date(2025, 4, 1)
    assert parse_day("-22", today=today) == date(2025, 2, 28)
    assert parse_day("2024-02-29", today=today) == date(2024, 2, 29)
    with pytest.raises(ValueError):
        parse_day("someday", today=today)


def test_split_title_description() -> None:
    assert split_title_description(["Buy", "milk", "|", "2", "l"]) == ("Buy milk", "2 l")
    assert split_title_description(["Buy", "milk"]) == ("Buy milk", "")
    assert split_title_description(["|", "only", "desc"]) == ("", "only desc")


def test_parse_rows() -> None:
    assert parse_rows(["1", "3,4"]) == [0, 2, 3]
    with pytest.raises(ValueError):
        parse_rows(["0"])
    with pytest.raises(ValueError):
        parse_rows(["x"])


def test_add_list_done_edit_del_flow(state: AppState) -> None:
    assert "(no tasks)" in (registry.handle(state, "/list") or "")

    assert registry.handle(state, "/add Buy milk | 2 liters") == "Added: Buy milk"
    assert registry.handle(state, "/add Call mom") == "Added: Call mom"
    assert "title must not be empty" in (registry.handle(state, "/add | nothing") or "")

    listing = registry.handle(state, "/ls") or ""
    assert "Tasks for 2025-03-22" in listing
    assert "1. [ ] Buy milk" in listing
    assert "2 liters" in listing
    assert "2. [ ] Call mom" in listing

    assert registry.handle(state, "/done 2") == "Completed: Call mom"
    assert "2. [x] Call mom" in (registry.handle(state, "/list") or "")
    assert registry.handle(state, "/toggle 2") == "Reopened: Call mom"

    first_id = state.task_store.all_tasks()[0].id
    assert registry.handle(state, "/edit 1 Buy oat milk | 1 liter") == "Updated: Buy oat milk"
    first = state.task_store.all_tasks()[0]
    assert (first.id, first.title, first.description) == (first_id, "Buy oat milk", "1 liter")

    assert registry.handle(state, "/del 1") == "Deleted 1 task(s)."
    assert [t.title for t in state.task_store.all_tasks()] == ["Call mom"]


def test_row_errors(state: AppState) -> None:
    registry.handle(state, "/add One")

    assert registry.handle(state, "/done 5") == "No task #5 on 2025-03-22."
    assert registry.handle(state, "/done x") == "Not a row number: x"
    assert (registry.handle(state, "/done") or "").startswith("Usage")
    assert (registry.handle(state, "/edit 1") or "").startswith("Usage")
    assert registry.handle(state, "/edit 1 | desc only") == "Title must not be empty."
    assert (registry.handle(state, "/del zero") or "").startswith("Usage")
    assert registry.handle(state, "/del 4") == "Deleted 0 task(s)."
    assert state.task_store.count_tasks() == 1


def test_date_command_scopes_the_view(state: AppState) -> None:
    registry.handle(state, "/add Today's task")

    assert registry.handle(state, "/date") == "Selected date: 2025-03-22"
    listing = registry.handle(state, "/date 2025-03-23") or ""
    assert state.selected_date == date(2025, 3, 23)
    assert "(no tasks)" in listing

    registry.handle(state, "/add Tomorrow's task")
    assert [t.title for t in state.task_store.tasks_for_date(date(2025, 3, 23))] == [
        "Tomorrow's task"
    ]

    assert (registry.handle(state, "/date not-a-date") or "").startswith("Usage")
    assert state.selected_date == date(2025, 3, 23)


def test_status(state: AppState) -> None:
    registry.handle(state, "/add One")
    text = registry.handle(state, "/status") or ""
    assert "Storage: sqlite (key=tasks)" in text
    assert "Tasks total: 1" in text
