# tests/conftest.py

from __future__ import annotations

from datetime import date
from pathlib import Path
from types import SimpleNamespace

import pytest

from daylist.core.state import AppState
from daylist.tasks.task_store import TaskStore

from .fakes import FakeBlobStore


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and bootstrap.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="daylist-test",
        log_level="DEBUG",
        console_enabled=False,
        storage_backend="sqlite",
        storage_key="tasks",
        # Paths (tmp per test run)
        data_dir=tmp_path,
        store_db_path=tmp_path / "store.sqlite3",
        store_dir=tmp_path / "store",
    )


@pytest.fixture()
def blob_store() -> FakeBlobStore:
    return FakeBlobStore()


@pytest.fixture()
def task_store(blob_store: FakeBlobStore) -> TaskStore:
    return TaskStore(blob_store)


@pytest.fixture()
def state(settings: SimpleNamespace, task_store: TaskStore) -> AppState:
    """AppState over an in-memory blob store, pinned to a fixed selected date."""
    return AppState(
        settings=settings,
        task_store=task_store,
        selected_date=date(2025, 3, 22),
    )
