# src/daylist/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The task store depends on Protocols instead of concrete backends.
This keeps storage swappable and makes testing with in-memory doubles easy.
"""

from collections.abc import Callable, Iterable
from datetime import date, datetime
from typing import Any, Protocol, runtime_checkable

ChangeListener = Callable[[], None]
# Called with no arguments after the task collection changed.


class BlobStore(Protocol):
    """Key-value storage of opaque snapshots (SQLite table, files, test fakes)."""

    def read(self, key: str) -> bytes | None: ...
    def write(self, key: str, blob: bytes) -> None: ...


@runtime_checkable
class TaskRepo(Protocol):
    """What the console and task_api helpers need from a task store."""

    @property
    def key(self) -> str: ...

    # Persistence
    def load(self) -> None: ...
    def save(self) -> None: ...

    # Mutations
    def add_task(self, title: str, description: str, date: datetime | date) -> Any: ...
    def update_task(self, updated_task: Any) -> bool: ...
    def delete_tasks(self, indices: Iterable[int], for_date: datetime | date) -> int: ...
    def delete_tasks_by_id(self, task_ids: Iterable[str]) -> int: ...

    # Queries
    def tasks_for_date(self, day: datetime | date) -> list[Any]: ...
    def get_task(self, task_id: str) -> Any | None: ...
    def all_tasks(self) -> list[Any]: ...
    def count_tasks(self) -> int: ...

    # Change notifications
    def subscribe(self, listener: ChangeListener) -> Callable[[], None]: ...
