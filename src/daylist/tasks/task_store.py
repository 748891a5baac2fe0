# src/daylist/tasks/task_store.py

from __future__ import annotations

import json
import logging
import threading
from collections.abc import Callable, Iterable
from dataclasses import replace
from datetime import date, datetime

from ..core.ports import BlobStore, ChangeListener
from .task_models import Task, as_datetime

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_KEY = "tasks"


class TaskStore:
    """
    In-memory task collection persisted as one JSON snapshot.

    The whole list is written under a single key of the injected BlobStore after
    every mutation. Persistence problems never reach the caller:
    - unreadable / corrupted snapshot on load -> empty collection
    - serialization or write failure on save  -> write skipped, old snapshot kept
    - update / delete of something unknown   -> no-op

    Listeners registered with subscribe() are called after each mutation
    (including load), outside the internal lock.
    """

    def __init__(self, blob_store: BlobStore, *, key: str = DEFAULT_STORAGE_KEY) -> None:
        self._blob_store = blob_store
        self._key = key
        self._tasks: list[Task] = []
        self._listeners: list[ChangeListener] = []
        self._lock = threading.RLock()
        self.load()
        logger.info("TaskStore ready key=%s total=%s", self._key, len(self._tasks))

    @property
    def key(self) -> str:
        return self._key

    # ---- change notifications ----

    def subscribe(self, listener: ChangeListener) -> Callable[[], None]:
        """Register a change listener. Returns a callable that unregisters it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            try:
                self._listeners.remove(listener)
            except ValueError:
                pass

        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            try:
                listener()
            except Exception:
                logger.exception("Task change listener %r failed.", listener)

    # ---- persistence ----

    def _decode(self, blob: bytes) -> list[Task]:
        data = json.loads(blob.decode("utf-8"))
        if not isinstance(data, list):
            raise ValueError(f"snapshot must be a JSON array, got {type(data).__name__}")

        out: list[Task] = []
        seen: set[str] = set()
        for raw in data:
            task = Task.from_record(raw)
            if task.id in seen:
                logger.warning("Duplicate task id=%s in snapshot; keeping the first.", task.id)
                continue
            seen.add(task.id)
            out.append(task)
        return out

    def load(self) -> None:
        """Replace the in-memory collection with the stored snapshot (empty if none/unusable)."""
        with self._lock:
            blob = self._blob_store.read(self._key)
            if blob is None:
                self._tasks = []
            else:
                try:
                    self._tasks = self._decode(blob)
                except (UnicodeDecodeError, ValueError):
                    # json.JSONDecodeError is a ValueError too.
                    logger.warning(
                        "Stored snapshot key=%s is unreadable; starting empty.",
                        self._key,
                        exc_info=True,
                    )
                    self._tasks = []
            logger.debug("Loaded %d tasks key=%s", len(self._tasks), self._key)
        self._notify()

    def save(self) -> None:
        """Write the whole collection. Failures are logged and the write is skipped."""
        with self._lock:
            try:
                blob = json.dumps(
                    [t.to_record() for t in self._tasks], ensure_ascii=False
                ).encode("utf-8")
            except (TypeError, ValueError, AttributeError):
                logger.warning("Failed to serialize tasks; skipping save.", exc_info=True)
                return

            try:
                self._blob_store.write(self._key, blob)
            except Exception:
                logger.warning("Failed to write tasks key=%s; skipping save.", self._key, exc_info=True)

    # ---- mutations ----

    def add_task(self, title: str, description: str, date: datetime | date) -> Task:
        task = Task(title=title, description=description, date=as_datetime(date))
        with self._lock:
            self._tasks.append(task)
            self.save()
        logger.debug("Task added id=%s date=%s", task.id, date)
        self._notify()
        return task

    def update_task(self, updated_task: Task) -> bool:
        with self._lock:
            index = self._index_of(updated_task.id)
            if index is None:
                logger.debug("update_task: unknown id=%s, ignoring.", updated_task.id)
                return False
            if not isinstance(updated_task.date, datetime):
                updated_task = replace(updated_task, date=as_datetime(updated_task.date))
            self._tasks[index] = updated_task
            self.save()
        logger.debug("Task updated id=%s", updated_task.id)
        self._notify()
        return True

    def delete_tasks(self, indices: Iterable[int], for_date: datetime | date) -> int:
        """
        Delete by position in the tasks_for_date(for_date) view.

        Each index is resolved to a task id in that view first, then the ids are
        removed from the full collection.
        """
        with self._lock:
            view = self.tasks_for_date(for_date)
            ids: list[str] = []
            for index in indices:
                if 0 <= index < len(view):
                    ids.append(view[index].id)
                else:
                    logger.warning(
                        "delete_tasks: index %s out of range for %s (%d tasks), ignoring.",
                        index,
                        for_date,
                        len(view),
                    )
            removed = self._remove_ids(ids)
            self.save()
        self._notify()
        return removed

    def delete_tasks_by_id(self, task_ids: Iterable[str]) -> int:
        with self._lock:
            removed = self._remove_ids(task_ids)
            self.save()
        self._notify()
        return removed

    def _remove_ids(self, task_ids: Iterable[str]) -> int:
        doomed = set(task_ids)
        before = len(self._tasks)
        self._tasks = [t for t in self._tasks if t.id not in doomed]
        removed = before - len(self._tasks)
        logger.debug("Removed %d tasks (requested %d ids)", removed, len(doomed))
        return removed

    def _index_of(self, task_id: str) -> int | None:
        for i, t in enumerate(self._tasks):
            if t.id == task_id:
                return i
        return None

    # ---- queries ----

    def tasks_for_date(self, day: datetime | date) -> list[Task]:
        """Tasks on the same calendar day as `day`, in collection order."""
        with self._lock:
            return [t for t in self._tasks if t.is_on(day)]

    def get_task(self, task_id: str) -> Task | None:
        with self._lock:
            index = self._index_of(task_id)
            return None if index is None else self._tasks[index]

    def all_tasks(self) -> list[Task]:
        with self._lock:
            return list(self._tasks)

    def count_tasks(self) -> int:
        with self._lock:
            return len(self._tasks)
