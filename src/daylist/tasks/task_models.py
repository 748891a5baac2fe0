# src/daylist/tasks/task_models.py

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import date as date_cls
from datetime import datetime, time
from typing import Any


def new_task_id() -> str:
    return str(uuid.uuid4()).upper()


def calendar_day(value: datetime | date_cls) -> date_cls:
    """
    Local calendar day of a datetime (or a plain date).

    Aware datetimes are converted to local time first; naive ones are taken as local.
    """
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone()
        return value.date()
    return value


def as_datetime(value: datetime | date_cls) -> datetime:
    """A plain date becomes midnight of that day; datetimes pass through."""
    if isinstance(value, datetime):
        return value
    return datetime.combine(value, time())


@dataclass(frozen=True, slots=True, eq=False, kw_only=True)
class Task:
    """
    A single dated task.

    Equality and hashing use only `id`; two values with the same id are the same task
    (possibly in different edit states).
    """

    id: str = field(default_factory=new_task_id)
    title: str
    description: str
    date: datetime
    is_completed: bool = False

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Task):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def is_on(self, day: datetime | date_cls) -> bool:
        return calendar_day(self.date) == calendar_day(day)

    def to_record(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "date": self.date.isoformat(),
            "isCompleted": self.is_completed,
        }

    @classmethod
    def from_record(cls, raw: Any) -> Task:
        """Strict decode of one stored record. Raises ValueError on any malformed field."""
        if not isinstance(raw, dict):
            raise ValueError(f"task record must be an object, got {type(raw).__name__}")

        task_id = raw.get("id")
        if not isinstance(task_id, str) or not task_id.strip():
            raise ValueError("task record has no id")

        title = raw.get("title")
        if not isinstance(title, str):
            raise ValueError(f"task {task_id}: title must be a string")

        description = raw.get("description", "")
        if not isinstance(description, str):
            raise ValueError(f"task {task_id}: description must be a string")

        raw_date = raw.get("date")
        if not isinstance(raw_date, str):
            raise ValueError(f"task {task_id}: date must be an ISO-8601 string")
        try:
            when = datetime.fromisoformat(raw_date)
        except ValueError as e:
            raise ValueError(f"task {task_id}: bad date {raw_date!r}") from e

        completed = raw.get("isCompleted", False)
        if not isinstance(completed, bool):
            raise ValueError(f"task {task_id}: isCompleted must be a boolean")

        return cls(
            id=task_id,
            title=title,
            description=description,
            date=when,
            is_completed=completed,
        )
