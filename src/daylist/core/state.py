# src/daylist/core/state.py

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date

from .ports import TaskRepo


@dataclass
class AppState:
    # Store Settings on the state for easy access in other modules later.
    settings: object

    task_store: TaskRepo

    # Presentation state: the day the list view is showing.
    selected_date: date = field(default_factory=date.today)
