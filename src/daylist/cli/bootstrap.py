# src/daylist/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- wires the configured blob backend into a TaskStore inside AppState.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.state import AppState
from ..tasks.persistence import StorageBackend, open_blob_store
from ..tasks.task_store import DEFAULT_STORAGE_KEY, TaskStore

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    backend = StorageBackend.from_config(str(getattr(settings, "storage_backend", "") or ""))
    if backend is StorageBackend.FILE:
        settings.store_dir.mkdir(parents=True, exist_ok=True)
    else:
        settings.store_db_path.parent.mkdir(parents=True, exist_ok=True)


def create_initial_state(*, settings=None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    blob_store = open_blob_store(settings)
    key = str(getattr(settings, "storage_key", "") or DEFAULT_STORAGE_KEY)
    task_store = TaskStore(blob_store, key=key)

    logger.info(
        "State created backend=%s location=%s key=%s",
        getattr(settings, "storage_backend", "sqlite"),
        getattr(blob_store, "location", "?"),
        key,
    )
    return AppState(settings=settings, task_store=task_store)
