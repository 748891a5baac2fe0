# src/daylist/tasks/persistence.py

"""
Key-value blob backends for the task snapshot.

Both backends store opaque bytes under a string key:
- SQLiteBlobStore: a single `kv` table in a local SQLite file (default)
- FileBlobStore: one file per key inside a directory

Contract:
- read() never raises; a missing key or a backend error both come back as None
- write() overwrites the previous value and may raise OSError / sqlite3.Error
  (ValueError for a key the file backend cannot map to a file name);
  the TaskStore decides what to do with that
"""

from __future__ import annotations

import contextlib
import logging
import os
import re
import sqlite3
from enum import StrEnum
from pathlib import Path

logger = logging.getLogger(__name__)

_FILE_KEY_RE = re.compile(r"[A-Za-z0-9_-][A-Za-z0-9_.-]*")


class StorageBackend(StrEnum):
    SQLITE = "sqlite"
    FILE = "file"

    @classmethod
    def from_config(cls, raw: str | None) -> StorageBackend:
        if not raw:
            return cls.SQLITE
        try:
            return cls(raw.strip().lower())
        except ValueError:
            logger.warning("Unknown storage backend %r, falling back to sqlite.", raw)
            return cls.SQLITE


class SQLiteBlobStore:
    """
    SQLite key-value table.

    Thread-safety:
    - each method opens its own SQLite connection
    """

    def __init__(self, db_path: str | Path = "store.sqlite3") -> None:
        self._db_path = Path(db_path)
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._ensure_schema()
        logger.info("SQLiteBlobStore ready db=%s", self._db_path)

    @property
    def location(self) -> str:
        return str(self._db_path)

    def _get_conn(self) -> sqlite3.Connection:
        conn = sqlite3.connect(str(self._db_path), timeout=30.0)
        with contextlib.suppress(sqlite3.Error):
            conn.execute("PRAGMA journal_mode=WAL")
        return conn

    def _ensure_schema(self) -> None:
        conn = self._get_conn()
        try:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS kv (
                    key TEXT PRIMARY KEY,
                    value BLOB NOT NULL
                )
                """
            )
            conn.commit()
        finally:
            conn.close()

    def read(self, key: str) -> bytes | None:
        try:
            conn = self._get_conn()
        except sqlite3.Error:
            logger.warning("Cannot open %s for reading key=%s", self._db_path, key, exc_info=True)
            return None
        try:
            row = conn.execute("SELECT value FROM kv WHERE key = ?", (key,)).fetchone()
        except sqlite3.Error:
            logger.warning("Read failed db=%s key=%s", self._db_path, key, exc_info=True)
            return None
        finally:
            conn.close()

        if row is None:
            return None
        value = row[0]
        if isinstance(value, str):
            return value.encode("utf-8")
        return bytes(value)

    def write(self, key: str, blob: bytes) -> None:
        conn = self._get_conn()
        try:
            with conn:
                conn.execute(
                    """
                    INSERT INTO kv(key, value) VALUES (?, ?)
                    ON CONFLICT(key) DO UPDATE SET value = excluded.value
                    """,
                    (key, sqlite3.Binary(blob)),
                )
            logger.debug("Wrote key=%s bytes=%d db=%s", key, len(blob), self._db_path)
        finally:
            conn.close()


class FileBlobStore:
    """One file per key; writes go through a temp file and os.replace."""

    def __init__(self, root: str | Path) -> None:
        self._root = Path(root)
        self._root.mkdir(parents=True, exist_ok=True)
        logger.info("FileBlobStore ready dir=%s", self._root)

    @property
    def location(self) -> str:
        return str(self._root)

    def _path_for(self, key: str) -> Path:
        """<key>.json; keys that are not plain file names are rejected, never rewritten."""
        if not _FILE_KEY_RE.fullmatch(key):
            raise ValueError(f"invalid storage key for file backend: {key!r}")
        return self._root / f"{key}.json"

    def read(self, key: str) -> bytes | None:
        try:
            path = self._path_for(key)
        except ValueError:
            logger.warning("Refusing to read invalid key=%r", key)
            return None
        try:
            return path.read_bytes()
        except FileNotFoundError:
            return None
        except OSError:
            logger.warning("Read failed path=%s", path, exc_info=True)
            return None

    def write(self, key: str, blob: bytes) -> None:
        path = self._path_for(key)
        tmp = path.with_suffix(".tmp")
        tmp.write_bytes(blob)
        os.replace(tmp, path)
        with contextlib.suppress(OSError):
            # Task text is personal; keep the file private on disk.
            os.chmod(path, 0o600)
        logger.debug("Wrote key=%s bytes=%d path=%s", key, len(blob), path)


def open_blob_store(settings) -> SQLiteBlobStore | FileBlobStore:
    """Build the backend selected by settings.storage_backend."""
    backend = StorageBackend.from_config(str(getattr(settings, "storage_backend", "") or ""))
    if backend is StorageBackend.FILE:
        return FileBlobStore(settings.store_dir)
    return SQLiteBlobStore(settings.store_db_path)
