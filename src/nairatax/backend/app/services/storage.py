"""Key-value storage backends for calculation history and related records."""

from __future__ import annotations

import json
import os
import sqlite3
from collections import OrderedDict
from contextlib import contextmanager
from datetime import datetime, timezone
from threading import Lock
from typing import Any, Callable, Iterator, Protocol


class KeyValueStore(Protocol):
    """Minimal storage contract used by the history and reminder services."""

    def get(self, key: str, default: Any = None) -> Any:
        ...

    def set(self, key: str, value: Any) -> None:
        ...

    def delete(self, key: str) -> bool:
        ...


class InMemoryKeyValueStore:
    """Thread-safe in-memory store holding JSON-compatible values."""

    def __init__(self) -> None:
        self._values: "OrderedDict[str, str]" = OrderedDict()
        self._lock = Lock()

    def get(self, key: str, default: Any = None) -> Any:
        with self._lock:
            raw = self._values.get(key)
        if raw is None:
            return default
        return json.loads(raw)

    def set(self, key: str, value: Any) -> None:
        # Values are kept serialised so callers never share mutable state.
        encoded = json.dumps(value, ensure_ascii=False)
        with self._lock:
            self._values[key] = encoded
            self._values.move_to_end(key)

    def delete(self, key: str) -> bool:
        with self._lock:
            return self._values.pop(key, None) is not None


class SQLiteKeyValueStore:
    """SQLite-backed store persisting JSON values across restarts."""

    def __init__(
        self,
        path: str | os.PathLike[str],
        *,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._path = str(path)
        self._clock = clock or (lambda: datetime.now(timezone.utc))
        self._lock = Lock()
        self._initialise()

    @contextmanager
    def _connect(self) -> Iterator[sqlite3.Connection]:
        connection = sqlite3.connect(self._path, check_same_thread=False)
        try:
            connection.execute("PRAGMA journal_mode=WAL")
            connection.execute("PRAGMA synchronous=NORMAL")
            with connection:
                yield connection
        finally:
            connection.close()

    def _initialise(self) -> None:
        with self._connect() as connection:
            connection.execute(
                """
                CREATE TABLE IF NOT EXISTS entries (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                )
                """
            )

    def get(self, key: str, default: Any = None) -> Any:
        with self._lock:
            with self._connect() as connection:
                row = connection.execute(
                    "SELECT value FROM entries WHERE key = ?",
                    (key,),
                ).fetchone()
        if row is None:
            return default
        return json.loads(row[0])

    def set(self, key: str, value: Any) -> None:
        encoded = json.dumps(value, ensure_ascii=False)
        now = self._clock().isoformat()
        with self._lock:
            with self._connect() as connection:
                connection.execute(
                    "INSERT INTO entries (key, value, updated_at) VALUES (?, ?, ?)"
                    " ON CONFLICT(key) DO UPDATE SET"
                    " value = excluded.value, updated_at = excluded.updated_at",
                    (key, encoded, now),
                )

    def delete(self, key: str) -> bool:
        with self._lock:
            with self._connect() as connection:
                cursor = connection.execute("DELETE FROM entries WHERE key = ?", (key,))
                return cursor.rowcount > 0


__all__ = ["InMemoryKeyValueStore", "KeyValueStore", "SQLiteKeyValueStore"]
