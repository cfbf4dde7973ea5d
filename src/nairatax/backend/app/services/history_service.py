"""Calculation history, usage counters and tax payment reminders.

Each service keeps its records under a single key of an injected
:class:`~nairatax.backend.app.services.storage.KeyValueStore`, so the same
code runs against the in-memory store in tests and SQLite in production.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import datetime, timezone
from threading import Lock
from typing import Any, Callable
from uuid import uuid4

from nairatax.backend.app.models import (
    ReminderInput,
    SavedCalculation,
    TaxReminder,
)

from .storage import KeyValueStore

logger = logging.getLogger(__name__)

HISTORY_KEY = "nairatax.history"
CALCULATION_COUNTER_KEY = "nairatax.stats.calculations"
REMINDERS_KEY = "nairatax.reminders"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class HistoryService:
    """Most-recent-first list of saved calculation results."""

    def __init__(
        self,
        store: KeyValueStore,
        *,
        capacity: int = 10,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        if capacity <= 0:
            raise ValueError("capacity must be positive")
        self._store = store
        self._capacity = capacity
        self._clock = clock or _utcnow
        self._lock = Lock()

    def _load(self) -> list[dict[str, Any]]:
        entries = self._store.get(HISTORY_KEY, [])
        if not isinstance(entries, list):
            logger.warning("Discarding malformed history payload of type %s", type(entries))
            return []
        return entries

    def save(self, result: Mapping[str, Any]) -> SavedCalculation:
        record = SavedCalculation(
            id=uuid4().hex,
            timestamp=self._clock().isoformat(),
            result=dict(result),
        )
        with self._lock:
            entries = [record.model_dump(mode="json"), *self._load()]
            self._store.set(HISTORY_KEY, entries[: self._capacity])
        logger.info("Stored calculation %s in history", record.id)
        return record

    def list(self) -> list[SavedCalculation]:
        with self._lock:
            entries = self._load()
        return [SavedCalculation.model_validate(entry) for entry in entries]

    def get(self, calculation_id: str) -> SavedCalculation:
        for record in self.list():
            if record.id == calculation_id:
                return record
        raise KeyError(calculation_id)

    def delete(self, calculation_id: str) -> bool:
        with self._lock:
            entries = self._load()
            remaining = [entry for entry in entries if entry.get("id") != calculation_id]
            if len(remaining) == len(entries):
                return False
            self._store.set(HISTORY_KEY, remaining)
        return True

    def clear(self) -> None:
        with self._lock:
            self._store.delete(HISTORY_KEY)


class StatsService:
    """Global counter of completed calculations."""

    def __init__(self, store: KeyValueStore, *, initial_count: int = 0) -> None:
        self._store = store
        self._initial_count = initial_count
        self._lock = Lock()

    def _current_locked(self) -> int:
        value = self._store.get(CALCULATION_COUNTER_KEY)
        if value is None:
            self._store.set(CALCULATION_COUNTER_KEY, self._initial_count)
            return self._initial_count
        return int(value)

    def count(self) -> int:
        with self._lock:
            return self._current_locked()

    def increment(self) -> int:
        with self._lock:
            updated = self._current_locked() + 1
            self._store.set(CALCULATION_COUNTER_KEY, updated)
            return updated


class ReminderService:
    """CRUD operations for per-user tax payment reminders."""

    def __init__(
        self,
        store: KeyValueStore,
        *,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._store = store
        self._clock = clock or _utcnow
        self._lock = Lock()

    def _load(self) -> list[dict[str, Any]]:
        entries = self._store.get(REMINDERS_KEY, [])
        return entries if isinstance(entries, list) else []

    def list_for_user(self, user_id: str) -> list[TaxReminder]:
        with self._lock:
            entries = self._load()
        return [
            TaxReminder.model_validate(entry)
            for entry in entries
            if entry.get("user_id") == user_id
        ]

    def add(self, reminder: ReminderInput) -> TaxReminder:
        record = TaxReminder(
            id=uuid4().hex,
            created_at=self._clock().isoformat(),
            **reminder.model_dump(),
        )
        with self._lock:
            entries = self._load()
            entries.append(record.model_dump(mode="json"))
            self._store.set(REMINDERS_KEY, entries)
        return record

    def set_completed(self, reminder_id: str, is_completed: bool) -> TaxReminder:
        with self._lock:
            entries = self._load()
            for entry in entries:
                if entry.get("id") == reminder_id:
                    entry["is_completed"] = bool(is_completed)
                    self._store.set(REMINDERS_KEY, entries)
                    return TaxReminder.model_validate(entry)
        raise KeyError(reminder_id)

    def delete(self, reminder_id: str) -> bool:
        with self._lock:
            entries = self._load()
            remaining = [entry for entry in entries if entry.get("id") != reminder_id]
            if len(remaining) == len(entries):
                return False
            self._store.set(REMINDERS_KEY, remaining)
        return True


__all__ = [
    "CALCULATION_COUNTER_KEY",
    "HISTORY_KEY",
    "HistoryService",
    "REMINDERS_KEY",
    "ReminderService",
    "StatsService",
]
