"""Wiring of storage-backed services for the Flask application."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from flask import Flask, current_app

from nairatax.backend.config.engine_config import load_engine_configuration

from .history_service import HistoryService, ReminderService, StatsService
from .storage import InMemoryKeyValueStore, KeyValueStore, SQLiteKeyValueStore

logger = logging.getLogger(__name__)

EXTENSION_KEY = "nairatax"


@dataclass(frozen=True)
class ServiceRegistry:
    """Services sharing one key-value store."""

    store: KeyValueStore
    history: HistoryService
    stats: StatsService
    reminders: ReminderService


def _parse_positive_int(value: str | None, *, env: str) -> int | None:
    if value is None or not value.strip():
        return None
    try:
        parsed = int(value)
    except ValueError:
        logger.warning("Ignoring invalid value for %s: %s", env, value)
        return None
    if parsed <= 0:
        logger.warning("Ignoring non-positive value for %s: %s", env, value)
        return None
    return parsed


def build_store() -> KeyValueStore:
    """Return the SQLite store named by ``NAIRATAX_STORE_DB`` or an in-memory one."""

    db_path = os.getenv("NAIRATAX_STORE_DB")
    if db_path and db_path.strip():
        return SQLiteKeyValueStore(Path(db_path.strip()).expanduser())
    return InMemoryKeyValueStore()


def build_services(store: KeyValueStore | None = None) -> ServiceRegistry:
    """Create the history, stats and reminder services around ``store``."""

    store = store if store is not None else build_store()
    history_config = load_engine_configuration().history

    capacity = _parse_positive_int(
        os.getenv("NAIRATAX_HISTORY_CAPACITY"), env="NAIRATAX_HISTORY_CAPACITY"
    )

    return ServiceRegistry(
        store=store,
        history=HistoryService(store, capacity=capacity or history_config.capacity),
        stats=StatsService(store, initial_count=history_config.initial_calculation_count),
        reminders=ReminderService(store),
    )


def init_app(app: Flask, registry: ServiceRegistry | None = None) -> ServiceRegistry:
    """Attach ``registry`` (or a freshly built one) to ``app``."""

    services = registry or build_services()
    app.extensions[EXTENSION_KEY] = services
    return services


def get_services() -> ServiceRegistry:
    """Return the registry bound to the active Flask application."""

    return current_app.extensions[EXTENSION_KEY]


__all__ = [
    "ServiceRegistry",
    "build_services",
    "build_store",
    "get_services",
    "init_app",
]
