"""SQLite persistence for computed targets and plan selections."""

from __future__ import annotations

from fitplan.db.connection import DatabaseConnection, get_db, set_db
from fitplan.db.store import ProfileStore, open_store, persist_selection, persist_targets

__all__ = [
    "DatabaseConnection",
    "ProfileStore",
    "get_db",
    "open_store",
    "persist_selection",
    "persist_targets",
    "set_db",
]
