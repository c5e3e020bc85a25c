"""Key-value persistence of computed targets and selected plans.

Values are stored as JSON keyed by user id. The `persist_*` helpers are
fire-and-forget: a storage failure is logged and reported as False, and
the already-computed value stays valid in memory.
"""

from __future__ import annotations

import json
import sqlite3
from typing import Any, Optional

import structlog

from fitplan.db.connection import DatabaseConnection, get_db
from fitplan.matching.models import StorageError
from fitplan.profiles.body_calc import TargetSet, targets_from_dict, targets_to_dict

logger = structlog.get_logger(__name__)

WORKOUT_PLAN = "workout_plan"
MEAL_PLAN = "meal_plan"


class ProfileStore:
    """Stores per-user targets and plan selections in SQLite."""

    def __init__(self, db: DatabaseConnection):
        """
        Args:
            db: Connection manager for the store's SQLite file

        Raises:
            StorageError: If the schema cannot be created
        """
        self.db = db
        try:
            self.db.initialize_schema()
        except (sqlite3.Error, OSError) as e:
            raise StorageError(f"Cannot open profile store at {db.db_path}: {e}") from e

    def save_targets(self, user_id: str, targets: TargetSet) -> None:
        """Insert or replace a user's targets.

        Raises:
            StorageError: If the write fails
        """
        query = """
            INSERT INTO user_targets (user_id, targets_json, updated_at)
            VALUES (?, ?, CURRENT_TIMESTAMP)
            ON CONFLICT(user_id) DO UPDATE SET
                targets_json = excluded.targets_json,
                updated_at = CURRENT_TIMESTAMP
        """
        payload = json.dumps(targets_to_dict(targets))
        try:
            with self.db.get_connection() as conn:
                conn.execute(query, (user_id, payload))
        except sqlite3.Error as e:
            raise StorageError(f"Failed to save targets for {user_id}: {e}") from e

    def load_targets(self, user_id: str) -> Optional[TargetSet]:
        """Load a user's targets, or None if none are stored."""
        query = "SELECT targets_json FROM user_targets WHERE user_id = ?"
        try:
            with self.db.get_connection() as conn:
                row = conn.execute(query, (user_id,)).fetchone()
        except sqlite3.Error as e:
            raise StorageError(f"Failed to load targets for {user_id}: {e}") from e
        if row is None:
            return None
        return targets_from_dict(json.loads(row["targets_json"]))

    def save_selection(self, user_id: str, kind: str, value: Any) -> None:
        """Insert or replace a selected plan (any JSON-serializable value).

        Raises:
            StorageError: If the write fails
        """
        query = """
            INSERT INTO user_selections (user_id, kind, value_json, updated_at)
            VALUES (?, ?, ?, CURRENT_TIMESTAMP)
            ON CONFLICT(user_id, kind) DO UPDATE SET
                value_json = excluded.value_json,
                updated_at = CURRENT_TIMESTAMP
        """
        try:
            payload = json.dumps(value)
            with self.db.get_connection() as conn:
                conn.execute(query, (user_id, kind, payload))
        except (TypeError, sqlite3.Error) as e:
            raise StorageError(f"Failed to save {kind} for {user_id}: {e}") from e

    def load_selection(self, user_id: str, kind: str) -> Optional[Any]:
        """Load a selected plan, or None if none is stored."""
        query = """
            SELECT value_json FROM user_selections
            WHERE user_id = ? AND kind = ?
        """
        try:
            with self.db.get_connection() as conn:
                row = conn.execute(query, (user_id, kind)).fetchone()
        except sqlite3.Error as e:
            raise StorageError(f"Failed to load {kind} for {user_id}: {e}") from e
        if row is None:
            return None
        return json.loads(row["value_json"])


def open_store(db: Optional[DatabaseConnection] = None) -> Optional[ProfileStore]:
    """Open the profile store without letting a storage failure propagate.

    Args:
        db: Connection to use; defaults to the shared one from settings

    Returns:
        The store, or None if it cannot be opened
    """
    try:
        return ProfileStore(db or get_db())
    except (StorageError, OSError) as e:
        logger.warning("Could not open profile store", error=str(e))
        return None


def persist_targets(store: ProfileStore, user_id: str, targets: TargetSet) -> bool:
    """Save targets without letting a storage failure propagate.

    Returns:
        True if the targets were saved
    """
    try:
        store.save_targets(user_id, targets)
    except StorageError as e:
        logger.warning("Could not persist targets", user_id=user_id, error=str(e))
        return False
    return True


def persist_selection(store: ProfileStore, user_id: str, kind: str, value: Any) -> bool:
    """Save a plan selection without letting a storage failure propagate.

    Returns:
        True if the selection was saved
    """
    try:
        store.save_selection(user_id, kind, value)
    except StorageError as e:
        logger.warning(
            "Could not persist selection", user_id=user_id, kind=kind, error=str(e)
        )
        return False
    return True
