"""SQLite connection handling for the profile store."""

from __future__ import annotations

import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Generator, Optional

import structlog

from fitplan.db.schema import get_schema_sql

logger = structlog.get_logger(__name__)

# Seconds to wait on a locked database before giving up
BUSY_TIMEOUT = 5.0


class DatabaseConnection:
    """Opens short-lived connections to one SQLite file."""

    def __init__(self, db_path: Path, timeout: float = BUSY_TIMEOUT):
        """
        Args:
            db_path: Location of the database file; parent folders are created
            timeout: Seconds to wait for a lock held by another process
        """
        self.db_path = Path(db_path)
        self.timeout = timeout
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

    @contextmanager
    def get_connection(self) -> Generator[sqlite3.Connection, None, None]:
        """Yield a connection that commits on exit or rolls back on error."""
        conn = sqlite3.connect(self.db_path, timeout=self.timeout)
        conn.row_factory = sqlite3.Row
        try:
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def initialize_schema(self) -> None:
        """Create the targets and selections tables when missing."""
        with self.get_connection() as conn:
            conn.executescript(get_schema_sql())
        logger.debug("Profile store schema ready", path=str(self.db_path))

    def table_exists(self, table_name: str) -> bool:
        with self.get_connection() as conn:
            row = conn.execute(
                "SELECT 1 FROM sqlite_master WHERE type = 'table' AND name = ?",
                (table_name,),
            ).fetchone()
        return row is not None


_db: Optional[DatabaseConnection] = None


def get_db() -> DatabaseConnection:
    """Return the shared store connection, opening it at the configured path."""
    global _db
    if _db is None:
        from fitplan.config import get_settings

        _db = DatabaseConnection(get_settings().database.path)
    return _db


def set_db(db: Optional[DatabaseConnection]) -> None:
    """Replace the shared connection; None forces a reopen from settings."""
    global _db
    _db = db
