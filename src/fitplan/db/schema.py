"""SQLite database schema definitions."""

SCHEMA_SQL = """
-- Computed daily targets, one row per user
CREATE TABLE IF NOT EXISTS user_targets (
    user_id TEXT PRIMARY KEY,
    targets_json TEXT NOT NULL,
    updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
);

-- Selected plans per user, keyed by kind ("workout_plan", "meal_plan")
CREATE TABLE IF NOT EXISTS user_selections (
    user_id TEXT NOT NULL,
    kind TEXT NOT NULL,
    value_json TEXT NOT NULL,
    updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
    PRIMARY KEY (user_id, kind)
);
"""


def get_schema_sql() -> str:
    """Return the complete schema SQL."""
    return SCHEMA_SQL
