"""Database setup and access layer using SQLite."""

import logging
import os
import sqlite3
from contextlib import contextmanager

from bmi_tracker.config import DB_PATH

logger = logging.getLogger(__name__)

SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS user_profiles (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    user_id TEXT NOT NULL UNIQUE,
    weight REAL NOT NULL,
    height REAL NOT NULL,
    gender TEXT NOT NULL,
    weight_unit TEXT NOT NULL DEFAULT 'kg' CHECK(weight_unit IN ('kg', 'lbs')),
    height_unit TEXT NOT NULL DEFAULT 'cm' CHECK(height_unit IN ('cm', 'inches')),
    created_at TIMESTAMP NOT NULL,
    updated_at TIMESTAMP NOT NULL
);

CREATE TABLE IF NOT EXISTS weight_history (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    user_id TEXT NOT NULL,
    weight REAL NOT NULL,
    unit TEXT NOT NULL CHECK(unit IN ('kg', 'lbs')),
    recorded_at TIMESTAMP NOT NULL
);

CREATE TABLE IF NOT EXISTS bmi_records (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    user_id TEXT NOT NULL,
    bmi REAL NOT NULL,
    category TEXT NOT NULL,
    calculated_at TIMESTAMP NOT NULL
);

CREATE INDEX IF NOT EXISTS idx_weight_history_user_date ON weight_history(user_id, recorded_at);
CREATE INDEX IF NOT EXISTS idx_bmi_records_user_date ON bmi_records(user_id, calculated_at);
"""


def init_db(db_path: str = DB_PATH) -> None:
    """Initialize the database, creating tables if they don't exist."""
    directory = os.path.dirname(db_path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    with get_connection(db_path) as conn:
        conn.executescript(SCHEMA_SQL)
    logger.debug("Database ready at %s", db_path)


@contextmanager
def get_connection(db_path: str = DB_PATH):
    """Context manager for database connections."""
    conn = sqlite3.connect(db_path)
    conn.row_factory = sqlite3.Row
    try:
        yield conn
        conn.commit()
    except Exception:
        conn.rollback()
        logger.exception("Rolled back transaction on %s", db_path)
        raise
    finally:
        conn.close()
