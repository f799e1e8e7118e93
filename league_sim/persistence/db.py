"""
Database connection and initialization.
"""
from __future__ import annotations

import sqlite3
from pathlib import Path

from league_sim import config

from .schema import all_schema_sql

_db_path: Path | None = None


def set_db_path(path: str | Path) -> None:
    """Set the database path. Call before first get_connection if not using default."""
    global _db_path
    _db_path = Path(path)


def get_db_path() -> Path:
    """Return the current database path (LEAGUE_DB_PATH unless overridden)."""
    if _db_path is not None:
        return _db_path
    return config.DB_PATH


def get_connection(db_path: str | Path | None = None) -> sqlite3.Connection:
    """
    Return a new SQLite connection.
    Use as context manager or ensure close() is called.
    """
    path = Path(db_path) if db_path else get_db_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(str(path))
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON")
    return conn


def init_db(db_path: str | Path | None = None) -> None:
    """Create or ensure all tables exist."""
    path = Path(db_path) if db_path else get_db_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(str(path))
    try:
        conn.executescript(all_schema_sql())
        conn.commit()
    finally:
        conn.close()
