"""
SQLite database integration and simple migration system.

This module provides functions for opening a database connection
(``get_connection``) and applying migrations (``init_db``).  It uses
SQLite as a lightweight embedded store; to switch to another DBMS you
would replace connection logic and adapt SQL syntax accordingly.

The migration mechanism stores applied migration versions in the
``migrations`` table and executes new migrations in order.
"""

import os
import sqlite3
from pathlib import Path
from typing import Optional

MEMORY_DATABASE = ":memory:"
SQLITE_URI_PREFIX = "sqlite:///"

MIGRATIONS: list[tuple[int, str]] = [
    # Migration 1: franchise collection
    (
        1,
        """
        CREATE TABLE IF NOT EXISTS franchises (
            id TEXT PRIMARY KEY,
            name TEXT NOT NULL,
            company TEXT NOT NULL,
            contact_name TEXT NOT NULL,
            contact_email TEXT,
            contact_phone TEXT,
            created_at TEXT NOT NULL
        );
        """,
    ),
    # Migration 2: listing and search results are ordered by creation time
    (
        2,
        """
        CREATE INDEX IF NOT EXISTS idx_franchises_created_at ON franchises(created_at);
        """,
    ),
]


def get_database_path(database_url: str) -> str:
    """Compute the path to the SQLite database file.

    A ``sqlite:///`` prefix is stripped.  ``:memory:`` and absolute
    paths are returned as they are; relative paths are resolved
    against the project root.
    """
    db_url = database_url
    if db_url.startswith(SQLITE_URI_PREFIX):
        db_url = db_url[len(SQLITE_URI_PREFIX):]
    if db_url == MEMORY_DATABASE or os.path.isabs(db_url):
        return db_url
    base_dir = Path(__file__).resolve().parent.parent.parent.parent
    return str((base_dir / db_url).resolve())


def _icontains(value: Optional[str], term: Optional[str]) -> int:
    if value is None or term is None:
        return 0
    return int(term.lower() in value.lower())


def get_connection(database_url: str) -> sqlite3.Connection:
    """Create and return a new SQLite connection.

    The connection returns rows as ``sqlite3.Row`` objects and has an
    ``icontains(value, term)`` SQL function registered for
    case-insensitive substring matching.  SQLite's own ``LIKE`` only
    folds ASCII letters and treats ``%`` and ``_`` as wildcards.

    The connection may be used from threads other than the one that
    created it; callers are responsible for not sharing it between
    threads at the same time.
    """
    db_path = get_database_path(database_url)
    conn = sqlite3.connect(db_path, check_same_thread=False)
    conn.row_factory = sqlite3.Row
    conn.create_function("icontains", 2, _icontains, deterministic=True)
    return conn


def init_db(conn: sqlite3.Connection) -> int:
    """Apply pending migrations and return the resulting schema version.

    Creates the ``migrations`` table if it does not exist, checks the
    current schema version, and applies any new entries of
    ``MIGRATIONS``.  If you add a migration, append it with an
    incremented version number.
    """
    cursor = conn.cursor()
    try:
        cursor.execute(
            "CREATE TABLE IF NOT EXISTS migrations (version INTEGER PRIMARY KEY)"
        )
        cursor.execute("SELECT MAX(version) as version FROM migrations")
        row = cursor.fetchone()
        current_version = row["version"] if row and row["version"] is not None else 0

        for version, sql in MIGRATIONS:
            if version > current_version:
                cursor.executescript(sql)
                cursor.execute(
                    "INSERT INTO migrations (version) VALUES (?)", (version,)
                )
                current_version = version
        conn.commit()
        return current_version
    finally:
        cursor.close()
