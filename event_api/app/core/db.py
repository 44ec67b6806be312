"""
SQLite database integration and simple migration system.

This module provides functions for obtaining a database connection
(``get_connection``), a time-bounded cursor context manager used by
every service call (``get_cursor``) and the migration runner applied on
application start (``init_db``).

The migration mechanism stores applied migration versions in the
``migrations`` table and executes new migrations in order.
"""

import logging
import os
import sqlite3
import time
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

from .config import settings
from .exceptions import QueryTimeoutError

logger = logging.getLogger(__name__)

# Number of SQLite VM instructions between deadline checks.
PROGRESS_STEPS = 1000


MIGRATIONS: list[tuple[int, str]] = [
    # Migration 1: Initial schema
    (
        1,
        """
        CREATE TABLE IF NOT EXISTS users (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            email TEXT NOT NULL UNIQUE,
            name TEXT NOT NULL,
            password TEXT NOT NULL,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        );

        CREATE TABLE IF NOT EXISTS events (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            owner_id INTEGER NOT NULL,
            name TEXT NOT NULL,
            description TEXT NOT NULL,
            date TEXT NOT NULL,
            location TEXT NOT NULL,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            FOREIGN KEY(owner_id) REFERENCES users(id) ON DELETE CASCADE
        );

        CREATE TABLE IF NOT EXISTS attendees (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            user_id INTEGER NOT NULL,
            event_id INTEGER NOT NULL,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            UNIQUE(event_id, user_id),
            FOREIGN KEY(user_id) REFERENCES users(id) ON DELETE CASCADE,
            FOREIGN KEY(event_id) REFERENCES events(id) ON DELETE CASCADE
        );
        """,
    ),
    # Migration 2: indices for the owner and attendee lookups
    (
        2,
        """
        CREATE INDEX IF NOT EXISTS idx_events_owner_id ON events(owner_id);
        CREATE INDEX IF NOT EXISTS idx_attendees_user_id ON attendees(user_id);
        """,
    ),
]


def get_database_path() -> str:
    """Compute the path to the SQLite database file.

    If ``settings.database_url`` is an absolute path, use it directly.
    Otherwise resolve it relative to the project root.
    """
    db_url = settings.database_url
    if os.path.isabs(db_url):
        return db_url
    base_dir = Path(__file__).resolve().parents[3]
    return str((base_dir / db_url).resolve())


def get_connection(timeout: Optional[float] = None) -> sqlite3.Connection:
    """Create and return a new SQLite connection.

    Rows are returned as ``sqlite3.Row`` so columns can be accessed by
    name.  ``timeout`` bounds how long the connection waits on a locked
    database.  Foreign keys are enforced for the lifetime of the
    connection; SQLite disables them by default.
    """
    if timeout is None:
        timeout = settings.query_timeout
    conn = sqlite3.connect(get_database_path(), timeout=timeout)
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON")
    return conn


@contextmanager
def get_cursor(timeout: Optional[float] = None) -> Iterator[sqlite3.Cursor]:
    """Yield a cursor whose statements must finish within ``timeout`` seconds.

    The connection is committed when the block exits normally and rolled
    back otherwise; it is always closed.  A statement still running when
    the deadline passes is interrupted and surfaces as
    ``QueryTimeoutError``.

    Parameters
    ----------
    timeout : Optional[float]
        Deadline for the whole block.  Defaults to
        ``settings.query_timeout``.
    """
    if timeout is None:
        timeout = settings.query_timeout
    conn = get_connection(timeout=timeout)
    deadline = time.monotonic() + timeout
    conn.set_progress_handler(lambda: time.monotonic() > deadline, PROGRESS_STEPS)
    try:
        yield conn.cursor()
        conn.commit()
    except sqlite3.OperationalError as exc:
        conn.rollback()
        if time.monotonic() > deadline:
            logger.error("Query exceeded %.1fs timeout: %s", timeout, exc)
            raise QueryTimeoutError(f"query exceeded {timeout}s timeout") from exc
        raise
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def init_db() -> None:
    """Initialise the database and apply pending migrations.

    Creates the ``migrations`` table if it does not exist, checks the
    current schema version and applies any newer entries of
    ``MIGRATIONS``.  To change the schema, append a migration with an
    incremented version number.
    """
    conn = get_connection()
    try:
        cursor = conn.cursor()
        cursor.execute(
            "CREATE TABLE IF NOT EXISTS migrations (version INTEGER PRIMARY KEY)"
        )
        row = cursor.execute("SELECT MAX(version) AS version FROM migrations").fetchone()
        current_version = row["version"] if row and row["version"] is not None else 0

        for version, sql in MIGRATIONS:
            if version > current_version:
                cursor.executescript(sql)
                cursor.execute("INSERT INTO migrations (version) VALUES (?)", (version,))
                conn.commit()
                logger.info("Applied migration %s", version)
                current_version = version
    finally:
        conn.close()
