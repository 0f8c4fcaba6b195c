# ABOUTME: SQLite database connection management for the shelfmark catalog.
# ABOUTME: Opens or creates the database and applies the schema on first use.

import sqlite3
from pathlib import Path

from shelfmark.db.schema import SCHEMA_V1

DEFAULT_DB_PATH = Path.home() / ".shelfmark" / "library.db"


def _schema_exists(conn: sqlite3.Connection) -> bool:
    """Check if the schema has already been applied."""
    cursor = conn.execute(
        "SELECT name FROM sqlite_master WHERE type='table' AND name='schema_version'"
    )
    return cursor.fetchone() is not None


def get_schema_version(conn: sqlite3.Connection) -> int:
    """Read the current schema version from the database."""
    cursor = conn.execute("SELECT version FROM schema_version ORDER BY version DESC LIMIT 1")
    row = cursor.fetchone()
    return row[0] if row else 0


def open_library(path: Path | None = None) -> sqlite3.Connection:
    """Open or create the shelfmark catalog database.

    Creates the database file and parent directories if they don't exist.
    Applies the schema on first creation and sets sqlite3.Row as the row
    factory for dict-like column access.

    Args:
        path: Path to the database file. Defaults to ~/.shelfmark/library.db.
    """
    db_path = path or DEFAULT_DB_PATH
    db_path.parent.mkdir(parents=True, exist_ok=True)

    conn = sqlite3.connect(str(db_path))
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA journal_mode=WAL")

    if not _schema_exists(conn):
        conn.executescript(SCHEMA_V1)

    return conn
