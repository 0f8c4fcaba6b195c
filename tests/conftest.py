# ABOUTME: Shared pytest fixtures for shelfmark tests.
# ABOUTME: Provides a temporary catalog database scoped to a test user.

import sqlite3
from collections.abc import Iterator
from pathlib import Path

import pytest

from shelfmark.db.catalog import LibraryCatalog
from shelfmark.db.connection import open_library


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    return tmp_path / "library.db"


@pytest.fixture
def db_conn(db_path: Path) -> Iterator[sqlite3.Connection]:
    """Open a fresh catalog database, closed after the test."""
    conn = open_library(db_path)
    yield conn
    conn.close()


@pytest.fixture
def catalog(db_conn: sqlite3.Connection) -> LibraryCatalog:
    """A catalog scoped to the user "alice"."""
    return LibraryCatalog(db_conn, "alice")
