# ABOUTME: Unit tests for the SQLite catalog layer.
# ABOUTME: Tests schema setup, record creation, user scoping, duplicates, and entry ordering.

import sqlite3
from pathlib import Path

import pytest

from shelfmark.db.catalog import DuplicateBookError, LibraryCatalog
from shelfmark.db.connection import get_schema_version, open_library
from shelfmark.db.mapping import candidate_to_row
from tests.fixtures.candidates import make_candidate


class TestOpenLibrary:
    def test_creates_file_and_schema(self, tmp_path: Path) -> None:
        """Opening a new path creates parent directories and applies the schema."""
        path = tmp_path / "nested" / "dir" / "library.db"
        conn = open_library(path)
        try:
            assert path.exists()
            assert get_schema_version(conn) == 1
        finally:
            conn.close()

    def test_reopen_keeps_data(self, db_path: Path) -> None:
        conn = open_library(db_path)
        LibraryCatalog(conn, "alice").add_book(make_candidate())
        conn.close()

        conn = open_library(db_path)
        try:
            assert len(LibraryCatalog(conn, "alice").list_all()) == 1
        finally:
            conn.close()


class TestCandidateToRow:
    def test_row_shape(self) -> None:
        row = candidate_to_row(make_candidate(authors=["A", "B"]), "alice")
        assert len(row["id"]) == 32
        assert row["user_id"] == "alice"
        assert row["authors"] == '["A", "B"]'
        assert row["source"] == "google"


class TestLibraryCatalog:
    """Tests for user-scoped catalog operations."""

    def test_blank_user_rejected(self, db_conn: sqlite3.Connection) -> None:
        with pytest.raises(ValueError):
            LibraryCatalog(db_conn, "  ")

    def test_add_and_get(self, catalog: LibraryCatalog) -> None:
        book_id = catalog.add_book(make_candidate())
        record = catalog.get_by_id(book_id)

        assert record is not None
        assert record.title == "The Lord of the Rings"
        assert record.authors == ["J.R.R. Tolkien"]
        assert record.author == "J.R.R. Tolkien"
        assert record.user_id == "alice"
        assert record.date_added

    def test_lookup_by_isbn(self, catalog: LibraryCatalog) -> None:
        book_id = catalog.add_book(make_candidate())
        assert catalog.find_id_by_isbn("9780544003415") == book_id
        assert catalog.find_id_by_isbn(" 9780544003415 ") == book_id
        assert catalog.find_id_by_isbn("9780000000000") is None

    def test_duplicate_isbn_rejected(self, catalog: LibraryCatalog) -> None:
        catalog.add_book(make_candidate())
        with pytest.raises(DuplicateBookError, match="9780544003415"):
            catalog.add_book(make_candidate(source="openlibrary"))

    def test_books_without_isbn_may_repeat(self, catalog: LibraryCatalog) -> None:
        catalog.add_book(make_candidate(isbn=None))
        catalog.add_book(make_candidate(isbn=None))
        assert len(catalog.list_all()) == 2

    def test_users_are_isolated(self, db_conn: sqlite3.Connection) -> None:
        """One user's books are invisible to another, and ISBNs may overlap."""
        alice = LibraryCatalog(db_conn, "alice")
        bob = LibraryCatalog(db_conn, "bob")
        alice_id = alice.add_book(make_candidate())
        bob.add_book(make_candidate())

        assert bob.find_id_by_isbn("9780544003415") != alice_id
        assert bob.get_by_id(alice_id) is None
        assert [e.id for e in alice.entries()] == [alice_id]

    def test_list_all_sorted_by_title(self, catalog: LibraryCatalog) -> None:
        catalog.add_book(make_candidate(title="dune", isbn="1"))
        catalog.add_book(make_candidate(title="Anathem", isbn="2"))
        catalog.add_book(make_candidate(title="Carrie", isbn="3"))
        assert [r.title for r in catalog.list_all()] == ["Anathem", "Carrie", "dune"]

    def test_entries_oldest_first(self, catalog: LibraryCatalog) -> None:
        first = catalog.add_book(make_candidate(title="Zed", isbn="1"))
        second = catalog.add_book(make_candidate(title="Alpha", isbn="2"))
        entries = catalog.entries()
        assert [e.id for e in entries] == [first, second]
        assert entries[0].isbn == "1"
