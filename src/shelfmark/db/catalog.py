# ABOUTME: User-scoped catalog operations over the shelfmark SQLite database.
# ABOUTME: Creates records from candidates and serves the lookups library reconciliation needs.

import sqlite3

from shelfmark.db.mapping import BookRecord, candidate_to_row, row_to_record
from shelfmark.metadata.reconcile import CatalogEntry
from shelfmark.metadata.types import BookCandidate


class DuplicateBookError(Exception):
    """Raised when a user adds an ISBN already in their catalog."""


class LibraryCatalog:
    """Wraps a sqlite3 connection and provides typed access to one user's books.

    Every query is filtered by user_id, so one catalog instance never sees
    another user's records.
    """

    def __init__(self, conn: sqlite3.Connection, user_id: str) -> None:
        if not user_id or not user_id.strip():
            raise ValueError("user_id must be a non-empty string")
        self._conn = conn
        self._user_id = user_id

    @property
    def user_id(self) -> str:
        return self._user_id

    def add_book(self, candidate: BookCandidate) -> str:
        """Create a catalog record from a candidate.

        Returns:
            The new record's id.

        Raises:
            DuplicateBookError: If this user already has a book with the ISBN.
        """
        row = candidate_to_row(candidate, self._user_id)
        columns = ", ".join(row.keys())
        placeholders = ", ".join("?" for _ in row)

        try:
            self._conn.execute(
                f"INSERT INTO books ({columns}) VALUES ({placeholders})",
                list(row.values()),
            )
            self._conn.commit()
        except sqlite3.IntegrityError as exc:
            if "books.user_id, books.isbn" in str(exc):
                raise DuplicateBookError(
                    f"Book with ISBN {candidate.isbn} is already in the library"
                ) from exc
            raise

        return row["id"]

    def get_by_id(self, book_id: str) -> BookRecord | None:
        """Retrieve one of this user's books by id."""
        cursor = self._conn.execute(
            "SELECT * FROM books WHERE id = ? AND user_id = ?", (book_id, self._user_id)
        )
        row = cursor.fetchone()
        return row_to_record(row) if row else None

    def get_by_isbn(self, isbn: str) -> BookRecord | None:
        """Retrieve one of this user's books by exact ISBN."""
        cursor = self._conn.execute(
            "SELECT * FROM books WHERE user_id = ? AND isbn = ?", (self._user_id, isbn.strip())
        )
        row = cursor.fetchone()
        return row_to_record(row) if row else None

    def find_id_by_isbn(self, isbn: str) -> str | None:
        record = self.get_by_isbn(isbn)
        return record.id if record else None

    def list_all(self) -> list[BookRecord]:
        """Return this user's books, ordered by title."""
        cursor = self._conn.execute(
            "SELECT * FROM books WHERE user_id = ? ORDER BY title COLLATE NOCASE",
            (self._user_id,),
        )
        return [row_to_record(row) for row in cursor.fetchall()]

    def entries(self) -> list[CatalogEntry]:
        """Return id/title/isbn for this user's books, oldest first."""
        cursor = self._conn.execute(
            "SELECT id, title, isbn FROM books WHERE user_id = ? ORDER BY date_added, rowid",
            (self._user_id,),
        )
        return [
            CatalogEntry(id=row["id"], title=row["title"], isbn=row["isbn"])
            for row in cursor.fetchall()
        ]
