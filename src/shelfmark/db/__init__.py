# ABOUTME: Public API for the shelfmark catalog database layer.
# ABOUTME: Exports connection management, catalog operations, and record types.

from shelfmark.db.catalog import DuplicateBookError, LibraryCatalog
from shelfmark.db.connection import DEFAULT_DB_PATH, open_library
from shelfmark.db.mapping import BookRecord

__all__ = [
    "DEFAULT_DB_PATH",
    "BookRecord",
    "DuplicateBookError",
    "LibraryCatalog",
    "open_library",
]
