# ABOUTME: SQL DDL statements for the shelfmark catalog database.
# ABOUTME: Defines the user-scoped books table, its lookup indexes, and schema versioning.

SCHEMA_V1 = """
-- User-scoped book catalog
CREATE TABLE books (
    id             TEXT PRIMARY KEY,
    user_id        TEXT NOT NULL,
    title          TEXT NOT NULL,
    subtitle       TEXT,
    authors        TEXT,
    publisher      TEXT,
    published_year INTEGER,
    isbn           TEXT,
    cover_url      TEXT,
    pages          INTEGER,
    language       TEXT,
    source         TEXT,
    date_added     TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%f', 'now'))
);

CREATE UNIQUE INDEX idx_books_user_isbn ON books(user_id, isbn) WHERE isbn IS NOT NULL;
CREATE INDEX idx_books_user_title ON books(user_id, title);

-- Schema versioning for future migrations
CREATE TABLE schema_version (
    version    INTEGER NOT NULL,
    applied_at TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%S', 'now'))
);

INSERT INTO schema_version (version) VALUES (1);
"""
