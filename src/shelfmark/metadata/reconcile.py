# ABOUTME: Library reconciliation: matches candidates against the caller's existing catalog.
# ABOUTME: Exact ISBN lookup first, then normalized title lookup; pure functions over an index.

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable

from shelfmark.metadata.candidate import LibraryMatch


@dataclass(frozen=True)
class CatalogEntry:
    """The slice of a catalog record reconciliation needs."""

    id: str
    title: str
    isbn: str | None = None


@runtime_checkable
class CatalogSource(Protocol):
    """A caller-scoped view of the catalog."""

    def find_id_by_isbn(self, isbn: str) -> str | None: ...

    def entries(self) -> list[CatalogEntry]: ...


def normalize_title(title: str) -> str:
    """Lowercase, trim, and collapse internal whitespace."""
    return " ".join(title.split()).lower()


@dataclass(frozen=True)
class CatalogIndex:
    """Lookup maps from ISBN and normalized title to catalog id."""

    by_isbn: dict[str, str] = field(default_factory=dict)
    by_title: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_entries(cls, entries: Iterable[CatalogEntry]) -> "CatalogIndex":
        """Build an index. When two entries share a key, the earlier one wins."""
        by_isbn: dict[str, str] = {}
        by_title: dict[str, str] = {}
        for entry in entries:
            if entry.isbn:
                by_isbn.setdefault(entry.isbn.strip(), entry.id)
            title = normalize_title(entry.title)
            if title:
                by_title.setdefault(title, entry.id)
        return cls(by_isbn=by_isbn, by_title=by_title)

    @classmethod
    def from_catalog(cls, catalog: CatalogSource) -> "CatalogIndex":
        return cls.from_entries(catalog.entries())


def match_isbn(isbn: str | None, index: CatalogIndex) -> LibraryMatch:
    if isbn:
        book_id = index.by_isbn.get(isbn.strip())
        if book_id is not None:
            return LibraryMatch.owned(book_id)
    return LibraryMatch.none()


def match_title(title: str | None, index: CatalogIndex) -> LibraryMatch:
    if title:
        book_id = index.by_title.get(normalize_title(title))
        if book_id is not None:
            return LibraryMatch.owned(book_id)
    return LibraryMatch.none()


def reconcile(isbn: str | None, title: str | None, index: CatalogIndex) -> LibraryMatch:
    """Match a candidate's ISBN, then its title, against the index.

    First match wins; no match yields an unmatched LibraryMatch.
    """
    match = match_isbn(isbn, index)
    if match.in_library:
        return match
    return match_title(title, index)
