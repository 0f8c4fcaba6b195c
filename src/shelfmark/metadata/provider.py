# ABOUTME: BookProvider protocol defining the contract for metadata sources.
# ABOUTME: Google Books, Open Library and the Amazon scraper all implement it.

from typing import Protocol, runtime_checkable

from shelfmark.metadata.candidate import SearchPage
from shelfmark.metadata.types import BookCandidate


class ProviderError(Exception):
    """Raised by a provider when its upstream source fails.

    Covers network errors, unexpected HTTP statuses and response bodies that
    fail validation. Expected absence is never an error: providers return
    None or an empty list for that.
    """

    provider = "unknown"


@runtime_checkable
class BookProvider(Protocol):
    """Protocol for book metadata lookup services.

    Implementations must provide ISBN-based lookup (single best record) and
    title-based search (ordered list, possibly empty).
    """

    @property
    def name(self) -> str: ...

    def search_by_isbn(self, isbn: str) -> BookCandidate | None: ...

    def search_by_title(self, title: str, author: str | None = None) -> list[BookCandidate]: ...


def require_query(value: str, what: str) -> str:
    """Return the stripped query, raising ValueError when it is blank."""
    stripped = value.strip() if value else ""
    if not stripped:
        raise ValueError(f"{what} must be a non-empty string")
    return stripped


@runtime_checkable
class ListingProvider(BookProvider, Protocol):
    """A provider that can also return a full result page with a total count."""

    def search(self, title: str, author: str | None = None) -> SearchPage[BookCandidate]: ...
