# ABOUTME: Resolution orchestrator that tries metadata providers in priority order.
# ABOUTME: Exposes combined ISBN/title lookups, single-provider lookups, and library-aware listing.

import logging
from collections.abc import Sequence

from shelfmark.metadata.candidate import LibraryMatch, MatchedCandidate, SearchPage
from shelfmark.metadata.outcome import LookupOutcome, LookupStatus, attempt
from shelfmark.metadata.provider import (
    BookProvider,
    ListingProvider,
    ProviderError,
    require_query,
)
from shelfmark.metadata.reconcile import CatalogIndex, CatalogSource, match_title, reconcile
from shelfmark.metadata.types import BookCandidate

logger = logging.getLogger(__name__)


class BookSearchError(Exception):
    """Raised by lookups that have no fallback provider when that provider fails."""


class BookSearchService:
    """Resolves book metadata across providers for one caller's catalog.

    Combined lookups walk isbn_providers or title_providers in the order
    given; calls are sequential and the first provider that finds something
    wins. Without explicit orders, ISBN lookups walk google -> openlibrary ->
    amazon and title lookups walk google -> openlibrary. The named providers
    back the single-source operations.
    """

    def __init__(
        self,
        google: ListingProvider,
        openlibrary: BookProvider,
        amazon: BookProvider,
        catalog: CatalogSource | None = None,
        *,
        isbn_providers: Sequence[BookProvider] | None = None,
        title_providers: Sequence[BookProvider] | None = None,
    ) -> None:
        self._google = google
        self._openlibrary = openlibrary
        self._amazon = amazon
        self._catalog = catalog
        self.isbn_providers: list[BookProvider] = list(
            isbn_providers if isbn_providers is not None else [google, openlibrary, amazon]
        )
        self.title_providers: list[BookProvider] = list(
            title_providers if title_providers is not None else [google, openlibrary]
        )

    # --- Combined lookups ---

    def search_by_isbn(self, isbn: str) -> MatchedCandidate | None:
        """Resolve an ISBN through every provider until one finds it.

        Library membership is an exact ISBN lookup done once before any
        provider call; it is attached to whichever provider's record wins.
        Returns None when every provider fails or finds nothing.
        """
        isbn = require_query(isbn, "isbn")
        match = self._match_isbn(isbn)

        outcome = self._first_found(self.isbn_providers, "isbn", isbn)
        if outcome is None or outcome.first is None:
            return None
        return MatchedCandidate(candidate=outcome.first, match=match)

    def search_by_title(self, title: str) -> MatchedCandidate | None:
        """Resolve a free-text title to the first candidate of the first provider that finds it.

        Library membership is checked once, up front, by normalized exact
        title against the caller's catalog.
        """
        title = require_query(title, "title")
        match = match_title(title, self._index()) if self._catalog else LibraryMatch.none()

        outcome = self._first_found(self.title_providers, "title", title)
        if outcome is None or outcome.first is None:
            return None
        return MatchedCandidate(candidate=outcome.first, match=match)

    def search_and_add(
        self,
        title: str,
        author: str | None = None,
        included_in_library: bool = True,
    ) -> SearchPage[MatchedCandidate]:
        """List every Google Books result with its library status.

        Each result is reconciled independently (ISBN, then normalized
        title). Never modifies the catalog.

        Raises:
            BookSearchError: If Google Books fails.
        """
        page = self.search_google_books(title, author)
        if not page.results:
            return SearchPage.empty()

        index = self._index() if included_in_library and self._catalog else CatalogIndex()
        results = [
            MatchedCandidate(candidate=c, match=reconcile(c.isbn, c.title, index))
            for c in page.results
        ]
        return SearchPage(results=results, total_items=page.total_items)

    # --- Single-provider lookups ---

    def search_google_books(
        self, title: str, author: str | None = None
    ) -> SearchPage[BookCandidate]:
        """Search Google Books only.

        Raises:
            BookSearchError: If Google Books fails.
        """
        try:
            page = self._google.search(title, author)
        except ProviderError as exc:
            raise BookSearchError("Failed to search Google Books") from exc
        if not page.results:
            return SearchPage.empty()
        return page

    def search_by_isbn_google(self, isbn: str) -> BookCandidate | None:
        """Look up an ISBN on Google Books only.

        Raises:
            BookSearchError: If Google Books fails.
        """
        try:
            return self._google.search_by_isbn(isbn)
        except ProviderError as exc:
            raise BookSearchError("Failed to search Google Books by ISBN") from exc

    def search_by_isbn_openlibrary(self, isbn: str) -> BookCandidate | None:
        """Look up an ISBN on Open Library only. Unknown ISBNs return None.

        Raises:
            BookSearchError: If Open Library fails with anything but a 404.
        """
        try:
            return self._openlibrary.search_by_isbn(isbn)
        except ProviderError as exc:
            raise BookSearchError("Failed to search Open Library") from exc

    def search_by_isbn_amazon(self, isbn: str) -> BookCandidate | None:
        """Look up an ISBN on Amazon only. Failures are logged and return None."""
        try:
            return self._amazon.search_by_isbn(isbn)
        except ProviderError as exc:
            logger.warning("Amazon ISBN search failed for %s: %s", isbn, exc)
            return None

    # --- Internals ---

    def _first_found(
        self, providers: Sequence[BookProvider], kind: str, query: str
    ) -> LookupOutcome | None:
        for provider in providers:
            call = provider.search_by_isbn if kind == "isbn" else provider.search_by_title
            outcome = attempt(provider.name, call, query)
            if outcome.status is LookupStatus.FOUND:
                logger.debug("%s lookup for %r resolved by %s", kind, query, provider.name)
                return outcome
            if outcome.status is LookupStatus.FAILED:
                logger.warning(
                    "%s %s search failed for %r: %s", provider.name, kind, query, outcome.error
                )
            else:
                logger.debug("%s found nothing for %s %r", provider.name, kind, query)
        logger.info("No provider resolved %s %r", kind, query)
        return None

    def _match_isbn(self, isbn: str) -> LibraryMatch:
        if self._catalog is None:
            return LibraryMatch.none()
        book_id = self._catalog.find_id_by_isbn(isbn)
        return LibraryMatch.owned(book_id) if book_id is not None else LibraryMatch.none()

    def _index(self) -> CatalogIndex:
        if self._catalog is None:
            return CatalogIndex()
        return CatalogIndex.from_catalog(self._catalog)
