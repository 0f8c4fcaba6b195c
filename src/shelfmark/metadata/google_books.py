# ABOUTME: Google Books metadata provider implementation.
# ABOUTME: Queries the public volumes endpoint by ISBN or title/author and returns candidates.

import logging

from pydantic import ValidationError

from shelfmark.metadata.candidate import SearchPage
from shelfmark.metadata.google_books_parser import (
    VolumesResponse,
    parse_volume_candidates,
    parse_volumes_response,
)
from shelfmark.metadata.http import HttpClient, MetadataFetchError
from shelfmark.metadata.provider import ProviderError, require_query
from shelfmark.metadata.types import BookCandidate

logger = logging.getLogger(__name__)

GOOGLE_BOOKS_URL = "https://www.googleapis.com/books/v1/volumes"
_DEFAULT_MAX_RESULTS = 20


class GoogleBooksError(ProviderError):
    """Raised when the Google Books API fails or returns an invalid body."""

    provider = "google"


class GoogleBooksProvider:
    """Metadata provider backed by the Google Books volumes API.

    Every response is validated against a strict schema before mapping; a
    body that does not validate is an error, not an empty result.
    """

    def __init__(
        self,
        http_client: HttpClient,
        *,
        base_url: str = GOOGLE_BOOKS_URL,
        country: str = "US",
        max_results: int = _DEFAULT_MAX_RESULTS,
        api_key: str | None = None,
    ) -> None:
        self._http = http_client
        self._base_url = base_url
        self._country = country
        self._max_results = max_results
        self._api_key = api_key

    @property
    def name(self) -> str:
        return "google"

    def search_by_isbn(self, isbn: str) -> BookCandidate | None:
        """Look up a single volume by ISBN.

        The first usable volume wins. If it carries no ISBN identifiers the
        query ISBN is reported instead.
        """
        isbn = require_query(isbn, "isbn")
        response = self._fetch({"q": f"isbn:{isbn}"})
        candidates = parse_volume_candidates(response, fallback_isbn=isbn)
        return candidates[0] if candidates else None

    def search_by_title(self, title: str, author: str | None = None) -> list[BookCandidate]:
        return self.search(title, author).results

    def search(self, title: str, author: str | None = None) -> SearchPage[BookCandidate]:
        """Search volumes by title with an optional author refinement.

        Returns all usable volumes together with the API's totalItems count.
        """
        title = require_query(title, "title")
        query = f"intitle:{title}"
        if author and author.strip():
            query += f" inauthor:{author.strip()}"

        response = self._fetch({"q": query, "maxResults": str(self._max_results)})
        results = parse_volume_candidates(response)
        logger.debug("Google Books returned %d usable volumes for %r", len(results), query)
        return SearchPage(results=results, total_items=response.total_items)

    def _fetch(self, params: dict[str, str]) -> VolumesResponse:
        params = {**params, "country": self._country}
        if self._api_key:
            params["key"] = self._api_key

        try:
            data = self._http.get_json(self._base_url, params=params)
        except MetadataFetchError as exc:
            raise GoogleBooksError(f"Google Books request failed: {exc}") from exc

        try:
            return parse_volumes_response(data)
        except ValidationError as exc:
            logger.error("Google Books response validation failed: %s", exc)
            raise GoogleBooksError("Invalid response from Google Books API") from exc
