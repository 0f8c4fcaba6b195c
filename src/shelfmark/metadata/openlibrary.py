# ABOUTME: Open Library metadata provider implementation.
# ABOUTME: Looks up openlibrary.org editions by ISBN or searches by title, resolving author names.

import logging

from pydantic import ValidationError

from shelfmark.metadata.http import HttpClient, MetadataFetchError
from shelfmark.metadata.openlibrary_parser import (
    author_keys,
    edition_to_candidate,
    parse_author_name,
    parse_edition_response,
    parse_search_candidates,
    parse_search_response,
)
from shelfmark.metadata.provider import ProviderError, require_query
from shelfmark.metadata.types import BookCandidate

logger = logging.getLogger(__name__)

OPEN_LIBRARY_URL = "https://openlibrary.org"
_SEARCH_LIMIT = 10


class OpenLibraryError(ProviderError):
    """Raised when Open Library fails with anything other than a 404."""

    provider = "openlibrary"


class OpenLibraryProvider:
    """Metadata provider backed by the Open Library API.

    ISBN lookup hits the edition endpoint and dereferences each author key;
    an unknown ISBN (HTTP 404) is "not found", not an error. Title search
    uses the search endpoint, which already carries author names.
    """

    def __init__(
        self,
        http_client: HttpClient,
        *,
        base_url: str = OPEN_LIBRARY_URL,
        search_limit: int = _SEARCH_LIMIT,
    ) -> None:
        self._http = http_client
        self._base_url = base_url.rstrip("/")
        self._search_limit = search_limit

    @property
    def name(self) -> str:
        return "openlibrary"

    def search_by_isbn(self, isbn: str) -> BookCandidate | None:
        """Look up an edition by ISBN.

        Returns None on 404 or when the edition has no title.

        Raises:
            OpenLibraryError: On any other HTTP or validation failure.
        """
        isbn = require_query(isbn, "isbn")
        url = f"{self._base_url}/isbn/{isbn}.json"
        try:
            data = self._http.get_json(url)
        except MetadataFetchError as exc:
            if exc.status_code == 404:
                logger.debug("Open Library has no edition for ISBN %s", isbn)
                return None
            raise OpenLibraryError(f"Open Library ISBN lookup failed: {exc}") from exc

        try:
            edition = parse_edition_response(data)
        except ValidationError as exc:
            logger.error("Open Library edition validation failed for %s: %s", isbn, exc)
            raise OpenLibraryError("Invalid response from Open Library") from exc

        if not edition.title:
            return None

        names = self._resolve_author_names(author_keys(edition))
        return edition_to_candidate(edition, isbn, names)

    def search_by_title(self, title: str, author: str | None = None) -> list[BookCandidate]:
        """Search Open Library by title and optional author.

        Returns candidates in OL relevance order.

        Raises:
            OpenLibraryError: On HTTP or validation failure.
        """
        title = require_query(title, "title")
        params: dict[str, str] = {"title": title, "limit": str(self._search_limit)}
        if author and author.strip():
            params["author"] = author.strip()

        try:
            data = self._http.get_json(f"{self._base_url}/search.json", params=params)
        except MetadataFetchError as exc:
            raise OpenLibraryError(f"Open Library search failed: {exc}") from exc

        try:
            response = parse_search_response(data)
        except ValidationError as exc:
            logger.error("Open Library search validation failed for %r: %s", title, exc)
            raise OpenLibraryError("Invalid search response from Open Library") from exc

        return parse_search_candidates(response)

    def _resolve_author_names(self, keys: list[str]) -> list[str]:
        """Fetch author names from the authors endpoint.

        A failed author fetch is logged and skipped, so the result may be
        shorter than keys.
        """
        names: list[str] = []
        for key in keys:
            path = key if key.startswith("/") else f"/authors/{key}"
            try:
                author_data = self._http.get_json(f"{self._base_url}{path}.json")
            except MetadataFetchError as exc:
                logger.warning("Failed to fetch Open Library author %s: %s", key, exc)
                continue
            name = parse_author_name(author_data)
            if name:
                names.append(name)
        return names
