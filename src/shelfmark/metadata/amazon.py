# ABOUTME: Amazon storefront scraping provider, the least stable metadata source.
# ABOUTME: Searches by ISBN, then fetches the top hit's detail page and maps it to a candidate.

import logging

from shelfmark.metadata.amazon_parser import (
    AmazonBookDetail,
    AmazonSearchHit,
    parse_detail_page,
    parse_search_results,
)
from shelfmark.metadata.http import HttpClient, MetadataFetchError
from shelfmark.metadata.provider import ProviderError, require_query
from shelfmark.metadata.types import BookCandidate, authors_from_names

logger = logging.getLogger(__name__)

AMAZON_URL = "https://www.amazon.de"

BROWSER_HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/91.0.4472.114 Safari/537.36"
    ),
    "Accept": (
        "text/html,application/xhtml+xml,application/xml;q=0.9,image/avif,image/webp,*/*;q=0.8"
    ),
    "Accept-Language": "en-US,en;q=0.9,de;q=0.8",
    "Upgrade-Insecure-Requests": "1",
    "Cache-Control": "no-cache",
    "Pragma": "no-cache",
}


class AmazonScrapeError(ProviderError):
    """Raised when an Amazon page cannot be fetched."""

    provider = "amazon"


class AmazonProvider:
    """Best-effort provider that scrapes Amazon search and product pages.

    There is no contract with the storefront markup: pages that parse to
    nothing are treated as "no results", only failed fetches are errors.
    Amazon has no usable free-text search here, so title search is empty.
    """

    def __init__(self, http_client: HttpClient, *, base_url: str = AMAZON_URL) -> None:
        self._http = http_client
        self._base_url = base_url.rstrip("/")
        self._headers = {**BROWSER_HEADERS, "Referer": f"{self._base_url}/"}

    @property
    def name(self) -> str:
        return "amazon"

    def search_by_isbn(self, isbn: str) -> BookCandidate | None:
        """Search the storefront for an ISBN and map the top hit's detail page.

        Issues two requests: the search page, then the first hit's detail page.
        The returned ISBN falls back to the query when none can be scraped.

        Raises:
            AmazonScrapeError: If either page cannot be fetched.
        """
        isbn = require_query(isbn, "isbn")
        hits = self.search(isbn)
        if not hits:
            logger.info("Amazon search found no results for ISBN %s", isbn)
            return None

        detail = self.fetch_detail(hits[0].detail_url)
        if detail is None:
            return None
        return self._to_candidate(detail, isbn)

    def search_by_title(self, title: str, author: str | None = None) -> list[BookCandidate]:
        logger.debug("Amazon title search is not supported; ignoring %r", title)
        return []

    def search(self, query: str) -> list[AmazonSearchHit]:
        """Fetch the storefront search page for a query and extract hits."""
        url = f"{self._base_url}/s"
        try:
            html = self._http.get_text(url, params={"k": query}, headers=self._headers)
        except MetadataFetchError as exc:
            raise AmazonScrapeError(f"Failed to fetch Amazon search results: {exc}") from exc

        hits = parse_search_results(html, self._base_url)
        logger.debug("Amazon search for %s found %d results", query, len(hits))
        return hits

    def fetch_detail(self, detail_url: str) -> AmazonBookDetail | None:
        """Fetch and parse a product detail page. Relative URLs are resolved."""
        if not detail_url.startswith(("http://", "https://")):
            detail_url = f"{self._base_url}{'' if detail_url.startswith('/') else '/'}{detail_url}"
        try:
            html = self._http.get_text(detail_url, headers=self._headers)
        except MetadataFetchError as exc:
            raise AmazonScrapeError(f"Failed to fetch Amazon book details: {exc}") from exc

        detail = parse_detail_page(html)
        if detail is None:
            logger.info("Could not extract book details from %s", detail_url)
        return detail

    @staticmethod
    def _to_candidate(detail: AmazonBookDetail, isbn: str) -> BookCandidate:
        return BookCandidate(
            external_id=f"amazon-{isbn}",
            title=detail.title,
            subtitle=detail.subtitle,
            authors=authors_from_names(detail.authors),
            publisher=detail.publisher,
            cover_url=detail.cover_url,
            isbn=detail.isbn or isbn,
            source="amazon",
        )
