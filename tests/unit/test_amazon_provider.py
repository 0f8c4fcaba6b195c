# ABOUTME: Unit tests for AmazonProvider.
# ABOUTME: Uses a FakeHttpClient serving canned HTML to test the search-then-detail flow.

import pytest

from shelfmark.metadata.amazon import AmazonProvider, AmazonScrapeError
from shelfmark.metadata.provider import BookProvider
from tests.fixtures.amazon_pages import (
    DETAIL_PAGE,
    DETAIL_PAGE_DYNAMIC_IMAGE,
    DETAIL_PAGE_NO_TITLE,
    SEARCH_PAGE,
    SEARCH_PAGE_EMPTY,
)
from tests.fixtures.fake_http import FakeHttpClient, server_error

ISBN = "9783608939811"


class TestAmazonProviderProtocol:
    def test_satisfies_protocol(self) -> None:
        assert isinstance(AmazonProvider(FakeHttpClient()), BookProvider)

    def test_name_property(self) -> None:
        assert AmazonProvider(FakeHttpClient()).name == "amazon"


class TestSearchByIsbn:
    """Tests for the two-request ISBN flow."""

    def test_search_then_detail(self) -> None:
        client = FakeHttpClient(
            {
                f"/s?k={ISBN}": SEARCH_PAGE,
                "/dp/3608939814": DETAIL_PAGE,
            }
        )
        candidate = AmazonProvider(client).search_by_isbn(ISBN)

        assert candidate is not None
        assert candidate.source == "amazon"
        assert candidate.external_id == f"amazon-{ISBN}"
        assert candidate.title == "Der Herr der Ringe"
        assert candidate.subtitle == "Die Gefährten"
        assert candidate.author == "J.R.R. Tolkien, Wolfgang Krege"
        assert candidate.publisher == "Klett-Cotta"
        assert len(client.request_log) == 2

    def test_browser_headers_sent(self) -> None:
        """Both requests carry browser-like headers and a storefront Referer."""
        client = FakeHttpClient({"/s?k=": SEARCH_PAGE, "/dp/": DETAIL_PAGE})
        AmazonProvider(client).search_by_isbn(ISBN)

        for headers in client.headers_log:
            assert headers is not None
            assert headers["Referer"] == "https://www.amazon.de/"
            assert "Mozilla" in headers["User-Agent"]

    def test_query_isbn_used_when_page_has_none(self) -> None:
        client = FakeHttpClient({"/s?k=": SEARCH_PAGE, "/dp/": DETAIL_PAGE_DYNAMIC_IMAGE})
        candidate = AmazonProvider(client).search_by_isbn("9783423715683")
        assert candidate is not None
        assert candidate.isbn == "9783423715683"

    def test_no_hits_returns_none(self) -> None:
        """An empty search page is "not found" and skips the detail request."""
        client = FakeHttpClient({"/s?k=": SEARCH_PAGE_EMPTY})
        assert AmazonProvider(client).search_by_isbn(ISBN) is None
        assert len(client.request_log) == 1

    def test_untitled_detail_returns_none(self) -> None:
        client = FakeHttpClient({"/s?k=": SEARCH_PAGE, "/dp/": DETAIL_PAGE_NO_TITLE})
        assert AmazonProvider(client).search_by_isbn(ISBN) is None

    def test_search_fetch_failure_raises(self) -> None:
        client = FakeHttpClient({"/s?k=": server_error()})
        with pytest.raises(AmazonScrapeError, match="search results"):
            AmazonProvider(client).search_by_isbn(ISBN)

    def test_detail_fetch_failure_raises(self) -> None:
        client = FakeHttpClient({"/s?k=": SEARCH_PAGE, "/dp/": server_error()})
        with pytest.raises(AmazonScrapeError, match="book details"):
            AmazonProvider(client).search_by_isbn(ISBN)

    def test_custom_storefront(self) -> None:
        client = FakeHttpClient({"/s?k=": SEARCH_PAGE_EMPTY})
        AmazonProvider(client, base_url="https://www.amazon.com/").search_by_isbn(ISBN)
        assert client.request_log[0] == f"https://www.amazon.com/s?k={ISBN}"


class TestOtherOperations:
    def test_title_search_is_empty(self) -> None:
        client = FakeHttpClient()
        assert AmazonProvider(client).search_by_title("Dune") == []
        assert client.request_log == []

    def test_fetch_detail_resolves_relative_url(self) -> None:
        client = FakeHttpClient({"/dp/": DETAIL_PAGE})
        AmazonProvider(client).fetch_detail("/Herr/dp/3608939814")
        assert client.request_log[0] == "https://www.amazon.de/Herr/dp/3608939814"
