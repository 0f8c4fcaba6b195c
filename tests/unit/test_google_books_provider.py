# ABOUTME: Unit tests for GoogleBooksProvider.
# ABOUTME: Uses a FakeHttpClient to test ISBN lookup, title search, query building, and errors.

import logging

import pytest

from shelfmark.metadata.google_books import GoogleBooksError, GoogleBooksProvider
from shelfmark.metadata.provider import BookProvider, ProviderError
from tests.fixtures.fake_http import FakeHttpClient, server_error
from tests.fixtures.google_books_responses import (
    EMPTY_RESPONSE,
    INVALID_RESPONSE,
    ISBN_RESPONSE,
    LOTR_ISBN,
    TITLE_RESPONSE,
)


class TestGoogleBooksProviderProtocol:
    def test_satisfies_protocol(self) -> None:
        """GoogleBooksProvider implements the BookProvider protocol."""
        assert isinstance(GoogleBooksProvider(FakeHttpClient()), BookProvider)

    def test_name_property(self) -> None:
        assert GoogleBooksProvider(FakeHttpClient()).name == "google"


class TestSearchByIsbn:
    """Tests for ISBN-based lookup."""

    def test_returns_first_volume(self) -> None:
        client = FakeHttpClient({f"q=isbn:{LOTR_ISBN}": ISBN_RESPONSE})
        provider = GoogleBooksProvider(client)

        candidate = provider.search_by_isbn(LOTR_ISBN)

        assert candidate is not None
        assert candidate.title == "The Lord of the Rings"
        assert candidate.source == "google"

    def test_query_includes_country(self) -> None:
        """Requests carry the configured country code."""
        client = FakeHttpClient({"q=isbn:": EMPTY_RESPONSE})
        GoogleBooksProvider(client, country="DE").search_by_isbn(LOTR_ISBN)
        assert "country=DE" in client.request_log[0]

    def test_api_key_sent_when_configured(self) -> None:
        client = FakeHttpClient({"q=isbn:": EMPTY_RESPONSE})
        GoogleBooksProvider(client, api_key="secret").search_by_isbn(LOTR_ISBN)
        assert "key=secret" in client.request_log[0]

    def test_no_items_returns_none(self) -> None:
        """Zero results is absence, not an error."""
        client = FakeHttpClient({"q=isbn:": EMPTY_RESPONSE})
        assert GoogleBooksProvider(client).search_by_isbn("9780000000000") is None

    def test_blank_isbn_rejected(self) -> None:
        with pytest.raises(ValueError):
            GoogleBooksProvider(FakeHttpClient()).search_by_isbn("  ")

    def test_http_failure_raises_provider_error(self) -> None:
        client = FakeHttpClient({"q=isbn:": server_error()})
        with pytest.raises(GoogleBooksError) as exc_info:
            GoogleBooksProvider(client).search_by_isbn(LOTR_ISBN)
        assert isinstance(exc_info.value, ProviderError)
        assert exc_info.value.provider == "google"

    def test_invalid_body_raises_and_logs(self, caplog: pytest.LogCaptureFixture) -> None:
        """A body that fails validation is an error, never an empty result."""
        client = FakeHttpClient({"q=isbn:": INVALID_RESPONSE})
        with (
            caplog.at_level(logging.ERROR, logger="shelfmark"),
            pytest.raises(GoogleBooksError, match="Invalid response from Google Books API"),
        ):
            GoogleBooksProvider(client).search_by_isbn(LOTR_ISBN)
        assert "validation failed" in caplog.text


class TestSearch:
    """Tests for title search and listing."""

    def test_title_query(self) -> None:
        client = FakeHttpClient({"q=intitle:Dune": TITLE_RESPONSE})
        results = GoogleBooksProvider(client).search_by_title("Dune")
        assert [c.title for c in results] == ["Dune", "Dune Messiah"]
        assert "maxResults=20" in client.request_log[0]

    def test_author_refinement(self) -> None:
        """An author narrows the query with inauthor:."""
        client = FakeHttpClient({"q=intitle:Dune inauthor:Frank Herbert": TITLE_RESPONSE})
        page = GoogleBooksProvider(client).search("Dune", "Frank Herbert")
        assert len(page.results) == 2

    def test_search_reports_total_items(self) -> None:
        client = FakeHttpClient({"q=intitle:Dune": TITLE_RESPONSE})
        page = GoogleBooksProvider(client).search("Dune")
        assert page.total_items == 57

    def test_max_results_configurable(self) -> None:
        client = FakeHttpClient({"q=intitle:": EMPTY_RESPONSE})
        GoogleBooksProvider(client, max_results=5).search("Dune")
        assert "maxResults=5" in client.request_log[0]

    def test_empty_search(self) -> None:
        client = FakeHttpClient({"q=intitle:": EMPTY_RESPONSE})
        page = GoogleBooksProvider(client).search("Nothing Like This")
        assert page.results == []
        assert page.total_items == 0
