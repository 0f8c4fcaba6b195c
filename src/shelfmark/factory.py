# ABOUTME: Wires providers, the HTTP client, and a caller's catalog into a BookSearchService.
# ABOUTME: Single place where SearchSettings turn into concrete providers and their lookup order.

from collections.abc import Iterator
from contextlib import closing, contextmanager

from shelfmark.config import SearchSettings, load_settings
from shelfmark.metadata.amazon import AmazonProvider
from shelfmark.metadata.google_books import GoogleBooksProvider
from shelfmark.metadata.http import HttpClient, ShelfmarkHttpClient
from shelfmark.metadata.openlibrary import OpenLibraryProvider
from shelfmark.metadata.reconcile import CatalogSource
from shelfmark.metadata.resolver import BookSearchService


def create_http_client(settings: SearchSettings) -> ShelfmarkHttpClient:
    return ShelfmarkHttpClient(
        timeout=settings.http_timeout,
        min_request_interval=settings.http_min_interval,
        max_retries=settings.http_max_retries,
    )


def create_search_service(
    catalog: CatalogSource | None = None,
    settings: SearchSettings | None = None,
    http_client: HttpClient | None = None,
) -> BookSearchService:
    """Create the default service.

    ISBN lookups try Google Books, Open Library, then Amazon; title lookups
    try Google Books, then Open Library.

    Raises:
        ConfigError: If settings are not given and the environment is invalid.
    """
    settings = settings or load_settings()
    http = http_client or create_http_client(settings)

    google = GoogleBooksProvider(
        http,
        base_url=settings.google_books_url,
        country=settings.google_country,
        max_results=settings.google_max_results,
        api_key=settings.google_api_key,
    )
    openlibrary = OpenLibraryProvider(
        http,
        base_url=settings.openlibrary_url,
        search_limit=settings.openlibrary_search_limit,
    )
    amazon = AmazonProvider(http, base_url=settings.amazon_url)

    return BookSearchService(
        google=google,
        openlibrary=openlibrary,
        amazon=amazon,
        catalog=catalog,
        isbn_providers=[google, openlibrary, amazon],
        title_providers=[google, openlibrary],
    )


@contextmanager
def search_session(
    catalog: CatalogSource | None = None,
    settings: SearchSettings | None = None,
) -> Iterator[BookSearchService]:
    """Yield a service backed by a fresh HTTP client that is closed on exit.

    Raises:
        ConfigError: If settings are not given and the environment is invalid.
    """
    settings = settings or load_settings()
    with closing(create_http_client(settings)) as http:
        yield create_search_service(catalog, settings, http)
