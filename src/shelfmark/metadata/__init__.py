# ABOUTME: Metadata package for multi-source book lookup and library reconciliation.
# ABOUTME: Exports the candidate types, provider contract, and the search service.

from shelfmark.metadata.candidate import LibraryMatch, MatchedCandidate, SearchPage
from shelfmark.metadata.provider import BookProvider, ProviderError
from shelfmark.metadata.resolver import BookSearchError, BookSearchService
from shelfmark.metadata.types import Author, BookCandidate

__all__ = [
    "Author",
    "BookCandidate",
    "BookProvider",
    "BookSearchError",
    "BookSearchService",
    "LibraryMatch",
    "MatchedCandidate",
    "ProviderError",
    "SearchPage",
]
