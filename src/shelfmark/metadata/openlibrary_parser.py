# ABOUTME: Schemas and parsing functions for Open Library API JSON responses.
# ABOUTME: Converts OL edition and search structures into BookCandidate instances.

from typing import Any

from pydantic import BaseModel

from shelfmark.metadata.types import (
    Author,
    BookCandidate,
    authors_from_names,
    parse_trailing_year,
)

_COVERS_BASE_URL = "https://covers.openlibrary.org/b/id"


class KeyRef(BaseModel):
    key: str


class TextValue(BaseModel):
    value: str


class EditionResponse(BaseModel):
    """The subset of an /isbn/{isbn}.json edition record we map."""

    title: str | None = None
    subtitle: str | None = None
    authors: list[KeyRef] | None = None
    publishers: list[str] | None = None
    publish_date: str | None = None
    covers: list[int] | None = None
    number_of_pages: int | None = None
    dewey_decimal_class: list[str] | None = None
    isbn_13: list[str] | None = None
    isbn_10: list[str] | None = None
    languages: list[KeyRef] | None = None
    description: str | TextValue | None = None


class SearchDoc(BaseModel):
    key: str
    title: str
    author_name: list[str] | None = None
    first_publish_year: int | None = None
    cover_i: int | None = None
    publisher: list[str] | None = None
    isbn: list[str] | None = None
    language: list[str] | None = None
    description: str | None = None
    dewey_decimal_class: list[str] | None = None


class SearchResponse(BaseModel):
    docs: list[SearchDoc] | None = None


def parse_edition_response(data: Any) -> EditionResponse:
    """Validate an edition payload.

    Raises:
        pydantic.ValidationError: If the payload does not match the schema.
    """
    return EditionResponse.model_validate(data)


def parse_search_response(data: Any) -> SearchResponse:
    """Validate a search.json payload.

    Raises:
        pydantic.ValidationError: If the payload does not match the schema.
    """
    return SearchResponse.model_validate(data)


def normalize_description(desc: str | TextValue | None) -> str | None:
    """Flatten the OL description quirk to a plain string.

    OL returns either a plain string or {"type": ..., "value": "actual text"}.
    """
    if desc is None:
        return None
    if isinstance(desc, TextValue):
        return desc.value or None
    return desc or None


def build_cover_url(cover_id: int | None, size: str = "L") -> str | None:
    """Build an Open Library cover image URL from a numeric cover id.

    Args:
        cover_id: OL cover id; non-positive ids mean "no cover".
        size: Image size: "S" (small), "M" (medium), or "L" (large).
    """
    if cover_id is None or cover_id <= 0:
        return None
    return f"{_COVERS_BASE_URL}/{cover_id}-{size}.jpg"


def parse_language_key(languages: list[KeyRef] | None) -> str | None:
    """Turn [{"key": "/languages/eng"}] into "eng"."""
    if not languages:
        return None
    lang_key = languages[0].key
    return lang_key.rsplit("/", 1)[-1] if "/" in lang_key else lang_key or None


def first_dewey_class(classes: list[str] | None) -> list[str] | None:
    if not classes:
        return None
    return [classes[0]]


def author_keys(edition: EditionResponse) -> list[str]:
    """Author keys in edition order, blanks dropped."""
    return [ref.key for ref in edition.authors or [] if ref.key]


def parse_author_name(data: dict[str, Any]) -> str | None:
    """Extract the author name from an Open Library Author response."""
    name = data.get("name") if isinstance(data, dict) else None
    if isinstance(name, str) and name.strip():
        return name.strip()
    return None


def edition_to_candidate(
    edition: EditionResponse, isbn: str, author_names: list[str]
) -> BookCandidate | None:
    """Convert a validated edition into a BookCandidate.

    Returns None when the edition has no title.
    """
    if not edition.title or not edition.title.strip():
        return None

    isbn_13 = edition.isbn_13 or []
    isbn_10 = edition.isbn_10 or []
    resolved_isbn = isbn_13[0] if isbn_13 else (isbn_10[0] if isbn_10 else isbn)

    publishers = edition.publishers or []
    covers = edition.covers or []

    return BookCandidate(
        external_id=f"ol-{isbn}",
        title=edition.title,
        subtitle=edition.subtitle or None,
        authors=[Author(name=name) for name in author_names],
        publisher=publishers[0] if publishers else None,
        published_year=parse_trailing_year(edition.publish_date),
        description=normalize_description(edition.description),
        cover_url=build_cover_url(covers[0]) if covers else None,
        categories=first_dewey_class(edition.dewey_decimal_class),
        isbn=resolved_isbn,
        pages=edition.number_of_pages,
        language=parse_language_key(edition.languages),
        source="openlibrary",
    )


def search_doc_to_candidate(doc: SearchDoc) -> BookCandidate | None:
    """Convert one search result doc into a BookCandidate, or None if untitled."""
    if not doc.title.strip():
        return None

    publishers = doc.publisher or []
    isbns = doc.isbn or []
    languages = doc.language or []

    return BookCandidate(
        external_id=f"ol-{doc.key}",
        title=doc.title,
        authors=authors_from_names(doc.author_name),
        publisher=publishers[0] if publishers else None,
        published_year=doc.first_publish_year or None,
        description=doc.description or None,
        cover_url=build_cover_url(doc.cover_i),
        categories=first_dewey_class(doc.dewey_decimal_class),
        isbn=isbns[0] if isbns else None,
        language=languages[0] if languages else None,
        source="openlibrary",
    )


def parse_search_candidates(response: SearchResponse) -> list[BookCandidate]:
    """Map every titled doc in a search response, preserving OL order."""
    results: list[BookCandidate] = []
    for doc in response.docs or []:
        candidate = search_doc_to_candidate(doc)
        if candidate is not None:
            results.append(candidate)
    return results
