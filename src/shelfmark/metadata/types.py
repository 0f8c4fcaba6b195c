# ABOUTME: Core candidate record structures produced by book metadata providers.
# ABOUTME: BookCandidate is the normalized shape every provider adapter maps into.

import re
from dataclasses import dataclass, field
from typing import Any

SOURCES = frozenset({"google", "openlibrary", "amazon"})

_LEADING_DIGITS_RE = re.compile(r"^\s*(\d+)")


@dataclass
class Author:
    """A credited author. Role is reserved; automated sources leave it None."""

    name: str
    role: str | None = None

    def as_dict(self) -> dict[str, Any]:
        return {"name": self.name, "role": self.role}


@dataclass
class BookCandidate:
    """A transient, normalized book metadata result from one provider.

    Candidates are built fresh per lookup and never stored as-is; a catalog
    record may be created from one, but that is a separate step. Every
    candidate carries a non-blank title.
    """

    external_id: str
    title: str
    source: str
    subtitle: str | None = None
    authors: list[Author] = field(default_factory=list)
    publisher: str | None = None
    published_year: int | None = None
    description: str | None = None
    cover_url: str | None = None
    categories: list[str] | None = None
    isbn: str | None = None
    pages: int | None = None
    language: str | None = None

    def __post_init__(self) -> None:
        if not self.title or not self.title.strip():
            raise ValueError("title must be a non-empty string")
        if self.source not in SOURCES:
            msg = f"source must be one of {sorted(SOURCES)}, got {self.source!r}"
            raise ValueError(msg)

    @property
    def author(self) -> str:
        """Convenience property: joined author string for display."""
        return ", ".join(a.name for a in self.authors)

    def as_dict(self) -> dict[str, Any]:
        """Serialize to the camelCase response shape."""
        return {
            "externalId": self.external_id,
            "title": self.title,
            "subtitle": self.subtitle,
            "authors": [a.as_dict() for a in self.authors],
            "publisher": self.publisher,
            "publishedYear": self.published_year,
            "description": self.description,
            "coverUrl": self.cover_url,
            "categories": self.categories,
            "isbn": self.isbn,
            "pages": self.pages,
            "language": self.language,
            "source": self.source,
        }


def authors_from_names(names: list[str] | None) -> list[Author]:
    """Build an Author list from plain names, dropping blanks."""
    return [Author(name=name.strip()) for name in names or [] if name and name.strip()]


def parse_leading_year(date: str | None) -> int | None:
    """Parse the year from an ISO-like date such as "2004-05-01" or "2004".

    Takes the segment before the first hyphen and reads its leading digits.
    Zero and non-numeric values map to None.
    """
    if not date:
        return None
    match = _LEADING_DIGITS_RE.match(date.split("-", 1)[0])
    if not match:
        return None
    return int(match.group(1)) or None


def parse_trailing_year(date: str | None) -> int | None:
    """Parse the year from a free-text date by its last whitespace token.

    Reads the leading digits of the last token, so "March 1999", "1999." and
    "1999?" all give 1999; a tail without leading digits maps to None.
    """
    if not date:
        return None
    tokens = date.split()
    if not tokens:
        return None
    match = _LEADING_DIGITS_RE.match(tokens[-1])
    if not match:
        return None
    return int(match.group(1)) or None


def to_https(url: str | None) -> str | None:
    """Rewrite a leading http: scheme to https:."""
    if not url:
        return None
    if url.startswith("http:"):
        return "https:" + url[len("http:") :]
    return url
