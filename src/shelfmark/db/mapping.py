# ABOUTME: Converts between BookCandidate results and catalog rows.
# ABOUTME: A candidate becomes a creation payload here; rows come back as BookRecord.

import json
import uuid
from dataclasses import dataclass, field
from typing import Any

from shelfmark.metadata.types import BookCandidate


@dataclass
class BookRecord:
    """A cataloged book owned by one user."""

    id: str
    user_id: str
    title: str
    subtitle: str | None = None
    authors: list[str] = field(default_factory=list)
    publisher: str | None = None
    published_year: int | None = None
    isbn: str | None = None
    cover_url: str | None = None
    pages: int | None = None
    language: str | None = None
    source: str | None = None
    date_added: str = ""

    @property
    def author(self) -> str:
        return ", ".join(self.authors)


def candidate_to_row(candidate: BookCandidate, user_id: str) -> dict[str, Any]:
    """Build an INSERT payload for a new catalog record from a candidate.

    Assigns a fresh id; authors are stored as a JSON array of names.
    """
    return {
        "id": uuid.uuid4().hex,
        "user_id": user_id,
        "title": candidate.title.strip(),
        "subtitle": candidate.subtitle,
        "authors": json.dumps([a.name for a in candidate.authors]),
        "publisher": candidate.publisher,
        "published_year": candidate.published_year,
        "isbn": candidate.isbn,
        "cover_url": candidate.cover_url,
        "pages": candidate.pages,
        "language": candidate.language,
        "source": candidate.source,
    }


def row_to_record(row: Any) -> BookRecord:
    """Convert a database row (dict-like) to a BookRecord."""
    return BookRecord(
        id=row["id"],
        user_id=row["user_id"],
        title=row["title"],
        subtitle=row["subtitle"],
        authors=json.loads(row["authors"]) if row["authors"] else [],
        publisher=row["publisher"],
        published_year=row["published_year"],
        isbn=row["isbn"],
        cover_url=row["cover_url"],
        pages=row["pages"],
        language=row["language"],
        source=row["source"],
        date_added=row["date_added"],
    )
