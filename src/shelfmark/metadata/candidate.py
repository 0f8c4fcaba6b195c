# ABOUTME: Library membership wrappers around BookCandidate results.
# ABOUTME: MatchedCandidate pairs a candidate with whether the caller already owns it.

from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from shelfmark.metadata.types import BookCandidate

T = TypeVar("T")


@dataclass(frozen=True)
class LibraryMatch:
    """Whether a candidate is already in the caller's catalog.

    An owned match always names the catalog record; an unmatched one never does.
    """

    in_library: bool
    book_id: str | None = None

    def __post_init__(self) -> None:
        if self.in_library and self.book_id is None:
            raise ValueError("in_library match requires a book_id")
        if not self.in_library and self.book_id is not None:
            raise ValueError("unmatched result must not carry a book_id")

    @classmethod
    def none(cls) -> "LibraryMatch":
        return cls(in_library=False, book_id=None)

    @classmethod
    def owned(cls, book_id: str) -> "LibraryMatch":
        return cls(in_library=True, book_id=book_id)


@dataclass
class MatchedCandidate:
    """A candidate annotated with its library match."""

    candidate: BookCandidate
    match: LibraryMatch

    @property
    def in_library(self) -> bool:
        return self.match.in_library

    @property
    def book_id(self) -> str | None:
        return self.match.book_id

    def as_dict(self) -> dict[str, Any]:
        data = self.candidate.as_dict()
        data["inLibrary"] = self.match.in_library
        data["bookId"] = self.match.book_id
        return data


@dataclass
class SearchPage(Generic[T]):
    """A page of listing results plus the provider's reported total."""

    results: list[T]
    total_items: int

    @classmethod
    def empty(cls) -> "SearchPage[T]":
        return cls(results=[], total_items=0)

    def as_dict(self) -> dict[str, Any]:
        return {
            "results": [r.as_dict() for r in self.results],  # type: ignore[attr-defined]
            "totalItems": self.total_items,
        }
