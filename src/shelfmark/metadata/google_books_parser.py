# ABOUTME: Response schemas and mapping functions for the Google Books volumes API.
# ABOUTME: Validates raw JSON with pydantic and converts volumes into BookCandidate instances.

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from shelfmark.metadata.types import (
    BookCandidate,
    authors_from_names,
    parse_leading_year,
    to_https,
)

# Largest first.
COVER_SIZE_ORDER = (
    "extraLarge",
    "large",
    "medium",
    "small",
    "thumbnail",
    "smallThumbnail",
)


class _Model(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class IndustryIdentifier(_Model):
    type: str
    identifier: str


class ImageLinks(_Model):
    small_thumbnail: str | None = Field(default=None, alias="smallThumbnail")
    thumbnail: str | None = None
    small: str | None = None
    medium: str | None = None
    large: str | None = None
    extra_large: str | None = Field(default=None, alias="extraLarge")


class VolumeInfo(_Model):
    title: str
    subtitle: str | None = None
    authors: list[str] | None = None
    publisher: str | None = None
    published_date: str | None = Field(default=None, alias="publishedDate")
    description: str | None = None
    industry_identifiers: list[IndustryIdentifier] | None = Field(
        default=None, alias="industryIdentifiers"
    )
    page_count: int | None = Field(default=None, alias="pageCount")
    categories: list[str] | None = None
    image_links: ImageLinks | None = Field(default=None, alias="imageLinks")
    language: str | None = None


class Volume(_Model):
    id: str
    volume_info: VolumeInfo = Field(alias="volumeInfo")


class VolumesResponse(_Model):
    kind: str
    total_items: int = Field(alias="totalItems")
    items: list[Volume] | None = None


def parse_volumes_response(data: Any) -> VolumesResponse:
    """Validate a volumes API payload.

    Raises:
        pydantic.ValidationError: If the payload does not match the schema.
    """
    return VolumesResponse.model_validate(data)


def extract_isbn(identifiers: list[IndustryIdentifier] | None) -> str | None:
    """Pick the ISBN from industry identifiers, preferring ISBN_13 over ISBN_10."""
    if not identifiers:
        return None
    for wanted in ("ISBN_13", "ISBN_10"):
        for ident in identifiers:
            if ident.type == wanted:
                return ident.identifier
    return None


def largest_cover(image_links: ImageLinks | None) -> str | None:
    """Return the largest available cover URL, rewritten to https."""
    if image_links is None:
        return None
    links = image_links.model_dump(by_alias=True)
    for size in COVER_SIZE_ORDER:
        if links.get(size):
            return to_https(links[size])
    return None


def volume_to_candidate(volume: Volume, fallback_isbn: str | None = None) -> BookCandidate | None:
    """Convert a validated volume into a BookCandidate.

    Returns None for volumes with a blank title.
    """
    info = volume.volume_info
    if not info.title.strip():
        return None
    return BookCandidate(
        external_id=volume.id,
        title=info.title,
        subtitle=info.subtitle,
        authors=authors_from_names(info.authors),
        publisher=info.publisher,
        published_year=parse_leading_year(info.published_date),
        description=info.description,
        cover_url=largest_cover(info.image_links),
        categories=info.categories,
        isbn=extract_isbn(info.industry_identifiers) or fallback_isbn,
        pages=info.page_count,
        language=info.language,
        source="google",
    )


def parse_volume_candidates(
    response: VolumesResponse, fallback_isbn: str | None = None
) -> list[BookCandidate]:
    """Map every usable volume in a response, preserving API order."""
    candidates = []
    for volume in response.items or []:
        candidate = volume_to_candidate(volume, fallback_isbn)
        if candidate is not None:
            candidates.append(candidate)
    return candidates
