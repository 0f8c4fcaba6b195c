# ABOUTME: HTML extraction for Amazon storefront search and product detail pages.
# ABOUTME: Best-effort CSS selector scraping with fallbacks; no schema contract with the site.

import json
import logging
import re
from dataclasses import dataclass, field
from urllib.parse import urljoin

from bs4 import BeautifulSoup, Tag

logger = logging.getLogger(__name__)

SEARCH_RESULT_LIMIT = 10

_RESULT_SELECTORS = ('div[data-component-type="s-search-result"]', "div.s-result-item")
_TITLE_SELECTORS = ("h2 .a-link-normal span", ".s-line-clamp-2 span")
_AUTHOR_SELECTORS = (".a-color-secondary .a-row a", ".a-size-base .a-row a.a-size-base")
_LINK_SELECTORS = ("h2 .a-link-normal", "a.s-line-clamp-2")

_DETAIL_TITLE_SELECTOR = "span.a-size-large"
_DETAIL_AUTHOR_SELECTOR = ".author a"
_DETAIL_COVER_SELECTOR = "img.a-stretch-vertical"
_DETAIL_PUBLISHER_SELECTOR = "#rpi-attribute-book_details-publisher .a-spacing-none span"

# Amazon pads the label with bidi marks and colons, e.g. "ISBN-13 ‏ : ‎ 978-...".
_ISBN13_RE = re.compile(r"ISBN-13[^0-9]*([0-9][0-9-]*)")


@dataclass
class AmazonSearchHit:
    title: str
    detail_url: str
    author: str | None = None


@dataclass
class AmazonBookDetail:
    title: str
    subtitle: str | None = None
    authors: list[str] = field(default_factory=list)
    cover_url: str | None = None
    publisher: str | None = None
    isbn: str | None = None


def _text(element: Tag | None) -> str:
    return element.get_text(strip=True) if element is not None else ""


def _select_first(item: Tag, selectors: tuple[str, ...]) -> Tag | None:
    for selector in selectors:
        found = item.select_one(selector)
        if found is not None and _text(found):
            return found
    return None


def _select_link(item: Tag) -> str | None:
    for selector in _LINK_SELECTORS:
        found = item.select_one(selector)
        if found is not None and found.get("href"):
            return str(found["href"])
    return None


def parse_search_results(html: str, base_url: str) -> list[AmazonSearchHit]:
    """Extract up to ten search hits from a storefront search page.

    Tries the primary result selector and falls back to the alternate one
    when the primary yields nothing. Items without a title or a detail link
    are skipped.
    """
    soup = BeautifulSoup(html, "html.parser")

    items: list[Tag] = []
    for selector in _RESULT_SELECTORS:
        items = soup.select(selector)
        logger.debug("Amazon selector %s matched %d items", selector, len(items))
        if items:
            break

    hits: list[AmazonSearchHit] = []
    for index, item in enumerate(items):
        if len(hits) >= SEARCH_RESULT_LIMIT:
            break
        title = _text(_select_first(item, _TITLE_SELECTORS))
        href = _select_link(item)
        if not title or not href:
            logger.debug("Skipping Amazon result #%d: missing title or detail link", index + 1)
            continue
        author = _text(_select_first(item, _AUTHOR_SELECTORS)) or None
        hits.append(AmazonSearchHit(title=title, detail_url=urljoin(base_url, href), author=author))

    return hits


def split_title(full_title: str) -> tuple[str, str | None]:
    """Split "Title: Subtitle" at the first colon."""
    main, sep, rest = full_title.partition(":")
    if not sep:
        return full_title.strip(), None
    return main.strip(), rest.strip() or None


def _largest_dynamic_image(raw: str) -> str | None:
    """Pick the highest-resolution URL from a data-a-dynamic-image attribute.

    The attribute maps image URLs to [width, height].
    """
    try:
        images = json.loads(raw)
    except ValueError as exc:
        logger.debug("Unparseable dynamic image data: %s", exc)
        return None
    if not isinstance(images, dict) or not images:
        return None

    def area(url: str) -> int:
        size = images[url]
        try:
            return int(size[0]) * int(size[1])
        except (TypeError, ValueError, IndexError):
            return 0

    return max(images, key=area)


def _is_web_url(url: str) -> bool:
    return url.startswith(("http://", "https://"))


def _extract_cover(soup: BeautifulSoup) -> str | None:
    image = soup.select_one(_DETAIL_COVER_SELECTOR)
    if image is None:
        return None
    src = image.get("src")
    if src and _is_web_url(str(src)):
        return str(src)
    # Lazy-loaded images carry a data: placeholder in src.
    raw = image.get("data-a-dynamic-image")
    url = _largest_dynamic_image(str(raw)) if raw else None
    if url and _is_web_url(url):
        return url
    return None


def _extract_isbn13(soup: BeautifulSoup) -> str | None:
    for section in soup.select("div.a-section"):
        text = section.get_text(" ", strip=True)
        if "ISBN-13" not in text:
            continue
        match = _ISBN13_RE.search(text)
        if match:
            digits = re.sub(r"[^0-9]", "", match.group(1))
            if digits:
                return digits
    return None


def parse_detail_page(html: str) -> AmazonBookDetail | None:
    """Extract book details from a product page.

    Returns None when no title can be found, which is how selector drift
    usually shows up.
    """
    soup = BeautifulSoup(html, "html.parser")

    full_title = _text(soup.select_one(_DETAIL_TITLE_SELECTOR))
    if not full_title:
        logger.debug("Amazon detail page has no title element")
        return None
    title, subtitle = split_title(full_title)
    if not title:
        return None

    authors = [name for name in (_text(a) for a in soup.select(_DETAIL_AUTHOR_SELECTOR)) if name]
    publisher = _text(soup.select_one(_DETAIL_PUBLISHER_SELECTOR)) or None

    return AmazonBookDetail(
        title=title,
        subtitle=subtitle,
        authors=authors,
        cover_url=_extract_cover(soup),
        publisher=publisher,
        isbn=_extract_isbn13(soup),
    )
